"""Tests for geometry helpers."""

import math

import pytest

from xgesture.utils.gesture_utils import GeometryUtils, Point


def test_point_coercion():
    p = Point(1, 2)
    assert Point.of(p) is p
    assert Point.of((3, 4)) == Point(3.0, 4.0)
    assert Point.of([5, 6]) == Point(5, 6)


def test_point_arithmetic():
    assert Point(1, 2) + Point(3, 4) == Point(4, 6)
    assert Point(1, 2) - Point(3, 4) == Point(-2, -2)
    assert Point(4, 6) / 2 == Point(2, 3)
    assert Point(3, 4).distance == 5
    assert Point(3, 4).distance_squared == 25
    assert Point(0, 0).distance_to(Point(6, 8)) == 10


def test_distance_and_midpoint():
    a, b = Point(0, 0), Point(10, 10)
    assert GeometryUtils.calculate_distance_squared(a, b) == 200
    assert GeometryUtils.calculate_distance(a, b) == pytest.approx(math.sqrt(200))
    assert GeometryUtils.calculate_midpoint(a, b) == Point(5, 5)


@pytest.mark.parametrize("angle, expected", [
    (0, 0),
    (90, 90),
    (180, 180),
    (-180, 180),
    (190, -170),
    (-190, 170),
    (360, 0),
    (540, 180),
    (-359, 1),
])
def test_normalize_180(angle, expected):
    assert GeometryUtils.normalize_180(angle) == pytest.approx(expected)


def test_angle_between_lines_is_zero_without_rotation():
    angle = GeometryUtils.angle_between_lines(
        Point(0, 0), Point(10, 0), Point(5, 5), Point(25, 5))
    assert angle == pytest.approx(0.0)


def test_angle_between_lines_quarter_turn():
    # Second-to-first turns from pointing left to pointing down on a y-down screen
    angle = GeometryUtils.angle_between_lines(
        Point(0, 0), Point(10, 0), Point(0, 0), Point(0, -10))
    assert math.degrees(angle) == pytest.approx(90.0)


def test_angle_between_lines_ignores_finger_order():
    forward = GeometryUtils.angle_between_lines(
        Point(0, 0), Point(10, 0), Point(0, 0), Point(7, 7))
    swapped = GeometryUtils.angle_between_lines(
        Point(10, 0), Point(0, 0), Point(7, 7), Point(0, 0))
    assert forward == pytest.approx(swapped)
