"""
Shared geometry utilities for gesture recognition.

This module provides the 2D point type used by touches and gesture events,
plus the distance and angle math needed by the scale/rotate gesture.
"""

import math
from dataclasses import dataclass
from typing import Sequence, Union


@dataclass(frozen=True)
class Point:
    """Represents an immutable 2D position or displacement."""

    x: float = 0.0
    y: float = 0.0

    @classmethod
    def of(cls, value: Union['Point', Sequence[float]]) -> 'Point':
        """Coerce a Point or an (x, y) pair into a Point."""
        if isinstance(value, Point):
            return value
        x, y = value
        return cls(float(x), float(y))

    def __repr__(self):
        return f"Point({self.x:.1f}, {self.y:.1f})"

    def __add__(self, other: 'Point') -> 'Point':
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Point') -> 'Point':
        return Point(self.x - other.x, self.y - other.y)

    def __truediv__(self, divisor: float) -> 'Point':
        return Point(self.x / divisor, self.y / divisor)

    @property
    def distance(self) -> float:
        """Length of this point seen as a vector from the origin."""
        return math.hypot(self.x, self.y)

    @property
    def distance_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    def distance_to(self, other: 'Point') -> float:
        """Calculate Euclidean distance to another point."""
        return (self - other).distance


ZERO = Point(0.0, 0.0)


class GeometryUtils:
    """Utility class for geometric calculations."""

    @staticmethod
    def calculate_distance(p1: Point, p2: Point) -> float:
        """Calculate Euclidean distance between two points."""
        return (p1 - p2).distance

    @staticmethod
    def calculate_distance_squared(p1: Point, p2: Point) -> float:
        """Squared distance, compared against squared tolerances."""
        return (p1 - p2).distance_squared

    @staticmethod
    def calculate_midpoint(p1: Point, p2: Point) -> Point:
        """Focal point between two touches."""
        return (p1 + p2) / 2

    @staticmethod
    def normalize_180(angle_degrees: float) -> float:
        """Wrap an angle in degrees into (-180, 180]."""
        angle = angle_degrees % 360.0
        if angle > 180.0:
            angle -= 360.0
        return angle

    @staticmethod
    def angle_between_lines(first_start: Point, second_start: Point,
                            first_current: Point, second_current: Point) -> float:
        """
        Signed rotation, in radians, of the line joining two touches.

        The start line runs between the touches' start positions and the
        current line between their current positions. The result is the
        start angle minus the current angle, wrapped into (-pi, pi].
        """
        start = first_start - second_start
        current = first_current - second_current
        angle1 = math.atan2(start.y, start.x)
        angle2 = math.atan2(current.y, current.x)

        angle = GeometryUtils.normalize_180(math.degrees(angle1 - angle2))
        return math.radians(angle)
