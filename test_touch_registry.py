"""Tests for active touch bookkeeping."""

from xgesture.core.touch_registry import TouchRegistry
from xgesture.utils.gesture_utils import Point


def test_touches_keep_insertion_order():
    registry = TouchRegistry()
    for touch_id in (7, 3, 5):
        registry.add(touch_id, Point(touch_id, 0))

    assert [t.id for t in registry.all()] == [7, 3, 5]

    registry.remove(3)
    registry.add(3, Point(0, 0))
    assert [t.id for t in registry.all()] == [7, 5, 3]


def test_new_touch_starts_where_it_is():
    registry = TouchRegistry()
    touch = registry.add(1, Point(4, 2))

    assert touch.start_offset == touch.current_offset == Point(4, 2)
    assert registry.count() == len(registry) == 1
    assert 1 in registry


def test_duplicate_add_keeps_existing_touch():
    registry = TouchRegistry()
    registry.add(1, Point(0, 0))

    assert registry.add(1, Point(9, 9)) is None
    assert registry.get(1).start_offset == Point(0, 0)
    assert registry.count() == 1


def test_update_position_moves_only_current_offset():
    registry = TouchRegistry()
    registry.add(1, Point(0, 0))
    registry.update_position(1, Point(3, 4))

    touch = registry.get(1)
    assert touch.start_offset == Point(0, 0)
    assert touch.current_offset == Point(3, 4)
    assert touch.displacement_squared == 25


def test_displacement_ignores_reanchored_start_offset():
    registry = TouchRegistry()
    touch = registry.add(1, Point(0, 0))
    registry.update_position(1, Point(3, 0))
    touch.start_offset = touch.current_offset
    registry.update_position(1, Point(3, 4))

    assert touch.origin == Point(0, 0)
    assert touch.displacement_squared == 25


def test_missing_ids_are_harmless():
    registry = TouchRegistry()

    assert registry.update_position(9, Point(1, 1)) is None
    assert registry.remove(9) is None
    assert registry.get(9) is None
    assert registry.all() == []


def test_clear_empties_registry():
    registry = TouchRegistry()
    registry.add(1, Point(0, 0))
    registry.add(2, Point(1, 1))
    registry.clear()

    assert registry.count() == 0
