"""
Bookkeeping for the contact points currently on the surface.
"""

from typing import Dict, List, Optional

from ..utils.gesture_utils import Point


class Touch:
    """One active contact point."""

    def __init__(self, touch_id: int, start_offset: Point):
        self.id = touch_id
        # Where the contact began; start_offset is re-anchored by gestures
        self.origin = start_offset
        self.start_offset = start_offset
        self.current_offset = start_offset

    def __repr__(self):
        return f"Touch({self.id}, start={self.start_offset}, current={self.current_offset})"

    @property
    def displacement_squared(self) -> float:
        """Squared distance from where the contact began."""
        return (self.current_offset - self.origin).distance_squared


class TouchRegistry:
    """Tracks active touches by id, in the order they touched down.

    The scale gesture treats the first two entries as its anchor fingers,
    so iteration order is insertion order.
    """

    def __init__(self):
        self._touches: Dict[int, Touch] = {}

    def __len__(self):
        return len(self._touches)

    def __contains__(self, touch_id: int) -> bool:
        return touch_id in self._touches

    def add(self, touch_id: int, position: Point) -> Optional[Touch]:
        """Register a new touch. Returns None if the id is already active."""
        if touch_id in self._touches:
            return None
        touch = Touch(touch_id, position)
        self._touches[touch_id] = touch
        return touch

    def update_position(self, touch_id: int, position: Point) -> Optional[Touch]:
        touch = self._touches.get(touch_id)
        if touch is not None:
            touch.current_offset = position
        return touch

    def remove(self, touch_id: int) -> Optional[Touch]:
        return self._touches.pop(touch_id, None)

    def clear(self):
        self._touches.clear()

    def count(self) -> int:
        return len(self._touches)

    def get(self, touch_id: int) -> Optional[Touch]:
        return self._touches.get(touch_id)

    def all(self) -> List[Touch]:
        return list(self._touches.values())
