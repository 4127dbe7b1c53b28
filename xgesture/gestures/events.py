"""
Semantic gesture events delivered to detector callbacks.

All events are immutable; the detector never keeps a reference to an
event after handing it to a callback.
"""

from dataclasses import dataclass

from ..utils.gesture_utils import Point, ZERO


@dataclass(frozen=True)
class TapEvent:
    """A pointer touched down or lifted at a position.

    ``local_position`` is in the receiver's coordinate space and
    ``global_position`` in screen coordinates.
    """
    pointer_id: int
    local_position: Point
    global_position: Point
    buttons: int = 0


@dataclass(frozen=True)
class MoveEvent(TapEvent):
    """A pointer in contact moved.

    ``delta`` is the step in global coordinates since the previous move,
    ``local_delta`` the same step in local coordinates.
    """
    delta: Point = ZERO
    local_delta: Point = ZERO


@dataclass(frozen=True)
class ScaleEvent:
    """Two pointers changed their distance and/or angle.

    ``scale`` is the current distance divided by the distance when the
    scale gesture started. ``rotation_angle`` is in radians within
    (-pi, pi], positive when the fingers turn counter-clockwise on a
    y-down screen.
    """
    focal_point: Point
    scale: float
    rotation_angle: float


@dataclass(frozen=True)
class ScrollEvent:
    """A discrete scroll signal, such as a mouse wheel notch."""
    pointer_id: int
    local_position: Point
    global_position: Point
    scroll_delta: Point
