"""
XGesture Package
Detects tap, double tap, long press, drag, two-finger scale/rotate and
scroll gestures from a stream of pointer contact events.

The evdev host adapter lives in ``xgesture.core.listener`` and is not
imported here, so the detector works on platforms without evdev.
"""

from .config.settings import GestureConfig, TouchConfig
from .core.touch_registry import Touch, TouchRegistry
from .gestures.events import TapEvent, MoveEvent, ScaleEvent, ScrollEvent
from .gestures.gesture_detector import GestureCallbacks, GestureState, XGestureDetector
from .utils.gesture_utils import Point
from .utils.timers import PolledTimerService, ThreadingTimerService

__version__ = "1.0.0"
__all__ = [
    "XGestureDetector", "GestureCallbacks", "GestureState", "GestureConfig", "TouchConfig",
    "Touch", "TouchRegistry", "TapEvent", "MoveEvent", "ScaleEvent", "ScrollEvent",
    "Point", "PolledTimerService", "ThreadingTimerService",
]
