"""
Utilities package for gesture recognition and processing.

This package provides the shared geometry, timer and logging helpers
used by the gesture detector and its host adapters.
"""

from .gesture_utils import (
    Point,
    GeometryUtils,
    ZERO
)
from .timers import (
    TimerHandle,
    TimerService,
    ThreadingTimerService,
    PolledTimerService
)

__all__ = [
    'Point',
    'GeometryUtils',
    'ZERO',
    'TimerHandle',
    'TimerService',
    'ThreadingTimerService',
    'PolledTimerService'
]
