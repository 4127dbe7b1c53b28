"""
Gesture detection system.

This module provides the gesture state machine and the semantic
events it emits.
"""

from .events import TapEvent, MoveEvent, ScaleEvent, ScrollEvent
from .gesture_detector import GestureCallbacks, GestureContext, GestureState, XGestureDetector

__all__ = [
    'TapEvent',
    'MoveEvent',
    'ScaleEvent',
    'ScrollEvent',
    'GestureCallbacks',
    'GestureContext',
    'GestureState',
    'XGestureDetector'
]
