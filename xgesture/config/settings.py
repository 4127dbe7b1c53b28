"""
Configuration settings for the gesture detector.
"""

from dataclasses import dataclass


class TouchConfig:
    """Default constants for touch gesture recognition."""

    # Timing configurations (in milliseconds)
    DOUBLE_TAP_TIMEOUT = 250
    LONG_PRESS_TIMEOUT = 350

    # Distance configurations (squared logical pixels)
    LONG_PRESS_MAX_RANGE_SQUARED = 25
    DOUBLE_TAP_MAX_DISTANCE_SQUARED = 200

    # Event suppression
    BYPASS_MOVE_EVENT_AFTER_LONG_PRESS = True
    BYPASS_TAP_EVENT_ON_DOUBLE_TAP = False

    # Pixels scrolled per mouse wheel notch
    SCROLL_LINE_PIXELS = 20


@dataclass(frozen=True)
class GestureConfig:
    """Immutable detector configuration, fixed at construction.

    ``double_tap_timeout_ms``: window in which a second tap makes a double tap.
    ``long_press_timeout_ms``: time a still finger needs to become a long press.
    ``long_press_max_range_squared``: how far (squared) the finger may drift
    from its start position and still count as a long press.
    ``bypass_move_event_after_long_press``: once a long press fired, report
    moves through the long-press-move callback instead of starting a drag.
    ``bypass_tap_event_on_double_tap``: hold single taps back until the
    double-tap window closes, so a double tap emits no taps at all.
    """

    double_tap_timeout_ms: int = TouchConfig.DOUBLE_TAP_TIMEOUT
    long_press_timeout_ms: int = TouchConfig.LONG_PRESS_TIMEOUT
    long_press_max_range_squared: float = TouchConfig.LONG_PRESS_MAX_RANGE_SQUARED
    bypass_move_event_after_long_press: bool = TouchConfig.BYPASS_MOVE_EVENT_AFTER_LONG_PRESS
    bypass_tap_event_on_double_tap: bool = TouchConfig.BYPASS_TAP_EVENT_ON_DOUBLE_TAP

    def __post_init__(self):
        for name in ('double_tap_timeout_ms', 'long_press_timeout_ms',
                     'long_press_max_range_squared'):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")

    @property
    def double_tap_max_distance_squared(self) -> float:
        # Not configurable: matches the fixed tolerance of the widget this mirrors
        return TouchConfig.DOUBLE_TAP_MAX_DISTANCE_SQUARED
