"""
Logging utilities for detected gestures.
"""

import datetime
import logging
import math
from typing import Optional

from ..gestures.events import TapEvent, MoveEvent, ScaleEvent, ScrollEvent
from ..gestures.gesture_detector import GestureCallbacks
from .gesture_utils import Point

logger = logging.getLogger(__name__)


class GestureLogger:
    """Prints detected gestures and mirrors them to a debug file."""

    def __init__(self, debug_file: Optional[str] = 'gesture_debug.log', verbose_moves: bool = False):
        self.debug_file = None
        self.verbose_moves = verbose_moves
        if debug_file:
            try:
                self.debug_file = open(debug_file, 'w')
                self.debug_file.write(f"Debug logging started at {datetime.datetime.now()}\n")
                self.debug_file.flush()
            except OSError as e:
                logger.warning(f"Could not open debug file: {e}")

    def callbacks(self) -> GestureCallbacks:
        """Handler slots that route every gesture to this logger."""
        return GestureCallbacks(
            on_tap=self.log_tap,
            on_double_tap=self.log_double_tap,
            on_move_start=self.log_move_start,
            on_move_update=self.log_move_update,
            on_move_end=self.log_move_end,
            on_scale_start=self.log_scale_start,
            on_scale_update=self.log_scale_update,
            on_scale_end=self.log_scale_end,
            on_long_press=self.log_long_press,
            on_long_press_move=self.log_long_press_move,
            on_long_press_end=self.log_long_press_end,
            on_scroll=self.log_scroll,
        )

    def log_tap(self, event: TapEvent):
        self._print(f"👆 TAP: pointer {event.pointer_id} at {_fmt(event.local_position)}", event)

    def log_double_tap(self, event: TapEvent):
        self._print(f"👆👆 DOUBLE TAP: pointer {event.pointer_id} at {_fmt(event.local_position)}", event)

    def log_long_press(self, event: TapEvent):
        self._print(f"🤚 LONG PRESS: pointer {event.pointer_id} at {_fmt(event.local_position)}", event)

    def log_long_press_move(self, event: MoveEvent):
        if self.verbose_moves:
            self._print(f"🤚 LONG PRESS MOVE: {_fmt(event.local_position)} [Δ {_fmt(event.delta)}]", event)

    def log_long_press_end(self):
        self._print("✋ LONG PRESS END")

    def log_move_start(self, event: MoveEvent):
        self._print(f"🖐️ MOVE START: pointer {event.pointer_id} at {_fmt(event.local_position)}", event)

    def log_move_update(self, event: MoveEvent):
        if self.verbose_moves:
            self._print(f"   MOVE: {_fmt(event.local_position)} [Δ {_fmt(event.delta)}]", event)

    def log_move_end(self, event: MoveEvent):
        self._print(f"✊ MOVE END: pointer {event.pointer_id} at {_fmt(event.local_position)}", event)

    def log_scale_start(self, focal_point: Point):
        self._print(f"🔍 SCALE START: focal point {_fmt(focal_point)}")

    def log_scale_update(self, event: ScaleEvent):
        if self.verbose_moves:
            degrees = math.degrees(event.rotation_angle)
            self._print(f"🔍 SCALE: x{event.scale:.2f}, rotation {degrees:.1f}°", event)

    def log_scale_end(self):
        self._print("🔍 SCALE END")

    def log_scroll(self, event: ScrollEvent):
        self._print(f"🔄 SCROLL: {_fmt(event.scroll_delta)} at {_fmt(event.local_position)}", event)

    def _print(self, message: str, event=None):
        timestamp = datetime.datetime.now().strftime("%H:%M:%S.%f")[:-3]
        print(f"[{timestamp}] {message}")

        if self.debug_file:
            try:
                self.debug_file.write(f"[{timestamp}] {message} {event if event is not None else ''}\n")
                self.debug_file.flush()
            except OSError as e:
                logger.warning(f"Could not write debug file: {e}")

    def close(self):
        """Close the debug file."""
        if self.debug_file:
            self.debug_file.close()
            self.debug_file = None


def _fmt(point: Point) -> str:
    return f"({point.x:.0f}, {point.y:.0f})"
