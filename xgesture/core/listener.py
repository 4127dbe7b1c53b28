"""
Touchscreen listener that feeds evdev multitouch events to the gesture detector.
"""

import logging
import threading
from typing import Dict, List, Optional, Tuple

from evdev import ecodes

from ..config.settings import GestureConfig, TouchConfig
from ..device.device_manager import DeviceManager
from ..gestures.gesture_detector import GestureCallbacks, XGestureDetector
from ..utils.gesture_utils import Point, ZERO
from ..utils.logger import GestureLogger
from ..utils.timers import ThreadingTimerService

logger = logging.getLogger(__name__)

WHEEL_POINTER_ID = -1


class _Slot:
    """Multitouch slot state between two SYN_REPORT frames."""

    def __init__(self):
        self.tracking_id: Optional[int] = None
        self.x = 0
        self.y = 0
        self.pending_begin = False
        self.reported: Optional[Point] = None
        # (tracking id, last position, began within this frame)
        self.ended: List[Tuple[int, Point, bool]] = []

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)


class TouchListener:
    """Reads a multitouch device (slot protocol, type B) and drives a detector.

    Pointer events and detector timer callbacks share ``state_lock`` so the
    detector only ever sees one event at a time.
    """

    def __init__(self, callbacks: Optional[GestureCallbacks] = None,
                 config: Optional[GestureConfig] = None,
                 device_path: Optional[str] = None):
        self.device_manager = DeviceManager()
        self.device_path = device_path
        self.state_lock = threading.RLock()

        self.gesture_logger = None
        if callbacks is None:
            self.gesture_logger = GestureLogger()
            callbacks = self.gesture_logger.callbacks()

        self.gesture_detector = XGestureDetector(
            ThreadingTimerService(self.state_lock),
            config=config,
            callbacks=callbacks,
        )

        # State management
        self.running = False
        self.current_slot = 0
        self.slots: Dict[int, _Slot] = {}
        self.scroll_delta = ZERO

        # Thread management
        self.thread = None

    def start(self) -> bool:
        """Start the touchscreen listener."""
        device = self.device_manager.find_device(self.device_path)
        if not device:
            print("❌ No touchscreen found")
            return False

        self.running = True
        self._print_startup_info(self.device_manager.get_device_info())

        self.thread = threading.Thread(target=self._event_loop)
        self.thread.daemon = True
        self.thread.start()
        return True

    def stop(self):
        """Stop the touchscreen listener."""
        self.running = False
        if self.thread:
            self.thread.join(timeout=1)
        with self.state_lock:
            self.gesture_detector.reset()
            self.slots.clear()
        if self.gesture_logger:
            self.gesture_logger.close()

    def _print_startup_info(self, device_info: Dict):
        """Print startup information."""
        config = self.gesture_detector.config
        print(f"✅ Found: {device_info['name']}")
        print(f"📺 Screen: {device_info['screen_width']}x{device_info['screen_height']}")
        print(f"⏱️ Double tap window: {config.double_tap_timeout_ms}ms")
        print(f"⏱️ Long press window: {config.long_press_timeout_ms}ms")
        print(f"📏 Long press tolerance: {config.long_press_max_range_squared}px²")
        print("🎯 Ready! Try taps, double taps, long presses, drags and two-finger pinches!")

    def _event_loop(self):
        """Main event processing loop."""
        try:
            event_batch = []
            for event in self.device_manager.device.read_loop():
                if not self.running:
                    break

                event_batch.append(event)

                if event.type == ecodes.EV_SYN and event.code == ecodes.SYN_REPORT:
                    with self.state_lock:
                        self._process_event_batch(event_batch)
                    event_batch = []

        except KeyboardInterrupt:
            pass
        except OSError as e:
            logger.error(f"Error in event loop: {e}")

    def _process_event_batch(self, event_batch):
        """Process one frame of events, ending with SYN_REPORT."""
        for ev in event_batch:
            if ev.type == ecodes.EV_ABS:
                self._handle_abs_event(ev)
            elif ev.type == ecodes.EV_REL:
                self._handle_rel_event(ev)
            elif ev.type == ecodes.EV_SYN and ev.code == ecodes.SYN_REPORT:
                self._flush_frame()

    def _handle_abs_event(self, ev):
        """Handle absolute coordinate events."""
        if ev.code == ecodes.ABS_MT_SLOT:
            self.current_slot = ev.value
        elif ev.code == ecodes.ABS_MT_TRACKING_ID:
            self._handle_tracking_id(ev.value)
        elif ev.code == ecodes.ABS_MT_POSITION_X:
            self._slot().x = ev.value
        elif ev.code == ecodes.ABS_MT_POSITION_Y:
            self._slot().y = ev.value

    def _handle_rel_event(self, ev):
        """Accumulate wheel notches into a scroll delta."""
        step = TouchConfig.SCROLL_LINE_PIXELS
        if ev.code == ecodes.REL_WHEEL:
            # Positive wheel values scroll up, towards smaller y
            self.scroll_delta = self.scroll_delta + Point(0, -ev.value * step)
        elif ev.code == ecodes.REL_HWHEEL:
            self.scroll_delta = self.scroll_delta + Point(ev.value * step, 0)

    def _handle_tracking_id(self, value: int):
        """Handle finger tracking ID changes."""
        slot = self._slot()

        if slot.tracking_id is not None:
            # Finger lifted, or the slot was handed to a new contact
            slot.ended.append((slot.tracking_id, slot.position, slot.pending_begin))
            slot.tracking_id = None
            slot.pending_begin = False

        if value != -1:
            slot.tracking_id = value
            slot.pending_begin = True
            slot.reported = None

    def _slot(self) -> _Slot:
        slot = self.slots.get(self.current_slot)
        if slot is None:
            slot = self.slots[self.current_slot] = _Slot()
        return slot

    def _flush_frame(self):
        """Translate the finished frame into detector calls: ends, begins, moves."""
        detector = self.gesture_detector
        ordered = [self.slots[index] for index in sorted(self.slots)]

        for slot in ordered:
            for tracking_id, position, began_in_frame in slot.ended:
                if began_in_frame:
                    detector.on_contact_begin(tracking_id, position)
                detector.on_contact_end(tracking_id, position)
            slot.ended = []

        for slot in ordered:
            if slot.tracking_id is not None and slot.pending_begin:
                detector.on_contact_begin(slot.tracking_id, slot.position)
                slot.pending_begin = False
                slot.reported = slot.position

        for slot in ordered:
            if slot.tracking_id is None or slot.reported is None:
                continue
            position = slot.position
            if position != slot.reported:
                detector.on_contact_move(slot.tracking_id, position, position - slot.reported)
                slot.reported = position

        if self.scroll_delta != ZERO:
            anchor = next((s.position for s in ordered if s.tracking_id is not None), ZERO)
            detector.on_scroll_signal(WHEEL_POINTER_ID, anchor, anchor, self.scroll_delta)
            self.scroll_delta = ZERO
