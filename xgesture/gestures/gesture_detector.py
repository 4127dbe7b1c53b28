"""
Gesture detection state machine.

Turns an ordered stream of contact begin/move/end events (plus scroll
signals) into tap, double tap, long press, move, scale/rotate and scroll
callbacks. Tap versus double tap and long press are decided with two
debounce timers scheduled through a timer service supplied by the host.
"""

import dataclasses
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Union

from ..config.settings import GestureConfig
from ..core.touch_registry import Touch, TouchRegistry
from ..utils.gesture_utils import Point, GeometryUtils, ZERO
from ..utils.timers import TimerHandle, TimerService
from .events import TapEvent, MoveEvent, ScaleEvent, ScrollEvent

logger = logging.getLogger(__name__)

PointLike = Union[Point, Sequence[float]]


class GestureState(Enum):
    UNKNOWN = "Unknown"
    POINTER_DOWN = "PointerDown"
    MOVE_START = "MoveStart"
    SCALE_START = "ScaleStart"
    SCALING = "Scaling"
    LONG_PRESS = "LongPress"


@dataclass
class GestureContext:
    """Mutable bookkeeping owned by a single detector."""
    state: GestureState = GestureState.UNKNOWN
    initial_scale_distance: float = 1.0
    last_tap_up_position: Point = ZERO
    double_tap_timer: Optional[TimerHandle] = None
    long_press_timer: Optional[TimerHandle] = None


@dataclass
class GestureCallbacks:
    """Optional handler slots. An unset slot is simply not called."""
    on_tap: Optional[Callable[[TapEvent], None]] = None
    on_double_tap: Optional[Callable[[TapEvent], None]] = None
    on_move_start: Optional[Callable[[MoveEvent], None]] = None
    on_move_update: Optional[Callable[[MoveEvent], None]] = None
    on_move_end: Optional[Callable[[MoveEvent], None]] = None
    on_scale_start: Optional[Callable[[Point], None]] = None
    on_scale_update: Optional[Callable[[ScaleEvent], None]] = None
    on_scale_end: Optional[Callable[[], None]] = None
    on_long_press: Optional[Callable[[TapEvent], None]] = None
    on_long_press_move: Optional[Callable[[MoveEvent], None]] = None
    on_long_press_end: Optional[Callable[[], None]] = None
    on_scroll: Optional[Callable[[ScrollEvent], None]] = None


class XGestureDetector:
    """Detects tap, double tap, long press, move, scale and scroll gestures.

    All entry points, and every callback scheduled on ``timer_service``,
    must be invoked from one logical thread (or under one lock). Handler
    slots may be passed as a ``GestureCallbacks`` instance, as keyword
    arguments, or both (keywords win).
    """

    def __init__(self, timer_service: TimerService,
                 config: Optional[GestureConfig] = None,
                 callbacks: Optional[GestureCallbacks] = None,
                 **handlers: Optional[Callable]):
        self.timers = timer_service
        self.config = config or GestureConfig()
        self.callbacks = dataclasses.replace(callbacks or GestureCallbacks(), **handlers)
        self.registry = TouchRegistry()
        self.context = GestureContext()

        self._move_handlers: Dict[GestureState, Callable[[Touch, MoveEvent], None]] = {
            GestureState.UNKNOWN: self._move_anchor,
            GestureState.POINTER_DOWN: self._switch_to_move_start,
            GestureState.MOVE_START: self._move_update,
            GestureState.SCALE_START: self._move_scale_start,
            GestureState.SCALING: self._move_scaling,
            GestureState.LONG_PRESS: self._move_long_press,
        }
        self._end_handlers: Dict[GestureState, Callable[[TapEvent], None]] = {
            GestureState.UNKNOWN: self._end_unknown,
            GestureState.POINTER_DOWN: self._end_pointer_down,
            GestureState.MOVE_START: self._end_move,
            GestureState.SCALE_START: self._end_scale,
            GestureState.SCALING: self._end_scale,
            GestureState.LONG_PRESS: self._end_long_press,
        }
        for table in (self._move_handlers, self._end_handlers):
            missing = set(GestureState) - set(table)
            if missing:
                raise RuntimeError(f"Unhandled gesture states: {sorted(s.value for s in missing)}")

    @property
    def state(self) -> GestureState:
        return self.context.state

    @property
    def touch_count(self) -> int:
        return self.registry.count()

    @property
    def touches(self) -> List[Touch]:
        return self.registry.all()

    # ------------------------------------------------------------------
    # Inbound events
    # ------------------------------------------------------------------

    def on_contact_begin(self, pointer_id: int, position: PointLike, *,
                         global_position: Optional[PointLike] = None, buttons: int = 0):
        """A pointer touched the surface."""
        position = Point.of(position)
        if self.registry.add(pointer_id, position) is None:
            logger.debug(f"Ignoring duplicate contact begin for pointer {pointer_id}")
            return

        count = self.registry.count()
        if count == 1:
            self._set_state(GestureState.POINTER_DOWN)
            self._start_long_press_timer(
                self._tap_event(pointer_id, position, global_position, buttons))
        elif count == 2:
            self._cancel_long_press_timer()
            self._set_state(GestureState.SCALE_START)
        else:
            self._cancel_long_press_timer()
            self._set_state(GestureState.UNKNOWN)

    def on_contact_move(self, pointer_id: int, position: PointLike,
                        delta: Optional[PointLike] = None,
                        local_delta: Optional[PointLike] = None, *,
                        global_position: Optional[PointLike] = None, buttons: int = 0):
        """A pointer in contact moved.

        ``delta`` defaults to the step from the touch's previous position
        and ``local_delta`` defaults to ``delta``.
        """
        touch = self.registry.get(pointer_id)
        if touch is None:
            logger.debug(f"Ignoring move for unknown pointer {pointer_id}")
            return

        position = Point.of(position)
        delta = Point.of(delta) if delta is not None else position - touch.current_offset
        local_delta = Point.of(local_delta) if local_delta is not None else delta
        self.registry.update_position(pointer_id, position)
        self._cancel_double_tap_timer()
        if touch.displacement_squared >= self.config.long_press_max_range_squared:
            self._cancel_long_press_timer()

        event = MoveEvent(
            pointer_id,
            position,
            Point.of(global_position) if global_position is not None else position,
            buttons,
            delta=delta,
            local_delta=local_delta,
        )
        self._move_handlers[self.context.state](touch, event)

    def on_contact_end(self, pointer_id: int, position: PointLike, *,
                       global_position: Optional[PointLike] = None, buttons: int = 0):
        """A pointer left the surface, or its contact was cancelled."""
        if self.registry.remove(pointer_id) is None:
            logger.debug(f"Ignoring end for unknown pointer {pointer_id}")
            return

        position = Point.of(position)
        self._cancel_long_press_timer()
        event = self._tap_event(pointer_id, position, global_position, buttons)
        self._end_handlers[self.context.state](event)
        self.context.last_tap_up_position = position

    on_contact_cancel = on_contact_end

    def on_scroll_signal(self, pointer_id: int, local_position: PointLike,
                         global_position: PointLike, scroll_delta: PointLike):
        """Pass a discrete scroll signal straight through."""
        self._emit('on_scroll', ScrollEvent(
            pointer_id,
            Point.of(local_position),
            Point.of(global_position),
            Point.of(scroll_delta),
        ))

    def reset(self):
        """Drop all touches and pending timers and return to Unknown."""
        self._cancel_timers()
        self.registry.clear()
        self.context = GestureContext()

    # ------------------------------------------------------------------
    # Move dispatch
    # ------------------------------------------------------------------

    def _move_anchor(self, touch: Touch, event: MoveEvent):
        touch.start_offset = touch.current_offset

    def _switch_to_move_start(self, touch: Touch, event: MoveEvent):
        # A pending long press survives jitter within its tolerance
        self._set_state(GestureState.MOVE_START)
        touch.start_offset = event.local_position
        self._emit('on_move_start', MoveEvent(
            event.pointer_id, event.local_position, event.local_position, event.buttons))

    def _move_update(self, touch: Touch, event: MoveEvent):
        self._emit('on_move_update', event)

    def _move_long_press(self, touch: Touch, event: MoveEvent):
        if self.config.bypass_move_event_after_long_press:
            self._emit('on_long_press_move', event)
        else:
            self._switch_to_move_start(touch, event)

    def _move_scale_start(self, touch: Touch, event: MoveEvent):
        touch.start_offset = touch.current_offset
        self._cancel_long_press_timer()
        self._set_state(GestureState.SCALING)
        first, second = self._scale_anchors()
        self.context.initial_scale_distance = GeometryUtils.calculate_distance(
            first.current_offset, second.current_offset)
        self._emit('on_scale_start', GeometryUtils.calculate_midpoint(
            first.current_offset, second.current_offset))

    def _move_scaling(self, touch: Touch, event: MoveEvent):
        if self.callbacks.on_scale_update is None:
            return
        first, second = self._scale_anchors()
        rotation = GeometryUtils.angle_between_lines(
            first.start_offset, second.start_offset,
            first.current_offset, second.current_offset)
        distance = GeometryUtils.calculate_distance(first.current_offset, second.current_offset)
        baseline = self.context.initial_scale_distance
        # Two fingers starting on the same spot have no meaningful ratio
        scale = distance / baseline if baseline > 0 else 1.0
        self._emit('on_scale_update', ScaleEvent(
            GeometryUtils.calculate_midpoint(first.current_offset, second.current_offset),
            scale,
            rotation,
        ))

    def _scale_anchors(self):
        touches = self.registry.all()
        return touches[0], touches[1]

    # ------------------------------------------------------------------
    # End dispatch
    # ------------------------------------------------------------------

    def _end_pointer_down(self, event: TapEvent):
        self._set_state(GestureState.UNKNOWN)
        self._handle_tap(event)

    def _end_scale(self, event: TapEvent):
        self._set_state(GestureState.UNKNOWN)
        self._emit('on_scale_end')

    def _end_move(self, event: TapEvent):
        self._set_state(GestureState.UNKNOWN)
        self._emit('on_move_end', MoveEvent(
            event.pointer_id, event.local_position, event.global_position, event.buttons))

    def _end_long_press(self, event: TapEvent):
        self._set_state(GestureState.UNKNOWN)
        self._emit('on_long_press_end')

    def _end_unknown(self, event: TapEvent):
        # A coexisting third finger lifted: the remaining pair scales afresh
        if self.registry.count() == 2:
            self._set_state(GestureState.SCALE_START)
        else:
            self._set_state(GestureState.UNKNOWN)

    # ------------------------------------------------------------------
    # Tap / double tap / long press
    # ------------------------------------------------------------------

    def _handle_tap(self, event: TapEvent):
        on_double_tap = self.callbacks.on_double_tap
        if not self.config.bypass_tap_event_on_double_tap or on_double_tap is None:
            self._emit('on_tap', event)
        if on_double_tap is None:
            return

        if self.context.double_tap_timer is None:
            self._start_double_tap_timer(event)
            return

        self._cancel_timers()
        distance_squared = GeometryUtils.calculate_distance_squared(
            event.local_position, self.context.last_tap_up_position)
        if distance_squared < self.config.double_tap_max_distance_squared:
            self._emit('on_double_tap', event)
        else:
            logger.debug(f"Second tap too far from the first ({distance_squared:.0f}), restarting window")
            self._start_double_tap_timer(event)

    def _start_double_tap_timer(self, event: TapEvent):
        self._cancel_double_tap_timer()

        def on_double_tap_timeout():
            self.context.double_tap_timer = None
            if self.config.bypass_tap_event_on_double_tap:
                self._emit('on_tap', event)

        self.context.double_tap_timer = self.timers.schedule(
            self.config.double_tap_timeout_ms, on_double_tap_timeout)

    def _start_long_press_timer(self, event: TapEvent):
        if self.callbacks.on_long_press is None:
            return
        self._cancel_long_press_timer()

        def on_long_press_timeout():
            self.context.long_press_timer = None
            touches = self.registry.all()
            if (len(touches) == 1
                    and touches[0].id == event.pointer_id
                    and touches[0].displacement_squared < self.config.long_press_max_range_squared):
                self._set_state(GestureState.LONG_PRESS)
                self._emit('on_long_press', event)
                self._cancel_timers()
            else:
                logger.debug(f"Long press for pointer {event.pointer_id} no longer applies")

        self.context.long_press_timer = self.timers.schedule(
            self.config.long_press_timeout_ms, on_long_press_timeout)

    def _cancel_double_tap_timer(self):
        if self.context.double_tap_timer is not None:
            self.context.double_tap_timer.cancel()
            self.context.double_tap_timer = None

    def _cancel_long_press_timer(self):
        if self.context.long_press_timer is not None:
            self.context.long_press_timer.cancel()
            self.context.long_press_timer = None

    def _cancel_timers(self):
        self._cancel_double_tap_timer()
        self._cancel_long_press_timer()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _set_state(self, state: GestureState):
        if state is not self.context.state:
            logger.debug(f"Gesture state {self.context.state.value} -> {state.value}")
        self.context.state = state

    def _emit(self, slot: str, *args):
        handler = getattr(self.callbacks, slot)
        if handler is not None:
            handler(*args)

    @staticmethod
    def _tap_event(pointer_id: int, position: Point,
                   global_position: Optional[PointLike], buttons: int) -> TapEvent:
        return TapEvent(
            pointer_id,
            position,
            Point.of(global_position) if global_position is not None else position,
            buttons,
        )
