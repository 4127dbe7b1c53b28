"""Tests for translating evdev multitouch frames into detector calls."""

import threading
from types import SimpleNamespace
from unittest import mock

import pytest

pytest.importorskip("evdev")
from evdev import ecodes  # noqa: E402

from xgesture.config.settings import GestureConfig  # noqa: E402
from xgesture.core.listener import TouchListener, WHEEL_POINTER_ID  # noqa: E402
from xgesture.gestures.gesture_detector import GestureCallbacks  # noqa: E402
from xgesture.utils.gesture_utils import Point  # noqa: E402


def abs_event(code, value):
    return SimpleNamespace(type=ecodes.EV_ABS, code=code, value=value)


def rel_event(code, value):
    return SimpleNamespace(type=ecodes.EV_REL, code=code, value=value)


def syn():
    return SimpleNamespace(type=ecodes.EV_SYN, code=ecodes.SYN_REPORT, value=0)


def finger(slot, tracking_id=None, x=None, y=None):
    events = [abs_event(ecodes.ABS_MT_SLOT, slot)]
    if tracking_id is not None:
        events.append(abs_event(ecodes.ABS_MT_TRACKING_ID, tracking_id))
    if x is not None:
        events.append(abs_event(ecodes.ABS_MT_POSITION_X, x))
    if y is not None:
        events.append(abs_event(ecodes.ABS_MT_POSITION_Y, y))
    return events


@pytest.fixture
def listener():
    touch_listener = TouchListener(callbacks=GestureCallbacks())
    touch_listener.gesture_detector = mock.Mock()
    return touch_listener


def test_finger_down_move_up(listener):
    detector = listener.gesture_detector

    listener._process_event_batch(finger(0, 12, 100, 200) + [syn()])
    detector.on_contact_begin.assert_called_once_with(12, Point(100, 200))

    listener._process_event_batch(finger(0, x=110) + [syn()])
    detector.on_contact_move.assert_called_once_with(12, Point(110, 200), Point(10, 0))

    listener._process_event_batch(finger(0, -1) + [syn()])
    detector.on_contact_end.assert_called_once_with(12, Point(110, 200))


def test_unchanged_position_reports_no_move(listener):
    listener._process_event_batch(finger(0, 1, 10, 10) + [syn()])
    listener._process_event_batch(finger(0, x=10) + [syn()])

    listener.gesture_detector.on_contact_move.assert_not_called()


def test_frame_reports_ends_before_begins(listener):
    detector = listener.gesture_detector
    listener._process_event_batch(finger(1, 5, 50, 50) + [syn()])
    detector.reset_mock()

    listener._process_event_batch(finger(0, 6, 10, 10) + finger(1, -1) + [syn()])

    assert detector.mock_calls == [
        mock.call.on_contact_end(5, Point(50, 50)),
        mock.call.on_contact_begin(6, Point(10, 10)),
    ]


def test_slot_handed_to_new_contact(listener):
    detector = listener.gesture_detector
    listener._process_event_batch(finger(0, 1, 10, 10) + [syn()])
    detector.reset_mock()

    listener._process_event_batch(finger(0, 2, 300, 300) + [syn()])

    assert detector.mock_calls == [
        mock.call.on_contact_end(1, Point(10, 10)),
        mock.call.on_contact_begin(2, Point(300, 300)),
    ]


def test_contact_within_single_frame(listener):
    listener._process_event_batch(finger(0, 3, 40, 40) + finger(0, -1) + [syn()])

    assert listener.gesture_detector.mock_calls == [
        mock.call.on_contact_begin(3, Point(40, 40)),
        mock.call.on_contact_end(3, Point(40, 40)),
    ]


def test_wheel_becomes_scroll_signal(listener):
    listener._process_event_batch([rel_event(ecodes.REL_WHEEL, 1), rel_event(ecodes.REL_HWHEEL, -2), syn()])

    listener.gesture_detector.on_scroll_signal.assert_called_once_with(
        WHEEL_POINTER_ID, Point(0, 0), Point(0, 0), Point(-40, -20))


def test_frames_drive_a_real_detector():
    taps = []
    touch_listener = TouchListener(callbacks=GestureCallbacks(on_tap=taps.append))

    touch_listener._process_event_batch(finger(0, 9, 70, 80) + [syn()])
    touch_listener._process_event_batch(finger(0, -1) + [syn()])
    touch_listener.stop()

    assert [(t.pointer_id, t.local_position) for t in taps] == [(9, Point(70, 80))]


def test_long_press_callback_can_stop_its_listener():
    stopped = threading.Event()

    def on_long_press(event):
        touch_listener.stop()
        stopped.set()

    touch_listener = TouchListener(callbacks=GestureCallbacks(on_long_press=on_long_press),
                                   config=GestureConfig(long_press_timeout_ms=10))
    with touch_listener.state_lock:
        touch_listener._process_event_batch(finger(0, 4, 50, 50) + [syn()])

    assert stopped.wait(2.0)
    assert touch_listener.gesture_detector.touch_count == 0
