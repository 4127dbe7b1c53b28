"""Tests for the gesture logger."""

from xgesture.gestures.events import TapEvent, ScaleEvent
from xgesture.gestures.gesture_detector import XGestureDetector
from xgesture.utils.gesture_utils import Point
from xgesture.utils.logger import GestureLogger
from xgesture.utils.timers import PolledTimerService


def test_logger_prints_and_mirrors_to_debug_file(tmp_path, capsys):
    debug_file = tmp_path / "gestures.log"
    gesture_logger = GestureLogger(debug_file=str(debug_file))

    gesture_logger.log_tap(TapEvent(1, Point(12, 34), Point(12, 34)))
    gesture_logger.log_scale_end()
    gesture_logger.close()

    out = capsys.readouterr().out
    assert "TAP: pointer 1 at (12, 34)" in out
    assert "SCALE END" in out
    assert "TAP: pointer 1" in debug_file.read_text()


def test_move_updates_only_printed_when_verbose(capsys):
    quiet = GestureLogger(debug_file=None)
    quiet.log_scale_update(ScaleEvent(Point(0, 0), 1.5, 0.0))
    assert capsys.readouterr().out == ""

    verbose = GestureLogger(debug_file=None, verbose_moves=True)
    verbose.log_scale_update(ScaleEvent(Point(0, 0), 1.5, 0.0))
    assert "x1.50" in capsys.readouterr().out


def test_logger_callbacks_drive_from_detector(capsys):
    gesture_logger = GestureLogger(debug_file=None)
    timers = PolledTimerService()
    detector = XGestureDetector(timers, callbacks=gesture_logger.callbacks())

    detector.on_contact_begin(1, (5, 5))
    timers.advance(400)
    detector.on_contact_end(1, (5, 5))

    out = capsys.readouterr().out
    assert "LONG PRESS: pointer 1" in out
    assert "LONG PRESS END" in out
