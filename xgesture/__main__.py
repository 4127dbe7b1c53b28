"""
XGesture Listener - Main Entry Point
Prints the gestures detected on a Linux multitouch device.

Run with ``python -m xgesture`` or the ``xgesture-listen`` script.
"""

import argparse
import logging
import time

from xgesture.config.settings import GestureConfig, TouchConfig
from xgesture.core.listener import TouchListener
from xgesture.gestures.gesture_detector import GestureCallbacks
from xgesture.utils.logger import GestureLogger


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Print gestures detected on a multitouch device")
    parser.add_argument("--device", help="Input device path, e.g. /dev/input/event5 (default: first multitouch device)")
    parser.add_argument("--double-tap-ms", type=int, default=TouchConfig.DOUBLE_TAP_TIMEOUT,
                        help="Double tap window in milliseconds")
    parser.add_argument("--long-press-ms", type=int, default=TouchConfig.LONG_PRESS_TIMEOUT,
                        help="Long press window in milliseconds")
    parser.add_argument("--long-press-range", type=float, default=TouchConfig.LONG_PRESS_MAX_RANGE_SQUARED,
                        help="Squared distance a finger may drift during a long press")
    parser.add_argument("--moves-after-long-press", action="store_true",
                        help="Start a drag when moving after a long press instead of long-press moves")
    parser.add_argument("--defer-taps", action="store_true",
                        help="Hold single taps back until the double tap window closes")
    parser.add_argument("--verbose-moves", action="store_true", help="Print every move and scale update")
    parser.add_argument("--debug-file", default="gesture_debug.log", help="Gesture debug log file ('' to disable)")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point for the gesture listener."""
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        config = GestureConfig(
            double_tap_timeout_ms=args.double_tap_ms,
            long_press_timeout_ms=args.long_press_ms,
            long_press_max_range_squared=args.long_press_range,
            bypass_move_event_after_long_press=not args.moves_after_long_press,
            bypass_tap_event_on_double_tap=args.defer_taps,
        )
    except ValueError as e:
        print(f"❌ {e}")
        return 2

    gesture_logger = GestureLogger(debug_file=args.debug_file or None, verbose_moves=args.verbose_moves)
    callbacks: GestureCallbacks = gesture_logger.callbacks()
    listener = TouchListener(callbacks=callbacks, config=config, device_path=args.device)

    if not listener.start():
        gesture_logger.close()
        return 1

    try:
        while True:
            time.sleep(0.1)
    except KeyboardInterrupt:
        print("\n👋 Stopping...")
    finally:
        listener.stop()
        gesture_logger.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
