"""Gesture Detection Demo with Visual Feedback.

This demo feeds mouse and touch input from a pygame window into the
gesture detector and shows the recognised gestures as they happen.

Left mouse button acts as a single finger, the mouse wheel sends scroll
signals, and on a touchscreen every finger becomes its own contact.
Needs the ``demo`` extra (pygame); run with ``python -m xgesture.demo``.
"""

import math
from collections import deque
from typing import Deque, Tuple

import pygame

from xgesture.config.settings import GestureConfig, TouchConfig
from xgesture.gestures.events import MoveEvent, ScaleEvent, ScrollEvent
from xgesture.gestures.gesture_detector import XGestureDetector
from xgesture.utils.gesture_utils import Point
from xgesture.utils.timers import PolledTimerService

MOUSE_POINTER_ID = 0


class GestureDemo:
    """Interactive demo for gesture detection."""

    def __init__(self, size: Tuple[int, int] = (1280, 800)) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode(size)
        pygame.display.set_caption("XGesture Demo - tap, double tap, hold, drag, pinch, scroll")

        self.timers = PolledTimerService(clock=pygame.time.get_ticks)
        self.detector = XGestureDetector(
            self.timers,
            config=GestureConfig(bypass_tap_event_on_double_tap=True),
            on_tap=lambda e: self.report("Tap", e.local_position),
            on_double_tap=lambda e: self.report("Double tap", e.local_position),
            on_long_press=lambda e: self.report("Long press", e.local_position),
            on_long_press_move=self.on_long_press_move,
            on_long_press_end=lambda: self.report("Long press end"),
            on_move_start=lambda e: self.report("Move start", e.local_position),
            on_move_update=self.on_move_update,
            on_move_end=lambda e: self.report("Move end", e.local_position),
            on_scale_start=lambda p: self.report("Scale start", p),
            on_scale_update=self.on_scale_update,
            on_scale_end=lambda: self.report("Scale end"),
            on_scroll=self.on_scroll,
        )

        self.messages: Deque[str] = deque(maxlen=14)
        self.trail: Deque[Tuple[int, int]] = deque(maxlen=200)
        self.scale_text = ""
        self.scroll_offset = Point(0, 0)

        # Colors
        self.BLACK = (0, 0, 0)
        self.WHITE = (255, 255, 255)
        self.RED = (255, 0, 0)
        self.GREEN = (0, 255, 0)
        self.BLUE = (0, 0, 255)
        self.GRAY = (128, 128, 128)

        # Fonts
        self.font = pygame.font.Font(None, 40)
        self.small_font = pygame.font.Font(None, 30)

    def run(self) -> None:
        """Run the demo loop."""
        clock = pygame.time.Clock()
        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return
                self.handle_event(event)

            self.timers.poll()
            self.draw()
            clock.tick(60)

    def handle_event(self, event) -> None:
        """Translate one pygame event into detector calls."""
        # SDL mirrors touches as mouse events; the FINGER* events cover them
        if getattr(event, "touch", False):
            return

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self.detector.on_contact_begin(MOUSE_POINTER_ID, event.pos, buttons=1)
        elif event.type == pygame.MOUSEMOTION and event.buttons[0]:
            self.detector.on_contact_move(MOUSE_POINTER_ID, event.pos, event.rel, buttons=1)
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.detector.on_contact_end(MOUSE_POINTER_ID, event.pos)
        elif event.type == pygame.MOUSEWHEEL:
            pos = pygame.mouse.get_pos()
            step = TouchConfig.SCROLL_LINE_PIXELS
            self.detector.on_scroll_signal(MOUSE_POINTER_ID, pos, pos, (event.x * step, -event.y * step))
        elif event.type == pygame.FINGERDOWN:
            self.detector.on_contact_begin(self.finger_id(event), self.finger_pos(event))
        elif event.type == pygame.FINGERMOTION:
            width, height = self.screen.get_size()
            delta = (event.dx * width, event.dy * height)
            self.detector.on_contact_move(self.finger_id(event), self.finger_pos(event), delta)
        elif event.type == pygame.FINGERUP:
            self.detector.on_contact_end(self.finger_id(event), self.finger_pos(event))
        elif event.type == pygame.KEYDOWN and event.key == pygame.K_c:
            self.clear_screen()

    @staticmethod
    def finger_id(event) -> int:
        # Keep finger ids clear of the mouse pointer id
        return event.finger_id + 1

    def finger_pos(self, event) -> Tuple[float, float]:
        """SDL reports finger positions normalised to [0, 1]."""
        width, height = self.screen.get_size()
        return event.x * width, event.y * height

    def report(self, name: str, position: Point = None) -> None:
        if position is not None:
            name = f"{name} at ({position.x:.0f}, {position.y:.0f})"
        self.messages.appendleft(name)

    def on_move_update(self, event: MoveEvent) -> None:
        self.trail.append((int(event.local_position.x), int(event.local_position.y)))

    def on_long_press_move(self, event: MoveEvent) -> None:
        self.trail.append((int(event.local_position.x), int(event.local_position.y)))

    def on_scale_update(self, event: ScaleEvent) -> None:
        self.scale_text = f"scale x{event.scale:.2f}  rotation {math.degrees(event.rotation_angle):.1f}°"

    def on_scroll(self, event: ScrollEvent) -> None:
        self.scroll_offset = self.scroll_offset + event.scroll_delta
        self.report(f"Scroll ({event.scroll_delta.x:.0f}, {event.scroll_delta.y:.0f})")

    def clear_screen(self) -> None:
        self.messages.clear()
        self.trail.clear()
        self.scale_text = ""
        self.scroll_offset = Point(0, 0)

    def draw(self) -> None:
        """Draw touches, the drag trail and the event log."""
        self.screen.fill(self.WHITE)

        if len(self.trail) > 1:
            pygame.draw.lines(self.screen, self.BLUE, False, list(self.trail), 3)

        touches = self.detector.touches
        for touch in touches:
            start = (int(touch.start_offset.x), int(touch.start_offset.y))
            current = (int(touch.current_offset.x), int(touch.current_offset.y))
            pygame.draw.circle(self.screen, self.GRAY, start, 10, 2)
            pygame.draw.circle(self.screen, self.RED, current, 24, 3)
        if len(touches) >= 2:
            first, second = touches[0].current_offset, touches[1].current_offset
            pygame.draw.line(self.screen, self.GREEN, (first.x, first.y), (second.x, second.y), 2)

        state = self.font.render(f"State: {self.detector.state.value}", True, self.BLACK)
        self.screen.blit(state, (20, 20))
        if self.scale_text:
            self.screen.blit(self.font.render(self.scale_text, True, self.BLACK), (20, 60))
        scroll = self.small_font.render(
            f"Scroll offset: ({self.scroll_offset.x:.0f}, {self.scroll_offset.y:.0f})", True, self.GRAY)
        self.screen.blit(scroll, (20, 100))

        for i, message in enumerate(self.messages):
            text = self.small_font.render(message, True, self.BLACK if i == 0 else self.GRAY)
            self.screen.blit(text, (20, 150 + i * 30))

        help_text = self.small_font.render("Press C to clear", True, self.GRAY)
        self.screen.blit(help_text, (20, self.screen.get_height() - 40))

        pygame.display.flip()


def main() -> None:
    demo = GestureDemo()
    try:
        demo.run()
    finally:
        pygame.quit()


if __name__ == "__main__":
    main()
