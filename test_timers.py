"""Tests for the timer services."""

import threading
import time

from xgesture.utils.timers import PolledTimerService, ThreadingTimerService


def test_polled_callbacks_fire_in_due_order():
    timers = PolledTimerService()
    fired = []
    timers.schedule(30, lambda: fired.append('late'))
    timers.schedule(10, lambda: fired.append('early'))

    assert timers.advance(9) == 0
    assert timers.advance(25) == 2
    assert fired == ['early', 'late']
    assert timers.pending == 0


def test_cancelled_callback_never_fires():
    timers = PolledTimerService()
    fired = []
    handle = timers.schedule(10, lambda: fired.append(True))
    handle.cancel()

    assert not handle.active
    assert timers.advance(100) == 0
    assert fired == []


def test_callback_scheduled_while_firing_uses_its_due_time():
    timers = PolledTimerService()
    fired = []

    def first():
        fired.append('first')
        timers.schedule(10, lambda: fired.append('second'))

    timers.schedule(10, first)
    timers.advance(15)
    assert fired == ['first']

    timers.advance(5)
    assert fired == ['first', 'second']


def test_poll_with_external_clock():
    now = [1000.0]
    timers = PolledTimerService(clock=lambda: now[0])
    fired = []
    timers.schedule(50, lambda: fired.append(True))

    now[0] = 1049.0
    assert timers.poll() == 0
    now[0] = 1050.0
    assert timers.poll() == 1
    assert fired == [True]


def test_threading_timer_runs_under_lock():
    lock = threading.Lock()
    timers = ThreadingTimerService(lock)
    done = threading.Event()
    held = []

    def callback():
        held.append(lock.locked())
        done.set()

    timers.schedule(10, callback)

    assert done.wait(2.0)
    assert held == [True]


def test_threading_timer_cancel():
    timers = ThreadingTimerService()
    fired = []
    handle = timers.schedule(50, lambda: fired.append(True))
    handle.cancel()
    time.sleep(0.15)

    assert fired == []
    assert not handle.active


def test_threading_timer_cancelled_while_waiting_for_lock():
    timers = ThreadingTimerService()
    fired = []
    with timers.lock:
        handle = timers.schedule(1, lambda: fired.append(True))
        time.sleep(0.1)
        handle.cancel()
    time.sleep(0.1)

    assert fired == []


def test_threading_timer_callback_may_take_the_default_lock_again():
    timers = ThreadingTimerService()
    done = threading.Event()

    def callback():
        with timers.lock:
            done.set()

    timers.schedule(1, callback)

    assert done.wait(2.0)
