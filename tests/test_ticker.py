from __future__ import annotations

import threading
import time

import pytest

from timeos.timer.engine import TimerEngine
from timeos.timer.ticker import TickLoop


def _wait_until(predicate, timeout=2.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


def test_tick_loop_reports_engine_elapsed(store, clock):
    engine = TimerEngine(store, clock=clock)
    engine.start("1", "Work")
    clock.advance(61)

    seen = []
    got_three = threading.Event()

    def on_tick(elapsed):
        seen.append(elapsed)
        if len(seen) >= 3:
            got_three.set()

    with TickLoop(engine, on_tick, interval_ms=5):
        assert got_three.wait(2.0)

    assert all(value == 61 for value in seen)


def test_tick_loop_ends_when_engine_stops(store, clock):
    engine = TimerEngine(store, clock=clock)
    engine.start("1", "Work")

    loop = TickLoop(engine, lambda elapsed: None, interval_ms=5)
    loop.start()
    engine.stop()

    assert _wait_until(lambda: not loop.is_alive)


def test_tick_loop_ends_after_callback_error(store, clock):
    engine = TimerEngine(store, clock=clock)
    engine.start("1", "Work")

    def boom(elapsed):
        raise RuntimeError("display gone")

    loop = TickLoop(engine, boom, interval_ms=5)
    loop.start()

    assert _wait_until(lambda: not loop.is_alive)
    assert engine.is_running


def test_interval_must_be_positive(store, clock):
    with pytest.raises(ValueError):
        TickLoop(TimerEngine(store, clock=clock), lambda elapsed: None, interval_ms=0)
