from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from ..core.constants import DEFAULT_TICK_INTERVAL_MS
from .engine import TimerEngine

log = logging.getLogger(__name__)


class TickLoop:
    """Periodic display signal for a running timer.

    Calls on_tick(elapsed_seconds) every interval on a daemon thread and ends
    by itself once the engine is no longer running. The cadence only affects
    how often the display refreshes: each value comes from engine.tick().
    """

    def __init__(
        self,
        engine: TimerEngine,
        on_tick: Callable[[int], None],
        *,
        interval_ms: int = DEFAULT_TICK_INTERVAL_MS,
    ):
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        self._engine = engine
        self._on_tick = on_tick
        self._interval = interval_ms / 1000.0
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.is_alive:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="timeos-tick", daemon=True)
        self._thread.start()

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop_event.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout)

    def _run(self) -> None:
        while not self._stop_event.wait(self._interval):
            if not self._engine.is_running:
                break
            try:
                self._on_tick(self._engine.tick())
            except Exception:
                log.exception("Tick callback failed, stopping tick loop")
                break

    def __enter__(self) -> "TickLoop":
        self.start()
        return self

    def __exit__(self, *exc) -> None:
        self.stop()
