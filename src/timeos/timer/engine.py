from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from ..common.datetime_utils import now_epoch_ms
from ..common.validators import require_non_empty
from ..core.enums import TimerStatus
from ..core.exceptions import TimerStateError
from .model import CorruptSnapshotError, TimerSnapshot
from .store import TimerStateStore

log = logging.getLogger(__name__)

_UNSET = object()


@dataclass(frozen=True)
class FinishedInterval:
    """What stop() hands over to entry submission."""

    resource_id: Optional[str]
    label: str
    elapsed_seconds: int


class TimerEngine:
    """Single stopwatch with Stopped/Running states.

    Elapsed time is always recomputed from wall-clock deltas, never counted
    from ticks. While running, every state change is written to the store so a
    reload or crash can pick the timer up again with restore().
    """

    def __init__(self, store: TimerStateStore, *, clock: Callable[[], int] = now_epoch_ms):
        self._store = store
        self._clock = clock
        self._status = TimerStatus.STOPPED
        self._started_at_ms: Optional[int] = None
        self._accumulated = 0
        self._resource_id: Optional[str] = None
        self._label = ""

    @property
    def status(self) -> TimerStatus:
        return self._status

    @property
    def is_running(self) -> bool:
        return self._status == TimerStatus.RUNNING

    @property
    def resource_id(self) -> Optional[str]:
        return self._resource_id

    @property
    def label(self) -> str:
        return self._label

    @property
    def started_at_epoch_ms(self) -> Optional[int]:
        return self._started_at_ms

    @property
    def accumulated_seconds(self) -> int:
        return self._accumulated

    def tick(self) -> int:
        """Elapsed seconds for display; reads the clock, changes nothing."""
        if not self.is_running or self._started_at_ms is None:
            return self._accumulated
        running_ms = max(0, self._clock() - self._started_at_ms)
        return self._accumulated + running_ms // 1000

    def start(self, resource_id: Optional[str], label: Optional[str]) -> None:
        if self.is_running:
            raise TimerStateError("Timer is already running")

        resource_id = require_non_empty(None if resource_id is None else str(resource_id), "Please select a company")
        label = require_non_empty(label, "Please enter a description")

        self._resource_id = resource_id
        self._label = label
        self._started_at_ms = self._clock()
        self._accumulated = 0
        self._status = TimerStatus.RUNNING
        log.info("Timer started for company %s", resource_id)
        self._persist()

    def update(self, *, resource_id=_UNSET, label=_UNSET) -> None:
        """Change the company or label; persisted immediately while running."""

        if resource_id is not _UNSET:
            resource_id = None if resource_id is None else str(resource_id)
            if self.is_running:
                resource_id = require_non_empty(resource_id, "Please select a company")
            self._resource_id = resource_id
        if label is not _UNSET:
            if self.is_running:
                label = require_non_empty(label, "Please enter a description")
            self._label = (label or "").strip()

        if self.is_running:
            self._persist()

    def stop(self) -> FinishedInterval:
        if not self.is_running:
            raise TimerStateError("Timer is not running")

        interval = FinishedInterval(
            resource_id=self._resource_id,
            label=self._label,
            elapsed_seconds=self.tick(),
        )
        self.reset()
        log.info("Timer stopped after %ss", interval.elapsed_seconds)
        return interval

    def reset(self) -> None:
        """Back to Stopped with an empty slot. Used by stop() and at logout."""
        self._status = TimerStatus.STOPPED
        self._started_at_ms = None
        self._accumulated = 0
        self._resource_id = None
        self._label = ""
        self._store.clear()

    def restore(self) -> TimerStatus:
        """Resume a timer left running by a previous process.

        The wall-clock gap since the snapshot was saved is added to the
        accumulated seconds, so the display carries on as if nothing happened.
        An unreadable slot is dropped and the timer stays stopped. Restoring never
        writes the slot, so a stop made by another request in the meantime
        is never undone.
        """

        if self.is_running:
            return self._status

        try:
            snapshot = self._store.read()
        except CorruptSnapshotError:
            log.warning("Discarding unreadable timer snapshot", exc_info=True)
            self._store.clear()
            return self._status

        if snapshot is None:
            return self._status
        if snapshot.status != TimerStatus.RUNNING:
            self._store.clear()
            return self._status

        now = self._clock()
        drift = max(0, now - snapshot.saved_at_epoch_ms) // 1000

        self._resource_id = snapshot.resource_id
        self._label = snapshot.label
        self._accumulated = snapshot.accumulated_seconds + drift
        # Shifting the segment start by the same whole seconds keeps the
        # sub-second remainder of the saved segment.
        self._started_at_ms = snapshot.started_at_epoch_ms + drift * 1000
        self._status = TimerStatus.RUNNING
        log.info("Restored running timer (accumulated=%ss, drift=%ss)", self._accumulated, drift)
        return self._status

    def _persist(self) -> None:
        now = self._clock()
        if now < self._started_at_ms:
            # Wall clock moved backwards; the segment cannot start in the future.
            self._started_at_ms = now

        # Fold whole seconds of the current segment into accumulated; the
        # sub-second remainder stays in the segment so tick() is unchanged.
        whole = (now - self._started_at_ms) // 1000
        self._accumulated += whole
        self._started_at_ms += whole * 1000

        self._store.write(
            TimerSnapshot(
                status=TimerStatus.RUNNING,
                started_at_epoch_ms=self._started_at_ms,
                accumulated_seconds=self._accumulated,
                resource_id=self._resource_id,
                label=self._label,
                saved_at_epoch_ms=now,
            )
        )
