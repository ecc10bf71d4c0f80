from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ..common.formatting import format_clock
from ..common.validators import require_non_empty
from ..companies.model import Company
from ..core.constants import DEFAULT_TICK_INTERVAL_MS
from ..core.exceptions import AIServiceError, TimerStateError
from ..entries.model import TimeEntry
from ..entries.submission import EntrySubmission, ShortIntervalSkipped
from ..reports.ai import GeminiClient
from ..users.service import SessionUser
from .engine import TimerEngine

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class StopOutcome:
    elapsed_seconds: int
    entry: Optional[TimeEntry] = None
    skipped: Optional[ShortIntervalSkipped] = None

    def to_view(self) -> dict:
        return {
            "elapsed_seconds": self.elapsed_seconds,
            "entry": self.entry.to_view() if self.entry else None,
            "skipped": self.skipped is not None,
            "message": self.skipped.message if self.skipped else "Time entry saved",
        }


class TimeTracker:
    """Use case: one user's timer on one device, from start to a recorded entry."""

    def __init__(
        self,
        engine: TimerEngine,
        submission: EntrySubmission,
        user: SessionUser,
        *,
        known_companies: Sequence[Company] = (),
        ai: Optional[GeminiClient] = None,
        tick_interval_ms: int = DEFAULT_TICK_INTERVAL_MS,
    ):
        self._engine = engine
        self._submission = submission
        self._user = user
        self._known_companies = list(known_companies)
        self._ai = ai
        self._tick_interval_ms = tick_interval_ms

    def status(self) -> dict:
        elapsed = self._engine.tick()
        return {
            "status": self._engine.status.value,
            "elapsed_seconds": elapsed,
            "display": format_clock(elapsed),
            "resource_id": self._engine.resource_id,
            "label": self._engine.label,
            "started_at_epoch_ms": self._engine.started_at_epoch_ms,
            "accumulated_seconds": self._engine.accumulated_seconds,
            "tick_interval_ms": self._tick_interval_ms,
        }

    def start(self, resource_id: Optional[str], label: Optional[str]) -> dict:
        self._engine.start(resource_id, label)
        return self.status()

    def update(self, **changes) -> dict:
        self._engine.update(**changes)
        return self.status()

    def stop(self) -> StopOutcome:
        """Stop the timer and record the interval.

        The engine is Stopped before the entry is written; if the write fails
        the interval is not kept and the error reaches the caller.
        """

        interval = self._engine.stop()
        result = self._submission.submit(
            company_id=interval.resource_id,
            label=interval.label,
            elapsed_seconds=interval.elapsed_seconds,
            user=self._user,
            known_companies=self._known_companies,
        )
        if isinstance(result, ShortIntervalSkipped):
            log.info("Skipped %ss interval for user %s", interval.elapsed_seconds, self._user.user_id)
            return StopOutcome(elapsed_seconds=interval.elapsed_seconds, skipped=result)
        return StopOutcome(elapsed_seconds=interval.elapsed_seconds, entry=result)

    def enhance_label(self, text: Optional[str] = None) -> str:
        if self._engine.is_running:
            raise TimerStateError("Stop the timer before enhancing the description")
        draft = require_non_empty(text if text is not None else self._engine.label, "Please enter a description first")
        if self._ai is None:
            raise AIServiceError("AI service is not configured")
        return self._ai.enhance_description(draft)
