from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Optional, Protocol

from .model import CorruptSnapshotError, TimerSnapshot

log = logging.getLogger(__name__)


def slot_key(user_id: int, device_id: str) -> str:
    """One timer per user per device; two devices never share a slot."""
    return f"{user_id}:{device_id}"


class TimerStateStore(Protocol):
    """A single slot holding at most one timer snapshot."""

    def read(self) -> Optional[TimerSnapshot]:
        """Return the snapshot, None when empty; raise CorruptSnapshotError when unreadable."""
        raise NotImplementedError

    def write(self, snapshot: TimerSnapshot) -> bool:
        """Failures are logged and reported as False, never raised."""
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError


class JsonFileTimerStateStore(TimerStateStore):
    """Slot backed by one JSON file under a local state directory."""

    def __init__(self, directory: str | Path, key: str):
        self._directory = Path(directory)
        self.key = key
        safe = re.sub(r"[^A-Za-z0-9_.-]", "_", key)
        self.path = self._directory / f"timer_{safe}.json"

    def read(self) -> Optional[TimerSnapshot]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise CorruptSnapshotError(f"cannot read {self.path}: {e}") from e

        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, RecursionError) as e:
            raise CorruptSnapshotError(f"invalid JSON in {self.path}: {e}") from e
        return TimerSnapshot.from_dict(data)

    def write(self, snapshot: TimerSnapshot) -> bool:
        tmp_path = self.path.with_suffix(".tmp")
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(snapshot.to_dict(), f, indent=2)
            os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError):
            log.warning("Could not save timer slot %r to '%s'", self.key, self.path, exc_info=True)
            return False
        log.debug("Saved timer slot %r (accumulated=%ss)", self.key, snapshot.accumulated_seconds)
        return True

    def clear(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError:
            log.warning("Could not delete timer slot '%s'", self.path, exc_info=True)
