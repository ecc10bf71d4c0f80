from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Optional

from ..core.enums import TimerStatus

SCHEMA_VERSION = 1


class CorruptSnapshotError(ValueError):
    """The persisted slot holds something that is not a valid snapshot."""


def _int_field(data: dict, key: str) -> int:
    value = data.get(key)
    # bool is an int subclass; a True start time is still garbage
    if isinstance(value, bool) or not isinstance(value, int):
        raise CorruptSnapshotError(f"{key} must be an integer, got {value!r}")
    return value


@dataclass(frozen=True)
class TimerSnapshot:
    """Persisted form of a running timer.

    accumulated_seconds is the elapsed time observed at saved_at_epoch_ms; the
    running segment that produced it starts at started_at_epoch_ms.
    """

    status: TimerStatus
    started_at_epoch_ms: int
    accumulated_seconds: int
    resource_id: Optional[str]
    label: str
    saved_at_epoch_ms: int

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["status"] = self.status.value
        data["schema_version"] = SCHEMA_VERSION
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "TimerSnapshot":
        if not isinstance(data, dict):
            raise CorruptSnapshotError("snapshot must be a JSON object")

        try:
            status = TimerStatus(data.get("status"))
        except (TypeError, ValueError) as e:
            raise CorruptSnapshotError(str(e)) from e

        started = _int_field(data, "started_at_epoch_ms")
        accumulated = _int_field(data, "accumulated_seconds")
        saved = _int_field(data, "saved_at_epoch_ms")
        if accumulated < 0:
            raise CorruptSnapshotError("accumulated_seconds is negative")
        if started > saved:
            raise CorruptSnapshotError("started_at_epoch_ms is after saved_at_epoch_ms")

        resource_id = data.get("resource_id")
        if resource_id is not None:
            resource_id = str(resource_id)
        label = data.get("label") or ""
        if not isinstance(label, str):
            raise CorruptSnapshotError("label must be a string")

        return cls(
            status=status,
            started_at_epoch_ms=started,
            accumulated_seconds=accumulated,
            resource_id=resource_id,
            label=label,
            saved_at_epoch_ms=saved,
        )
