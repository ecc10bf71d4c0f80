from __future__ import annotations

import time
from datetime import date, datetime


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def now_epoch_ms() -> int:
    """Wall-clock milliseconds since the epoch, the unit timer snapshots are stored in."""
    return int(time.time() * 1000)


def today() -> date:
    return now_local().date()
