from __future__ import annotations


def format_clock(seconds: int) -> str:
    """Stopwatch display, e.g. 3725 -> '01:02:05'."""
    seconds = max(0, int(seconds))
    h, rem = divmod(seconds, 3600)
    m, s = divmod(rem, 60)
    return f"{h:02d}:{m:02d}:{s:02d}"


def format_duration(seconds: int) -> str:
    """Compact entry duration, e.g. 3725 -> '1h 2m', 125 -> '2m'."""
    seconds = max(0, int(seconds or 0))
    h = seconds // 3600
    m = (seconds % 3600) // 60
    return f"{h}h {m}m" if h > 0 else f"{m}m"


def split_hours_minutes(seconds: int) -> tuple[int, int]:
    seconds = int(seconds or 0)
    return seconds // 3600, (seconds % 3600) // 60


def decimal_hours(seconds: int, places: int = 2) -> str:
    return f"{(seconds or 0) / 3600:.{places}f}"
