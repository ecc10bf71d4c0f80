from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class TimerStatus(str, Enum):
    """State of the per-device stopwatch."""

    STOPPED = "stopped"
    RUNNING = "running"
