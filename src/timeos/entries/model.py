from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.formatting import format_duration


@dataclass(frozen=True)
class NewTimeEntry:
    """A finished interval ready to be written; the store assigns id and created_at."""

    user_id: int
    user_name: str
    user_title: str
    company_id: Optional[str]
    company_name: str
    description: str
    seconds: int
    entry_date: date


@dataclass(frozen=True)
class TimeEntry:
    """Domain entity: one tracked interval.

    company_name is the name at the moment the timer stopped, not a live reference.
    """

    entry_id: int
    user_id: int
    user_name: str
    user_title: str
    company_id: Optional[str]
    company_name: str
    description: str
    seconds: int
    entry_date: date
    created_at: Optional[datetime] = None

    @classmethod
    def from_new(cls, entry_id: int, new: NewTimeEntry, created_at: Optional[datetime] = None) -> "TimeEntry":
        return cls(
            entry_id=entry_id,
            user_id=new.user_id,
            user_name=new.user_name,
            user_title=new.user_title,
            company_id=new.company_id,
            company_name=new.company_name,
            description=new.description,
            seconds=new.seconds,
            entry_date=new.entry_date,
            created_at=created_at,
        )

    def to_view(self) -> dict:
        return {
            "id": self.entry_id,
            "user_id": self.user_id,
            "user_name": self.user_name,
            "user_title": self.user_title,
            "company_id": self.company_id,
            "company_name": self.company_name,
            "description": self.description,
            "seconds": self.seconds,
            "duration": format_duration(self.seconds),
            "date": self.entry_date.strftime("%Y-%m-%d"),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
