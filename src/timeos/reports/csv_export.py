"""Pure helpers turning time entries into CSV text and summary figures."""

from __future__ import annotations

import csv
import io
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from ..common.formatting import decimal_hours, split_hours_minutes
from ..entries.model import TimeEntry

ALL_COMPANIES = "all"

CSV_HEADERS = [
    "Date",
    "Employee Name",
    "Job Title",
    "Company",
    "Description",
    "Hours",
    "Minutes",
    "Total Hours (Decimal)",
]


@dataclass(frozen=True)
class ReportSummary:
    total_seconds: int
    total_entries: int
    employee_count: int
    company_seconds: dict[str, int] = field(default_factory=dict)
    user_seconds: dict[str, int] = field(default_factory=dict)

    @property
    def total_hours(self) -> str:
        return decimal_hours(self.total_seconds, 1)

    def to_dict(self) -> dict:
        return {
            "total_hours": self.total_hours,
            "total_seconds": self.total_seconds,
            "total_entries": self.total_entries,
            "employee_count": self.employee_count,
            "company_hours": {k: decimal_hours(v, 2) for k, v in self.company_seconds.items()},
            "user_hours": {k: decimal_hours(v, 2) for k, v in self.user_seconds.items()},
        }


def filter_by_company(entries: Iterable[TimeEntry], company_name: str = ALL_COMPANIES) -> list[TimeEntry]:
    if not company_name or company_name == ALL_COMPANIES:
        return list(entries)
    return [e for e in entries if e.company_name == company_name]


def total_hours(entries: Iterable[TimeEntry], places: int = 1) -> str:
    return decimal_hours(sum(e.seconds or 0 for e in entries), places)


def summarize(entries: Sequence[TimeEntry]) -> ReportSummary:
    company_seconds: dict[str, int] = defaultdict(int)
    user_seconds: dict[str, int] = defaultdict(int)
    for e in entries:
        company_seconds[e.company_name or "Unknown"] += e.seconds or 0
        user_seconds[e.user_name or "Unknown"] += e.seconds or 0

    return ReportSummary(
        total_seconds=sum(e.seconds or 0 for e in entries),
        total_entries=len(entries),
        employee_count=len({e.user_id for e in entries}),
        company_seconds=dict(company_seconds),
        user_seconds=dict(user_seconds),
    )


def entry_row(entry: TimeEntry) -> list:
    hours, minutes = split_hours_minutes(entry.seconds)
    return [
        entry.entry_date.strftime("%Y-%m-%d"),
        entry.user_name or "",
        entry.user_title or "",
        entry.company_name or "",
        entry.description or "",
        hours,
        minutes,
        decimal_hours(entry.seconds, 2),
    ]


def entries_to_csv(entries: Iterable[TimeEntry]) -> str:
    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for entry in entries:
        writer.writerow(entry_row(entry))
    return out.getvalue()


def export_filename(company_name: str = ALL_COMPANIES) -> str:
    if not company_name or company_name == ALL_COMPANIES:
        return "all_time_entries.csv"
    safe = "".join(ch if ch.isalnum() or ch in "-_ " else "_" for ch in company_name).strip()
    return f"{safe or 'company'}_time_entries.csv"
