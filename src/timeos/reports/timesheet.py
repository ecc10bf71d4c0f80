from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..common.formatting import format_duration
from ..companies.model import Company
from ..entries.model import TimeEntry
from .csv_export import total_hours

_env = Environment(
    loader=FileSystemLoader(str(Path(__file__).resolve().parent / "templates")),
    autoescape=select_autoescape(["html"]),
)


def render_timesheet_html(
    company: Company,
    entries: Sequence[TimeEntry],
    *,
    report_date: date,
    printable: bool = True,
) -> str:
    """Client timesheet as a standalone HTML page.

    printable adds the print button used by the browser preview; the emailed
    copy leaves it out.
    """

    rows = [
        {
            "date": e.entry_date.strftime("%Y-%m-%d"),
            "user_name": e.user_name,
            "description": e.description,
            "duration": format_duration(e.seconds),
        }
        for e in entries
    ]
    return _env.get_template("timesheet.html").render(
        company_name=company.name,
        client_reference=company.client_reference,
        total_hours=total_hours(entries),
        entry_count=len(rows),
        report_date=report_date.strftime("%Y-%m-%d"),
        rows=rows,
        printable=printable,
    )


def render_timesheet_text(company: Company, entries: Sequence[TimeEntry], *, report_date: date) -> str:
    """Plain-text alternative part for the timesheet email."""

    lines = [f"Work Hours Report - {company.name}"]
    if company.client_reference:
        lines.append(f"Reference: {company.client_reference}")
    lines += [
        f"Total Hours: {total_hours(entries)} hours",
        f"Number of Entries: {len(entries)}",
        f"Report Date: {report_date.strftime('%Y-%m-%d')}",
        "",
    ]
    for e in entries:
        lines.append(f"{e.entry_date:%Y-%m-%d}  {e.user_name}  {format_duration(e.seconds)}  {e.description}")
    return "\n".join(lines) + "\n"
