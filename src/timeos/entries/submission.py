from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, Iterable, Optional, Union

from ..common.datetime_utils import today
from ..companies.model import Company
from ..companies.repository import CompanyRepository
from ..core.constants import MIN_ENTRY_SECONDS, UNKNOWN_COMPANY
from ..users.service import SessionUser
from .model import NewTimeEntry, TimeEntry
from .repository import EntryRepository

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShortIntervalSkipped:
    """Informational outcome: the interval was too short to record."""

    elapsed_seconds: int
    message: str = "Timer ran for less than 1 second"


SubmitResult = Union[TimeEntry, ShortIntervalSkipped]


def _find_name(company_id: str, companies: Iterable[Company]) -> Optional[str]:
    for company in companies:
        if company.company_id == company_id and company.name:
            return company.name
    return None


class EntrySubmission:
    """Records a finished timer interval as a time entry.

    The company name is copied onto the entry at stop time. Losing tracked time
    is worse than mislabeling it, so a name that cannot be resolved becomes
    "Unknown Company" instead of failing the write.
    """

    def __init__(
        self,
        entries: EntryRepository,
        companies: CompanyRepository,
        *,
        date_provider: Callable[[], date] = today,
    ):
        self._entries = entries
        self._companies = companies
        self._date_provider = date_provider

    def resolve_company_name(self, company_id: str, known_companies: Iterable[Company] = ()) -> str:
        name = _find_name(company_id, known_companies)
        if name:
            return name

        # The loaded list can be stale or empty after a fast reload: refetch once.
        log.info("Company %s not in loaded list, fetching companies again", company_id)
        name = _find_name(company_id, self._companies.list_all())
        if name:
            return name

        log.warning("Company %s could not be resolved, recording as %r", company_id, UNKNOWN_COMPANY)
        return UNKNOWN_COMPANY

    def submit(
        self,
        *,
        company_id: str,
        label: str,
        elapsed_seconds: int,
        user: SessionUser,
        known_companies: Iterable[Company] = (),
    ) -> SubmitResult:
        if elapsed_seconds < MIN_ENTRY_SECONDS:
            return ShortIntervalSkipped(elapsed_seconds=elapsed_seconds)

        new_entry = NewTimeEntry(
            user_id=user.user_id,
            user_name=user.name or "",
            user_title=user.title or "",
            company_id=company_id,
            company_name=self.resolve_company_name(company_id, known_companies),
            description=(label or "").strip(),
            seconds=int(elapsed_seconds),
            # Stop day, also for intervals that crossed midnight.
            entry_date=self._date_provider(),
        )

        # PersistenceError propagates as-is; the caller reports it.
        entry_id = self._entries.create_entry(new_entry)
        log.info("Recorded %ss for user %s on %s", new_entry.seconds, user.user_id, new_entry.company_name)
        return TimeEntry.from_new(entry_id, new_entry)
