from __future__ import annotations

from datetime import date

import pytest

from timeos.companies.model import Company
from timeos.core.exceptions import PersistenceError
from timeos.entries.model import TimeEntry
from timeos.entries.submission import EntrySubmission, ShortIntervalSkipped

STOP_DAY = date(2024, 3, 1)


@pytest.fixture
def submission(entries_repo, companies_repo):
    return EntrySubmission(entries_repo, companies_repo, date_provider=lambda: STOP_DAY)


def test_submit_records_entry_with_snapshot_of_company_name(submission, entries_repo, employee, acme):
    result = submission.submit(
        company_id="1",
        label="  Quarterly review  ",
        elapsed_seconds=3725,
        user=employee,
        known_companies=[acme],
    )

    assert isinstance(result, TimeEntry)
    stored = entries_repo.get_by_id(result.entry_id)
    assert stored.company_name == "Acme Corp"
    assert stored.description == "Quarterly review"
    assert stored.seconds == 3725
    assert stored.user_name == "Alice"
    assert stored.user_title == "Consultant"
    assert stored.entry_date == STOP_DAY


def test_interval_under_one_second_is_skipped(submission, entries_repo, employee):
    result = submission.submit(company_id="1", label="Oops", elapsed_seconds=0, user=employee)

    assert isinstance(result, ShortIntervalSkipped)
    assert result.message == "Timer ran for less than 1 second"
    assert entries_repo.entries == {}


def test_one_second_is_recorded(submission, entries_repo, employee):
    result = submission.submit(company_id="1", label="Blink", elapsed_seconds=1, user=employee)
    assert isinstance(result, TimeEntry)
    assert len(entries_repo.entries) == 1


def test_stale_company_list_is_refetched_once(submission, companies_repo, employee):
    result = submission.submit(
        company_id="2",
        label="Support",
        elapsed_seconds=60,
        user=employee,
        known_companies=[Company("1", "Acme Corp")],
    )

    assert result.company_name == "Globex"
    assert companies_repo.list_calls == 1


def test_known_company_needs_no_fetch(submission, companies_repo, employee, acme):
    submission.submit(company_id="1", label="Work", elapsed_seconds=60, user=employee, known_companies=[acme])
    assert companies_repo.list_calls == 0


def test_unresolvable_company_still_records_time(submission, companies_repo, employee):
    result = submission.submit(company_id="99", label="Work", elapsed_seconds=60, user=employee)

    assert result.company_name == "Unknown Company"
    assert result.company_id == "99"
    assert companies_repo.list_calls == 1


def test_store_failure_propagates(submission, entries_repo, employee):
    entries_repo.fail_writes = True

    with pytest.raises(PersistenceError):
        submission.submit(company_id="1", label="Work", elapsed_seconds=60, user=employee)
