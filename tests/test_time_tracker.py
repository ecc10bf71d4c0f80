from __future__ import annotations

from datetime import date

import pytest

from timeos.core.exceptions import AIServiceError, PersistenceError, TimerStateError, ValidationError
from timeos.entries.submission import EntrySubmission
from timeos.timer.engine import TimerEngine
from timeos.timer.service import TimeTracker


class FakeAI:
    def __init__(self):
        self.calls = []

    def enhance_description(self, rough):
        self.calls.append(rough)
        return f"Professional: {rough}"


@pytest.fixture
def ai():
    return FakeAI()


@pytest.fixture
def tracker(store, clock, entries_repo, companies_repo, employee, acme, ai):
    submission = EntrySubmission(entries_repo, companies_repo, date_provider=lambda: date(2024, 3, 1))
    return TimeTracker(TimerEngine(store, clock=clock), submission, employee, known_companies=[acme], ai=ai)


def test_status_while_stopped(tracker):
    view = tracker.status()
    assert view["status"] == "stopped"
    assert view["display"] == "00:00:00"
    assert view["tick_interval_ms"] == 100


def test_status_shows_clock_while_running(tracker, clock):
    tracker.start("1", "Planning")
    clock.advance(3725)

    view = tracker.status()
    assert view["status"] == "running"
    assert view["elapsed_seconds"] == 3725
    assert view["display"] == "01:02:05"
    assert view["resource_id"] == "1"


def test_stop_records_entry(tracker, clock, entries_repo):
    tracker.start("1", "Planning")
    clock.advance(90)

    outcome = tracker.stop()

    assert outcome.elapsed_seconds == 90
    assert outcome.skipped is None
    assert outcome.entry.company_name == "Acme Corp"
    assert entries_repo.get_by_id(outcome.entry.entry_id).seconds == 90
    assert outcome.to_view()["message"] == "Time entry saved"
    assert tracker.status()["status"] == "stopped"


def test_stop_of_short_interval_is_skipped(tracker, clock, entries_repo):
    tracker.start("1", "Planning")
    clock.advance(0.4)

    outcome = tracker.stop()

    assert outcome.entry is None
    assert outcome.to_view()["skipped"] is True
    assert entries_repo.entries == {}


def test_failed_save_leaves_timer_stopped(tracker, clock, entries_repo, store):
    tracker.start("1", "Planning")
    clock.advance(30)
    entries_repo.fail_writes = True

    with pytest.raises(PersistenceError):
        tracker.stop()

    assert tracker.status()["status"] == "stopped"
    assert store.snapshot is None


def test_update_changes_label_while_running(tracker, clock):
    tracker.start("1", "Planning")
    clock.advance(5)

    view = tracker.update(label="Planning sprint 4")

    assert view["label"] == "Planning sprint 4"
    assert view["elapsed_seconds"] == 5


def test_enhance_label_uses_draft(tracker, ai):
    tracker.update(label="fix bug login")
    assert tracker.enhance_label() == "Professional: fix bug login"
    assert ai.calls == ["fix bug login"]


def test_enhance_label_requires_text(tracker):
    with pytest.raises(ValidationError, match="Please enter a description first"):
        tracker.enhance_label("  ")


def test_enhance_label_rejected_while_running(tracker, ai):
    tracker.start("1", "Planning")
    with pytest.raises(TimerStateError):
        tracker.enhance_label("Planning")
    assert ai.calls == []


def test_enhance_label_without_ai_client(store, clock, entries_repo, companies_repo, employee):
    tracker = TimeTracker(TimerEngine(store, clock=clock), EntrySubmission(entries_repo, companies_repo), employee)
    with pytest.raises(AIServiceError):
        tracker.enhance_label("draft")
