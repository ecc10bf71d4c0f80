from __future__ import annotations

import pytest

from timeos.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from timeos.entries.service import EntryService


@pytest.fixture
def seeded(entries_repo, make_entry):
    entries_repo.entries = {
        1: make_entry(1, user_id=1),
        2: make_entry(2, user_id=5, user_name="Bob"),
        3: make_entry(3, user_id=1, day=16),
    }
    entries_repo._id = 3
    return entries_repo


def test_list_own_newest_first(seeded, employee):
    entries = EntryService(seeded).list_own(employee)
    assert [e.entry_id for e in entries] == [3, 1]


def test_list_all_is_admin_only(seeded, employee, admin):
    svc = EntryService(seeded)
    assert len(svc.list_all(admin)) == 3
    with pytest.raises(AuthorizationError):
        svc.list_all(employee)


def test_edit_description_and_duration(seeded, employee):
    entry = EntryService(seeded).update_entry(employee, 1, description=" Refined ", hours=1, minutes=30)

    assert entry.description == "Refined"
    assert entry.seconds == 5400
    assert seeded.get_by_id(1).seconds == 5400
    assert seeded.get_by_id(1).company_name == "Acme Corp"


@pytest.mark.parametrize(
    "description,hours,minutes,message",
    [
        ("", 1, 0, "Description is required"),
        ("Work", 0, 0, "greater than 0"),
        ("Work", "x", 0, "Hours must be a number"),
    ],
)
def test_edit_validation(seeded, employee, description, hours, minutes, message):
    with pytest.raises(ValidationError, match=message):
        EntryService(seeded).update_entry(employee, 1, description=description, hours=hours, minutes=minutes)


def test_cannot_touch_other_users_entries(seeded, employee):
    svc = EntryService(seeded)

    with pytest.raises(AuthorizationError):
        svc.update_entry(employee, 2, description="Mine now", hours=1)
    with pytest.raises(AuthorizationError):
        svc.delete_entry(employee, 2)


def test_admin_can_delete_any_entry(seeded, admin):
    EntryService(seeded).delete_entry(admin, 2)
    assert seeded.get_by_id(2) is None


def test_missing_entry(seeded, employee):
    with pytest.raises(NotFoundError):
        EntryService(seeded).delete_entry(employee, 99)
