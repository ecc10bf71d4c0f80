from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional, Sequence

import pytest

from timeos.companies.model import Company
from timeos.core.enums import Role
from timeos.core.exceptions import PersistenceError
from timeos.entries.model import NewTimeEntry, TimeEntry
from timeos.timer.model import CorruptSnapshotError, TimerSnapshot
from timeos.users.model import User
from timeos.users.service import SessionUser

START_MS = 1_700_000_000_000


class FakeClock:
    def __init__(self, now_ms: int = START_MS):
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, seconds: float = 0, *, ms: int = 0) -> None:
        self.now_ms += int(seconds * 1000) + ms


class MemoryTimerStore:
    def __init__(self):
        self.snapshot: Optional[TimerSnapshot] = None
        self.corrupt = False
        self.fail_writes = False
        self.writes: list[TimerSnapshot] = []
        self.clears = 0

    def read(self) -> Optional[TimerSnapshot]:
        if self.corrupt:
            raise CorruptSnapshotError("garbage")
        return self.snapshot

    def write(self, snapshot: TimerSnapshot) -> bool:
        if self.fail_writes:
            return False
        self.snapshot = snapshot
        self.writes.append(snapshot)
        return True

    def clear(self) -> None:
        self.snapshot = None
        self.corrupt = False
        self.clears += 1


class InMemoryUsers:
    def __init__(self, users: Sequence[User] = ()):
        self.users: dict[int, User] = {u.user_id: u for u in users}
        self._id = max(self.users, default=0)

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)

    def get_by_access_code(self, access_code: str) -> Optional[User]:
        for user in self.users.values():
            if user.access_code == access_code:
                return user
        return None

    def list_all(self) -> Sequence[User]:
        return sorted(self.users.values(), key=lambda u: u.user_id, reverse=True)

    def create_user(self, *, name, title, role, access_code, assigned_company_ids) -> int:
        self._id += 1
        self.users[self._id] = User(
            user_id=self._id,
            name=name,
            title=title,
            role=role,
            access_code=access_code,
            assigned_company_ids=tuple(assigned_company_ids),
        )
        return self._id

    def update_user(self, user_id, *, name=None, title=None, access_code=None, assigned_company_ids=None, is_blocked=None) -> bool:
        user = self.users.get(user_id)
        if not user:
            return False
        changes = {
            "name": name,
            "title": title,
            "access_code": access_code,
            "assigned_company_ids": None if assigned_company_ids is None else tuple(assigned_company_ids),
            "is_blocked": is_blocked,
        }
        fields = {k: v for k, v in changes.items() if v is not None}
        self.users[user_id] = replace(user, **fields)
        return True

    def delete_by_id(self, user_id: int) -> bool:
        return self.users.pop(user_id, None) is not None


class InMemoryCompanies:
    def __init__(self, companies: Sequence[Company] = ()):
        self.companies: dict[str, Company] = {c.company_id: c for c in companies}
        self._id = len(self.companies)
        self.list_calls = 0

    def list_all(self) -> Sequence[Company]:
        self.list_calls += 1
        return list(self.companies.values())

    def get_by_id(self, company_id: str) -> Optional[Company]:
        return self.companies.get(str(company_id))

    def create_company(self, *, name, client_reference=None, client_email=None) -> str:
        self._id += 1
        company_id = str(self._id)
        self.companies[company_id] = Company(company_id, name, client_reference, client_email)
        return company_id

    def update_company(self, company_id, *, name=None, client_reference=None, client_email=None) -> bool:
        company = self.companies.get(str(company_id))
        if not company:
            return False
        self.companies[company.company_id] = Company(
            company.company_id,
            name if name is not None else company.name,
            client_reference,
            client_email,
        )
        return True

    def delete_by_id(self, company_id: str) -> bool:
        return self.companies.pop(str(company_id), None) is not None


class InMemoryEntries:
    def __init__(self, entries: Sequence[TimeEntry] = ()):
        self.entries: dict[int, TimeEntry] = {e.entry_id: e for e in entries}
        self._id = max(self.entries, default=0)
        self.fail_writes = False

    def create_entry(self, entry: NewTimeEntry) -> int:
        if self.fail_writes:
            raise PersistenceError("Failed to save time entry")
        self._id += 1
        self.entries[self._id] = TimeEntry.from_new(self._id, entry, created_at=datetime(2024, 1, 15, 12, 0))
        return self._id

    def get_by_id(self, entry_id: int) -> Optional[TimeEntry]:
        return self.entries.get(entry_id)

    def list_all(self) -> Sequence[TimeEntry]:
        return sorted(self.entries.values(), key=lambda e: e.entry_id, reverse=True)

    def list_for_user(self, user_id: int) -> Sequence[TimeEntry]:
        return [e for e in self.list_all() if e.user_id == user_id]

    def update_entry(self, entry_id: int, *, description: str, seconds: int) -> bool:
        entry = self.entries.get(entry_id)
        if not entry:
            return False
        self.entries[entry_id] = replace(entry, description=description, seconds=seconds)
        return True

    def delete_by_id(self, entry_id: int) -> bool:
        return self.entries.pop(entry_id, None) is not None


def _entry(entry_id, *, user_id=1, user_name="Alice", company_name="Acme Corp", seconds=3600, description="Work", day=15):
    return TimeEntry(
        entry_id=entry_id,
        user_id=user_id,
        user_name=user_name,
        user_title="Consultant",
        company_id="1",
        company_name=company_name,
        description=description,
        seconds=seconds,
        entry_date=date(2024, 1, day),
    )


@pytest.fixture
def make_entry():
    return _entry


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return MemoryTimerStore()


@pytest.fixture
def acme():
    return Company("1", "Acme Corp", "ACME-001", "billing@acme.example")


@pytest.fixture
def globex():
    return Company("2", "Globex", None, None)


@pytest.fixture
def alice():
    return User(
        user_id=1,
        name="Alice",
        title="Consultant",
        role=Role.EMPLOYEE,
        access_code="123456",
        assigned_company_ids=("1",),
    )


@pytest.fixture
def users_repo(alice):
    return InMemoryUsers([alice])


@pytest.fixture
def companies_repo(acme, globex):
    return InMemoryCompanies([acme, globex])


@pytest.fixture
def entries_repo():
    return InMemoryEntries()


@pytest.fixture
def employee(alice):
    return SessionUser.from_user(alice)


@pytest.fixture
def admin():
    return SessionUser(user_id=0, name="Super Admin", title="System Administrator", role=Role.ADMIN)
