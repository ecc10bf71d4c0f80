from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import NewTimeEntry, TimeEntry


class EntryRepository(Protocol):
    def create_entry(self, entry: NewTimeEntry) -> int:
        raise NotImplementedError

    def get_by_id(self, entry_id: int) -> Optional[TimeEntry]:
        raise NotImplementedError

    def list_all(self) -> Sequence[TimeEntry]:
        """Newest first."""
        raise NotImplementedError

    def list_for_user(self, user_id: int) -> Sequence[TimeEntry]:
        """Newest first."""
        raise NotImplementedError

    def update_entry(self, entry_id: int, *, description: str, seconds: int) -> bool:
        raise NotImplementedError

    def delete_by_id(self, entry_id: int) -> bool:
        raise NotImplementedError
