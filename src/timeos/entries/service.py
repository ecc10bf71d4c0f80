from __future__ import annotations

import logging
from dataclasses import replace
from typing import Sequence

from ..common.validators import require_non_empty
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..users.service import SessionUser
from .model import TimeEntry
from .repository import EntryRepository

log = logging.getLogger(__name__)


def _to_int(value, message: str) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        raise ValidationError(message)


class EntryService:
    """Use case: list, edit and delete recorded time entries."""

    def __init__(self, entries: EntryRepository):
        self._entries = entries

    def list_own(self, current: SessionUser) -> Sequence[TimeEntry]:
        return self._entries.list_for_user(current.user_id)

    def list_all(self, current: SessionUser) -> Sequence[TimeEntry]:
        if not current.is_admin:
            raise AuthorizationError("Admin access required")
        return self._entries.list_all()

    def _get_owned(self, current: SessionUser, entry_id: int) -> TimeEntry:
        entry = self._entries.get_by_id(entry_id)
        if not entry:
            raise NotFoundError("Time entry not found")
        if entry.user_id != current.user_id and not current.is_admin:
            raise AuthorizationError("You can only change your own time entries")
        return entry

    def update_entry(
        self,
        current: SessionUser,
        entry_id: int,
        *,
        description: str,
        hours=0,
        minutes=0,
    ) -> TimeEntry:
        """Only description and duration are editable."""

        entry = self._get_owned(current, entry_id)
        description = require_non_empty(description, "Description is required")
        seconds = _to_int(hours, "Hours must be a number") * 3600 + _to_int(minutes, "Minutes must be a number") * 60
        if seconds <= 0:
            raise ValidationError("Time must be greater than 0")

        self._entries.update_entry(entry_id, description=description, seconds=seconds)
        log.info("Entry %s edited by user %s", entry_id, current.user_id)
        return replace(entry, description=description, seconds=seconds)

    def delete_entry(self, current: SessionUser, entry_id: int) -> None:
        self._get_owned(current, entry_id)
        if not self._entries.delete_by_id(entry_id):
            raise ValidationError("Failed to delete entry")
        log.info("Entry %s deleted by user %s", entry_id, current.user_id)
