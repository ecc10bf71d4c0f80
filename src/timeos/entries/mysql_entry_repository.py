from __future__ import annotations

from typing import Any, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date
from .model import NewTimeEntry, TimeEntry
from .repository import EntryRepository

_SELECT = """
    SELECT entry_id, user_id, user_name, user_title, company_id, company_name,
           description, seconds, entry_date, created_at
    FROM time_entries
"""


def _to_entry(row: dict[str, Any]) -> TimeEntry:
    return TimeEntry(
        entry_id=int(row["entry_id"]),
        user_id=int(row["user_id"]),
        user_name=row.get("user_name") or "",
        user_title=row.get("user_title") or "",
        company_id=row.get("company_id"),
        company_name=row.get("company_name") or "",
        description=row.get("description") or "",
        seconds=int(row.get("seconds") or 0),
        entry_date=normalize_mysql_date(row["entry_date"]),
        created_at=row.get("created_at"),
    )


class MySQLEntryRepository(EntryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_entry(self, entry: NewTimeEntry) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO time_entries(user_id, user_name, user_title, company_id, company_name,
                                         description, seconds, entry_date)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    entry.user_id,
                    entry.user_name,
                    entry.user_title,
                    entry.company_id,
                    entry.company_name,
                    entry.description,
                    entry.seconds,
                    entry.entry_date,
                ),
            )
            return int(cur.lastrowid)

    def get_by_id(self, entry_id: int) -> Optional[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE entry_id=%s", (entry_id,))
            row = fetchone(cur)
            return _to_entry(row) if row else None

    def list_all(self) -> Sequence[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY created_at DESC, entry_id DESC")
            return [_to_entry(r) for r in fetchall(cur)]

    def list_for_user(self, user_id: int) -> Sequence[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE user_id=%s ORDER BY created_at DESC, entry_id DESC", (user_id,))
            return [_to_entry(r) for r in fetchall(cur)]

    def update_entry(self, entry_id: int, *, description: str, seconds: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE time_entries SET description=%s, seconds=%s WHERE entry_id=%s",
                (description, seconds, entry_id),
            )
            return cur.rowcount > 0

    def delete_by_id(self, entry_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM time_entries WHERE entry_id=%s", (entry_id,))
            return cur.rowcount > 0
