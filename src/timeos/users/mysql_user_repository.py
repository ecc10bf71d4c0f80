from __future__ import annotations

import json
from typing import Any, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, load_json_list
from .model import User
from .repository import UserRepository

_COLUMNS = "user_id, name, title, role, access_code, assigned_company_ids, is_blocked, created_at"


def _to_user(row: dict[str, Any]) -> User:
    return User(
        user_id=int(row["user_id"]),
        name=row["name"],
        title=row.get("title") or "",
        role=Role(row["role"]),
        access_code=row["access_code"],
        assigned_company_ids=tuple(str(c) for c in load_json_list(row.get("assigned_company_ids"))),
        is_blocked=bool(row.get("is_blocked", False)),
        created_at=row.get("created_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (user_id,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_access_code(self, access_code: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE access_code=%s", (access_code,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users ORDER BY created_at DESC, user_id DESC")
            return [_to_user(r) for r in fetchall(cur)]

    def create_user(
        self,
        *,
        name: str,
        title: str,
        role: Role,
        access_code: str,
        assigned_company_ids: Sequence[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(name, title, role, access_code, assigned_company_ids, is_blocked)
                VALUES(%s,%s,%s,%s,%s,0)
                """,
                (name, title, role.value, access_code, json.dumps(list(assigned_company_ids))),
            )
            return int(cur.lastrowid)

    def update_user(
        self,
        user_id: int,
        *,
        name: Optional[str] = None,
        title: Optional[str] = None,
        access_code: Optional[str] = None,
        assigned_company_ids: Optional[Sequence[str]] = None,
        is_blocked: Optional[bool] = None,
    ) -> bool:
        sets: list[str] = []
        params: list[Any] = []
        if name is not None:
            sets.append("name=%s")
            params.append(name)
        if title is not None:
            sets.append("title=%s")
            params.append(title)
        if access_code is not None:
            sets.append("access_code=%s")
            params.append(access_code)
        if assigned_company_ids is not None:
            sets.append("assigned_company_ids=%s")
            params.append(json.dumps(list(assigned_company_ids)))
        if is_blocked is not None:
            sets.append("is_blocked=%s")
            params.append(1 if is_blocked else 0)
        if not sets:
            return False

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE users SET {', '.join(sets)} WHERE user_id=%s", (*params, user_id))
            return cur.rowcount > 0

    def delete_by_id(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE user_id=%s", (user_id,))
            return cur.rowcount > 0
