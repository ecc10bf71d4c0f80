from __future__ import annotations

from typing import Any, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Company
from .repository import CompanyRepository


def _to_company(row: dict[str, Any]) -> Company:
    return Company(
        company_id=str(row["company_id"]),
        name=row["name"],
        client_reference=row.get("client_reference"),
        client_email=row.get("client_email"),
        created_at=row.get("created_at"),
    )


def _as_pk(company_id: str) -> Optional[int]:
    # Timer slots may carry ids from another backend; those never match a row.
    try:
        return int(company_id)
    except (TypeError, ValueError):
        return None


class MySQLCompanyRepository(CompanyRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Company]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT company_id, name, client_reference, client_email, created_at
                FROM companies
                ORDER BY created_at DESC, company_id DESC
                """
            )
            return [_to_company(r) for r in fetchall(cur)]

    def get_by_id(self, company_id: str) -> Optional[Company]:
        pk = _as_pk(company_id)
        if pk is None:
            return None
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT company_id, name, client_reference, client_email, created_at
                FROM companies
                WHERE company_id=%s
                """,
                (pk,),
            )
            row = fetchone(cur)
            return _to_company(row) if row else None

    def create_company(
        self,
        *,
        name: str,
        client_reference: Optional[str],
        client_email: Optional[str],
    ) -> str:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO companies(name, client_reference, client_email) VALUES(%s,%s,%s)",
                (name, client_reference, client_email),
            )
            return str(cur.lastrowid)

    def update_company(
        self,
        company_id: str,
        *,
        name: str,
        client_reference: Optional[str],
        client_email: Optional[str],
    ) -> bool:
        pk = _as_pk(company_id)
        if pk is None:
            return False
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE companies SET name=%s, client_reference=%s, client_email=%s WHERE company_id=%s",
                (name, client_reference, client_email, pk),
            )
            return cur.rowcount > 0

    def delete_by_id(self, company_id: str) -> bool:
        pk = _as_pk(company_id)
        if pk is None:
            return False
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM companies WHERE company_id=%s", (pk,))
            return cur.rowcount > 0
