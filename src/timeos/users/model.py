from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: an employee (or admin) who logs in with an access code.

    Note: Plain data object, no DB access code lives here.
    """

    user_id: int
    name: str
    title: str
    role: Role
    access_code: str
    assigned_company_ids: tuple[str, ...] = field(default_factory=tuple)
    is_blocked: bool = False
    created_at: Optional[datetime] = None

    def to_admin_view(self) -> dict:
        return {
            "id": self.user_id,
            "name": self.name,
            "title": self.title,
            "role": self.role.value,
            "access_code": self.access_code,
            "assigned_company_ids": list(self.assigned_company_ids),
            "is_blocked": self.is_blocked,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
