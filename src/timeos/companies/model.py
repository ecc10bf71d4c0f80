from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Company:
    """Domain entity: a client company that tracked time is billed against."""

    company_id: str
    name: str
    client_reference: Optional[str] = None
    client_email: Optional[str] = None
    created_at: Optional[datetime] = None

    def to_view(self) -> dict:
        return {
            "id": self.company_id,
            "name": self.name,
            "client_reference": self.client_reference,
            "client_email": self.client_email,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
