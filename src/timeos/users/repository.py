from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): services depend on this interface, never on a concrete DB.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_access_code(self, access_code: str) -> Optional[User]:
        raise NotImplementedError

    def list_all(self) -> Sequence[User]:
        """Newest first."""
        raise NotImplementedError

    def create_user(
        self,
        *,
        name: str,
        title: str,
        role: Role,
        access_code: str,
        assigned_company_ids: Sequence[str],
    ) -> int:
        raise NotImplementedError

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
        raise NotImplementedError

    def delete_by_id(self, user_id: int) -> bool:
        raise NotImplementedError
