from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from ..common.validators import require_digits, require_non_empty
from ..core.constants import ACCESS_CODE_LENGTH, ADMIN_NAME, ADMIN_TITLE, ADMIN_USER_ID
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from .model import User
from .repository import UserRepository

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """The logged-in user for one session.

    Created at login, dropped at logout. The tracker and the entry submission
    receive it explicitly instead of reading a global.
    """

    user_id: int
    name: str
    title: str
    role: Role
    assigned_company_ids: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def to_session(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "name": self.name,
            "title": self.title,
            "role": self.role.value,
            "assigned_company_ids": list(self.assigned_company_ids),
        }

    @classmethod
    def from_session(cls, data: dict[str, Any]) -> "SessionUser":
        return cls(
            user_id=int(data["user_id"]),
            name=data.get("name") or "",
            title=data.get("title") or "",
            role=Role(data["role"]),
            assigned_company_ids=tuple(data.get("assigned_company_ids") or ()),
        )

    @classmethod
    def from_user(cls, user: User) -> "SessionUser":
        return cls(
            user_id=user.user_id,
            name=user.name,
            title=user.title,
            role=user.role,
            assigned_company_ids=tuple(user.assigned_company_ids),
        )


class AuthService:
    """Use case: log in with an access code."""

    def __init__(self, users: UserRepository, *, admin_access_code: Optional[str] = None):
        self._users = users
        self._admin_access_code = (admin_access_code or "").strip()

    def login(self, access_code: str) -> SessionUser:
        code = require_non_empty(access_code, "Please enter your access code")

        if self._admin_access_code and hmac.compare_digest(code, self._admin_access_code):
            log.info("Built-in administrator logged in")
            return SessionUser(
                user_id=ADMIN_USER_ID,
                name=ADMIN_NAME,
                title=ADMIN_TITLE,
                role=Role.ADMIN,
            )

        user = self._users.get_by_access_code(code)
        if not user:
            raise AuthenticationError("Invalid access code. Please try again.")
        if user.is_blocked:
            raise AuthenticationError("Your account has been blocked. Please contact your administrator.")

        log.info("User %s logged in", user.user_id)
        return SessionUser.from_user(user)


class UserService:
    """Use case: manage employees (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    @staticmethod
    def _require_admin(current: SessionUser) -> None:
        if not current.is_admin:
            raise AuthorizationError("Admin access required")

    def _validate(self, name: str, title: str, access_code: str, *, user_id: Optional[int] = None):
        name = require_non_empty(name, "Name is required")
        title = require_non_empty(title, "Title is required")
        access_code = require_digits(access_code, "Access code must be 6 digits", ACCESS_CODE_LENGTH)

        holder = self._users.get_by_access_code(access_code)
        if holder and holder.user_id != user_id:
            raise ValidationError("Access code is already in use")
        return name, title, access_code

    def _get(self, user_id: int) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("Employee not found")
        return user

    def list_users(self, current: SessionUser) -> Sequence[User]:
        self._require_admin(current)
        return self._users.list_all()

    def create_employee(
        self,
        current: SessionUser,
        *,
        name: str,
        title: str,
        access_code: str,
        assigned_company_ids: Sequence[str] = (),
    ) -> int:
        self._require_admin(current)
        name, title, access_code = self._validate(name, title, access_code)
        user_id = self._users.create_user(
            name=name,
            title=title,
            role=Role.EMPLOYEE,
            access_code=access_code,
            assigned_company_ids=[str(c) for c in assigned_company_ids],
        )
        log.info("Created employee %s", user_id)
        return user_id

    def update_employee(
        self,
        current: SessionUser,
        user_id: int,
        *,
        name: str,
        title: str,
        access_code: str,
        assigned_company_ids: Sequence[str] = (),
    ) -> None:
        self._require_admin(current)
        self._get(user_id)
        name, title, access_code = self._validate(name, title, access_code, user_id=user_id)
        self._users.update_user(
            user_id,
            name=name,
            title=title,
            access_code=access_code,
            assigned_company_ids=[str(c) for c in assigned_company_ids],
        )

    def toggle_block(self, current: SessionUser, user_id: int) -> bool:
        """Flip the blocked flag; returns the new value."""
        self._require_admin(current)
        user = self._get(user_id)
        blocked = not user.is_blocked
        self._users.update_user(user_id, is_blocked=blocked)
        log.info("Employee %s blocked=%s", user_id, blocked)
        return blocked

    def delete_user(self, current: SessionUser, user_id: int) -> None:
        self._require_admin(current)
        self._get(user_id)
        if not self._users.delete_by_id(user_id):
            raise ValidationError("Failed to delete employee")
        log.info("Deleted employee %s", user_id)
