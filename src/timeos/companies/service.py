from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import optional_text, require_non_empty
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..users.service import SessionUser
from .model import Company
from .repository import CompanyRepository

log = logging.getLogger(__name__)


class CompanyService:
    """Use case: client companies (admin CRUD, per-employee visibility)."""

    def __init__(self, companies: CompanyRepository):
        self._companies = companies

    @staticmethod
    def _require_admin(current: SessionUser) -> None:
        if not current.is_admin:
            raise AuthorizationError("Admin access required")

    @staticmethod
    def _clean_email(value: Optional[str]) -> Optional[str]:
        email = optional_text(value)
        if email and ("@" not in email or email.startswith("@") or email.endswith("@")):
            raise ValidationError("Client email is not a valid address")
        return email

    def list_all(self) -> Sequence[Company]:
        return self._companies.list_all()

    def list_for_user(self, current: SessionUser) -> list[Company]:
        """Admins see every company, employees only the ones assigned to them."""
        companies = list(self._companies.list_all())
        if current.is_admin:
            return companies
        assigned = set(current.assigned_company_ids)
        return [c for c in companies if c.company_id in assigned]

    def get(self, company_id: str) -> Company:
        company = self._companies.get_by_id(company_id)
        if not company:
            raise NotFoundError("Company not found")
        return company

    def create_company(
        self,
        current: SessionUser,
        *,
        name: str,
        client_reference: Optional[str] = None,
        client_email: Optional[str] = None,
    ) -> str:
        self._require_admin(current)
        company_id = self._companies.create_company(
            name=require_non_empty(name, "Company name is required"),
            client_reference=optional_text(client_reference),
            client_email=self._clean_email(client_email),
        )
        log.info("Created company %s", company_id)
        return company_id

    def update_company(
        self,
        current: SessionUser,
        company_id: str,
        *,
        name: str,
        client_reference: Optional[str] = None,
        client_email: Optional[str] = None,
    ) -> None:
        self._require_admin(current)
        self.get(company_id)
        self._companies.update_company(
            company_id,
            name=require_non_empty(name, "Company name is required"),
            client_reference=optional_text(client_reference),
            client_email=self._clean_email(client_email),
        )

    def delete_company(self, current: SessionUser, company_id: str) -> None:
        self._require_admin(current)
        self.get(company_id)
        if not self._companies.delete_by_id(company_id):
            raise ValidationError("Failed to delete company")
        log.info("Deleted company %s", company_id)
