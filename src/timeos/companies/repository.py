from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Company


class CompanyRepository(Protocol):
    def list_all(self) -> Sequence[Company]:
        """Newest first."""
        raise NotImplementedError

    def get_by_id(self, company_id: str) -> Optional[Company]:
        raise NotImplementedError

    def create_company(
        self,
        *,
        name: str,
        client_reference: Optional[str],
        client_email: Optional[str],
    ) -> str:
        raise NotImplementedError

    def update_company(
        self,
        company_id: str,
        *,
        name: str,
        client_reference: Optional[str],
        client_email: Optional[str],
    ) -> bool:
        raise NotImplementedError

    def delete_by_id(self, company_id: str) -> bool:
        raise NotImplementedError
