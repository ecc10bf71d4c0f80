from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Optional

from ..common.datetime_utils import today
from ..companies.model import Company
from ..companies.repository import CompanyRepository
from ..core.exceptions import AIServiceError, AuthorizationError, EmailDeliveryError, NotFoundError, ValidationError
from ..entries.repository import EntryRepository
from ..users.service import SessionUser
from .ai import GeminiClient
from .csv_export import ALL_COMPANIES, entries_to_csv, export_filename, filter_by_company, summarize
from .mailer import TimesheetMailer
from .timesheet import render_timesheet_html, render_timesheet_text

log = logging.getLogger(__name__)


class ReportService:
    """Admin reporting: dashboard figures, CSV export, client timesheets, AI summary."""

    def __init__(
        self,
        entries: EntryRepository,
        companies: CompanyRepository,
        *,
        mailer: Optional[TimesheetMailer] = None,
        ai: Optional[GeminiClient] = None,
        date_provider: Callable[[], date] = today,
    ):
        self._entries = entries
        self._companies = companies
        self._mailer = mailer
        self._ai = ai
        self._date_provider = date_provider

    def _require_admin(self, current: SessionUser) -> None:
        if not current.is_admin:
            raise AuthorizationError("Admin access required")

    def _entries_for(self, current: SessionUser, company: str):
        self._require_admin(current)
        return filter_by_company(self._entries.list_all(), company)

    def _company_by_name(self, company_name: str) -> Company:
        if not company_name or company_name == ALL_COMPANIES:
            raise ValidationError("Please select a specific company")
        for company in self._companies.list_all():
            if company.name == company_name:
                return company
        raise NotFoundError("Company not found")

    def summary(self, current: SessionUser, company: str = ALL_COMPANIES) -> dict:
        return summarize(self._entries_for(current, company)).to_dict()

    def export_csv(self, current: SessionUser, company: str = ALL_COMPANIES) -> tuple[str, str]:
        """Return (filename, csv_text) for the filtered entries."""

        entries = self._entries_for(current, company)
        if not entries:
            raise ValidationError("No data to export")
        return export_filename(company), entries_to_csv(entries)

    def timesheet_html(self, current: SessionUser, company_name: str) -> str:
        self._require_admin(current)
        company = self._company_by_name(company_name)
        entries = filter_by_company(self._entries.list_all(), company.name)
        return render_timesheet_html(company, entries, report_date=self._date_provider())

    def send_to_client(self, current: SessionUser, company_name: str) -> str:
        """Email the company's timesheet to its client contact; returns the recipient."""

        self._require_admin(current)
        company = self._company_by_name(company_name)
        if not company.client_email:
            raise ValidationError("This company has no client email address")
        if self._mailer is None:
            raise EmailDeliveryError("Email delivery is not configured")

        entries = filter_by_company(self._entries.list_all(), company.name)
        report_date = self._date_provider()
        self._mailer.send(
            to_addr=company.client_email,
            subject=f"Work Hours Report - {company.name} - {report_date:%Y-%m-%d}",
            html=render_timesheet_html(company, entries, report_date=report_date, printable=False),
            text=render_timesheet_text(company, entries, report_date=report_date),
        )
        return company.client_email

    def ai_summary(self, current: SessionUser, company: str = ALL_COMPANIES) -> str:
        entries = self._entries_for(current, company)
        if self._ai is None:
            raise AIServiceError("AI service is not configured")
        return self._ai.generate_executive_summary(entries)
