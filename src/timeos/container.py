from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Callable, Optional

from .common.datetime_utils import now_epoch_ms, today
from .companies.mysql_company_repository import MySQLCompanyRepository
from .companies.repository import CompanyRepository
from .companies.service import CompanyService
from .core.constants import DEFAULT_TICK_INTERVAL_MS
from .database.connection import DBConfig, DatabaseConnection
from .entries.mysql_entry_repository import MySQLEntryRepository
from .entries.repository import EntryRepository
from .entries.service import EntryService
from .entries.submission import EntrySubmission
from .reports.ai import GeminiClient
from .reports.mailer import SMTPSettings, TimesheetMailer
from .reports.service import ReportService
from .timer.engine import TimerEngine
from .timer.store import JsonFileTimerStateStore, slot_key
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    companies_repo: CompanyRepository
    entries_repo: EntryRepository

    auth_service: AuthService
    user_service: UserService
    company_service: CompanyService
    entry_service: EntryService
    entry_submission: EntrySubmission
    report_service: ReportService

    ai_client: Optional[GeminiClient]
    timer_state_dir: Path
    tick_interval_ms: int
    clock: Callable[[], int]

    def timer_engine(self, user_id: int, device_id: str) -> TimerEngine:
        """Engine bound to the (user, device) slot; call restore() before use."""
        store = JsonFileTimerStateStore(self.timer_state_dir, slot_key(user_id, device_id))
        return TimerEngine(store, clock=self.clock)


def assemble_container(
    *,
    users_repo: UserRepository,
    companies_repo: CompanyRepository,
    entries_repo: EntryRepository,
    timer_state_dir: str | Path,
    admin_access_code: Optional[str] = None,
    ai_client: Optional[GeminiClient] = None,
    mailer: Optional[TimesheetMailer] = None,
    tick_interval_ms: int = DEFAULT_TICK_INTERVAL_MS,
    clock: Callable[[], int] = now_epoch_ms,
    date_provider: Callable[[], date] = today,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    auth_service = AuthService(users_repo, admin_access_code=admin_access_code)
    user_service = UserService(users_repo)
    company_service = CompanyService(companies_repo)
    entry_service = EntryService(entries_repo)
    entry_submission = EntrySubmission(entries_repo, companies_repo, date_provider=date_provider)
    report_service = ReportService(
        entries_repo,
        companies_repo,
        mailer=mailer,
        ai=ai_client,
        date_provider=date_provider,
    )

    return Container(
        conn=conn,
        users_repo=users_repo,
        companies_repo=companies_repo,
        entries_repo=entries_repo,
        auth_service=auth_service,
        user_service=user_service,
        company_service=company_service,
        entry_service=entry_service,
        entry_submission=entry_submission,
        report_service=report_service,
        ai_client=ai_client,
        timer_state_dir=Path(timer_state_dir),
        tick_interval_ms=tick_interval_ms,
        clock=clock,
    )


def build_container(settings) -> Container:
    """Production wiring: MySQL repositories plus Gemini/SMTP from settings."""

    conn = DatabaseConnection.get_instance(DBConfig.from_dict(getattr(settings, "DB_CONFIG")))

    return assemble_container(
        users_repo=MySQLUserRepository(conn),
        companies_repo=MySQLCompanyRepository(conn),
        entries_repo=MySQLEntryRepository(conn),
        timer_state_dir=getattr(settings, "TIMER_STATE_DIR", "instance/timers"),
        admin_access_code=getattr(settings, "ADMIN_ACCESS_CODE", None),
        ai_client=GeminiClient(
            getattr(settings, "GEMINI_API_KEY", ""),
            model=getattr(settings, "GEMINI_MODEL", "gemini-pro"),
            timeout=float(getattr(settings, "GEMINI_TIMEOUT", 30)),
        ),
        mailer=TimesheetMailer(SMTPSettings.from_settings(settings)),
        tick_interval_ms=int(getattr(settings, "TICK_INTERVAL_MS", DEFAULT_TICK_INTERVAL_MS)),
        conn=conn,
    )
