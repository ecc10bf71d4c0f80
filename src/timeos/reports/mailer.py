from __future__ import annotations

import logging
import smtplib
import ssl
from dataclasses import dataclass
from email.message import EmailMessage
from typing import Callable, Optional

from ..core.exceptions import EmailDeliveryError, ValidationError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SMTPSettings:
    host: str
    port: int = 587
    user: Optional[str] = None
    password: Optional[str] = None
    use_tls: bool = True
    sender: Optional[str] = None

    @classmethod
    def from_settings(cls, settings) -> "SMTPSettings":
        user = getattr(settings, "SMTP_USER", None) or None
        return cls(
            host=getattr(settings, "SMTP_HOST", "") or "",
            port=int(getattr(settings, "SMTP_PORT", 587)),
            user=user,
            password=getattr(settings, "SMTP_PASSWORD", None) or None,
            use_tls=bool(getattr(settings, "SMTP_USE_TLS", True)),
            sender=getattr(settings, "MAIL_SENDER", None) or user,
        )


class TimesheetMailer:
    """Sends HTML timesheets to client contacts over SMTP."""

    def __init__(self, settings: SMTPSettings, *, smtp_factory: Callable[..., smtplib.SMTP] = smtplib.SMTP):
        self._settings = settings
        self._smtp_factory = smtp_factory

    @property
    def configured(self) -> bool:
        return bool(self._settings.host and self._settings.sender)

    def send(self, *, to_addr: str, subject: str, html: str, text: str) -> None:
        if not self.configured:
            raise EmailDeliveryError("Email delivery is not configured")
        if not to_addr:
            raise ValidationError("Recipient email address is required")

        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = self._settings.sender
        msg["To"] = to_addr
        msg.set_content(text)
        msg.add_alternative(html, subtype="html")

        try:
            with self._smtp_factory(self._settings.host, self._settings.port, timeout=30) as smtp:
                if self._settings.use_tls:
                    smtp.starttls(context=ssl.create_default_context())
                if self._settings.user:
                    smtp.login(self._settings.user, self._settings.password or "")
                smtp.send_message(msg)
        except (smtplib.SMTPException, OSError) as exc:
            log.error("Failed to send timesheet to %s: %s", to_addr, exc)
            raise EmailDeliveryError("Failed to send email") from exc

        log.info("Timesheet '%s' sent to %s", subject, to_addr)
