"""SMTP mail transport.

``send_email`` never raises: every failure is reported through
``SendResult(success=False, error=...)``.
"""
import logging
import smtplib
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import make_msgid
from typing import Optional, Protocol

from glimmer.config import Settings

logger = logging.getLogger(__name__)


@dataclass
class SendResult:
    success: bool
    message_id: Optional[str] = None
    error: Optional[str] = None


class Mailer(Protocol):
    def send_email(self, to: str, subject: str, text: str, html: Optional[str] = None) -> SendResult:
        ...


class SmtpMailer:
    """STARTTLS SMTP sender configured from application settings."""

    def __init__(self, host: str, port: int, user: str, password: str, sender: str, timeout: float = 30.0):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.sender = sender or user
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "SmtpMailer":
        return cls(
            host=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            user=settings.SMTP_USER,
            password=settings.SMTP_PASSWORD,
            sender=settings.SMTP_FROM,
        )

    @property
    def configured(self) -> bool:
        return bool(self.host and self.user and self.password)

    def _build_message(self, to: str, subject: str, text: str, html: Optional[str]) -> MIMEMultipart:
        message = MIMEMultipart("alternative")
        message["Subject"] = subject
        message["From"] = self.sender
        message["To"] = to
        message["Message-ID"] = make_msgid(domain="glimmer.app")

        message.attach(MIMEText(text, "plain", "utf-8"))
        message.attach(MIMEText(html or text, "html", "utf-8"))
        return message

    def send_email(self, to: str, subject: str, text: str, html: Optional[str] = None) -> SendResult:
        if not self.configured:
            logger.warning("SMTP is not configured; dropping mail to %s", to)
            return SendResult(success=False, error="SMTP_HOST / SMTP_USER / SMTP_PASSWORD are not configured")

        message = self._build_message(to, subject, text, html)
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                server.starttls()
                server.login(self.user, self.password)
                server.sendmail(self.sender, [to], message.as_string())
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Mail to %s failed: %s", to, e)
            return SendResult(success=False, error=str(e) or e.__class__.__name__)

        logger.info("Mail sent to %s (%s)", to, message["Message-ID"])
        return SendResult(success=True, message_id=message["Message-ID"])
