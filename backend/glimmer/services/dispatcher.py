"""Notification dispatcher: renders reminder mails and turns outcomes into ledger entries.

Nothing here writes to the database; the reminder job collects the returned
``PendingLogEntry`` objects and persists them per page.
"""
import html
import logging

from glimmer.models.emergency_contact import EmergencyContact
from glimmer.models.notification_log import NotificationStatus, NotificationType
from glimmer.models.user import User
from glimmer.services.mailer import Mailer, SendResult
from glimmer.services.notification_ledger import PendingLogEntry

logger = logging.getLogger(__name__)

SIGNATURE = "— Glimmer"

_HTML_WRAPPER = """<!DOCTYPE html>
<html>
  <body style="margin:0; padding:0; background-color:#f7f8fa;">
    <div style="max-width:600px; margin:0 auto; padding:24px; font-family:-apple-system,BlinkMacSystemFont,'Segoe UI',Roboto,Helvetica,Arial,sans-serif; color:#333; line-height:1.6;">
{body}
      <p style="margin-top:32px; color:#999;">{signature}</p>
    </div>
  </body>
</html>"""


def _day_word(days: int) -> str:
    return "day" if days == 1 else "days"


def render_self_reminder(days_since: int) -> tuple[str, str, str]:
    """Subject, plain text and HTML for the reminder sent to the user."""
    subject = "A small light from Glimmer"
    text = (
        "Hi,\n\n"
        f"You haven't checked in for {days_since} {_day_word(days_since)}.\n\n"
        "If everything is fine, come back and check in whenever you like.\n\n"
        f"{SIGNATURE}"
    )
    body = (
        "      <p>Hi,</p>\n"
        f"      <p>You haven't checked in or left a note on Glimmer for "
        f"<strong>{days_since} {_day_word(days_since)}</strong>.</p>\n"
        "      <p>We hope you are doing well.</p>\n"
        "      <p>If you are going through something hard, we hope this email "
        "can be a small but warm light.</p>"
    )
    return subject, text, _HTML_WRAPPER.format(body=body, signature=SIGNATURE)


def render_contact_reminder(user_name: str, days_since: int) -> tuple[str, str, str]:
    """Subject, plain text and HTML for the reminder sent to an emergency contact."""
    subject = f"A small light from Glimmer about {user_name}"
    text = (
        "Hi,\n\n"
        "This is a reminder from Glimmer.\n\n"
        f"{user_name} hasn't checked in on Glimmer for {days_since} {_day_word(days_since)}.\n\n"
        "If all is well, you could gently remind them to check in;\n"
        "if they are going through a hard time, we hope this email can be a small but warm light.\n\n"
        "Wishing you well.\n"
        f"{SIGNATURE}"
    )
    body = (
        "      <p>Hi,</p>\n"
        "      <p>This is a reminder from <strong>Glimmer</strong>.</p>\n"
        f"      <p><strong>{html.escape(user_name)}</strong> hasn't left a note on Glimmer for "
        f"<strong>{days_since} {_day_word(days_since)}</strong>.</p>\n"
        "      <p>If all is well, you could gently remind them to check in;<br />\n"
        "      if they are going through a hard time, we hope this email can be a small but warm light.</p>\n"
        "      <p>Wishing you well.</p>"
    )
    return subject, text, _HTML_WRAPPER.format(body=body, signature=SIGNATURE)


def display_name_for(user: User) -> str:
    return user.display_name or user.email or "A Glimmer user"


class NotificationDispatcher:
    """Sends reminder mails through an injected mailer."""

    def __init__(self, mailer: Mailer):
        self.mailer = mailer

    def _deliver(
        self,
        user_id: str,
        channel: NotificationType,
        to: str,
        subject: str,
        text: str,
        html_body: str,
    ) -> PendingLogEntry:
        try:
            result: SendResult = self.mailer.send_email(to=to, subject=subject, text=text, html=html_body)
        except Exception as e:
            logger.exception("Mailer raised while sending %s reminder for user %s", channel.value, user_id)
            result = SendResult(success=False, error=str(e) or e.__class__.__name__)

        if not result.success:
            logger.warning("%s reminder for user %s to %s failed: %s", channel.value, user_id, to, result.error)

        return PendingLogEntry(
            user_id=user_id,
            type=channel,
            status=NotificationStatus.sent if result.success else NotificationStatus.failed,
            content=text,
            recipient=to,
            error=None if result.success else (result.error or "unknown error"),
        )

    def dispatch_self(self, user: User, days_since: int) -> PendingLogEntry:
        subject, text, html_body = render_self_reminder(days_since)
        return self._deliver(user.user_id, NotificationType.self_, user.email, subject, text, html_body)

    def dispatch_contact(self, user: User, contact: EmergencyContact, days_since: int) -> PendingLogEntry:
        subject, text, html_body = render_contact_reminder(display_name_for(user), days_since)
        return self._deliver(user.user_id, NotificationType.contact, contact.email, subject, text, html_body)
