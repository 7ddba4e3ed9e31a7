"""Tests for reminder rendering and dispatch outcomes."""
from glimmer.models.emergency_contact import EmergencyContact
from glimmer.models.notification_log import NotificationStatus, NotificationType
from glimmer.models.user import User
from glimmer.services.dispatcher import NotificationDispatcher, render_contact_reminder
from tests.conftest import FakeMailer


def _user(**kwargs):
    defaults = {"user_id": "u-1", "email": "me@example.com", "display_name": "Mei"}
    defaults.update(kwargs)
    return User(**defaults)


class TestDispatchSelf:
    def test_sent_entry(self):
        mailer = FakeMailer()
        entry = NotificationDispatcher(mailer).dispatch_self(_user(), 4)

        assert mailer.recipients() == ["me@example.com"]
        assert entry.type == NotificationType.self_
        assert entry.status == NotificationStatus.sent
        assert entry.error is None
        assert entry.recipient == "me@example.com"
        assert "4 days" in entry.content
        assert "<strong>4 days</strong>" in mailer.sent[0]["html"]

    def test_failed_send_recorded(self):
        mailer = FakeMailer(failing={"me@example.com"})
        entry = NotificationDispatcher(mailer).dispatch_self(_user(), 3)
        assert entry.status == NotificationStatus.failed
        assert entry.error == "550 mailbox unavailable"

    def test_mailer_exception_never_escapes(self):
        mailer = FakeMailer(raise_for={"me@example.com"})
        entry = NotificationDispatcher(mailer).dispatch_self(_user(), 3)
        assert entry.status == NotificationStatus.failed
        assert "connection to mail server lost" in entry.error

    def test_singular_day(self):
        entry = NotificationDispatcher(FakeMailer()).dispatch_self(_user(), 1)
        assert "1 day." in entry.content


class TestDispatchContact:
    def test_third_person_message_to_contact(self):
        mailer = FakeMailer()
        contact = EmergencyContact(name="Li", email="li@example.com", enabled=True)
        entry = NotificationDispatcher(mailer).dispatch_contact(_user(), contact, 7)

        assert mailer.recipients() == ["li@example.com"]
        assert mailer.sent[0]["subject"] == "A small light from Glimmer about Mei"
        assert entry.type == NotificationType.contact
        assert entry.user_id == "u-1"
        assert entry.recipient == "li@example.com"
        assert "Mei hasn't checked in on Glimmer for 7 days" in entry.content

    def test_falls_back_to_email_when_no_name(self):
        mailer = FakeMailer()
        contact = EmergencyContact(name="Li", email="li@example.com", enabled=True)
        NotificationDispatcher(mailer).dispatch_contact(_user(display_name=None), contact, 7)
        assert "me@example.com" in mailer.sent[0]["subject"]

    def test_name_is_escaped_in_html(self):
        _, _, html_body = render_contact_reminder("<b>Mei</b>", 7)
        assert "&lt;b&gt;Mei&lt;/b&gt;" in html_body
        assert "<b>Mei</b>" not in html_body
