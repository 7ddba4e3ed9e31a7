"""Tests for the SMTP mailer's failure handling."""
import smtplib

from glimmer.services import mailer as mailer_module
from glimmer.services.mailer import SmtpMailer


class _FakeSMTP:
    instances = []

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.messages = []
        _FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        pass

    def login(self, user, password):
        if password == "wrong":
            raise smtplib.SMTPAuthenticationError(535, b"bad credentials")

    def sendmail(self, sender, to, message):
        self.messages.append((sender, to, message))


def _mailer(password="secret"):
    return SmtpMailer(host="smtp.test", port=587, user="bot", password=password, sender="Glimmer <bot@test>")


class TestSmtpMailer:
    def test_not_configured(self):
        result = SmtpMailer(host="", port=587, user="", password="", sender="").send_email("a@b.c", "s", "t")
        assert result.success is False
        assert "not configured" in result.error

    def test_success(self, monkeypatch):
        monkeypatch.setattr(mailer_module.smtplib, "SMTP", _FakeSMTP)
        result = _mailer().send_email("a@example.com", "Hello", "plain body", "<p>html body</p>")
        assert result.success is True
        assert result.message_id
        sender, to, message = _FakeSMTP.instances[-1].messages[0]
        assert to == ["a@example.com"]
        assert "multipart/alternative" in message

    def test_smtp_error_reported_not_raised(self, monkeypatch):
        monkeypatch.setattr(mailer_module.smtplib, "SMTP", _FakeSMTP)
        result = _mailer(password="wrong").send_email("a@example.com", "Hello", "body")
        assert result.success is False
        assert result.error
