"""Tests for consecutive-reminder streak detection."""
import pytest

from glimmer.models.notification_log import NotificationStatus, NotificationType
from glimmer.services.auto_disable import AutoDisableSupervisor
from tests.conftest import add_check_in, add_log, make_user, utc


def _six_daily_reminders(db, user):
    for day in range(1, 7):
        log_type = NotificationType.self_ if day % 2 else NotificationType.contact
        add_log(db, user, utc(2026, 3, day, 9), log_type)


class TestStreak:
    def test_six_in_ledger_plus_one_pending_reaches_seven(self, db):
        user = make_user(db)
        _six_daily_reminders(db, user)
        supervisor = AutoDisableSupervisor(threshold=7)
        assert supervisor.has_consecutive_reminder_streak(db, user.user_id, 1) is True

    def test_check_in_after_oldest_breaks_streak(self, db):
        user = make_user(db)
        _six_daily_reminders(db, user)
        add_check_in(db, user, utc(2026, 3, 1, 10))
        supervisor = AutoDisableSupervisor(threshold=7)
        assert supervisor.has_consecutive_reminder_streak(db, user.user_id, 1) is False

    def test_check_in_before_oldest_does_not_break_streak(self, db):
        user = make_user(db)
        add_check_in(db, user, utc(2026, 2, 27, 10))
        _six_daily_reminders(db, user)
        supervisor = AutoDisableSupervisor(threshold=7)
        assert supervisor.has_consecutive_reminder_streak(db, user.user_id, 1) is True

    def test_re_enabling_after_oldest_breaks_streak(self, db):
        user = make_user(db)
        _six_daily_reminders(db, user)
        supervisor = AutoDisableSupervisor(threshold=7)
        assert supervisor.has_consecutive_reminder_streak(
            db, user.user_id, 1, enabled_at=utc(2026, 3, 3, 12)
        ) is False

    def test_re_enabling_before_oldest_does_not_break_streak(self, db):
        user = make_user(db)
        _six_daily_reminders(db, user)
        supervisor = AutoDisableSupervisor(threshold=7)
        assert supervisor.has_consecutive_reminder_streak(
            db, user.user_id, 1, enabled_at=utc(2026, 2, 20)
        ) is True

    def test_not_enough_reminders(self, db):
        user = make_user(db)
        for day in range(1, 6):
            add_log(db, user, utc(2026, 3, day, 9))
        supervisor = AutoDisableSupervisor(threshold=7)
        assert supervisor.has_consecutive_reminder_streak(db, user.user_id, 1) is False

    def test_failed_reminders_do_not_count(self, db):
        user = make_user(db)
        for day in range(1, 6):
            add_log(db, user, utc(2026, 3, day, 9))
        add_log(db, user, utc(2026, 3, 6, 9), log_status=NotificationStatus.failed)
        supervisor = AutoDisableSupervisor(threshold=7)
        assert supervisor.has_consecutive_reminder_streak(db, user.user_id, 1) is False

    def test_pending_alone_can_reach_threshold(self, db):
        user = make_user(db)
        supervisor = AutoDisableSupervisor(threshold=3)
        assert supervisor.has_consecutive_reminder_streak(db, user.user_id, 3) is True

    def test_other_users_reminders_ignored(self, db):
        user = make_user(db, email="a@example.com")
        other = make_user(db, email="b@example.com")
        _six_daily_reminders(db, other)
        supervisor = AutoDisableSupervisor(threshold=7)
        assert supervisor.has_consecutive_reminder_streak(db, user.user_id, 1) is False

    def test_threshold_must_be_positive(self):
        with pytest.raises(ValueError):
            AutoDisableSupervisor(threshold=0)
