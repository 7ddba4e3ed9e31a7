"""Reminder decision engine.

Pure per-user evaluation: given the user's reminder settings, the UTC day of
their last check-in, what was already sent today and today's UTC day, decide
which channels need a reminder now. No I/O happens here.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from glimmer.models.notification_log import NotificationType
from glimmer.models.reminder_settings import ReminderSettings
from glimmer.services.dates import add_days, days_between, normalize_to_utc_date
from glimmer.services.notification_ledger import SentStatus

CHANNELS = (NotificationType.self_, NotificationType.contact)


@dataclass(frozen=True)
class ReminderIntent:
    channel: NotificationType
    days_since: int


def _channel_config(settings: ReminderSettings, channel: NotificationType) -> tuple[bool, int]:
    if channel == NotificationType.self_:
        return bool(settings.self_reminder_enabled), int(settings.self_reminder_days)
    return bool(settings.contact_reminder_enabled), int(settings.contact_reminder_days)


def is_due(last_check_in_day: Optional[datetime], today: datetime, threshold_days: int) -> bool:
    """True when at least ``threshold_days`` whole days passed since the last check-in.

    A user who never checked in is always due.
    """
    if last_check_in_day is None:
        return True
    threshold_day = add_days(today, -threshold_days)
    return normalize_to_utc_date(last_check_in_day) <= threshold_day


def days_since_check_in(last_check_in_day: Optional[datetime], today: datetime, default: int) -> int:
    if last_check_in_day is None:
        return default
    return days_between(last_check_in_day, today)


def evaluate_reminders(
    settings: ReminderSettings,
    last_check_in_day: Optional[datetime],
    sent_today: SentStatus,
    today: datetime,
    has_email: bool,
    enabled_contact_count: int,
) -> list[ReminderIntent]:
    """Return one intent per channel that is enabled, not yet sent today, due and deliverable."""
    intents: list[ReminderIntent] = []
    for channel in CHANNELS:
        enabled, threshold_days = _channel_config(settings, channel)
        if not enabled or sent_today.is_sent(channel):
            continue

        # Thresholds below one day would fire on the day of a check-in.
        threshold_days = max(threshold_days, 1)
        if not is_due(last_check_in_day, today, threshold_days):
            continue

        if channel == NotificationType.self_ and not has_email:
            continue
        if channel == NotificationType.contact and enabled_contact_count == 0:
            continue

        intents.append(ReminderIntent(
            channel=channel,
            days_since=days_since_check_in(last_check_in_day, today, threshold_days),
        ))
    return intents
