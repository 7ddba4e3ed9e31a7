"""Inactivity detection and reminder batch job.

Pages through every user with reminders enabled and, per page:

1. prefetches each user's last check-in day and today's sent status,
2. evaluates the self and contact channels,
3. sends due reminders and collects ledger entries in memory,
4. flags users whose reminder streak reached the auto-disable threshold,
5. writes the ledger entries and switches off flagged users' reminders.

The job is sequential and meant to run as a single instance at a time.
Re-running it on the same UTC day is safe: channels with a ``sent`` ledger
row since midnight are skipped.
"""
import logging
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, contains_eager, selectinload

from glimmer.config import Settings
from glimmer.models.notification_log import NotificationType
from glimmer.models.reminder_settings import ReminderSettings
from glimmer.models.user import User
from glimmer.services.activity_store import last_check_in_by_user
from glimmer.services.auto_disable import AutoDisableSupervisor
from glimmer.services.dates import ensure_utc, today_utc
from glimmer.services.dispatcher import NotificationDispatcher
from glimmer.services.mailer import Mailer
from glimmer.services.notification_ledger import (
    PendingLogEntry,
    SentStatus,
    record_entries,
    todays_sent_status,
)
from glimmer.services.reminder_engine import evaluate_reminders

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 100


@dataclass
class ReminderRunSummary:
    pages: int = 0
    users_scanned: int = 0
    users_failed: int = 0
    reminders_sent: int = 0
    reminders_failed: int = 0
    entries_persisted: int = 0
    users_disabled: int = 0

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ReminderJob:
    """One reminder run over all enabled users, with explicitly injected collaborators."""

    def __init__(
        self,
        db: Session,
        dispatcher: NotificationDispatcher,
        supervisor: AutoDisableSupervisor,
        page_size: int = DEFAULT_PAGE_SIZE,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        if page_size < 1:
            raise ValueError("page_size must be at least 1")
        self.db = db
        self.dispatcher = dispatcher
        self.supervisor = supervisor
        self.page_size = page_size
        self.clock = clock or _utc_now

    # ── PAGING ─────────────────────────────────────────────────
    def _fetch_page(self, after_user_id: Optional[str]) -> list[User]:
        """Next page of users with reminders enabled, keyset-ordered by user id."""
        query = (
            self.db.query(User)
            .join(ReminderSettings, ReminderSettings.user_id == User.user_id)
            .options(contains_eager(User.reminder_settings), selectinload(User.emergency_contacts))
            .filter(ReminderSettings.enabled.is_(True))
        )
        if after_user_id is not None:
            query = query.filter(User.user_id > after_user_id)
        return query.order_by(User.user_id).limit(self.page_size).all()

    # ── PROCESSING_PAGE ────────────────────────────────────────
    def _process_user(
        self,
        user: User,
        last_check_in_day: Optional[datetime],
        sent_today: SentStatus,
        today: datetime,
        entries: list[PendingLogEntry],
    ) -> int:
        """Send whatever is due for one user; returns how many reminders were sent."""
        settings = user.reminder_settings
        contacts = [c for c in user.emergency_contacts if c.enabled]

        intents = evaluate_reminders(
            settings,
            last_check_in_day,
            sent_today,
            today,
            has_email=bool(user.email),
            enabled_contact_count=len(contacts),
        )

        sent = 0
        for intent in intents:
            if intent.channel == NotificationType.self_:
                outcomes = [self.dispatcher.dispatch_self(user, intent.days_since)]
            else:
                # Each contact gets an independent attempt.
                outcomes = [self.dispatcher.dispatch_contact(user, c, intent.days_since) for c in contacts]

            for entry in outcomes:
                entry.created_at = self.clock()
                entries.append(entry)
                sent += 1 if entry.is_sent else 0
        return sent

    def _process_page(
        self, users: list[User], today: datetime, summary: ReminderRunSummary
    ) -> tuple[list[PendingLogEntry], list[str]]:
        user_ids = [u.user_id for u in users]
        last_check_ins = last_check_in_by_user(self.db, user_ids)
        sent_status = todays_sent_status(self.db, user_ids, today)

        entries: list[PendingLogEntry] = []
        to_disable: list[str] = []

        for user_id, user in zip(user_ids, users):
            summary.users_scanned += 1
            already_collected = len(entries)
            try:
                sent = self._process_user(
                    user,
                    last_check_ins.get(user_id),
                    sent_status.get(user_id, SentStatus()),
                    today,
                    entries,
                )
                if sent and self.supervisor.has_consecutive_reminder_streak(
                    self.db, user_id, sent, enabled_at=user.reminder_settings.enabled_at
                ):
                    to_disable.append(user_id)
            except Exception as e:
                summary.users_failed += 1
                logger.exception("Reminder processing failed for user %s", user_id)
                if isinstance(e, SQLAlchemyError):
                    self.db.rollback()
            finally:
                for entry in entries[already_collected:]:
                    if entry.is_sent:
                        summary.reminders_sent += 1
                    else:
                        summary.reminders_failed += 1

        return entries, to_disable

    # ── PERSISTING ─────────────────────────────────────────────
    def _persist(self, entries: list[PendingLogEntry], to_disable: list[str], summary: ReminderRunSummary) -> None:
        summary.entries_persisted += record_entries(self.db, entries)

        if not to_disable:
            return
        try:
            updated = (
                self.db.query(ReminderSettings)
                .filter(ReminderSettings.user_id.in_(to_disable))
                .update({ReminderSettings.enabled: False}, synchronize_session=False)
            )
            self.db.commit()
            summary.users_disabled += updated
            logger.info("Auto-disabled reminders for %d users: %s", updated, ", ".join(to_disable))
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to auto-disable reminders for %s: %s", ", ".join(to_disable), e)

    def run(self) -> ReminderRunSummary:
        """Process every enabled user; only a failure to read a page propagates."""
        today = today_utc(ensure_utc(self.clock()))
        summary = ReminderRunSummary()
        last_user_id: Optional[str] = None

        logger.info("Reminder run started for %s", today.date().isoformat())
        while True:
            users = self._fetch_page(last_user_id)
            if not users:
                break
            summary.pages += 1

            last_user_id = users[-1].user_id
            entries, to_disable = self._process_page(users, today, summary)
            self._persist(entries, to_disable, summary)

            if len(users) < self.page_size:
                break

        logger.info(
            "Reminder run finished: %d users, %d sent, %d failed, %d user errors, %d disabled",
            summary.users_scanned,
            summary.reminders_sent,
            summary.reminders_failed,
            summary.users_failed,
            summary.users_disabled,
        )
        return summary


def build_reminder_job(db: Session, mailer: Mailer, settings: Settings) -> ReminderJob:
    """Wire a ReminderJob from application settings."""
    return ReminderJob(
        db=db,
        dispatcher=NotificationDispatcher(mailer),
        supervisor=AutoDisableSupervisor(settings.AUTO_DISABLE_STREAK),
        page_size=settings.REMINDER_BATCH_SIZE,
    )


def check_inactivity_and_remind(db: Session, mailer: Mailer, settings: Settings) -> ReminderRunSummary:
    """Run one reminder pass with collaborators built from ``settings``."""
    return build_reminder_job(db, mailer, settings).run()
