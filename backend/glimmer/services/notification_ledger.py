"""Notification ledger: reads for dedup/streaks and two-tier writes.

The ledger (``notification_logs``) is append-only. Same-day dedup keys on
``status = sent`` rows, so a failed attempt is retried by the next run on the
same day.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from glimmer.models.notification_log import NotificationLog, NotificationStatus, NotificationType
from glimmer.services.dates import ensure_utc

logger = logging.getLogger(__name__)


@dataclass
class SentStatus:
    """Which channels already have a sent reminder today."""

    self_sent: bool = False
    contact_sent: bool = False

    def is_sent(self, channel: NotificationType) -> bool:
        if channel == NotificationType.self_:
            return self.self_sent
        return self.contact_sent


@dataclass
class ReminderRecord:
    created_at: datetime
    type: NotificationType


@dataclass
class PendingLogEntry:
    """A dispatch outcome waiting to be written to the ledger."""

    user_id: str
    type: NotificationType
    status: NotificationStatus
    content: str
    recipient: Optional[str] = None
    error: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_sent(self) -> bool:
        return self.status == NotificationStatus.sent

    def to_model(self) -> NotificationLog:
        return NotificationLog(
            user_id=self.user_id,
            type=self.type,
            status=self.status,
            content=self.content,
            recipient=self.recipient,
            error=self.error,
            created_at=self.created_at,
        )


def todays_sent_status(db: Session, user_ids: list[str], today_start: datetime) -> dict[str, SentStatus]:
    """Per user, whether a sent self/contact reminder exists since ``today_start``."""
    if not user_ids:
        return {}

    result = {uid: SentStatus() for uid in user_ids}
    rows = (
        db.query(NotificationLog.user_id, NotificationLog.type)
        .filter(
            NotificationLog.user_id.in_(user_ids),
            NotificationLog.status == NotificationStatus.sent,
            NotificationLog.created_at >= today_start,
        )
        .all()
    )
    for user_id, log_type in rows:
        status = result.setdefault(user_id, SentStatus())
        if log_type == NotificationType.self_:
            status.self_sent = True
        elif log_type == NotificationType.contact:
            status.contact_sent = True
    return result


def recent_reminders(db: Session, user_id: str, limit: int) -> list[ReminderRecord]:
    """Most recent sent reminders (either channel) for a user, newest first."""
    if limit <= 0:
        return []

    rows = (
        db.query(NotificationLog.created_at, NotificationLog.type)
        .filter(
            NotificationLog.user_id == user_id,
            NotificationLog.status == NotificationStatus.sent,
            NotificationLog.type.in_([NotificationType.self_, NotificationType.contact]),
        )
        .order_by(NotificationLog.created_at.desc())
        .limit(limit)
        .all()
    )
    return [ReminderRecord(created_at=ensure_utc(created_at), type=log_type) for created_at, log_type in rows]


def _bulk_insert(db: Session, entries: list[PendingLogEntry]) -> None:
    db.add_all([entry.to_model() for entry in entries])
    db.commit()


def _insert_one(db: Session, entry: PendingLogEntry) -> None:
    db.add(entry.to_model())
    db.commit()


def record_entries(db: Session, entries: list[PendingLogEntry]) -> int:
    """Persist ledger entries: one batch write, then row-by-row if the batch fails.

    Returns the number of rows written. Individual row failures are logged and
    skipped so one bad row does not lose the rest of the page.
    """
    if not entries:
        return 0

    try:
        _bulk_insert(db, entries)
        return len(entries)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Bulk insert of %d notification logs failed, retrying per row: %s", len(entries), e)

    written = 0
    for entry in entries:
        try:
            _insert_one(db, entry)
            written += 1
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(
                "Failed to write notification log (user %s, type %s): %s",
                entry.user_id, entry.type.value, e,
            )
    return written
