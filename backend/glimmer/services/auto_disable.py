"""Auto-disable supervisor.

Stops reminding users who keep receiving reminders without ever checking in
again. A streak is the run of sent reminders (self and contact combined)
since the user's last check-in, or since they last switched reminders on;
once it reaches ``threshold`` the user's reminder settings are switched off
until they re-enable them.
"""
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from glimmer.services.activity_store import last_check_in_instant
from glimmer.services.dates import ensure_utc
from glimmer.services.notification_ledger import recent_reminders

logger = logging.getLogger(__name__)

DEFAULT_STREAK_THRESHOLD = 7


class AutoDisableSupervisor:
    def __init__(self, threshold: int = DEFAULT_STREAK_THRESHOLD):
        if threshold < 1:
            raise ValueError("Auto-disable threshold must be at least 1")
        self.threshold = threshold

    def has_consecutive_reminder_streak(
        self,
        db: Session,
        user_id: str,
        pending_sent_count: int,
        enabled_at: Optional[datetime] = None,
    ) -> bool:
        """Whether ledger reminders plus ``pending_sent_count`` unsent-to-ledger ones form a streak.

        The streak is broken when a check-in was created, or reminders were
        re-enabled (``enabled_at``), after the oldest ledger reminder that would
        be counted in it.
        """
        needed_from_ledger = self.threshold - pending_sent_count
        if needed_from_ledger <= 0:
            return True

        reminders = recent_reminders(db, user_id, needed_from_ledger)
        if len(reminders) < needed_from_ledger:
            return False

        oldest = reminders[-1].created_at
        last_check_in = last_check_in_instant(db, user_id)
        if last_check_in is not None and last_check_in > oldest:
            return False
        if enabled_at is not None and ensure_utc(enabled_at) > oldest:
            return False

        logger.info(
            "User %s reached %d consecutive reminders without a check-in",
            user_id, self.threshold,
        )
        return True
