"""Check-in service: one mood entry per user per UTC calendar day."""
import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from glimmer.models.check_in import CheckIn
from glimmer.services.dates import add_days, today_utc
from glimmer.services.encouragement import needs_encouragement
from glimmer.services.user_service import get_user_or_404

logger = logging.getLogger(__name__)

DEFAULT_EMOJI = "🏃"
DEFAULT_MOOD = "positive"


def find_check_in_for_day(db: Session, user_id: str, day: datetime) -> Optional[CheckIn]:
    return (
        db.query(CheckIn)
        .filter(
            CheckIn.user_id == user_id,
            CheckIn.date >= day,
            CheckIn.date < add_days(day, 1),
        )
        .first()
    )


def create_check_in(
    db: Session,
    user_id: str,
    emoji: Optional[str],
    mood: Optional[str],
    encourage: Callable[[str], str],
    now: Optional[datetime] = None,
) -> CheckIn:
    """Record today's check-in, rejecting a second one on the same UTC day."""
    get_user_or_404(db, user_id)
    now = now or datetime.now(timezone.utc)
    today = today_utc(now)

    if find_check_in_for_day(db, user_id, today):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Already checked in today",
        )

    mood = mood or DEFAULT_MOOD
    encouragement = encourage(mood) if needs_encouragement(mood) else None

    check_in = CheckIn(
        user_id=user_id,
        date=today,
        emoji=emoji or DEFAULT_EMOJI,
        mood=mood,
        encouragement=encouragement,
        created_at=now,
    )
    db.add(check_in)
    db.commit()
    db.refresh(check_in)
    logger.info("User %s checked in for %s (mood %s)", user_id, today.date().isoformat(), mood)
    return check_in
