"""Read access to check-in activity for the reminder job."""
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from glimmer.models.check_in import CheckIn
from glimmer.services.dates import ensure_utc, normalize_to_utc_date

logger = logging.getLogger(__name__)


def last_check_in_by_user(db: Session, user_ids: list[str]) -> dict[str, Optional[datetime]]:
    """Map each user id to the UTC day of their latest check-in, or None.

    One range query ordered by user then date descending; the first row seen
    for a user is their latest.
    """
    if not user_ids:
        return {}

    rows = (
        db.query(CheckIn.user_id, CheckIn.date)
        .filter(CheckIn.user_id.in_(user_ids))
        .order_by(CheckIn.user_id.asc(), CheckIn.date.desc())
        .all()
    )

    result: dict[str, Optional[datetime]] = {uid: None for uid in user_ids}
    seen: set[str] = set()
    for user_id, day in rows:
        if user_id in seen:
            continue
        seen.add(user_id)
        result[user_id] = normalize_to_utc_date(day)

    logger.debug("Loaded last check-ins for %d users (%d with activity)", len(user_ids), len(seen))
    return result


def last_check_in_instant(db: Session, user_id: str) -> Optional[datetime]:
    """Creation instant of the user's most recent check-in, in UTC."""
    latest = (
        db.query(CheckIn.created_at)
        .filter(CheckIn.user_id == user_id)
        .order_by(CheckIn.created_at.desc())
        .first()
    )
    if latest is None or latest[0] is None:
        return None
    return ensure_utc(latest[0])
