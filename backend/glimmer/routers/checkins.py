"""Check-in API routes."""
import logging
from typing import Callable
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from glimmer.config import settings
from glimmer.database import get_db
from glimmer.models.check_in import CheckIn
from glimmer.schemas.check_in import CheckInCreate, CheckInOut
from glimmer.services import check_in_service
from glimmer.services.dates import format_date_for_display
from glimmer.services.encouragement import generate_encouragement
from glimmer.services.user_service import get_user_or_404

logger = logging.getLogger(__name__)
router = APIRouter()


def get_encourager() -> Callable[[str], str]:
    return generate_encouragement


def _to_out(check_in: CheckIn) -> CheckInOut:
    out = CheckInOut.model_validate(check_in)
    out.display_date = format_date_for_display(check_in.date, settings.DISPLAY_TIMEZONE)
    return out


@router.post("/{user_id}/checkins", response_model=CheckInOut, status_code=status.HTTP_201_CREATED)
def create_check_in(
    user_id: str,
    payload: CheckInCreate,
    db: Session = Depends(get_db),
    encourage: Callable[[str], str] = Depends(get_encourager),
):
    """Record today's mood; a second check-in on the same UTC day is rejected."""
    check_in = check_in_service.create_check_in(
        db=db,
        user_id=user_id,
        emoji=payload.emoji,
        mood=payload.mood,
        encourage=encourage,
    )
    return _to_out(check_in)


@router.get("/{user_id}/checkins", response_model=list[CheckInOut])
def list_check_ins(
    user_id: str,
    limit: int = Query(30, ge=1, le=366),
    db: Session = Depends(get_db),
):
    """List a user's check-ins, newest first."""
    get_user_or_404(db, user_id)
    check_ins = (
        db.query(CheckIn)
        .filter(CheckIn.user_id == user_id)
        .order_by(CheckIn.date.desc())
        .limit(limit)
        .all()
    )
    return [_to_out(c) for c in check_ins]
