"""Notification ledger read API."""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from glimmer.database import get_db
from glimmer.models.notification_log import NotificationLog
from glimmer.schemas.notification_log import NotificationLogOut
from glimmer.services.user_service import get_user_or_404

router = APIRouter()


@router.get("/{user_id}/notifications", response_model=list[NotificationLogOut])
def list_notifications(
    user_id: str,
    limit: int = Query(50, ge=1, le=500),
    db: Session = Depends(get_db),
):
    """Reminder attempts for a user, newest first."""
    get_user_or_404(db, user_id)
    return (
        db.query(NotificationLog)
        .filter(NotificationLog.user_id == user_id)
        .order_by(NotificationLog.created_at.desc())
        .limit(limit)
        .all()
    )
