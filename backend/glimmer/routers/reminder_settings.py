"""Reminder settings API routes."""
import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from glimmer.database import get_db
from glimmer.models.reminder_settings import (
    DEFAULT_CONTACT_REMINDER_DAYS,
    DEFAULT_SELF_REMINDER_DAYS,
    ReminderSettings,
)
from glimmer.schemas.reminder_settings import ReminderSettingsOut, ReminderSettingsUpdate
from glimmer.services.user_service import get_user_or_404

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/{user_id}/reminder-settings", response_model=ReminderSettingsOut)
def get_reminder_settings(user_id: str, db: Session = Depends(get_db)):
    """Current settings, or the defaults when the user never saved any."""
    user = get_user_or_404(db, user_id)
    if user.reminder_settings:
        return user.reminder_settings
    return ReminderSettingsOut(
        user_id=user_id,
        enabled=False,
        self_reminder_enabled=True,
        self_reminder_days=DEFAULT_SELF_REMINDER_DAYS,
        contact_reminder_enabled=False,
        contact_reminder_days=DEFAULT_CONTACT_REMINDER_DAYS,
    )


@router.put("/{user_id}/reminder-settings", response_model=ReminderSettingsOut)
def upsert_reminder_settings(user_id: str, payload: ReminderSettingsUpdate, db: Session = Depends(get_db)):
    """Create or replace the user's reminder settings.

    This is also how a user turns reminders back on after they were
    auto-disabled.
    """
    user = get_user_or_404(db, user_id)
    reminder_settings = user.reminder_settings
    if reminder_settings is None:
        reminder_settings = ReminderSettings(user_id=user_id)
        db.add(reminder_settings)

    values = payload.model_dump()
    reminder_settings.set_enabled(values.pop("enabled"))
    for field, value in values.items():
        setattr(reminder_settings, field, value)

    db.commit()
    db.refresh(reminder_settings)
    logger.info("Saved reminder settings for user %s (enabled=%s)", user_id, reminder_settings.enabled)
    return reminder_settings
