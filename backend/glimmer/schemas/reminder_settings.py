"""Pydantic schemas for ReminderSettings."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from glimmer.models.reminder_settings import DEFAULT_CONTACT_REMINDER_DAYS, DEFAULT_SELF_REMINDER_DAYS

MIN_REMINDER_DAYS = 1
MAX_REMINDER_DAYS = 30


class ReminderSettingsUpdate(BaseModel):
    enabled: bool
    self_reminder_enabled: bool = True
    self_reminder_days: int = Field(default=DEFAULT_SELF_REMINDER_DAYS, ge=MIN_REMINDER_DAYS, le=MAX_REMINDER_DAYS)
    contact_reminder_enabled: bool = False
    contact_reminder_days: int = Field(default=DEFAULT_CONTACT_REMINDER_DAYS, ge=MIN_REMINDER_DAYS, le=MAX_REMINDER_DAYS)


class ReminderSettingsOut(BaseModel):
    user_id: str
    enabled: bool
    self_reminder_enabled: bool
    self_reminder_days: int
    contact_reminder_enabled: bool
    contact_reminder_days: int
    enabled_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
