"""Pydantic schemas for the notification ledger."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from glimmer.models.notification_log import NotificationStatus, NotificationType


class NotificationLogOut(BaseModel):
    log_id: str
    user_id: str
    type: NotificationType
    status: NotificationStatus
    recipient: Optional[str] = None
    error: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}
