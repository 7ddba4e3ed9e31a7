"""ReminderSettings ORM model (1:1 with User)."""
import uuid
from datetime import datetime, timezone
from typing import Optional
from sqlalchemy import Column, String, Boolean, Integer, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from glimmer.database import Base

DEFAULT_SELF_REMINDER_DAYS = 3
DEFAULT_CONTACT_REMINDER_DAYS = 7


class ReminderSettings(Base):
    __tablename__ = "reminder_settings"

    settings_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.user_id"), nullable=False, unique=True)
    enabled = Column(Boolean, nullable=False, default=False)
    # Last time reminders were switched on; reminders sent before it never count toward an auto-disable streak
    enabled_at = Column(DateTime(timezone=True), nullable=True)
    self_reminder_enabled = Column(Boolean, nullable=False, default=True)
    self_reminder_days = Column(Integer, nullable=False, default=DEFAULT_SELF_REMINDER_DAYS)
    contact_reminder_enabled = Column(Boolean, nullable=False, default=False)
    contact_reminder_days = Column(Integer, nullable=False, default=DEFAULT_CONTACT_REMINDER_DAYS)
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    user = relationship("User", back_populates="reminder_settings")

    def set_enabled(self, enabled: bool, now: Optional[datetime] = None) -> None:
        """Switch reminders on or off, stamping ``enabled_at`` when they turn on."""
        if enabled and not self.enabled:
            self.enabled_at = now or datetime.now(timezone.utc)
        self.enabled = enabled
