"""NotificationLog ORM model — append-only ledger of reminder attempts."""
import uuid
import enum
from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Index, Enum as SAEnum
from glimmer.database import Base


class NotificationType(str, enum.Enum):
    self_ = "self"
    contact = "contact"


class NotificationStatus(str, enum.Enum):
    sent = "sent"
    failed = "failed"


class NotificationLog(Base):
    __tablename__ = "notification_logs"
    __table_args__ = (
        Index("ix_notification_logs_user_created", "user_id", "created_at"),
    )

    log_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.user_id"), nullable=False)
    type = Column(SAEnum(NotificationType, values_callable=lambda e: [m.value for m in e]), nullable=False)
    status = Column(SAEnum(NotificationStatus), nullable=False)
    content = Column(Text, nullable=False, default="")
    recipient = Column(String(255), nullable=True)
    error = Column(String(1000), nullable=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
