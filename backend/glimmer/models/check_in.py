"""CheckIn ORM model, one mood entry per user per UTC calendar day."""
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime, ForeignKey, Index
from glimmer.database import Base


class CheckIn(Base):
    __tablename__ = "check_ins"
    __table_args__ = (
        Index("ix_check_ins_user_date", "user_id", "date"),
    )

    check_in_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.user_id"), nullable=False)
    date = Column(DateTime(timezone=True), nullable=False)  # UTC midnight
    mood = Column(String(50), nullable=True)
    emoji = Column(String(16), nullable=False, default="🏃")
    encouragement = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
