"""User ORM model."""
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from glimmer.database import Base


class User(Base):
    __tablename__ = "users"

    user_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), nullable=True, unique=True)
    display_name = Column(String(100), nullable=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    reminder_settings = relationship(
        "ReminderSettings", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )
    emergency_contacts = relationship(
        "EmergencyContact", back_populates="user", cascade="all, delete-orphan",
        order_by="EmergencyContact.created_at",
    )
