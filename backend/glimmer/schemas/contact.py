"""Pydantic schemas for EmergencyContacts."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field


class ContactCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr


class ContactUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    enabled: Optional[bool] = None


class ContactOut(BaseModel):
    contact_id: str
    user_id: str
    name: str
    email: str
    enabled: bool
    created_at: datetime

    model_config = {"from_attributes": True}
