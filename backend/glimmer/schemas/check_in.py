"""Pydantic schemas for CheckIns."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class CheckInCreate(BaseModel):
    emoji: Optional[str] = Field(default=None, max_length=16)
    mood: Optional[str] = Field(default=None, max_length=50)


class CheckInOut(BaseModel):
    check_in_id: str
    user_id: str
    date: datetime
    display_date: Optional[str] = None
    mood: Optional[str] = None
    emoji: str
    encouragement: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}
