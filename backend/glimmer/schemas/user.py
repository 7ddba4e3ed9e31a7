"""Pydantic schemas for Users."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field


class UserCreate(BaseModel):
    email: Optional[EmailStr] = None
    display_name: Optional[str] = Field(default=None, max_length=100)


class UserUpdate(BaseModel):
    email: Optional[EmailStr] = None
    display_name: Optional[str] = Field(default=None, max_length=100)


class UserOut(BaseModel):
    user_id: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}
