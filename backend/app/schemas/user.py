"""Pydantic schemas for Users."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from app.models.user import UserRole


class UserCreate(BaseModel):
    username: str = Field(min_length=1, max_length=100)
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(min_length=6)
    first_name: str
    last_name: str
    role: UserRole = UserRole.user
    department: Optional[str] = None


class LoginRequest(BaseModel):
    username: str
    password: str


class UserUpdate(BaseModel):
    """Profile fields only — role is fixed at creation."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    department: Optional[str] = None


class UserOut(BaseModel):
    user_id: str
    username: str
    email: str
    first_name: str
    last_name: str
    role: UserRole
    department: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}
