"""Pydantic schemas for Feedback."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class FeedbackCreate(BaseModel):
    booking_id: str
    overall_rating: int = Field(ge=1, le=5)
    venue_rating: str = Field(min_length=1, max_length=50)
    it_support_rating: str = Field(min_length=1, max_length=50)
    feedback_text: Optional[str] = None
    attachments: list[str] = []  # references only; file storage lives elsewhere


class FeedbackOut(BaseModel):
    feedback_id: str
    booking_id: str
    user_id: str
    overall_rating: int
    venue_rating: str
    it_support_rating: str
    feedback_text: Optional[str] = None
    attachments: list[str] = []
    created_at: datetime

    model_config = {"from_attributes": True}
