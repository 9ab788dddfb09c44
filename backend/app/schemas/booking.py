"""Pydantic schemas for Bookings and their history."""
from __future__ import annotations
from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from app.models.booking import BookingStatus, MeetingType
from app.schemas.user import UserOut
from app.schemas.venue import VenueOut


class BookingCreate(BaseModel):
    venue_id: str
    event_title: str = Field(min_length=1, max_length=255)
    event_description: Optional[str] = None
    meeting_type: MeetingType
    event_date: date
    start_time: str
    end_time: str
    expected_attendees: int = Field(gt=0)
    department: str
    requested_resources: list[str] = []
    special_requirements: Optional[str] = None

    @field_validator("event_date", mode="before")
    @classmethod
    def _date_only(cls, value):
        # Clients send either "2024-03-01" or a full ISO timestamp; only the date counts.
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, str) and "T" in value:
            return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
        return value


class BookingUpdate(BookingCreate):
    """Edits replace every request field and resubmit the booking."""


class StatusChange(BaseModel):
    status: BookingStatus
    remarks: Optional[str] = None


class CancelRequest(BaseModel):
    remarks: Optional[str] = None


class BookingOut(BaseModel):
    booking_id: str
    user_id: str
    venue_id: str
    event_title: str
    event_description: Optional[str] = None
    meeting_type: MeetingType
    event_date: date
    start_time: str
    end_time: str
    expected_attendees: int
    department: str
    requested_resources: list[str] = []
    special_requirements: Optional[str] = None
    status: BookingStatus
    gd_approval_date: Optional[datetime] = None
    gd_remarks: Optional[str] = None
    secretary_approval_date: Optional[datetime] = None
    secretary_remarks: Optional[str] = None
    it_setup_date: Optional[datetime] = None
    it_remarks: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class BookingDetailOut(BookingOut):
    user: Optional[UserOut] = None
    venue: Optional[VenueOut] = None


class HistoryOut(BaseModel):
    history_id: int
    booking_id: str
    status: BookingStatus
    remarks: Optional[str] = None
    changed_by: str
    created_at: datetime

    model_config = {"from_attributes": True}
