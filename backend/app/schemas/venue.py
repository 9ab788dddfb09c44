"""Pydantic schemas for Venues and Resources."""
from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, Field

from app.models.venue import VenueStatus


class VenueCreate(BaseModel):
    name: str
    capacity: int = Field(gt=0)
    floor: str
    amenities: list[str] = []
    status: VenueStatus = VenueStatus.available


class VenueOut(BaseModel):
    venue_id: str
    name: str
    capacity: int
    floor: str
    amenities: list[str] = []
    status: VenueStatus
    created_at: datetime

    model_config = {"from_attributes": True}


class AvailabilityQuery(BaseModel):
    venue_id: str
    date: date
    start_time: str
    end_time: str
    exclude_booking_id: Optional[str] = None


class AvailabilityOut(BaseModel):
    available: bool


class ResourceCreate(BaseModel):
    name: str
    description: Optional[str] = None
    available: bool = True


class ResourceOut(BaseModel):
    resource_id: str
    name: str
    description: Optional[str] = None
    available: bool
    created_at: datetime

    model_config = {"from_attributes": True}
