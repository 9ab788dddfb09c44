"""Booking ORM model."""
import uuid
import enum
from sqlalchemy import Column, String, Date, DateTime, Integer, Text, JSON, ForeignKey, Enum as SAEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.database import Base


class BookingStatus(str, enum.Enum):
    submitted = "submitted"
    gd_approved = "gd_approved"
    gd_rejected = "gd_rejected"
    secretary_approved = "secretary_approved"
    secretary_rejected = "secretary_rejected"
    it_setup_complete = "it_setup_complete"
    completed = "completed"
    cancelled = "cancelled"


class MeetingType(str, enum.Enum):
    offline = "offline"
    online = "online"
    miscellaneous = "miscellaneous"


class Booking(Base):
    __tablename__ = "bookings"

    booking_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.user_id"), nullable=False, index=True)
    venue_id = Column(String(36), ForeignKey("venues.venue_id"), nullable=False, index=True)
    event_title = Column(String(255), nullable=False)
    event_description = Column(Text, nullable=True)
    meeting_type = Column(SAEnum(MeetingType), nullable=False)
    event_date = Column(Date, nullable=False, index=True)
    start_time = Column(String(5), nullable=False)  # "HH:MM" local
    end_time = Column(String(5), nullable=False)
    expected_attendees = Column(Integer, nullable=False)
    department = Column(String(150), nullable=False)
    requested_resources = Column(JSON, nullable=True, default=list)
    special_requirements = Column(Text, nullable=True)

    status = Column(SAEnum(BookingStatus), nullable=False, default=BookingStatus.submitted)
    # Stage records: written once by their transition, never cleared
    gd_approval_date = Column(DateTime(timezone=True), nullable=True)
    gd_remarks = Column(Text, nullable=True)
    secretary_approval_date = Column(DateTime(timezone=True), nullable=True)
    secretary_remarks = Column(Text, nullable=True)
    it_setup_date = Column(DateTime(timezone=True), nullable=True)
    it_remarks = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User")
    venue = relationship("Venue")
