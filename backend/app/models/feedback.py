"""Feedback ORM model — post-event rating for a completed booking."""
import uuid
from sqlalchemy import Column, String, Integer, Text, DateTime, JSON, ForeignKey
from sqlalchemy.sql import func
from app.database import Base


class Feedback(Base):
    __tablename__ = "feedback"

    feedback_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    booking_id = Column(String(36), ForeignKey("bookings.booking_id"), nullable=False, unique=True)
    user_id = Column(String(36), ForeignKey("users.user_id"), nullable=False, index=True)
    overall_rating = Column(Integer, nullable=False)
    venue_rating = Column(String(50), nullable=False)
    it_support_rating = Column(String(50), nullable=False)
    feedback_text = Column(Text, nullable=True)
    attachments = Column(JSON, nullable=True, default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
