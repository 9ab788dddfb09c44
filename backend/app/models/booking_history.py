"""BookingHistory ORM model — append-only ledger of status changes."""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Enum as SAEnum
from sqlalchemy.sql import func
from app.database import Base
from app.models.booking import BookingStatus


class BookingHistory(Base):
    __tablename__ = "booking_history"

    history_id = Column(Integer, primary_key=True, autoincrement=True)
    booking_id = Column(String(36), ForeignKey("bookings.booking_id"), nullable=False, index=True)
    status = Column(SAEnum(BookingStatus), nullable=False)
    remarks = Column(Text, nullable=True)
    changed_by = Column(String(36), ForeignKey("users.user_id"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
