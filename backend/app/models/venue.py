"""Venue ORM model."""
import enum
import uuid
from sqlalchemy import Column, String, DateTime, Integer, JSON, Enum as SAEnum
from sqlalchemy.sql import func
from app.database import Base


class VenueStatus(str, enum.Enum):
    available = "available"
    occupied = "occupied"
    maintenance = "maintenance"


class Venue(Base):
    __tablename__ = "venues"

    venue_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(200), nullable=False)
    capacity = Column(Integer, nullable=False)
    floor = Column(String(50), nullable=False)
    amenities = Column(JSON, nullable=True, default=list)
    status = Column(SAEnum(VenueStatus), nullable=False, default=VenueStatus.available)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
