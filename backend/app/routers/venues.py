"""Venue API routes, including the availability check."""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.venue import Venue
from app.repositories.sql import SqlBookingRepository
from app.schemas.venue import VenueCreate, VenueOut, AvailabilityQuery, AvailabilityOut
from app.services import availability_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=VenueOut, status_code=status.HTTP_201_CREATED)
def create_venue(payload: VenueCreate, db: Session = Depends(get_db)):
    venue = Venue(**payload.model_dump())
    db.add(venue)
    db.commit()
    db.refresh(venue)
    logger.info("Created venue %s (%s, capacity %d)", venue.venue_id, venue.name, venue.capacity)
    return venue


@router.get("/", response_model=list[VenueOut])
def list_venues(db: Session = Depends(get_db)):
    return db.query(Venue).order_by(Venue.name).all()


@router.post("/check-availability", response_model=AvailabilityOut)
def check_availability(payload: AvailabilityQuery, db: Session = Depends(get_db)):
    """Is the venue free on this date for [start_time, end_time)?"""
    availability_service.validate_time_range(payload.start_time, payload.end_time)
    repo = SqlBookingRepository(db)
    if not repo.get_venue(payload.venue_id):
        raise HTTPException(status_code=404, detail="Venue not found")
    available = availability_service.is_available(
        repo,
        payload.venue_id,
        payload.date,
        payload.start_time,
        payload.end_time,
        exclude_booking_id=payload.exclude_booking_id,
    )
    return AvailabilityOut(available=available)


@router.get("/{venue_id}", response_model=VenueOut)
def get_venue(venue_id: str, db: Session = Depends(get_db)):
    venue = db.query(Venue).filter(Venue.venue_id == venue_id).first()
    if not venue:
        raise HTTPException(status_code=404, detail="Venue not found")
    return venue
