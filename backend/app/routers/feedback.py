"""Feedback API routes."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.errors import NotFound
from app.repositories.sql import SqlBookingRepository
from app.schemas.feedback import FeedbackCreate, FeedbackOut
from app.services import feedback_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=FeedbackOut, status_code=status.HTTP_201_CREATED)
def submit_feedback(
    payload: FeedbackCreate,
    actor_user_id: str = Query(..., description="ID of the booking owner"),
    db: Session = Depends(get_db),
):
    """Rate a completed booking after the event has ended."""
    return feedback_service.submit_feedback(
        SqlBookingRepository(db),
        payload.booking_id,
        actor_user_id,
        payload.model_dump(exclude={"booking_id"}),
    )


@router.get("/booking/{booking_id}", response_model=Optional[FeedbackOut])
def get_feedback_for_booking(booking_id: str, db: Session = Depends(get_db)):
    repo = SqlBookingRepository(db)
    if not repo.get_by_id(booking_id):
        raise NotFound("Booking not found")
    return repo.feedback_for_booking(booking_id)


@router.get("/user", response_model=list[FeedbackOut])
def list_my_feedback(actor_user_id: str = Query(...), db: Session = Depends(get_db)):
    repo = SqlBookingRepository(db)
    if not repo.get_user(actor_user_id):
        raise NotFound("User not found")
    return repo.feedback_for_user(actor_user_id)
