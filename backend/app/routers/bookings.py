"""Booking API routes — delegates to BookingWorkflow for invariant enforcement."""
import logging
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.booking import BookingStatus
from app.repositories.sql import SqlBookingRepository
from app.schemas.booking import (
    BookingCreate,
    BookingUpdate,
    BookingDetailOut,
    StatusChange,
    CancelRequest,
    HistoryOut,
)
from app.services.booking_service import BookingWorkflow
from app.services.notifications import NotificationRelay, get_relay

logger = logging.getLogger(__name__)
router = APIRouter()

ACTOR = Query(..., description="ID of the user performing the request")


def get_workflow(
    db: Session = Depends(get_db),
    relay: NotificationRelay = Depends(get_relay),
) -> BookingWorkflow:
    return BookingWorkflow(SqlBookingRepository(db), relay)


@router.post("/", response_model=BookingDetailOut, status_code=status.HTTP_201_CREATED)
def create_booking(
    payload: BookingCreate,
    actor_user_id: str = ACTOR,
    workflow: BookingWorkflow = Depends(get_workflow),
):
    """Submit a booking request; fails with 400 if the slot is taken."""
    return workflow.create(actor_user_id, payload.model_dump())


@router.get("/user", response_model=list[BookingDetailOut])
def list_my_bookings(actor_user_id: str = ACTOR, workflow: BookingWorkflow = Depends(get_workflow)):
    """The actor's own bookings, newest first."""
    actor = workflow.get_actor(actor_user_id)
    return workflow.repo.list_by_user(actor.user_id)


@router.get("/status/{booking_status}", response_model=list[BookingDetailOut])
def list_by_status(booking_status: BookingStatus, workflow: BookingWorkflow = Depends(get_workflow)):
    return workflow.repo.list_by_status(booking_status)


@router.get("/pending", response_model=list[BookingDetailOut])
def list_pending(actor_user_id: str = ACTOR, workflow: BookingWorkflow = Depends(get_workflow)):
    """Bookings waiting on the actor's role. Plain users have no queue."""
    actor = workflow.get_actor(actor_user_id)
    return workflow.repo.list_pending_for_role(actor.role)


@router.get("/processed", response_model=list[BookingDetailOut])
def list_processed(actor_user_id: str = ACTOR, workflow: BookingWorkflow = Depends(get_workflow)):
    """Bookings the actor's role has already acted on, most recently updated first."""
    actor = workflow.get_actor(actor_user_id)
    return workflow.repo.list_processed_for_role(actor.role)


@router.get("/{booking_id}", response_model=BookingDetailOut)
def get_booking(booking_id: str, workflow: BookingWorkflow = Depends(get_workflow)):
    return workflow.get_booking(booking_id)


@router.get("/{booking_id}/history", response_model=list[HistoryOut])
def get_history(booking_id: str, workflow: BookingWorkflow = Depends(get_workflow)):
    """Status history, oldest first."""
    return workflow.history(booking_id)


@router.put("/{booking_id}", response_model=BookingDetailOut)
def edit_booking(
    booking_id: str,
    payload: BookingUpdate,
    actor_user_id: str = ACTOR,
    workflow: BookingWorkflow = Depends(get_workflow),
):
    """Owner edit; resets the booking to 'submitted'."""
    return workflow.edit(booking_id, payload.model_dump(), actor_user_id)


@router.patch("/{booking_id}/status", response_model=BookingDetailOut)
def change_status(
    booking_id: str,
    payload: StatusChange,
    actor_user_id: str = ACTOR,
    workflow: BookingWorkflow = Depends(get_workflow),
):
    """Approve, reject, record IT setup or complete a booking."""
    return workflow.transition(booking_id, payload.status, actor_user_id, payload.remarks)


@router.post("/{booking_id}/cancel", response_model=BookingDetailOut)
def cancel_booking(
    booking_id: str,
    payload: CancelRequest | None = None,
    actor_user_id: str = ACTOR,
    workflow: BookingWorkflow = Depends(get_workflow),
):
    """Owner cancellation."""
    remarks = payload.remarks if payload else None
    return workflow.cancel(booking_id, actor_user_id, remarks)
