"""Core booking service — the approval workflow.

Responsibilities:
- Creation with venue availability check (status starts at `submitted`)
- Status transitions gated by role/ownership and by the transition table
- Stage stamping (approval date + remarks per stage)
- Edit / resubmission for the owner while the booking is editable
- History ledger row for every committed change
- Best-effort status events to the notification relay after commit

Writers on the same booking are serialized by `booking_locks`; create and
edit also hold the (venue, date) lock across the availability check and the
write. Lock order is always booking, then venue.
"""
import logging
import uuid
from datetime import date, datetime, timezone
from typing import Any, Optional

from app.errors import Conflict, Forbidden, InvalidStage, NotFound
from app.models.booking import Booking, BookingStatus
from app.models.user import User
from app.repositories.base import BookingRepository
from app.services import availability_service
from app.services.history_service import HistoryLedger
from app.services.locks import KeyedLock, booking_locks, venue_locks
from app.services.notifications import NotificationRelay, StatusEvent
from app.services.status_machine import (
    DEFAULT_REMARKS,
    EDITABLE_STATUSES,
    RESUBMITTED_REMARKS,
    apply_stage_fields,
    authorize_transition,
    parse_status,
    validate_transition,
)

logger = logging.getLogger(__name__)

# Fields the owner supplies at creation and may overwrite on edit.
BOOKING_FIELDS = (
    "venue_id",
    "event_title",
    "event_description",
    "meeting_type",
    "event_date",
    "start_time",
    "end_time",
    "expected_attendees",
    "department",
    "requested_resources",
    "special_requirements",
)


class BookingWorkflow:
    """Booking lifecycle operations over an injected repository and relay."""

    def __init__(
        self,
        repo: BookingRepository,
        relay: NotificationRelay,
        booking_lock: KeyedLock = booking_locks,
        venue_lock: KeyedLock = venue_locks,
    ):
        self.repo = repo
        self.relay = relay
        self.ledger = HistoryLedger(repo)
        self.booking_lock = booking_lock
        self.venue_lock = venue_lock

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    def get_booking(self, booking_id: str) -> Booking:
        booking = self.repo.get_by_id(booking_id)
        if not booking:
            raise NotFound("Booking not found")
        return booking

    def get_actor(self, actor_user_id: str) -> User:
        actor = self.repo.get_user(actor_user_id)
        if not actor:
            raise NotFound("User not found")
        return actor

    def history(self, booking_id: str):
        self.get_booking(booking_id)
        return self.ledger.list_for_booking(booking_id)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def create(self, actor_user_id: str, fields: dict[str, Any]) -> Booking:
        """Submit a new booking request on behalf of the actor."""
        actor = self.get_actor(actor_user_id)
        data = _booking_fields(fields)
        self._check_slot_inputs(data)

        with self.venue_lock.hold(_slot_key(data)):
            self._ensure_available(data)
            now = datetime.now(timezone.utc)
            booking = Booking(
                booking_id=str(uuid.uuid4()),
                user_id=actor.user_id,
                status=BookingStatus.submitted,
                created_at=now,
                updated_at=now,
                **data,
            )
            with self.repo.transaction():
                self.repo.create(booking)
                self.ledger.append(
                    booking.booking_id, BookingStatus.submitted,
                    DEFAULT_REMARKS[BookingStatus.submitted], actor.user_id, at=now,
                )

        logger.info("Created booking '%s' (%s) for user %s", booking.event_title, booking.booking_id, actor.user_id)
        self._emit(booking.booking_id, BookingStatus.submitted, now)
        return booking

    def transition(
        self,
        booking_id: str,
        new_status: Any,
        actor_user_id: str,
        remarks: Optional[str] = None,
    ) -> Booking:
        """Move a booking to `new_status`, stamping stage fields and the ledger."""
        target = parse_status(new_status)
        with self.booking_lock.hold(booking_id):
            booking = self.get_booking(booking_id)
            actor = self.get_actor(actor_user_id)
            try:
                authorize_transition(booking, target, actor)
            except Forbidden:
                logger.info("User %s (%s) denied %s on booking %s",
                            actor.user_id, actor.role.value, target.value, booking_id)
                raise
            validate_transition(booking.status, target)

            now = datetime.now(timezone.utc)
            previous = booking.status
            with self.repo.transaction():
                apply_stage_fields(booking, target, remarks, now)
                booking.status = target
                booking.updated_at = now
                self.ledger.append(
                    booking_id, target, remarks or DEFAULT_REMARKS[target], actor.user_id, at=now,
                )

        logger.info("Booking %s: %s -> %s by %s", booking_id, previous.value, target.value, actor.user_id)
        self._emit(booking_id, target, now)
        return booking

    def cancel(self, booking_id: str, actor_user_id: str, remarks: Optional[str] = None) -> Booking:
        """Owner-initiated cancellation."""
        return self.transition(booking_id, BookingStatus.cancelled, actor_user_id, remarks)

    def edit(self, booking_id: str, fields: dict[str, Any], actor_user_id: str) -> Booking:
        """Overwrite the request fields and resubmit the booking for approval.

        Earlier stage dates and remarks are kept as the record of what happened.
        """
        with self.booking_lock.hold(booking_id):
            booking = self.get_booking(booking_id)
            actor = self.get_actor(actor_user_id)
            if booking.user_id != actor.user_id:
                logger.info("User %s denied edit on booking %s", actor.user_id, booking_id)
                raise Forbidden("Not authorized to edit this booking")
            if booking.status not in EDITABLE_STATUSES:
                raise InvalidStage(f"Booking cannot be edited while '{booking.status.value}'")

            data = _booking_fields(fields)
            self._check_slot_inputs(data)

            with self.venue_lock.hold(_slot_key(data)):
                self._ensure_available(data, exclude_booking_id=booking_id)
                now = datetime.now(timezone.utc)
                with self.repo.transaction():
                    for field, value in data.items():
                        setattr(booking, field, value)
                    booking.status = BookingStatus.submitted
                    booking.updated_at = now
                    self.ledger.append(
                        booking_id, BookingStatus.submitted, RESUBMITTED_REMARKS, actor.user_id, at=now,
                    )

        logger.info("Booking %s edited and resubmitted by %s", booking_id, actor.user_id)
        self._emit(booking_id, BookingStatus.submitted, now)
        return booking

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _check_slot_inputs(self, data: dict[str, Any]) -> None:
        availability_service.validate_time_range(data["start_time"], data["end_time"])
        if not self.repo.get_venue(data["venue_id"]):
            raise NotFound("Venue not found")

    def _ensure_available(self, data: dict[str, Any], exclude_booking_id: Optional[str] = None) -> None:
        available = availability_service.is_available(
            self.repo,
            data["venue_id"],
            data["event_date"],
            data["start_time"],
            data["end_time"],
            exclude_booking_id=exclude_booking_id,
        )
        if not available:
            raise Conflict("Venue not available for the selected time slot")

    def _emit(self, booking_id: str, status: BookingStatus, at: datetime) -> None:
        """Publish after commit; delivery problems never reach the caller."""
        try:
            self.relay.publish(StatusEvent(booking_id=booking_id, status=status, timestamp=at))
        except Exception as exc:
            logger.warning("Status event for booking %s not delivered: %s", booking_id, exc)


def _booking_fields(fields: dict[str, Any]) -> dict[str, Any]:
    data = {name: fields.get(name) for name in BOOKING_FIELDS}
    if isinstance(data["event_date"], datetime):
        data["event_date"] = data["event_date"].date()
    data["requested_resources"] = list(dict.fromkeys(data["requested_resources"] or []))
    return data


def _slot_key(data: dict[str, Any]) -> tuple[str, date]:
    return data["venue_id"], data["event_date"]
