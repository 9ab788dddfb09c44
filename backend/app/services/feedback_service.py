"""Post-event feedback for completed bookings."""
import logging
import uuid
from datetime import datetime, time, timezone
from typing import Any, Optional

import pytz

from app.config import settings
from app.errors import Conflict, Forbidden, InvalidStage, NotFound
from app.models.booking import Booking, BookingStatus
from app.models.feedback import Feedback
from app.repositories.base import BookingRepository

logger = logging.getLogger(__name__)


def event_has_ended(booking: Booking, now: Optional[datetime] = None, tz_name: Optional[str] = None) -> bool:
    """Whether the booking's end time has passed, evaluated in the venue timezone.

    Booking times are local wall-clock strings, so they are localized with
    the configured zone before comparing against the current instant.
    """
    tz = pytz.timezone(tz_name or settings.TIMEZONE)
    now = now or datetime.now(timezone.utc)
    local_end = tz.localize(datetime.combine(booking.event_date, time.fromisoformat(booking.end_time)))
    return local_end <= now


def submit_feedback(
    repo: BookingRepository,
    booking_id: str,
    actor_user_id: str,
    fields: dict[str, Any],
    now: Optional[datetime] = None,
) -> Feedback:
    """Record the owner's feedback once the booking is completed and the event is over."""
    booking = repo.get_by_id(booking_id)
    if not booking:
        raise NotFound("Booking not found")
    if not repo.get_user(actor_user_id):
        raise NotFound("User not found")
    if booking.user_id != actor_user_id:
        raise Forbidden("Only the booking owner may leave feedback")
    if booking.status != BookingStatus.completed:
        raise InvalidStage("Feedback is accepted only for completed bookings")
    if not event_has_ended(booking, now):
        raise InvalidStage("Feedback opens once the event has ended")
    if repo.feedback_for_booking(booking_id):
        raise Conflict("Feedback already submitted for this booking")

    feedback = Feedback(
        feedback_id=str(uuid.uuid4()),
        booking_id=booking_id,
        user_id=actor_user_id,
        overall_rating=fields["overall_rating"],
        venue_rating=fields["venue_rating"],
        it_support_rating=fields["it_support_rating"],
        feedback_text=fields.get("feedback_text"),
        attachments=list(fields.get("attachments") or []),
        created_at=now or datetime.now(timezone.utc),
    )
    with repo.transaction():
        repo.add_feedback(feedback)
    logger.info("Feedback %s recorded for booking %s", feedback.feedback_id, booking_id)
    return feedback
