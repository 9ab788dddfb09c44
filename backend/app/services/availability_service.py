"""Availability service — venue double-booking detection.

Bookings carry a calendar date plus local "HH:MM" start/end strings. Two
bookings conflict when they share venue and date, the existing one is
active, and their [start, end) ranges overlap. Zero-padded HH:MM strings
order the same way the times do, so ranges are compared as strings.
"""
import logging
import re
from datetime import date
from typing import Optional

from app.errors import InvalidTimeRange
from app.models.booking import Booking
from app.repositories.base import BookingRepository
from app.services.status_machine import ACTIVE_STATUSES

logger = logging.getLogger(__name__)

_HHMM = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def validate_time_range(start_time: str, end_time: str) -> None:
    """Reject malformed times and empty or inverted ranges."""
    for value in (start_time, end_time):
        if not isinstance(value, str) or not _HHMM.match(value):
            raise InvalidTimeRange(f"Time must be HH:MM (24h), got {value!r}")
    if start_time >= end_time:
        raise InvalidTimeRange(f"Start time {start_time} must be before end time {end_time}")


def intervals_overlap(start1: str, end1: str, start2: str, end2: str) -> bool:
    """Half-open [start, end) overlap test; touching boundaries do not overlap."""
    return not (end1 <= start2 or start1 >= end2)


def find_conflicts(
    repo: BookingRepository,
    venue_id: str,
    event_date: date,
    start_time: str,
    end_time: str,
    exclude_booking_id: Optional[str] = None,
) -> list[Booking]:
    """Return the active bookings on this venue and date that overlap the range."""
    candidates = repo.bookings_on(venue_id, event_date, ACTIVE_STATUSES, exclude_booking_id)
    return [
        b for b in candidates
        if intervals_overlap(start_time, end_time, b.start_time, b.end_time)
    ]


def is_available(
    repo: BookingRepository,
    venue_id: str,
    event_date: date,
    start_time: str,
    end_time: str,
    exclude_booking_id: Optional[str] = None,
) -> bool:
    """True when no active booking on the venue and date overlaps [start_time, end_time)."""
    conflicts = find_conflicts(repo, venue_id, event_date, start_time, end_time, exclude_booking_id)
    if conflicts:
        logger.info(
            "Venue %s on %s %s-%s conflicts with %s",
            venue_id, event_date, start_time, end_time,
            ", ".join(b.booking_id for b in conflicts),
        )
    return not conflicts
