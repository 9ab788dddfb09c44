"""Booking repository interface.

Storage backends implement the primitive methods; the role and status
queries the workflow and dashboards use are built on top of them here, so
every backend answers them identically.
"""
import abc
import logging
from datetime import date
from typing import ContextManager, Iterable, Optional

from app.models.booking import Booking, BookingStatus
from app.models.booking_history import BookingHistory
from app.models.feedback import Feedback
from app.models.user import User, UserRole
from app.models.venue import Venue
from app.services.status_machine import PENDING_STATUS, PROCESSED_STATUSES

logger = logging.getLogger(__name__)


class BookingRepository(abc.ABC):
    """Persistence collaborator for bookings, their history and feedback."""

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------
    @abc.abstractmethod
    def transaction(self) -> ContextManager[None]:
        """Commit everything written inside the block, or roll all of it back."""

    @abc.abstractmethod
    def get_user(self, user_id: str) -> Optional[User]: ...

    @abc.abstractmethod
    def get_venue(self, venue_id: str) -> Optional[Venue]: ...

    @abc.abstractmethod
    def add(self, booking: Booking) -> Booking: ...

    @abc.abstractmethod
    def get(self, booking_id: str) -> Optional[Booking]: ...

    @abc.abstractmethod
    def query(
        self,
        user_id: Optional[str] = None,
        statuses: Optional[Iterable[BookingStatus]] = None,
        newest_by: str = "created_at",
    ) -> list[Booking]:
        """Bookings matching the filters, newest first by `newest_by`."""

    @abc.abstractmethod
    def bookings_on(
        self,
        venue_id: str,
        event_date: date,
        statuses: Iterable[BookingStatus],
        exclude_booking_id: Optional[str] = None,
    ) -> list[Booking]:
        """Bookings for one venue and calendar date in any of `statuses`."""

    @abc.abstractmethod
    def add_history(self, entry: BookingHistory) -> BookingHistory: ...

    @abc.abstractmethod
    def history_for(self, booking_id: str) -> list[BookingHistory]:
        """History rows for a booking, oldest first."""

    @abc.abstractmethod
    def add_feedback(self, feedback: Feedback) -> Feedback: ...

    @abc.abstractmethod
    def feedback_for_booking(self, booking_id: str) -> Optional[Feedback]: ...

    @abc.abstractmethod
    def feedback_for_user(self, user_id: str) -> list[Feedback]: ...

    # ------------------------------------------------------------------
    # Query surface
    # ------------------------------------------------------------------
    def create(self, booking: Booking) -> Booking:
        return self.add(booking)

    def get_by_id(self, booking_id: str) -> Optional[Booking]:
        return self.get(booking_id)

    def list_by_user(self, user_id: str) -> list[Booking]:
        return self._with_details(self.query(user_id=user_id))

    def list_by_status(self, status: BookingStatus) -> list[Booking]:
        return self._with_details(self.query(statuses=[status]))

    def list_pending_for_role(self, role: UserRole) -> list[Booking]:
        """Bookings waiting on `role`'s decision; empty for roles with no stage."""
        status = PENDING_STATUS.get(role)
        if status is None:
            return []
        return self._with_details(self.query(statuses=[status]))

    def list_processed_for_role(self, role: UserRole) -> list[Booking]:
        """Bookings `role` has already acted on, most recently updated first."""
        statuses = PROCESSED_STATUSES.get(role)
        if not statuses:
            return []
        return self._with_details(self.query(statuses=statuses, newest_by="updated_at"))

    def _with_details(self, bookings: list[Booking]) -> list[Booking]:
        """Attach user and venue; drop (and log) bookings whose references don't resolve."""
        resolved = []
        for booking in bookings:
            user = self.get_user(booking.user_id)
            venue = self.get_venue(booking.venue_id)
            if user is None or venue is None:
                logger.warning(
                    "Skipping booking %s: unresolved %s",
                    booking.booking_id,
                    "user" if user is None else "venue",
                )
                continue
            booking.user = user
            booking.venue = venue
            resolved.append(booking)
        return resolved
