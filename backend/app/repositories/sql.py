"""SQLAlchemy implementation of the booking repository."""
import logging
from contextlib import contextmanager
from datetime import date
from typing import Iterable, Iterator, Optional

from sqlalchemy.orm import Session

from app.models.booking import Booking, BookingStatus
from app.models.booking_history import BookingHistory
from app.models.feedback import Feedback
from app.models.user import User
from app.models.venue import Venue
from app.repositories.base import BookingRepository

logger = logging.getLogger(__name__)


class SqlBookingRepository(BookingRepository):
    """Repository over a request-scoped Session."""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def transaction(self) -> Iterator[None]:
        try:
            yield
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.exception("Transaction rolled back")
            raise

    def get_user(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.user_id == user_id).first()

    def get_venue(self, venue_id: str) -> Optional[Venue]:
        return self.db.query(Venue).filter(Venue.venue_id == venue_id).first()

    def add(self, booking: Booking) -> Booking:
        self.db.add(booking)
        self.db.flush()
        return booking

    def get(self, booking_id: str) -> Optional[Booking]:
        return self.db.query(Booking).filter(Booking.booking_id == booking_id).first()

    def query(
        self,
        user_id: Optional[str] = None,
        statuses: Optional[Iterable[BookingStatus]] = None,
        newest_by: str = "created_at",
    ) -> list[Booking]:
        query = self.db.query(Booking)
        if user_id is not None:
            query = query.filter(Booking.user_id == user_id)
        if statuses is not None:
            query = query.filter(Booking.status.in_(list(statuses)))
        return query.order_by(getattr(Booking, newest_by).desc()).all()

    def bookings_on(
        self,
        venue_id: str,
        event_date: date,
        statuses: Iterable[BookingStatus],
        exclude_booking_id: Optional[str] = None,
    ) -> list[Booking]:
        query = self.db.query(Booking).filter(
            Booking.venue_id == venue_id,
            Booking.event_date == event_date,
            Booking.status.in_(list(statuses)),
        )
        if exclude_booking_id:
            query = query.filter(Booking.booking_id != exclude_booking_id)
        return query.order_by(Booking.start_time).all()

    def add_history(self, entry: BookingHistory) -> BookingHistory:
        self.db.add(entry)
        self.db.flush()
        return entry

    def history_for(self, booking_id: str) -> list[BookingHistory]:
        return (
            self.db.query(BookingHistory)
            .filter(BookingHistory.booking_id == booking_id)
            .order_by(BookingHistory.created_at, BookingHistory.history_id)
            .all()
        )

    def add_feedback(self, feedback: Feedback) -> Feedback:
        self.db.add(feedback)
        self.db.flush()
        return feedback

    def feedback_for_booking(self, booking_id: str) -> Optional[Feedback]:
        return self.db.query(Feedback).filter(Feedback.booking_id == booking_id).first()

    def feedback_for_user(self, user_id: str) -> list[Feedback]:
        return (
            self.db.query(Feedback)
            .filter(Feedback.user_id == user_id)
            .order_by(Feedback.created_at.desc())
            .all()
        )
