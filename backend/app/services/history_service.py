"""Booking history ledger — append-only audit trail of status changes."""
import logging
from datetime import datetime, timezone
from typing import Optional

from app.models.booking import BookingStatus
from app.models.booking_history import BookingHistory
from app.repositories.base import BookingRepository

logger = logging.getLogger(__name__)


class HistoryLedger:
    """Writes and reads BookingHistory rows through the repository.

    Rows are never updated or removed. `append` joins whatever transaction
    the caller has open, so a status change and its ledger row commit together.
    """

    def __init__(self, repo: BookingRepository):
        self.repo = repo

    def append(
        self,
        booking_id: str,
        status: BookingStatus,
        remarks: Optional[str],
        actor_id: str,
        at: Optional[datetime] = None,
    ) -> BookingHistory:
        entry = BookingHistory(
            booking_id=booking_id,
            status=status,
            remarks=remarks,
            changed_by=actor_id,
            created_at=at or datetime.now(timezone.utc),
        )
        self.repo.add_history(entry)
        logger.debug("History: booking %s -> %s by %s", booking_id, status.value, actor_id)
        return entry

    def list_for_booking(self, booking_id: str) -> list[BookingHistory]:
        """Chronological narrative for one booking, oldest first."""
        return self.repo.history_for(booking_id)
