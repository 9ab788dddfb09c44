"""Notification relay — publishes booking status changes to subscribers.

The workflow only ever calls `publish`. Transports (the /ws route) register
plain callables with `subscribe`; a subscriber that raises is logged and
skipped so one broken client never affects the others or the caller.
"""
import abc
import logging
import threading
from datetime import datetime
from typing import Callable

from pydantic import BaseModel

from app.models.booking import BookingStatus

logger = logging.getLogger(__name__)


class StatusEvent(BaseModel):
    booking_id: str
    status: BookingStatus
    timestamp: datetime


Subscriber = Callable[[StatusEvent], None]


class NotificationRelay(abc.ABC):
    @abc.abstractmethod
    def publish(self, event: StatusEvent) -> None: ...


class BroadcastRelay(NotificationRelay):
    """Fan-out to every current subscriber, synchronously and best effort."""

    def __init__(self):
        self._lock = threading.Lock()
        self._subscribers: set[Subscriber] = set()

    def subscribe(self, callback: Subscriber) -> None:
        with self._lock:
            self._subscribers.add(callback)

    def unsubscribe(self, callback: Subscriber) -> None:
        with self._lock:
            self._subscribers.discard(callback)

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def publish(self, event: StatusEvent) -> None:
        with self._lock:
            subscribers = list(self._subscribers)
        for callback in subscribers:
            try:
                callback(event)
            except Exception as exc:
                logger.warning("Dropping status event for booking %s: %s", event.booking_id, exc)
        logger.info("Published %s for booking %s to %d subscriber(s)",
                    event.status.value, event.booking_id, len(subscribers))


relay = BroadcastRelay()


def get_relay() -> BroadcastRelay:
    """FastAPI dependency — the process-wide relay, shared by publishers and the /ws feed."""
    return relay
