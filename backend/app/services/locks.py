"""Per-key mutual exclusion for in-process writers."""
import threading
from contextlib import contextmanager
from typing import Hashable, Iterator


class KeyedLock:
    """Hands out one lock per key; entries are dropped once nobody holds or waits on them."""

    def __init__(self):
        self._guard = threading.Lock()
        self._entries: dict[Hashable, list] = {}  # key -> [lock, refcount]

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        with self._guard:
            entry = self._entries.setdefault(key, [threading.Lock(), 0])
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._entries[key]

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)


# Shared by every request in this process.
booking_locks = KeyedLock()
venue_locks = KeyedLock()
