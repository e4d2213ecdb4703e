"""Integer id generation for menu items and orders."""

import threading
import time
from collections.abc import Iterable


class IdGenerator:
    """Generates unique, increasing integer ids derived from the clock.

    Ids are millisecond timestamps bumped past the last issued id and past any
    id already present in the target collection, so two creations in the same
    millisecond still get distinct ids.
    """

    def __init__(self) -> None:
        self._last_id = 0
        self._lock = threading.Lock()

    def next_id(self, existing_ids: Iterable[int] = ()) -> int:
        """Return a new id greater than every id issued or passed in.

        Args:
            existing_ids: Ids already stored in the collection

        Returns:
            int: A fresh id
        """
        floor = max(existing_ids, default=0)
        with self._lock:
            candidate = max(self._now_millis(), self._last_id + 1, floor + 1)
            self._last_id = candidate
            return candidate

    @staticmethod
    def _now_millis() -> int:
        return time.time_ns() // 1_000_000
