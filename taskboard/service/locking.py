"""Per-task lock registry.

Serializes read-modify-write cycles on the same task id within one process.
Acquisition is bounded by a timeout so no request waits indefinitely.
"""

import threading
from contextlib import contextmanager
from typing import Dict, List


class LockTimeout(Exception):
    """Lock acquisition timed out."""
    pass


class RecordLocks:
    """Lock per record id, kept only while some request holds or awaits it."""

    def __init__(self):
        self._guard = threading.Lock()
        # record id -> [lock, number of holders and waiters]
        self._locks: Dict[int, List] = {}

    def _checkout(self, record_id: int) -> threading.Lock:
        with self._guard:
            entry = self._locks.get(record_id)
            if entry is None:
                entry = self._locks[record_id] = [threading.Lock(), 0]
            entry[1] += 1
            return entry[0]

    def _checkin(self, record_id: int) -> None:
        with self._guard:
            entry = self._locks[record_id]
            entry[1] -= 1
            if entry[1] == 0:
                del self._locks[record_id]

    @contextmanager
    def hold(self, record_id: int, timeout: float):
        """Hold the lock for `record_id`.

        Raises:
            LockTimeout: If the lock is not acquired within `timeout` seconds
        """
        lock = self._checkout(record_id)
        try:
            if not lock.acquire(timeout=timeout):
                raise LockTimeout(f"record {record_id} is locked by another update")
            try:
                yield
            finally:
                lock.release()
        finally:
            self._checkin(record_id)

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)


# Process-wide registry shared by every request.
task_locks = RecordLocks()
