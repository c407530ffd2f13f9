from __future__ import annotations

import threading


class TableLockRegistry:
    """
    Provides a stable lock per table name so writers to different tables never contend.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.RLock] = {}

    def lock_for(self, table: str) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(table)
            if lock is None:
                lock = threading.RLock()
                self._locks[table] = lock
            return lock
