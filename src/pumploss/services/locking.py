"""Per-key lock arena serializing ledger writers."""

import threading
from contextlib import contextmanager
from typing import Hashable, Iterator


class KeyedLockArena:
    """
    Hands out one mutex per key.

    Holders of the same key run strictly one at a time; distinct keys
    never block each other. Handles are dropped once no thread holds or
    waits on them, so the arena only grows with in-flight keys.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[Hashable, threading.Lock] = {}
        self._users: dict[Hashable, int] = {}

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            self._users[key] = self._users.get(key, 0) + 1

        lock.acquire()
        try:
            yield
        finally:
            lock.release()
            with self._guard:
                self._users[key] -= 1
                if self._users[key] == 0:
                    del self._users[key]
                    del self._locks[key]

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)
