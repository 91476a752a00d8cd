"""In-process lock provider

Critical sections guarded here never await, so a threading lock is safe
both for asyncio tasks on one loop and for callbacks on other threads.
"""

from contextlib import contextmanager
from threading import Lock
from typing import Dict, Iterator
from src.app.services.lock_provider import LockProvider


class InMemoryLockProvider(LockProvider):
    def __init__(self) -> None:
        self._locks: Dict[str, Lock] = {}
        self._global_lock = Lock()

    @contextmanager
    def acquire(self, resource_id: str) -> Iterator[None]:
        with self._global_lock:
            lock = self._locks.get(resource_id)
            if lock is None:
                lock = self._locks[resource_id] = Lock()

        lock.acquire()
        try:
            yield
        finally:
            lock.release()
