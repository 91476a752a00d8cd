"""Lock Provider Interface"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator


class LockProvider(ABC):
    """Serializes critical sections per resource (one resource per payer)"""

    @abstractmethod
    @contextmanager
    def acquire(self, resource_id: str) -> Iterator[None]:
        """Hold the lock for resource_id for the duration of the block"""
