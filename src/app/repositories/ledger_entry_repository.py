"""Ledger Entry Repository Interface

Defines the contract for ledger entry storage.
"""

from abc import ABC, abstractmethod
from typing import Iterator, Optional
from src.domain.ledger_entry import LedgerEntry


class LedgerEntryRepository(ABC):
    """
    Repository interface for LedgerEntry storage

    Implementations never block: reads are snapshots and writes are
    expected to run inside the caller's per-payer critical section.
    """

    @abstractmethod
    def get(self, payer_id: str) -> Optional[LedgerEntry]:
        """
        Retrieve the entry for a payer

        Args:
            payer_id: Payer identifier

        Returns:
            LedgerEntry if the payer was ever credited, None otherwise
        """
        pass

    @abstractmethod
    def save(self, entry: LedgerEntry) -> LedgerEntry:
        """
        Store an entry, replacing any previous entry for the same payer

        Args:
            entry: LedgerEntry to store

        Returns:
            The stored entry
        """
        pass

    @abstractmethod
    def __iter__(self) -> Iterator[LedgerEntry]:
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass
