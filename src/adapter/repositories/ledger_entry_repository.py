"""In-memory implementation of LedgerEntryRepository

Balances live for the lifetime of the process.
"""

from typing import Dict, Iterator, Optional
from src.app.repositories.ledger_entry_repository import LedgerEntryRepository
from src.domain.ledger_entry import LedgerEntry


class InMemoryLedgerEntryRepository(LedgerEntryRepository):
    def __init__(self):
        self._entries: Dict[str, LedgerEntry] = {}

    def get(self, payer_id: str) -> Optional[LedgerEntry]:
        return self._entries.get(payer_id)

    def save(self, entry: LedgerEntry) -> LedgerEntry:
        self._entries[entry.payer_id] = entry
        return entry

    def __iter__(self) -> Iterator[LedgerEntry]:
        return iter(list(self._entries.values()))

    def __len__(self) -> int:
        return len(self._entries)
