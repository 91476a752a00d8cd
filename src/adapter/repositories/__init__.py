from .ledger_entry_repository import InMemoryLedgerEntryRepository

__all__ = [
    "InMemoryLedgerEntryRepository",
]
