from .ledger_entry_repository import LedgerEntryRepository

__all__ = [
    "LedgerEntryRepository",
]
