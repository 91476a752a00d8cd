from .base import BaseModel, generate_uuid
from .amount import parse_amount
from .ledger_entry import LedgerEntry
from .balance_change import BalanceChange, ChangeType
from .pending_wait import PendingWait
from .errors import ErrorCode

__all__ = [
    "BaseModel",
    "generate_uuid",
    "parse_amount",
    "LedgerEntry",
    "BalanceChange",
    "ChangeType",
    "PendingWait",
    "ErrorCode",
]
