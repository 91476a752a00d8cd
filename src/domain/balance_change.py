"""Balance Change Domain Entity

Snapshot of a single credit or debit applied to a ledger entry. Credit
changes double as the balance-changed event delivered to waiters.
"""

from datetime import datetime
from enum import Enum
from pydantic import Field
from src.domain.base import BaseModel


class ChangeType(str, Enum):
    """Balance change types"""
    CREDIT = "credit"   # Payment received
    DEBIT = "debit"     # Gated resource delivered


class BalanceChange(BaseModel):
    """
    Balance Change - result of one ledger mutation

    amount is what the caller asked for; balance_after - balance_before is
    what was applied (credits may be truncated by the ceiling).
    """

    payer_id: str
    change_type: ChangeType
    amount: int = Field(..., ge=0)
    balance_before: int = Field(..., ge=0)
    balance_after: int = Field(..., ge=0)
    occurred_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def applied_amount(self) -> int:
        return abs(self.balance_after - self.balance_before)
