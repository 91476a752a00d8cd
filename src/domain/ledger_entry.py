"""Ledger Entry Domain Entity

Tracks the accumulated balance of a single payer.
"""

from datetime import datetime
from typing import Optional
from pydantic import Field, model_validator
from src.domain.base import BaseModel


class LedgerEntry(BaseModel):
    """
    Ledger Entry - balance funded by payments from one payer

    Domain Rules:
    - One entry per payer (payer_id is the key)
    - 0 <= balance <= max_balance at all times
    - Created lazily on first credit, never deleted
    - max_balance None means unbounded
    """

    payer_id: str = Field(
        ...,
        description="Opaque payer identifier"
    )

    balance: int = Field(
        default=0,
        ge=0,
        description="Current balance in base units"
    )

    max_balance: Optional[int] = Field(
        default=None,
        ge=0,
        description="Balance ceiling (None = unbounded)"
    )

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @model_validator(mode="after")
    def check_cap(self):
        if self.max_balance is not None and self.balance > self.max_balance:
            raise ValueError(
                f"balance {self.balance} exceeds max_balance {self.max_balance}"
            )
        return self

    def capped(self, balance: int) -> int:
        """Clamp a candidate balance to the entry's ceiling"""
        if self.max_balance is None:
            return balance
        return min(balance, self.max_balance)

    def covers(self, price: int) -> bool:
        return self.balance >= price
