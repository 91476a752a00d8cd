"""Pending Wait Domain Entity"""

import asyncio
from datetime import datetime
from pydantic import ConfigDict, Field
from src.domain.base import BaseModel, generate_uuid


class PendingWait(BaseModel):
    """
    Pending Wait - a suspended request for a payer's balance to reach a threshold

    Each wait has its own identity even when payer_id and threshold match
    another wait. The completion future resolves with the balance that
    satisfied the threshold.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    id: str = Field(default_factory=generate_uuid)
    payer_id: str
    threshold: int = Field(..., ge=0)
    completion: asyncio.Future = Field(..., exclude=True, repr=False)
    created_at: datetime = Field(default_factory=datetime.utcnow)

    def is_satisfied_by(self, balance: int) -> bool:
        return balance >= self.threshold
