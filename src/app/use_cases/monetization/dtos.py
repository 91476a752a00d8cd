"""Data Transfer Objects for Monetization Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class SpendCommandDTO(BaseModel):
    """
    Command DTO for spending a payer's balance

    Used as input to SpendBalance use case.
    """

    payer_id: str = Field(
        ...,
        min_length=1,
        description="Payer identifier"
    )

    price: int = Field(
        ...,
        ge=0,
        description="Amount to debit in base units"
    )


class AwaitBalanceCommandDTO(BaseModel):
    """
    Command DTO for waiting on a payer's balance

    Used as input to AwaitBalance use case.
    """

    payer_id: str = Field(
        ...,
        min_length=1,
        description="Payer identifier"
    )

    threshold: int = Field(
        ...,
        ge=0,
        description="Balance required before the wait completes"
    )

    timeout_seconds: Optional[float] = Field(
        default=None,
        gt=0,
        description="Give up after this many seconds (None = wait indefinitely)"
    )


class BalanceChangeResponseDTO(BaseModel):
    """Response DTO for an applied credit or debit"""

    payer_id: str
    change_type: str
    amount: int
    balance_before: int
    balance_after: int
    occurred_at: datetime

    class Config:
        json_schema_extra = {
            "example": {
                "payer_id": "9f86d081884c7d659a2feaa0c55ad015",
                "change_type": "debit",
                "amount": 100,
                "balance_before": 250,
                "balance_after": 150,
                "occurred_at": "2024-01-01T00:00:00Z"
            }
        }


class BalanceResponseDTO(BaseModel):
    """Response DTO for a payer's current balance"""

    payer_id: str
    balance: int

    class Config:
        json_schema_extra = {
            "example": {
                "payer_id": "9f86d081884c7d659a2feaa0c55ad015",
                "balance": 150
            }
        }


class PaymentDestinationDTO(BaseModel):
    """
    SPSP response body

    Field names follow the SPSP wire format.
    """

    destination_account: str
    shared_secret: str = Field(..., description="Base64-encoded shared secret")

    class Config:
        json_schema_extra = {
            "example": {
                "destination_account": "private.monetizer.9f86d081.1a2b3c4d.5e6f7a8b",
                "shared_secret": "Zm9vYmFyYmF6cXV4Zm9vYmFyYmF6cXV4Zm9vYmFyYmE="
            }
        }
