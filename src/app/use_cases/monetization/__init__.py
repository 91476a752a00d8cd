"""Monetization use cases"""
from .handle_payment_notification import HandlePaymentNotification
from .spend_balance import SpendBalance
from .get_balance import GetBalance
from .await_balance import AwaitBalance
from .generate_payment_destination import GeneratePaymentDestination
from .dtos import (
    SpendCommandDTO,
    AwaitBalanceCommandDTO,
    BalanceChangeResponseDTO,
    BalanceResponseDTO,
    PaymentDestinationDTO,
)

__all__ = [
    "HandlePaymentNotification",
    "SpendBalance",
    "GetBalance",
    "AwaitBalance",
    "GeneratePaymentDestination",
    "SpendCommandDTO",
    "AwaitBalanceCommandDTO",
    "BalanceChangeResponseDTO",
    "BalanceResponseDTO",
    "PaymentDestinationDTO",
]
