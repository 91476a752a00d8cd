from .lock_provider import LockProvider
from .balance_ledger import BalanceLedger
from .wait_registry import WaitRegistry
from .payment_receiver import (
    PaymentReceiver,
    PaymentReceiverError,
    ReceiverNotConnectedError,
    IncomingChunk,
)

__all__ = [
    "LockProvider",
    "BalanceLedger",
    "WaitRegistry",
    "PaymentReceiver",
    "PaymentReceiverError",
    "ReceiverNotConnectedError",
    "IncomingChunk",
]
