from .lock_provider import InMemoryLockProvider
from .payment_receiver import LocalPaymentReceiver

__all__ = [
    "InMemoryLockProvider",
    "LocalPaymentReceiver",
]
