"""Background workers for the monetization service"""
from .payment_receiver import PaymentReceiverWorker

__all__ = ["PaymentReceiverWorker"]
