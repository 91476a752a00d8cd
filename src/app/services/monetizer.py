"""Monetizer

Bundles the ledger, wait registry and payment receiver of one application
and wires payment notifications into ledger credits.
"""

from dataclasses import dataclass, field
from typing import Optional
from src.app.services.balance_ledger import BalanceLedger
from src.app.services.payment_receiver import PaymentReceiver
from src.app.services.wait_registry import WaitRegistry
from src.app.use_cases.monetization.handle_payment_notification import HandlePaymentNotification


@dataclass
class MonetizerOptions:
    identity_token_name: str = "__monetizer"
    identity_token_options: dict = field(default_factory=dict)
    receiver_endpoint_pattern: str = "/__monetizer/{payer_id}"
    balance_endpoint: str = "/__monetizer/balance"
    await_balance_timeout_seconds: Optional[float] = None
    disconnect_poll_interval_seconds: float = 1.0


class Monetizer:
    def __init__(
        self,
        ledger: BalanceLedger,
        registry: WaitRegistry,
        receiver: PaymentReceiver,
        options: Optional[MonetizerOptions] = None,
    ):
        self.ledger = ledger
        self.registry = registry
        self.receiver = receiver
        self.options = options or MonetizerOptions()
        self.payment_handler = HandlePaymentNotification(ledger)

        ledger.subscribe(registry.publish)
        receiver.set_payment_handler(self.payment_handler.execute)
