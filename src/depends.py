from fastapi import Request
from src.adapter.repositories.ledger_entry_repository import InMemoryLedgerEntryRepository
from src.adapter.services.lock_provider import InMemoryLockProvider
from src.adapter.services.payment_receiver import LocalPaymentReceiver
from src.app.services.balance_ledger import BalanceLedger
from src.app.services.monetizer import Monetizer, MonetizerOptions
from src.app.services.payment_receiver import PaymentReceiver
from src.app.services.wait_registry import WaitRegistry


def create_monetizer(config, receiver: PaymentReceiver = None) -> Monetizer:
    ledger = BalanceLedger(
        InMemoryLedgerEntryRepository(),
        InMemoryLockProvider(),
        max_balance=config.MAX_BALANCE,
    )
    registry = WaitRegistry(ledger.balance_of)
    options = MonetizerOptions(
        identity_token_name=config.IDENTITY_TOKEN_NAME,
        identity_token_options=dict(config.IDENTITY_TOKEN_OPTIONS or {}),
        receiver_endpoint_pattern=config.RECEIVER_ENDPOINT_PATTERN,
        balance_endpoint=config.BALANCE_ENDPOINT,
        await_balance_timeout_seconds=config.AWAIT_BALANCE_TIMEOUT_SECONDS,
        disconnect_poll_interval_seconds=config.DISCONNECT_POLL_INTERVAL_SECONDS,
    )
    return Monetizer(
        ledger,
        registry,
        receiver or LocalPaymentReceiver(config.PAYMENT_RECEIVER_ADDRESS),
        options,
    )


def get_monetizer(request: Request) -> Monetizer:
    return request.app.state.monetizer
