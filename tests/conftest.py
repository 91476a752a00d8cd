import pytest
from unittest.mock import AsyncMock, MagicMock

from config import ApplicationConfig
from src.adapter.repositories.ledger_entry_repository import InMemoryLedgerEntryRepository
from src.adapter.services.lock_provider import InMemoryLockProvider
from src.app.services.balance_ledger import BalanceLedger
from src.app.services.payment_receiver import IncomingChunk
from src.app.services.wait_registry import WaitRegistry


class TestConfig(ApplicationConfig):
    __test__ = False

    LOG_LEVEL = "WARNING"
    ENABLE_LOGGING_MIDDLEWARE = False
    ENABLE_SENTRY = 0
    MAX_BALANCE = None
    PAYMENT_RECEIVER_ADDRESS = "test.monetizer"
    PAYMENT_RECEIVER_AUTOCONNECT = False
    AWAIT_BALANCE_TIMEOUT_SECONDS = None
    DISCONNECT_POLL_INTERVAL_SECONDS = 5.0


@pytest.fixture
def test_config():
    return TestConfig


@pytest.fixture
def ledger():
    """Unbounded ledger"""
    return BalanceLedger(InMemoryLedgerEntryRepository(), InMemoryLockProvider())


@pytest.fixture
def registry(ledger):
    """Wait registry subscribed to the ledger"""
    registry = WaitRegistry(ledger.balance_of)
    ledger.subscribe(registry.publish)
    return registry


@pytest.fixture
def make_chunk():
    """Build an IncomingChunk with mocked accept/reject"""

    def _make(destination: str, amount):
        return IncomingChunk(
            destination=destination,
            amount=amount,
            accept=AsyncMock(),
            reject=AsyncMock(),
        )

    return _make


@pytest.fixture
def mock_receiver():
    receiver = MagicMock()
    receiver.connected = False
    receiver.connect = AsyncMock()
    receiver.disconnect = AsyncMock()
    return receiver
