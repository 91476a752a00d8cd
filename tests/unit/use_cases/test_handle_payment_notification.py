"""Unit tests for HandlePaymentNotification use case

Tests cover:
- Credit then accept for well-formed chunks
- Malformed destinations and invalid amounts are rejected
- Acknowledgement failures after crediting
- Transport failures while rejecting
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.monetization.handle_payment_notification import HandlePaymentNotification
from src.domain.errors import ErrorCode


@pytest.fixture
def use_case(ledger):
    return HandlePaymentNotification(ledger)


@pytest.mark.asyncio
class TestHandlePaymentNotification:
    async def test_credits_payer_then_accepts(self, use_case, ledger, make_chunk):
        """
        Given: A chunk addressed to an embedded payer id
        When: The handler runs
        Then: The payer is credited before the chunk is accepted
        """
        # Arrange
        chunk = make_chunk("test.monetizer.payer1.conn.nonce", "100")
        balance_at_accept = []
        chunk.accept = AsyncMock(
            side_effect=lambda: balance_at_accept.append(ledger.balance_of("payer1"))
        )

        # Act
        result = await use_case.execute(chunk)

        # Assert
        assert result.is_ok()
        assert result.value.balance_after == 100
        assert balance_at_accept == [100]
        chunk.reject.assert_not_called()

    async def test_malformed_destination_is_rejected(self, use_case, ledger, make_chunk):
        # Arrange
        chunk = make_chunk("conn.nonce", "100")
        listener = MagicMock()
        ledger.subscribe(listener)

        # Act
        result = await use_case.execute(chunk)

        # Assert
        assert result.is_err()
        assert result.error.code == ErrorCode.MALFORMED_NOTIFICATION
        chunk.reject.assert_awaited_once_with(ErrorCode.MALFORMED_NOTIFICATION)
        chunk.accept.assert_not_called()
        listener.assert_not_called()

    async def test_invalid_amount_is_rejected(self, use_case, ledger, make_chunk):
        chunk = make_chunk("test.monetizer.payer1.conn.nonce", "-5")

        result = await use_case.execute(chunk)

        assert result.is_err()
        assert result.error.code == ErrorCode.INVALID_AMOUNT
        chunk.reject.assert_awaited_once_with(ErrorCode.INVALID_AMOUNT)
        chunk.accept.assert_not_called()
        assert ledger.balance_of("payer1") == 0

    async def test_acknowledge_failure_keeps_credit(self, use_case, ledger, make_chunk):
        """
        Given: A transport whose accept() raises
        When: The handler runs
        Then: The credit stands and ACKNOWLEDGE_FAILED is returned
        """
        chunk = make_chunk("test.monetizer.payer1.conn.nonce", 40)
        chunk.accept = AsyncMock(side_effect=ConnectionError("link down"))

        result = await use_case.execute(chunk)

        assert result.is_err()
        assert result.error.code == ErrorCode.ACKNOWLEDGE_FAILED
        assert ledger.balance_of("payer1") == 40

    @pytest.mark.parametrize(
        "destination, amount, code",
        [
            ("conn.nonce", "100", ErrorCode.MALFORMED_NOTIFICATION),
            ("test.monetizer.payer1.conn.nonce", "1e3", ErrorCode.INVALID_AMOUNT),
        ],
    )
    async def test_reject_failure_still_returns_rejection_error(
        self, use_case, ledger, make_chunk, destination, amount, code
    ):
        """
        Given: A transport whose reject() raises
        When: A chunk that must be rejected is handled
        Then: The rejection error is returned and the ledger is untouched
        """
        # Arrange
        chunk = make_chunk(destination, amount)
        chunk.reject = AsyncMock(side_effect=ConnectionError("link down"))

        # Act
        result = await use_case.execute(chunk)

        # Assert
        assert result.is_err()
        assert result.error.code == code
        chunk.reject.assert_awaited_once_with(code)
        chunk.accept.assert_not_called()
        assert ledger.balance_of("payer1") == 0

    async def test_duplicate_delivery_credits_twice(self, use_case, ledger, make_chunk):
        """Deduplication is the transport's job"""
        for _ in range(2):
            await use_case.execute(make_chunk("test.monetizer.payer1.conn.nonce", 10))

        assert ledger.balance_of("payer1") == 20
