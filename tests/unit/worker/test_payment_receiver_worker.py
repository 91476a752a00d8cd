"""Unit tests for PaymentReceiverWorker

Tests cover:
- Worker initialization with configuration
- run_once connection outcome
- run_forever retry loop
- Shutdown
"""

import pytest
from unittest.mock import AsyncMock, patch

from src.worker.payment_receiver import PaymentReceiverWorker


class TestPaymentReceiverWorkerInit:
    @patch("src.worker.payment_receiver.ApplicationConfig")
    def test_uses_configured_retry_interval(self, mock_app_config, mock_receiver):
        mock_app_config.PAYMENT_RECEIVER_RETRY_SECONDS = 17

        worker = PaymentReceiverWorker(mock_receiver)

        assert worker.retry_seconds == 17

    def test_explicit_retry_interval_wins(self, mock_receiver):
        worker = PaymentReceiverWorker(mock_receiver, retry_seconds=0)

        assert worker.retry_seconds == 0


@pytest.mark.asyncio
class TestPaymentReceiverWorkerRunOnce:
    async def test_run_once_connects(self, mock_receiver):
        """
        Given: A disconnected receiver
        When: run_once is called
        Then: connect() is awaited and True returned
        """
        # Arrange
        async def connect():
            mock_receiver.connected = True

        mock_receiver.connect = AsyncMock(side_effect=connect)
        worker = PaymentReceiverWorker(mock_receiver, retry_seconds=0)

        # Act
        connected = await worker.run_once()

        # Assert
        assert connected is True
        mock_receiver.connect.assert_awaited_once()

    async def test_run_once_skips_when_connected(self, mock_receiver):
        mock_receiver.connected = True
        worker = PaymentReceiverWorker(mock_receiver, retry_seconds=0)

        assert await worker.run_once() is True
        mock_receiver.connect.assert_not_called()

    async def test_run_once_reports_failure(self, mock_receiver):
        mock_receiver.connect = AsyncMock(side_effect=ConnectionError("no route"))
        worker = PaymentReceiverWorker(mock_receiver, retry_seconds=0)

        assert await worker.run_once() is False


@pytest.mark.asyncio
class TestPaymentReceiverWorkerRunForever:
    async def test_retries_until_connected(self, mock_receiver):
        """
        Given: connect() fails twice then succeeds
        When: run_forever runs
        Then: It returns after the third attempt
        """
        # Arrange
        attempts = []

        async def connect():
            attempts.append(1)
            if len(attempts) < 3:
                raise ConnectionError("not yet")
            mock_receiver.connected = True

        mock_receiver.connect = AsyncMock(side_effect=connect)
        worker = PaymentReceiverWorker(mock_receiver, retry_seconds=0)

        # Act
        await worker.run_forever()

        # Assert
        assert len(attempts) == 3
        assert mock_receiver.connected is True


@pytest.mark.asyncio
class TestPaymentReceiverWorkerShutdown:
    async def test_shutdown_disconnects(self, mock_receiver):
        worker = PaymentReceiverWorker(mock_receiver, retry_seconds=0)

        await worker.shutdown()

        mock_receiver.disconnect.assert_awaited_once()

    async def test_shutdown_swallows_disconnect_errors(self, mock_receiver):
        mock_receiver.disconnect = AsyncMock(side_effect=RuntimeError("already closed"))
        worker = PaymentReceiverWorker(mock_receiver, retry_seconds=0)

        await worker.shutdown()
