"""Unit tests for request-bound monetization dependencies"""

import asyncio
import pytest
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

from src.api.dependencies import get_payer_id, wait_unless_disconnected
from src.api.error import ClientError
from src.domain.errors import ErrorCode


class TestGetPayerId:
    def test_returns_payer_id_from_state(self):
        request = MagicMock()
        request.state = SimpleNamespace(payer_id="payer1")

        assert get_payer_id(request) == "payer1"

    def test_missing_identity_raises(self):
        request = MagicMock()
        request.state = SimpleNamespace()

        with pytest.raises(ClientError) as exc_info:
            get_payer_id(request)

        assert exc_info.value.error.code == ErrorCode.MISSING_IDENTITY
        assert exc_info.value.status_code == 400


@pytest.mark.asyncio
class TestWaitUnlessDisconnected:
    async def test_returns_result_when_wait_finishes_first(self, ledger, registry):
        # Arrange
        request = MagicMock()
        request.is_disconnected = AsyncMock(return_value=False)
        ledger.credit("payer1", 10)

        # Act
        result = await wait_unless_disconnected(
            request, registry.await_balance("payer1", 10), poll_interval=10
        )

        # Assert
        assert result == 10

    async def test_disconnect_cancels_wait_and_deregisters(self, registry):
        """
        Given: A client that has gone away
        When: A balance wait is pending
        Then: None is returned and the pending wait is removed
        """
        # Arrange
        request = MagicMock()
        request.is_disconnected = AsyncMock(return_value=True)

        # Act
        result = await asyncio.wait_for(
            wait_unless_disconnected(
                request, registry.await_balance("payer1", 100), poll_interval=0.01
            ),
            1,
        )

        # Assert
        assert result is None
        assert registry.pending_count() == 0
        request.is_disconnected.assert_awaited()
