"""Scenario tests across BalanceLedger and WaitRegistry"""

import asyncio
import pytest

from src.domain.errors import ErrorCode


@pytest.mark.asyncio
class TestPayThenSpend:
    async def test_credit_wait_debit_sequence(self, ledger, registry):
        """
        Given: u1 credited 100
        When: await 100, debit 100, then debit 1
        Then: Wait resolves at once, first debit succeeds, balance 0,
              second debit fails with INSUFFICIENT_BALANCE
        """
        # Arrange
        ledger.credit("u1", 100)

        # Act & Assert
        assert await asyncio.wait_for(registry.await_balance("u1", 100), 1) == 100
        assert registry.pending_count() == 0

        assert ledger.debit("u1", 100).is_ok()
        assert ledger.balance_of("u1") == 0

        result = ledger.debit("u1", 1)
        assert result.is_err()
        assert result.error.code == ErrorCode.INSUFFICIENT_BALANCE
        assert result.error.details == {"payer_id": "u1", "price": 1, "balance": 0}

    async def test_two_waiters_race_for_one_payment(self, ledger, registry):
        """
        Given: Two requests waiting for 100 from the same payer
        When: A single payment of 100 arrives and both try to debit
        Then: Both waits complete but only one debit succeeds
        """
        # Arrange
        async def serve():
            await registry.await_balance("u1", 100)
            return ledger.debit("u1", 100)

        tasks = [asyncio.create_task(serve()) for _ in range(2)]
        await asyncio.sleep(0)

        # Act
        ledger.credit("u1", 100)
        results = await asyncio.wait_for(asyncio.gather(*tasks), 1)

        # Assert
        assert sorted(r.is_ok() for r in results) == [False, True]
        assert ledger.balance_of("u1") == 0
        assert registry.pending_count() == 0

    async def test_many_waiters_across_payers(self, ledger, registry):
        # Arrange
        tasks = {
            payer: asyncio.create_task(registry.await_balance(payer, 10))
            for payer in ("a", "b", "c")
        }
        await asyncio.sleep(0)

        # Act
        ledger.credit("b", 10)
        await asyncio.wait_for(tasks["b"], 1)

        # Assert
        assert not tasks["a"].done()
        assert not tasks["c"].done()
        assert registry.pending_count() == 2

        for payer in ("a", "c"):
            tasks[payer].cancel()
        await asyncio.gather(tasks["a"], tasks["c"], return_exceptions=True)
        assert registry.pending_count() == 0
