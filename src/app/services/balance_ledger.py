"""Balance Ledger

Single owner of per-payer balances. Credits are capped, debits are
check-and-subtract under the payer's lock, and every credit is published
to subscribers (the wait registry) while the lock is still held so that
subscribers observe credits in the order they were applied.
"""

import logging
from datetime import datetime
from typing import Any, Callable, List, Optional
from libs.result import Result, Return
from src.app.repositories.ledger_entry_repository import LedgerEntryRepository
from src.app.services.lock_provider import LockProvider
from src.domain.amount import parse_amount
from src.domain.balance_change import BalanceChange, ChangeType
from src.domain.errors import insufficient_balance, invalid_amount
from src.domain.ledger_entry import LedgerEntry

logger = logging.getLogger(__name__)

BalanceListener = Callable[[BalanceChange], None]


class BalanceLedger:
    """
    Per-payer balance ledger

    Usage:
        ledger = BalanceLedger(InMemoryLedgerEntryRepository(), InMemoryLockProvider())
        ledger.subscribe(registry.publish)
        ledger.credit("payer", 100)
        result = ledger.debit("payer", 60)
    """

    def __init__(
        self,
        repository: LedgerEntryRepository,
        lock_provider: LockProvider,
        max_balance: Optional[int] = None,
    ):
        if max_balance is not None and max_balance < 0:
            raise ValueError("max_balance must be non-negative")
        self.repository = repository
        self.lock_provider = lock_provider
        self.max_balance = max_balance
        self._listeners: List[BalanceListener] = []

    def subscribe(self, listener: BalanceListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: BalanceListener) -> None:
        self._listeners.remove(listener)

    def balance_of(self, payer_id: str) -> int:
        entry = self.repository.get(payer_id)
        return entry.balance if entry else 0

    def credit(self, payer_id: str, amount: Any) -> Result[BalanceChange]:
        """
        Add funds to a payer's balance, truncated at max_balance

        Args:
            payer_id: Payer identifier
            amount: Non-negative integer or numeric string

        Returns:
            Result[BalanceChange]: applied change, or INVALID_AMOUNT error
        """
        value = parse_amount(amount)
        if value is None:
            logger.warning(f"Rejected credit for {payer_id}: invalid amount {amount!r}")
            return Return.err(invalid_amount(payer_id, amount))

        with self.lock_provider.acquire(payer_id):
            entry = self.repository.get(payer_id)
            if entry is None:
                entry = self.repository.save(
                    LedgerEntry(payer_id=payer_id, max_balance=self.max_balance)
                )

            balance_before = entry.balance
            balance_after = entry.capped(balance_before + value)
            entry.balance = balance_after
            entry.updated_at = datetime.utcnow()

            change = BalanceChange(
                payer_id=payer_id,
                change_type=ChangeType.CREDIT,
                amount=value,
                balance_before=balance_before,
                balance_after=balance_after,
            )

            if balance_after < balance_before + value:
                logger.info(
                    f"Credit for {payer_id} truncated at max_balance={entry.max_balance}: "
                    f"requested={value}, applied={change.applied_amount}"
                )
            logger.debug(f"Credited {payer_id}: amount={value}, balance={balance_after}")

            self._publish(change)

        return Return.ok(change)

    def debit(self, payer_id: str, price: Any) -> Result[BalanceChange]:
        """
        Atomically subtract price if the balance covers it

        A payer that was never credited has a balance of zero.

        Returns:
            Result[BalanceChange]: applied change, INSUFFICIENT_BALANCE or
            INVALID_AMOUNT error. The balance is untouched on error.
        """
        value = parse_amount(price)
        if value is None:
            logger.warning(f"Rejected debit for {payer_id}: invalid price {price!r}")
            return Return.err(invalid_amount(payer_id, price))

        with self.lock_provider.acquire(payer_id):
            entry = self.repository.get(payer_id)
            balance_before = entry.balance if entry else 0

            if balance_before < value:
                logger.info(
                    f"Insufficient balance for {payer_id}: price={value}, balance={balance_before}"
                )
                return Return.err(insufficient_balance(payer_id, value, balance_before))

            balance_after = balance_before - value
            if entry is not None:
                entry.balance = balance_after
                entry.updated_at = datetime.utcnow()

        logger.debug(f"Debited {payer_id}: price={value}, balance={balance_after}")
        return Return.ok(
            BalanceChange(
                payer_id=payer_id,
                change_type=ChangeType.DEBIT,
                amount=value,
                balance_before=balance_before,
                balance_after=balance_after,
            )
        )

    def _publish(self, change: BalanceChange) -> None:
        for listener in list(self._listeners):
            try:
                listener(change)
            except Exception:
                logger.exception(f"Balance listener failed for {change.payer_id}")
