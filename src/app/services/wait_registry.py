"""Wait Registry

Lets callers suspend until a payer's balance reaches a threshold. Fed by
the balance ledger: every credit is published here and each pending wait
for that payer is re-evaluated independently.
"""

import asyncio
import logging
from threading import Lock
from typing import Callable, Dict, List, Optional
from src.domain.balance_change import BalanceChange
from src.domain.pending_wait import PendingWait

logger = logging.getLogger(__name__)


class WaitRegistry:
    """
    Registry of pending balance waits keyed by payer id

    Usage:
        registry = WaitRegistry(ledger.balance_of)
        ledger.subscribe(registry.publish)
        balance = await registry.await_balance("payer", 100, timeout=30)
    """

    def __init__(self, balance_reader: Callable[[str], int]):
        self.balance_reader = balance_reader
        self._waits: Dict[str, Dict[str, PendingWait]] = {}
        self._lock = Lock()

    async def await_balance(
        self, payer_id: str, threshold: int, timeout: Optional[float] = None
    ) -> int:
        """
        Wait until the payer's balance is at least threshold

        Completes immediately when the balance already covers the threshold.
        On timeout (asyncio.TimeoutError) or cancellation the wait is
        deregistered before the exception propagates.

        Returns:
            The balance that satisfied the threshold
        """
        balance = self.balance_reader(payer_id)
        if balance >= threshold:
            logger.debug(f"Balance already sufficient for {payer_id}: {balance} >= {threshold}")
            return balance

        wait = self.register(payer_id, threshold)

        # A credit may have landed between the check above and registration.
        balance = self.balance_reader(payer_id)
        if balance >= threshold and self.cancel(wait):
            return balance

        try:
            if timeout is None:
                return await wait.completion
            return await asyncio.wait_for(wait.completion, timeout)
        finally:
            if self.cancel(wait):
                logger.info(
                    f"Abandoned wait {wait.id} for {payer_id} (threshold={threshold})"
                )

    def register(self, payer_id: str, threshold: int) -> PendingWait:
        """Create a pending wait bound to the running event loop"""
        loop = asyncio.get_running_loop()
        wait = PendingWait(
            payer_id=payer_id, threshold=threshold, completion=loop.create_future()
        )
        with self._lock:
            self._waits.setdefault(payer_id, {})[wait.id] = wait
        logger.debug(f"Registered wait {wait.id} for {payer_id} (threshold={threshold})")
        return wait

    def cancel(self, wait: PendingWait) -> bool:
        """
        Remove a wait that has not been satisfied yet

        Returns:
            True if this call removed the wait, False if it was already
            satisfied or cancelled
        """
        with self._lock:
            removed = self._remove(wait)
        if removed and not wait.completion.done():
            wait.completion.cancel()
        return removed

    def publish(self, change: BalanceChange) -> None:
        """Resolve every wait for change.payer_id that the new balance satisfies"""
        with self._lock:
            waits = self._waits.get(change.payer_id)
            if not waits:
                return
            satisfied = [
                wait for wait in waits.values() if wait.is_satisfied_by(change.balance_after)
            ]
            for wait in satisfied:
                self._remove(wait)

        for wait in satisfied:
            logger.debug(
                f"Wait {wait.id} for {wait.payer_id} satisfied: "
                f"{change.balance_after} >= {wait.threshold}"
            )
            try:
                wait.completion.get_loop().call_soon_threadsafe(
                    _resolve, wait.completion, change.balance_after
                )
            except RuntimeError as e:
                # loop already closed; nobody is left to wake
                logger.warning(f"Could not resolve wait {wait.id} for {wait.payer_id}: {e}")

    def pending(self, payer_id: str) -> List[PendingWait]:
        with self._lock:
            return list(self._waits.get(payer_id, {}).values())

    def pending_count(self, payer_id: Optional[str] = None) -> int:
        with self._lock:
            if payer_id is not None:
                return len(self._waits.get(payer_id, {}))
            return sum(len(waits) for waits in self._waits.values())

    def _remove(self, wait: PendingWait) -> bool:
        waits = self._waits.get(wait.payer_id)
        if not waits or waits.pop(wait.id, None) is None:
            return False
        if not waits:
            del self._waits[wait.payer_id]
        return True


def _resolve(future: asyncio.Future, balance: int) -> None:
    if not future.done():
        future.set_result(balance)
