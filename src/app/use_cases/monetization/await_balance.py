"""AwaitBalance Use Case

Suspends the calling task until a payer's balance reaches a threshold.
"""

import asyncio
import logging
from libs.result import Result, Return, Error
from src.app.services.wait_registry import WaitRegistry
from src.domain.errors import ErrorCode
from .dtos import AwaitBalanceCommandDTO, BalanceResponseDTO

logger = logging.getLogger(__name__)


class AwaitBalance:
    """
    Use Case: Wait for enough funds

    Business Rules:
    1. Completes immediately if the balance already meets the threshold
    2. Otherwise completes on the first credit that lifts the balance to
       the threshold
    3. Timeout returns BALANCE_WAIT_TIMEOUT; the pending wait is removed
    4. Cancellation of the calling task propagates after the pending wait
       is removed
    """

    def __init__(self, registry: WaitRegistry):
        self.registry = registry

    async def execute(self, command: AwaitBalanceCommandDTO) -> Result[BalanceResponseDTO]:
        try:
            balance = await self.registry.await_balance(
                command.payer_id, command.threshold, timeout=command.timeout_seconds
            )
        except asyncio.TimeoutError:
            logger.info(
                f"Timed out waiting for {command.payer_id} to reach {command.threshold} "
                f"after {command.timeout_seconds}s"
            )
            return Return.err(
                Error(
                    code=ErrorCode.BALANCE_WAIT_TIMEOUT,
                    message=f"Balance did not reach {command.threshold} in time",
                    reason=f"timeout={command.timeout_seconds}s",
                    details={"payer_id": command.payer_id, "threshold": command.threshold},
                )
            )

        return Return.ok(BalanceResponseDTO(payer_id=command.payer_id, balance=balance))
