"""HandlePaymentNotification Use Case

Turns an incoming payment chunk into a ledger credit. The credit is
applied before the chunk is acknowledged to the transport.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.balance_ledger import BalanceLedger
from src.app.services.payment_receiver import IncomingChunk
from src.domain.balance_change import BalanceChange
from src.domain.errors import ErrorCode, malformed_notification
from src.domain.payment_address import extract_payer_id

logger = logging.getLogger(__name__)


class HandlePaymentNotification:
    """
    Use Case: Credit a payer for an incoming payment chunk

    Flow:
    1. Extract payer id embedded in the chunk destination
    2. Credit the payer's balance
    3. Accept the chunk

    Chunks with no parsable payer id or an invalid amount are rejected so
    the sender keeps the money. Neither condition affects the ledger.
    """

    def __init__(self, ledger: BalanceLedger):
        self.ledger = ledger

    async def execute(self, chunk: IncomingChunk) -> Result[BalanceChange]:
        payer_id = extract_payer_id(chunk.destination)
        if payer_id is None:
            logger.warning(f"Dropping malformed payment notification: destination={chunk.destination}")
            await _reject(chunk, ErrorCode.MALFORMED_NOTIFICATION)
            return Return.err(malformed_notification(chunk.destination))

        result = self.ledger.credit(payer_id, chunk.amount)
        if result.is_err():
            await _reject(chunk, result.error.code)
            return result

        change = result.value
        logger.info(
            f"Got money for payer {payer_id}: amount={change.amount}, balance={change.balance_after}"
        )

        try:
            await chunk.accept()
        except Exception as e:
            logger.error(f"Failed to acknowledge chunk for {payer_id} after crediting: {e}")
            return Return.err(
                Error(
                    code=ErrorCode.ACKNOWLEDGE_FAILED,
                    message="Payment credited but the transport acknowledgement failed",
                    reason=str(e),
                    details={"payer_id": payer_id, "amount": change.amount},
                )
            )

        return Return.ok(change)


async def _reject(chunk: IncomingChunk, reason: str) -> None:
    try:
        await chunk.reject(reason)
    except Exception as e:
        logger.error(f"Failed to reject chunk to {chunk.destination} ({reason}): {e}")
