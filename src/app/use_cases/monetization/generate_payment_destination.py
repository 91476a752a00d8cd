"""GeneratePaymentDestination Use Case

Produces the SPSP details a payer's wallet uses to stream payments.
"""

import base64
import logging
from libs.result import Result, Return, Error
from src.app.services.payment_receiver import PaymentReceiver
from src.domain.errors import ErrorCode
from src.domain.payment_address import embed_payer_id, is_valid_payer_id
from .dtos import PaymentDestinationDTO

logger = logging.getLogger(__name__)


class GeneratePaymentDestination:
    """
    Use Case: Issue a destination address that carries the payer id

    Flow:
    1. Validate payer id (must be usable as an address segment)
    2. Connect the receiver if needed
    3. Generate address and shared secret
    4. Embed payer id before the last two address segments

    Errors:
        INVALID_PAYER_ID: payer id can't be embedded in an address
        PAYMENT_RECEIVER_UNAVAILABLE: transport connection failed
    """

    def __init__(self, receiver: PaymentReceiver):
        self.receiver = receiver

    async def execute(self, payer_id: str) -> Result[PaymentDestinationDTO]:
        if not is_valid_payer_id(payer_id):
            return Return.err(
                Error(
                    code=ErrorCode.INVALID_PAYER_ID,
                    message="Payer id must match [A-Za-z0-9_~-]+",
                    details={"payer_id": payer_id},
                )
            )

        try:
            await self.receiver.connect()
            destination_account, shared_secret = self.receiver.generate_address_and_secret()
        except Exception as e:
            logger.error(f"Payment receiver unavailable: {e}")
            return Return.err(
                Error(
                    code=ErrorCode.PAYMENT_RECEIVER_UNAVAILABLE,
                    message="Payment receiver is unavailable",
                    reason=str(e),
                )
            )

        return Return.ok(
            PaymentDestinationDTO(
                destination_account=embed_payer_id(destination_account, payer_id),
                shared_secret=base64.b64encode(shared_secret).decode("ascii"),
            )
        )
