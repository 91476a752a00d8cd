"""Monetization API Routes

SPSP receiver endpoint and visitor balance lookup.
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from libs.result import Error
from src.api.dependencies import get_payer_id
from src.api.error import ClientError
from src.app.services.monetizer import Monetizer
from src.app.use_cases.monetization import (
    BalanceResponseDTO,
    GeneratePaymentDestination,
    GetBalance,
)
from src.depends import get_monetizer
from src.domain.errors import ErrorCode

SPSP_MEDIA_TYPE = "application/spsp+json"


def create_monetization_router(receiver_endpoint_pattern: str, balance_endpoint: str) -> APIRouter:
    """
    Build the router

    The balance route is registered first so it wins over the receiver
    pattern when both share a prefix.
    """
    router = APIRouter(tags=["Monetization"])

    @router.get(
        balance_endpoint,
        response_model=BalanceResponseDTO,
        status_code=status.HTTP_200_OK,
    )
    async def get_visitor_balance(
        payer_id: str = Depends(get_payer_id),
        monetizer: Monetizer = Depends(get_monetizer),
    ):
        """
        Get the requesting visitor's current balance.

        The visitor is identified by the identity cookie.

        **Example response:**
        ```json
        {"payer_id": "9f86d081884c7d659a2feaa0c55ad015", "balance": 150}
        ```
        """
        result = await GetBalance(monetizer.ledger).execute(payer_id)
        return result.value

    @router.get(
        receiver_endpoint_pattern,
        status_code=status.HTTP_200_OK,
        responses={
            406: {"description": "Client does not accept application/spsp+json"},
            503: {"description": "Payment receiver could not connect"},
        },
    )
    async def receive_payments(
        payer_id: str,
        request: Request,
        monetizer: Monetizer = Depends(get_monetizer),
    ):
        """
        SPSP endpoint: issue a destination address and shared secret.

        The payer id from the path is embedded in the destination address,
        so every payment sent there is credited to that payer.

        **Returns:**
        - 200: `{"destination_account": "...", "shared_secret": "<base64>"}`
        - 400: Payer id is not a valid address segment
        - 406: Wrong Accept header
        - 503: Payment receiver unavailable
        """
        if SPSP_MEDIA_TYPE not in request.headers.get("accept", ""):
            raise ClientError(
                Error(
                    code=ErrorCode.UNSUPPORTED_ACCEPT,
                    message=f"Accept header must include {SPSP_MEDIA_TYPE}",
                ),
                status_code=status.HTTP_406_NOT_ACCEPTABLE,
            )

        result = await GeneratePaymentDestination(monetizer.receiver).execute(payer_id)

        if result.is_err():
            if result.error.code == ErrorCode.PAYMENT_RECEIVER_UNAVAILABLE:
                raise ClientError(result.error, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)
            raise ClientError(result.error)

        return JSONResponse(content=result.value.model_dump(), media_type=SPSP_MEDIA_TYPE)

    return router
