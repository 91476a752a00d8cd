"""Request-bound monetization dependencies

Routes gate a resource on payment with:

    @router.get("/content")
    async def content(receipt=Depends(require_payment(100))):
        ...

The dependency waits until the visitor's balance covers the price, debits
it, and only then lets the route run.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, TypeVar
from fastapi import Depends, Request, status
from libs.result import Error
from src.api.error import ClientError
from src.app.services.monetizer import Monetizer
from src.app.use_cases.monetization import (
    AwaitBalance,
    AwaitBalanceCommandDTO,
    BalanceChangeResponseDTO,
    SpendBalance,
    SpendCommandDTO,
)
from src.depends import get_monetizer
from src.domain.errors import ErrorCode

logger = logging.getLogger(__name__)

T = TypeVar("T")


def get_payer_id(request: Request) -> str:
    payer_id = getattr(request.state, "payer_id", None)
    if not payer_id:
        raise ClientError(
            Error(
                code=ErrorCode.MISSING_IDENTITY,
                message="Request carries no payer identity",
                reason="identity middleware not installed",
            )
        )
    return payer_id


async def _watch_disconnect(request: Request, poll_interval: float) -> None:
    while True:
        await asyncio.sleep(poll_interval)
        if await request.is_disconnected():
            return


async def wait_unless_disconnected(
    request: Request, awaitable: Awaitable[T], poll_interval: float
) -> Optional[T]:
    """
    Run awaitable until it finishes or the client goes away

    Returns:
        The awaitable's result, or None if the client disconnected first
        (the awaitable is cancelled and allowed to clean up).
    """
    wait_task = asyncio.ensure_future(awaitable)
    watch_task = asyncio.ensure_future(_watch_disconnect(request, poll_interval))
    try:
        await asyncio.wait({wait_task, watch_task}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        watch_task.cancel()
        if not wait_task.done():
            wait_task.cancel()
            await asyncio.gather(wait_task, return_exceptions=True)

    if wait_task.cancelled():
        return None
    return wait_task.result()


def require_payment(price: int) -> Callable:
    """Build a dependency that waits for and spends price from the visitor's balance"""

    async def pay(
        request: Request,
        payer_id: str = Depends(get_payer_id),
        monetizer: Monetizer = Depends(get_monetizer),
    ) -> BalanceChangeResponseDTO:
        options = monetizer.options

        wait_result = await wait_unless_disconnected(
            request,
            AwaitBalance(monetizer.registry).execute(
                AwaitBalanceCommandDTO(
                    payer_id=payer_id,
                    threshold=price,
                    timeout_seconds=options.await_balance_timeout_seconds,
                )
            ),
            options.disconnect_poll_interval_seconds,
        )

        if wait_result is None:
            logger.info(f"Client disconnected while waiting for {payer_id} to reach {price}")
            raise ClientError(
                Error(
                    code=ErrorCode.BALANCE_WAIT_CANCELLED,
                    message="Request abandoned while waiting for payment",
                ),
                status_code=status.HTTP_408_REQUEST_TIMEOUT,
            )

        if wait_result.is_err():
            raise ClientError(wait_result.error, status_code=status.HTTP_402_PAYMENT_REQUIRED)

        spend_result = await SpendBalance(monetizer.ledger).execute(
            SpendCommandDTO(payer_id=payer_id, price=price)
        )
        if spend_result.is_err():
            raise ClientError(spend_result.error, status_code=status.HTTP_402_PAYMENT_REQUIRED)

        return spend_result.value

    return pay
