"""Payment Receiver Background Worker

Keeps the payment receiver connected. A failed connection only disables
receiving payments; balances already accumulated can still be read and
spent.
"""

import asyncio
import logging
from typing import Optional

from config import ApplicationConfig
from src.app.services.payment_receiver import PaymentReceiver

logger = logging.getLogger(__name__)


class PaymentReceiverWorker:
    """
    Background worker for connecting the payment receiver

    Usage:
        # Try once
        worker = PaymentReceiverWorker(receiver)
        connected = await worker.run_once()

        # Retry until connected
        worker = PaymentReceiverWorker(receiver)
        await worker.run_forever(interval_seconds=5)
    """

    def __init__(self, receiver: PaymentReceiver, retry_seconds: Optional[float] = None):
        """
        Initialize the worker

        Args:
            receiver: Payment receiver to connect
            retry_seconds: Delay between attempts (defaults to ApplicationConfig.PAYMENT_RECEIVER_RETRY_SECONDS)
        """
        self.receiver = receiver
        self.retry_seconds = (
            retry_seconds
            if retry_seconds is not None
            else ApplicationConfig.PAYMENT_RECEIVER_RETRY_SECONDS
        )

    async def run_once(self) -> bool:
        """
        Attempt to connect once

        Returns:
            True if the receiver is connected afterwards
        """
        if self.receiver.connected:
            return True

        try:
            await self.receiver.connect()
        except Exception as e:
            logger.error(f"Payment receiver connection failed: {e}")
            return False

        logger.info("Payment receiver connected")
        return self.receiver.connected

    async def run_forever(self, interval_seconds: Optional[float] = None) -> None:
        """
        Retry connecting until it succeeds

        Args:
            interval_seconds: Seconds between attempts
        """
        interval = interval_seconds if interval_seconds is not None else self.retry_seconds
        attempt = 0

        while True:
            attempt += 1
            if await self.run_once():
                return
            logger.warning(
                f"Payment receiver not connected after attempt {attempt}, retrying in {interval}s"
            )
            await asyncio.sleep(interval)

    async def shutdown(self):
        """Disconnect the receiver"""
        try:
            await self.receiver.disconnect()
        except Exception as e:
            logger.error(f"Payment receiver disconnect failed: {e}")
