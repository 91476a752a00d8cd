"""In-process payment receiver

Development and test transport: issues addresses under a configured base
address and lets the host application push chunks through deliver().

Nothing is stored per issued address. Each address ends with
``<nonce>.<tag>`` where the tag is an HMAC of the nonce under a receiver
key created on connect(); the shared secret is derived from the same key.
Reconnecting rotates the key, which retires every previously issued address.
"""

import hashlib
import hmac
import logging
import secrets
from typing import Any, Optional, Tuple
from src.app.services.payment_receiver import (
    IncomingChunk,
    PaymentHandler,
    PaymentReceiver,
    ReceiverNotConnectedError,
)

logger = logging.getLogger(__name__)

RECEIVER_KEY_BYTES = 32
NONCE_BYTES = 8
TAG_HEX_CHARS = 16


class LocalPaymentReceiver(PaymentReceiver):
    """
    Payment receiver that never leaves the process

    Addresses have the form ``<base_address>.<nonce>.<tag>``; only chunks
    whose last two segments carry a tag valid under the current key (with
    any segments inserted before them) are offered to the handler.
    """

    def __init__(self, base_address: str):
        self.base_address = base_address
        self._connected = False
        self._handler: Optional[PaymentHandler] = None
        self._receiver_key: Optional[bytes] = None

    @property
    def connected(self) -> bool:
        return self._connected

    async def connect(self) -> None:
        if self._connected:
            return
        self._receiver_key = secrets.token_bytes(RECEIVER_KEY_BYTES)
        self._connected = True
        logger.info(f"Payment receiver listening on {self.base_address}")

    async def disconnect(self) -> None:
        if not self._connected:
            return
        self._connected = False
        self._receiver_key = None
        logger.info("Payment receiver disconnected")

    def generate_address_and_secret(self) -> Tuple[str, bytes]:
        if not self._connected:
            raise ReceiverNotConnectedError("Payment receiver is not connected")

        nonce = secrets.token_hex(NONCE_BYTES)
        return (
            f"{self.base_address}.{nonce}.{self._tag(nonce)}",
            self._shared_secret(nonce),
        )

    def owns_destination(self, destination: str) -> bool:
        """True if destination was issued under the current receiver key"""
        if self._receiver_key is None or not destination.startswith(self.base_address + "."):
            return False
        segments = destination.split(".")
        if len(segments) < 3:
            return False
        nonce, tag = segments[-2], segments[-1]
        return hmac.compare_digest(tag, self._tag(nonce))

    def _tag(self, nonce: str) -> str:
        digest = hmac.new(self._receiver_key, b"tag:" + nonce.encode(), hashlib.sha256)
        return digest.hexdigest()[:TAG_HEX_CHARS]

    def _shared_secret(self, nonce: str) -> bytes:
        return hmac.new(self._receiver_key, b"secret:" + nonce.encode(), hashlib.sha256).digest()

    def set_payment_handler(self, handler: Optional[PaymentHandler]) -> None:
        self._handler = handler

    async def deliver(self, destination: str, amount: Any) -> bool:
        """
        Offer a chunk to the payment handler

        Returns:
            True if the handler accepted the chunk, False if it was rejected
            or could not be routed
        """
        if not self._connected:
            raise ReceiverNotConnectedError("Payment receiver is not connected")

        if not self.owns_destination(destination):
            logger.warning(f"Rejected chunk for unknown destination {destination}")
            return False

        if self._handler is None:
            logger.warning(f"Rejected chunk for {destination}: no payment handler")
            return False

        decision = {}

        async def accept() -> None:
            decision.setdefault("accepted", True)

        async def reject(reason: str) -> None:
            decision.setdefault("accepted", False)
            decision.setdefault("reason", reason)

        await self._handler(
            IncomingChunk(destination=destination, amount=amount, accept=accept, reject=reject)
        )

        if not decision.get("accepted", False):
            logger.info(f"Chunk to {destination} rejected: {decision.get('reason', 'no decision')}")
            return False
        return True
