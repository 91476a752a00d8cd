"""Payment Receiver Interface

Boundary to the external payment transport. The transport hands out
destination addresses with a shared secret, and calls the registered
handler once for every incoming payment chunk. The handler decides whether
the chunk is accepted or rejected.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Tuple


class PaymentReceiverError(Exception):
    """Raised when the payment transport cannot be used"""


class ReceiverNotConnectedError(PaymentReceiverError):
    pass


@dataclass
class IncomingChunk:
    """
    A single payment chunk awaiting a decision

    amount is passed through as delivered by the transport (integer or
    numeric string). accept/reject settle the chunk with the transport.
    """

    destination: str
    amount: Any
    accept: Callable[[], Awaitable[None]]
    reject: Callable[[str], Awaitable[None]]


PaymentHandler = Callable[[IncomingChunk], Awaitable[Any]]


class PaymentReceiver(ABC):
    @property
    @abstractmethod
    def connected(self) -> bool:
        pass

    @abstractmethod
    async def connect(self) -> None:
        """Connect to the payment network. Calling it when connected is a no-op."""
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        pass

    @abstractmethod
    def generate_address_and_secret(self) -> Tuple[str, bytes]:
        """
        Issue a fresh destination address and shared secret

        Raises:
            ReceiverNotConnectedError: if connect() has not completed
        """
        pass

    @abstractmethod
    def set_payment_handler(self, handler: Optional[PaymentHandler]) -> None:
        pass
