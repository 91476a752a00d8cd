"""Get Balance Use Case

Retrieves a payer's current balance.
"""

from libs.result import Result, Return
from src.app.services.balance_ledger import BalanceLedger
from .dtos import BalanceResponseDTO


class GetBalance:
    """
    Read-only snapshot of a payer's balance

    Unknown payers have a balance of zero; this never fails.
    """

    def __init__(self, ledger: BalanceLedger):
        self.ledger = ledger

    async def execute(self, payer_id: str) -> Result[BalanceResponseDTO]:
        return Return.ok(
            BalanceResponseDTO(payer_id=payer_id, balance=self.ledger.balance_of(payer_id))
        )
