"""SpendBalance Use Case

Debits a payer's balance right before a gated resource is released.
"""

from libs.result import Result, Return
from src.app.services.balance_ledger import BalanceLedger
from .dtos import BalanceChangeResponseDTO, SpendCommandDTO


class SpendBalance:
    """
    Use Case: Spend part of a payer's balance

    Business Rules:
    1. Sufficient balance: balance >= price, checked and debited atomically
    2. INSUFFICIENT_BALANCE means the resource must not be released
    3. A payer that was never credited has a zero balance
    """

    def __init__(self, ledger: BalanceLedger):
        self.ledger = ledger

    async def execute(self, command: SpendCommandDTO) -> Result[BalanceChangeResponseDTO]:
        result = self.ledger.debit(command.payer_id, command.price)
        if result.is_err():
            return result

        change = result.value
        return Return.ok(
            BalanceChangeResponseDTO(
                payer_id=change.payer_id,
                change_type=change.change_type.value,
                amount=change.amount,
                balance_before=change.balance_before,
                balance_after=change.balance_after,
                occurred_at=change.occurred_at,
            )
        )
