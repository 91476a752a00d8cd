"""Ledger error codes and constructors"""

from libs.result import Error


class ErrorCode:
    INVALID_AMOUNT = "INVALID_AMOUNT"
    INSUFFICIENT_BALANCE = "INSUFFICIENT_BALANCE"
    MALFORMED_NOTIFICATION = "MALFORMED_NOTIFICATION"
    BALANCE_WAIT_TIMEOUT = "BALANCE_WAIT_TIMEOUT"
    BALANCE_WAIT_CANCELLED = "BALANCE_WAIT_CANCELLED"
    PAYMENT_RECEIVER_UNAVAILABLE = "PAYMENT_RECEIVER_UNAVAILABLE"
    ACKNOWLEDGE_FAILED = "ACKNOWLEDGE_FAILED"
    UNSUPPORTED_ACCEPT = "UNSUPPORTED_ACCEPT"
    INVALID_PAYER_ID = "INVALID_PAYER_ID"
    MISSING_IDENTITY = "MISSING_IDENTITY"


def invalid_amount(payer_id: str, amount) -> Error:
    return Error(
        code=ErrorCode.INVALID_AMOUNT,
        message=f"Invalid amount {amount!r} for payer {payer_id}",
        reason="Amount must be a non-negative integer",
        details={"payer_id": payer_id, "amount": str(amount)},
    )


def insufficient_balance(payer_id: str, price: int, balance: int) -> Error:
    return Error(
        code=ErrorCode.INSUFFICIENT_BALANCE,
        message=f"Insufficient balance. Required: {price}, Available: {balance}",
        reason=f"balance={balance}, required={price}",
        details={"payer_id": payer_id, "price": price, "balance": balance},
    )


def malformed_notification(destination: str) -> Error:
    return Error(
        code=ErrorCode.MALFORMED_NOTIFICATION,
        message="Could not parse payer id from payment destination",
        reason=f"destination={destination}",
        details={"destination": destination},
    )
