"""Amount parsing

Payment transports deliver amounts either as integers or as plain digit
strings (e.g. "1500"). Balances are kept in integer base units and no single
amount may exceed an unsigned 64-bit value.
"""

import re
from decimal import Decimal
from typing import Any, Optional

MAX_AMOUNT = 2 ** 64 - 1
DIGITS_PATTERN = re.compile(r"^[0-9]{1,20}$")


def parse_amount(value: Any) -> Optional[int]:
    """
    Convert a transport-supplied amount to a non-negative integer

    Returns:
        The amount in base units, or None when the value is not an integer
        (or digit string) between 0 and MAX_AMOUNT.
    """
    if isinstance(value, bool) or value is None:
        return None

    if isinstance(value, int):
        number = value
    elif isinstance(value, Decimal):
        if not value.is_finite() or value < 0 or value > MAX_AMOUNT:
            return None
        if value != value.to_integral_value():
            return None
        number = int(value)
    elif isinstance(value, str):
        text = value.strip()
        if not DIGITS_PATTERN.match(text):
            return None
        number = int(text)
    else:
        return None

    if number < 0 or number > MAX_AMOUNT:
        return None
    return number
