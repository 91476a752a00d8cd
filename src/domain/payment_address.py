"""Payment address helpers

The payment receiver hands out destination addresses of the form
``<prefix>.<segment>.<segment>``. The payer id is embedded as an extra
segment right before the last two, so every chunk sent to that address
carries the payer id in its destination:

    private.monetizer.a1b2.c3d4  ->  private.monetizer.<payer_id>.a1b2.c3d4
"""

import re
import secrets
from typing import Optional

PAYER_ID_PATTERN = re.compile(r"^[A-Za-z0-9_~-]+$")
IDENTITY_TOKEN_BYTES = 16


def generate_payer_id() -> str:
    return secrets.token_hex(IDENTITY_TOKEN_BYTES)


def is_valid_payer_id(payer_id: Optional[str]) -> bool:
    return bool(payer_id) and PAYER_ID_PATTERN.match(payer_id) is not None


def embed_payer_id(destination_account: str, payer_id: str) -> str:
    segments = destination_account.split(".")
    if len(segments) < 3:
        raise ValueError(f"Destination account too short: {destination_account}")
    return ".".join(segments[:-2] + [payer_id] + segments[-2:])


def extract_payer_id(destination: str) -> Optional[str]:
    """Return the embedded payer id, or None when the address doesn't carry one"""
    segments = (destination or "").split(".")
    if len(segments) < 4:
        return None
    payer_id = segments[-3]
    return payer_id if is_valid_payer_id(payer_id) else None
