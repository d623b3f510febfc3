"""
Principal identifiers.

The registry treats a principal as opaque and compares it by equality only.
Shape checks happen at the boundary where calls enter the contract, so the
core never sees an obviously malformed key. Signatures are verified upstream.
"""

import re
from typing import Optional

# Standard c32 address (SP/SM mainnet, ST/SN testnet), optional contract name
PRINCIPAL_PATTERN = re.compile(
    r"^S[PMTN][0-9A-HJKMNP-TV-Z]{26,40}(\.[a-zA-Z][a-zA-Z0-9_-]{0,39})?$"
)

# Harness-style literal, e.g. "'ST1PQ..."
_QUOTED_PREFIX = "'"


def normalize_principal(value: object) -> Optional[str]:
    """
    Return the canonical form of a principal, or None if malformed.

    Accepts the bare address or the quoted literal form produced by
    test harnesses.
    """
    if not isinstance(value, str):
        return None
    candidate = value.strip()
    if candidate.startswith(_QUOTED_PREFIX):
        candidate = candidate[1:]
    if not PRINCIPAL_PATTERN.match(candidate):
        return None
    return candidate


def is_principal(value: object) -> bool:
    return normalize_principal(value) is not None


def is_contract_principal(principal: str) -> bool:
    return "." in principal
