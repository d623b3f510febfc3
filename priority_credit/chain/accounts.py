"""
Devnet accounts.

The standard devnet wallet set: one deployer plus eight funded wallets.
Genesis uses the deployer as the first administrator.
"""

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class Account:
    name: str
    address: str


_DEVNET_ADDRESSES = {
    "deployer": "ST1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM",
    "wallet_1": "ST1SJ3DTE5DN7X54YDH5D64R3BCB6A2AG2ZQ8YPD5",
    "wallet_2": "ST2CY5V39NHDPWSXMW9QDT3HC3GD6Q6XX4CFRK9AG",
    "wallet_3": "ST2JHG361ZXG51QTKY2NQCVBPPRRE2KZB1HR05NNC",
    "wallet_4": "ST2NEB84ASENDXKYGJPQW86YXQCEFEX2ZQPG87ND",
    "wallet_5": "ST2REHHS5J3CERCRBEPMGH7921Q6PYKAADT7JP2VB",
    "wallet_6": "ST3AM1A56AK2C1XAFJ4115ZSV26EB49BVQ10MGCS0",
    "wallet_7": "ST3PF13W7Z0RRM42A8VZRVFQ75SV1K26RXEP8YGKJ",
    "wallet_8": "ST3NBRSFKX28FQ2ZJ1MAKX58HKHSDGNV5N7R21XCP",
}


def devnet_accounts() -> Dict[str, Account]:
    """Fresh name -> Account map of the devnet wallets."""
    return {name: Account(name=name, address=address) for name, address in _DEVNET_ADDRESSES.items()}
