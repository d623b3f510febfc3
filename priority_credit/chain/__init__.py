"""
Block runtime for the registry contract.
"""

from priority_credit.chain.accounts import Account, devnet_accounts
from priority_credit.chain.chain import Block, Chain, Receipt, Tx
from priority_credit.chain.contract import FUNCTIONS, PriorityCreditContract

__all__ = [
    "Account",
    "devnet_accounts",
    "Block",
    "Chain",
    "Receipt",
    "Tx",
    "FUNCTIONS",
    "PriorityCreditContract",
]
