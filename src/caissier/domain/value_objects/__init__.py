"""
Domain value objects.
"""

from caissier.domain.value_objects.amount import (
    format_ether,
    parse_amount,
    wei_to_ether,
)
from caissier.domain.value_objects.transaction_hash import TransactionHash
from caissier.domain.value_objects.wallet_address import WalletAddress

__all__ = [
    "WalletAddress",
    "TransactionHash",
    "parse_amount",
    "wei_to_ether",
    "format_ether",
]
