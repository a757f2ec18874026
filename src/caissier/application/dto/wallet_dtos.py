"""
Wallet data transfer objects.
"""

from dataclasses import dataclass

from caissier.domain.entities.wallet_binding import WalletBinding
from caissier.domain.value_objects.amount import format_ether


@dataclass(frozen=True)
class BindWalletResult:
    """Binding and whether this call created it."""

    binding: WalletBinding
    created: bool


@dataclass(frozen=True)
class WalletBalance:
    """Balance of a bound wallet in wei."""

    address: str
    balance_wei: int

    @property
    def balance_ether(self) -> str:
        return format_ether(self.balance_wei)
