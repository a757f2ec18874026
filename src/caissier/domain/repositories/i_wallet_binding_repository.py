"""
Wallet binding repository interface.
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from caissier.domain.entities.wallet_binding import WalletBinding


class IWalletBindingRepository(ABC):
    """Persistence port for address to identity bindings."""

    @abstractmethod
    async def create(self, binding: WalletBinding) -> WalletBinding:
        """
        Insert a binding.

        Raises:
            DuplicateEntityError: If the address is already bound
        """

    @abstractmethod
    async def get_by_address(self, address: str) -> Optional[WalletBinding]:
        """Get binding by checksummed address."""

    @abstractmethod
    async def list_addresses_for_user(self, user_id: UUID) -> list[str]:
        """List checksummed addresses bound to a user."""
