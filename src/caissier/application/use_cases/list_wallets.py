"""
List Wallets use case.
"""

from uuid import UUID

from caissier.domain.repositories.i_wallet_binding_repository import (
    IWalletBindingRepository,
)


class ListWallets:
    """List the addresses bound to a user, oldest first."""

    def __init__(self, wallet_binding_repository: IWalletBindingRepository):
        self.wallet_binding_repository = wallet_binding_repository

    async def execute(self, user_id: UUID) -> list[str]:
        return await self.wallet_binding_repository.list_addresses_for_user(user_id)
