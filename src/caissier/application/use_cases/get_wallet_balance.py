"""
Get Wallet Balance use case.
"""

from uuid import UUID

from caissier.application.dto.wallet_dtos import WalletBalance
from caissier.domain.exceptions import EntityNotFoundError
from caissier.domain.repositories.i_wallet_binding_repository import (
    IWalletBindingRepository,
)
from caissier.domain.services.i_ledger_client import ILedgerClient
from caissier.domain.value_objects.wallet_address import WalletAddress


class GetWalletBalance:
    """
    Query the ledger balance of one of the caller's wallets.

    Business rules:
    - Only addresses bound to the caller can be queried
    - Balance stays an int (wei); ether is derived for display only
    """

    def __init__(
        self,
        wallet_binding_repository: IWalletBindingRepository,
        ledger_client: ILedgerClient,
    ):
        self.wallet_binding_repository = wallet_binding_repository
        self.ledger_client = ledger_client

    async def execute(self, user_id: UUID, address: str) -> WalletBalance:
        """
        Raises:
            ValidationError: If address is malformed
            EntityNotFoundError: If address is not bound to the user
            LedgerUnavailableError: If the node cannot be reached
        """
        address = WalletAddress(address).address

        owned = await self.wallet_binding_repository.list_addresses_for_user(user_id)
        if address not in owned:
            raise EntityNotFoundError(entity_type="Wallet", entity_id=address)

        balance = await self.ledger_client.get_balance(address)
        return WalletBalance(address=address, balance_wei=balance)
