"""
Wallet binding exceptions.
"""

from caissier.domain.exceptions.base import CaissierException


class WalletAlreadyBoundError(CaissierException):
    """
    Raised when an address is already bound to another identity.

    Args:
        address: Checksummed wallet address
    """

    def __init__(self, address: str):
        self.address = address
        super().__init__(
            f"Wallet {address} is already bound to another account",
            code="WALLET_ALREADY_BOUND",
        )


class NoWalletBoundError(CaissierException):
    """
    Raised when an identity has no bound wallet address.

    Args:
        user_id: Identity that has no wallet
    """

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(
            "No wallet address is bound to this account",
            code="NO_WALLET_BOUND",
        )
