"""
Repository interfaces (ports) for the domain layer.
"""

from caissier.domain.repositories.i_payment_repository import IPaymentRepository
from caissier.domain.repositories.i_refresh_token_repository import (
    IRefreshTokenRepository,
)
from caissier.domain.repositories.i_user_repository import IUserRepository
from caissier.domain.repositories.i_wallet_binding_repository import (
    IWalletBindingRepository,
)

__all__ = [
    "IUserRepository",
    "IWalletBindingRepository",
    "IPaymentRepository",
    "IRefreshTokenRepository",
]
