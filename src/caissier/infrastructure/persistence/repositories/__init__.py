"""
SQLAlchemy repository implementations.
"""

from caissier.infrastructure.persistence.repositories.payment_repository import (
    PaymentRepository,
)
from caissier.infrastructure.persistence.repositories.refresh_token_repository import (  # noqa: E501
    RefreshTokenRepository,
)
from caissier.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)
from caissier.infrastructure.persistence.repositories.wallet_binding_repository import (  # noqa: E501
    WalletBindingRepository,
)

__all__ = [
    "UserRepository",
    "WalletBindingRepository",
    "PaymentRepository",
    "RefreshTokenRepository",
]
