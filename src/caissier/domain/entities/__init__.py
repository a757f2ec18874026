"""
Domain entities.
"""

from caissier.domain.entities.payment import Payment, PaymentStatus
from caissier.domain.entities.refresh_session import RefreshSession
from caissier.domain.entities.user import User
from caissier.domain.entities.wallet_binding import WalletBinding

__all__ = [
    "User",
    "WalletBinding",
    "Payment",
    "PaymentStatus",
    "RefreshSession",
]
