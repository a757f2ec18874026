"""
Data transfer objects for the application layer.
"""

from caissier.application.dto.payment_dtos import (
    PaymentClaim,
    PaymentPage,
    PaymentStats,
    SubmitPaymentResult,
)
from caissier.application.dto.wallet_dtos import BindWalletResult, WalletBalance

__all__ = [
    "PaymentClaim",
    "PaymentPage",
    "PaymentStats",
    "SubmitPaymentResult",
    "BindWalletResult",
    "WalletBalance",
]
