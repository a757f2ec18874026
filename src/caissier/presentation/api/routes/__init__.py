"""API routes."""
from caissier.presentation.api.routes import account, auth, payments, wallet

__all__ = [
    "account",
    "auth",
    "payments",
    "wallet",
]
