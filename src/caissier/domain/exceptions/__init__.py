"""
Domain exceptions for Caissier.
"""

from caissier.domain.exceptions.auth import (
    AuthenticationError,
    InvalidCredentialsError,
    InvalidTokenError,
    RefreshTokenExpiredError,
    RefreshTokenNotFoundError,
)
from caissier.domain.exceptions.base import (
    CaissierException,
    DuplicateEntityError,
    EntityNotFoundError,
    ValidationError,
)
from caissier.domain.exceptions.ledger import (
    LedgerError,
    LedgerNotFoundError,
    LedgerRpcError,
    LedgerUnavailableError,
)
from caissier.domain.exceptions.payment import (
    ClaimMismatchError,
    InvalidStatusTransitionError,
    TransactionNotFromOwnedWalletError,
)
from caissier.domain.exceptions.signature import (
    MalformedSignatureError,
    SignatureError,
    SignatureRecoveryError,
)
from caissier.domain.exceptions.wallet import (
    NoWalletBoundError,
    WalletAlreadyBoundError,
)

__all__ = [
    # Base
    "CaissierException",
    "EntityNotFoundError",
    "DuplicateEntityError",
    "ValidationError",
    # Auth
    "AuthenticationError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "RefreshTokenNotFoundError",
    "RefreshTokenExpiredError",
    # Signature
    "SignatureError",
    "MalformedSignatureError",
    "SignatureRecoveryError",
    # Wallet
    "WalletAlreadyBoundError",
    "NoWalletBoundError",
    # Ledger
    "LedgerError",
    "LedgerUnavailableError",
    "LedgerNotFoundError",
    "LedgerRpcError",
    # Payment
    "ClaimMismatchError",
    "TransactionNotFromOwnedWalletError",
    "InvalidStatusTransitionError",
]
