"""
Authentication adapters.
"""

from caissier.infrastructure.auth.argon2_password_hasher import (
    Argon2PasswordHasher,
)
from caissier.infrastructure.auth.ethereum_signature_verifier import (
    EthereumSignatureVerifier,
)
from caissier.infrastructure.auth.jwt_handler import (
    AccessTokenClaims,
    create_access_token,
    decode_access_token,
)
from caissier.infrastructure.auth.session_token_manager import (
    SessionTokenManager,
    TokenPair,
    hash_refresh_token,
)

__all__ = [
    "Argon2PasswordHasher",
    "EthereumSignatureVerifier",
    "AccessTokenClaims",
    "create_access_token",
    "decode_access_token",
    "SessionTokenManager",
    "TokenPair",
    "hash_refresh_token",
]
