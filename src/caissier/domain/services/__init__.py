"""
Domain service interfaces.
"""

from caissier.domain.services.i_ledger_client import (
    ILedgerClient,
    LedgerReceipt,
    LedgerTransaction,
)
from caissier.domain.services.i_password_hasher import IPasswordHasher
from caissier.domain.services.i_signature_verifier import ISignatureVerifier

__all__ = [
    "ILedgerClient",
    "LedgerTransaction",
    "LedgerReceipt",
    "ISignatureVerifier",
    "IPasswordHasher",
]
