"""
Signature recovery exceptions.
"""

from caissier.domain.exceptions.base import CaissierException


class SignatureError(CaissierException):
    """Base exception for signature verification."""


class MalformedSignatureError(SignatureError):
    """
    Signature bytes could not be decoded.

    Raised for bad hex, wrong length or an out-of-range recovery id.
    """

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(
            f"Malformed signature: {reason}",
            code="MALFORMED_SIGNATURE",
        )


class SignatureRecoveryError(SignatureError):
    """Elliptic-curve recovery rejected the signature."""

    def __init__(self, reason: str = "public key recovery failed"):
        self.reason = reason
        super().__init__(
            f"Signature recovery failed: {reason}",
            code="SIGNATURE_RECOVERY_FAILED",
        )
