"""
Signature verifier interface.
"""

from abc import ABC, abstractmethod


class ISignatureVerifier(ABC):
    """
    Recovers the signing address of a personal-sign message.

    Pure: no I/O, no state.
    """

    @abstractmethod
    def recover_address(self, message: str, signature: str) -> str:
        """
        Recover the address that signed message.

        Args:
            message: Plain text that was signed
            signature: 65-byte signature, hex encoded (0x prefix optional)

        Returns:
            EIP-55 checksummed address

        Raises:
            MalformedSignatureError: If hex decoding or length checks fail
            SignatureRecoveryError: If curve recovery rejects the signature
        """
