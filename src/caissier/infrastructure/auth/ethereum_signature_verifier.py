"""
Ethereum personal-sign signature verifier.

Recovers the signer of an EIP-191 (version 0x45) message from a
65-byte r || s || v signature, the format produced by wallet
personal_sign calls.
"""

import re

from eth_keys import keys
from eth_keys.exceptions import BadSignature
from eth_keys.exceptions import ValidationError as EthKeysValidationError
from eth_utils import keccak

from caissier.domain.exceptions.signature import (
    MalformedSignatureError,
    SignatureRecoveryError,
)
from caissier.domain.services.i_signature_verifier import ISignatureVerifier
from caissier.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)

SIGNED_MESSAGE_PREFIX = b"\x19Ethereum Signed Message:\n"
SIGNATURE_LENGTH = 65
_HEX_PATTERN = re.compile(r"[0-9a-fA-F]*")


def hash_personal_message(message: str) -> bytes:
    """
    Keccak-256 of the prefixed message.

    The length is the UTF-8 byte length written in decimal.
    """
    payload = message.encode("utf-8")
    return keccak(SIGNED_MESSAGE_PREFIX + str(len(payload)).encode("ascii") + payload)


def decode_signature(signature: str) -> keys.Signature:
    """
    Decode a hex signature into an eth_keys Signature.

    Recovery ids 27/28 are normalized to 0/1.

    Raises:
        MalformedSignatureError: On bad hex, wrong length or bad recovery id
    """
    if not isinstance(signature, str):
        raise MalformedSignatureError("signature must be a hex string")

    hex_part = signature[2:] if signature[:2].lower() == "0x" else signature
    if not _HEX_PATTERN.fullmatch(hex_part):
        raise MalformedSignatureError("invalid hex encoding")

    try:
        raw = bytes.fromhex(hex_part)
    except ValueError:
        raise MalformedSignatureError("invalid hex encoding")

    if len(raw) != SIGNATURE_LENGTH:
        raise MalformedSignatureError(
            f"expected {SIGNATURE_LENGTH} bytes, got {len(raw)}"
        )

    v = raw[64]
    if v in (27, 28):
        v -= 27
    if v not in (0, 1):
        raise MalformedSignatureError(f"invalid recovery id {raw[64]}")

    try:
        return keys.Signature(signature_bytes=raw[:64] + bytes([v]))
    except EthKeysValidationError as e:
        # r or s outside the curve order
        raise SignatureRecoveryError(str(e))


class EthereumSignatureVerifier(ISignatureVerifier):
    """secp256k1 public-key recovery for personal-sign messages."""

    def recover_address(self, message: str, signature: str) -> str:
        sig = decode_signature(signature)
        message_hash = hash_personal_message(message)

        try:
            public_key = sig.recover_public_key_from_msg_hash(message_hash)
        except (BadSignature, EthKeysValidationError) as e:
            logger.info("Signature recovery rejected", extra={"reason": str(e)})
            raise SignatureRecoveryError(str(e))

        return public_key.to_checksum_address()
