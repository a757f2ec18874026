"""
WalletAddress value object - Immutable Ethereum account address.
"""

from dataclasses import dataclass

from eth_utils import is_address, to_checksum_address

from caissier.domain.exceptions.base import ValidationError


@dataclass(frozen=True)
class WalletAddress:
    """
    Value object representing a validated Ethereum address.

    Business rules:
    - "0x" followed by 40 hex characters
    - Mixed-case input must carry a valid EIP-55 checksum
    - Stored in checksum form so equal addresses compare equal
    """

    address: str

    def __post_init__(self):
        """Validate and normalize address on creation."""
        if not self.address:
            raise ValidationError("address", "cannot be empty")

        if len(self.address) != 42 or not self.address.startswith("0x"):
            raise ValidationError("address", "must be 0x followed by 40 hex characters")

        if not is_address(self.address):
            raise ValidationError("address", "invalid hex or checksum")

        object.__setattr__(self, "address", to_checksum_address(self.address))

    def __str__(self) -> str:
        return self.address
