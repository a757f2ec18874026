"""
TransactionHash value object.
"""

import re
from dataclasses import dataclass

from caissier.domain.exceptions.base import ValidationError

_TX_HASH_PATTERN = re.compile(r"0x[0-9a-fA-F]{64}")


@dataclass(frozen=True)
class TransactionHash:
    """
    32-byte transaction hash, "0x"-prefixed and lowercased.

    Lowercasing makes the uniqueness constraint case-insensitive.
    """

    value: str

    def __post_init__(self):
        if not _TX_HASH_PATTERN.fullmatch(self.value or ""):
            raise ValidationError(
                "tx_hash", "must be 0x followed by 64 hex characters"
            )
        object.__setattr__(self, "value", self.value.lower())

    def __str__(self) -> str:
        return self.value
