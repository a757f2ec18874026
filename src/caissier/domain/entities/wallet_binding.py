"""
WalletBinding entity - proof-backed link between an address and a user.
"""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class WalletBinding:
    """
    Association of an on-chain address with a user's phone number.

    Business rules:
    - An address binds to at most one identity
    - An identity may hold several addresses
    - Created only after a successful signature proof, never mutated
    - Removed only together with the owning identity
    """

    address: str
    phone_number: str
    created_at: datetime = field(default_factory=datetime.now)
