"""
Payment data transfer objects.
"""

from dataclasses import dataclass, field
from typing import Optional

from caissier.domain.entities.payment import Payment, PaymentStatus


@dataclass(frozen=True)
class PaymentClaim:
    """
    A user's claim that an on-chain transaction paid someone.

    amount is the raw decimal-digit string from the client; it is
    parsed to int by the use case so malformed input never reaches
    the ledger.
    """

    to_address: str
    amount: str
    tx_hash: str
    currency: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class SubmitPaymentResult:
    """Submitted payment and whether this call created it."""

    payment: Payment
    created: bool


@dataclass(frozen=True)
class PaymentPage:
    """One page of a user's payments."""

    items: list[Payment]
    total: int
    page: int
    page_size: int


@dataclass(frozen=True)
class PaymentStats:
    """Per-status counts and the confirmed total (in smallest units)."""

    counts: dict[PaymentStatus, int] = field(default_factory=dict)
    total_confirmed_amount: int = 0

    @property
    def total(self) -> int:
        return sum(self.counts.values())
