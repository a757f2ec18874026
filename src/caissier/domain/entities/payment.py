"""
Payment entity - an on-chain transfer recorded against a user.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from caissier.domain.exceptions.payment import InvalidStatusTransitionError


class PaymentStatus(str, Enum):
    """Payment confirmation states."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass
class Payment:
    """
    Payment entity mirroring a verified ledger transaction.

    Business rules:
    - transaction_hash is globally unique
    - amount is an int in the smallest currency unit
    - Status transitions: PENDING -> CONFIRMED or PENDING -> FAILED
    - CANCELLED is administrative and never entered here
    - Owners cannot edit a payment; only the ledger moves its status
    """

    user_id: UUID
    from_address: str
    to_address: str
    amount: int
    transaction_hash: str
    currency: str = "ETH"
    status: PaymentStatus = PaymentStatus.PENDING
    block_number: Optional[int] = None
    gas_used: Optional[int] = None
    gas_price: Optional[int] = None
    description: Optional[str] = None
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)
    confirmed_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate payment data after initialization."""
        if not self.transaction_hash:
            raise ValueError("Transaction hash is required")

        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise ValueError("Payment amount must be an integer")

        if self.amount < 0:
            raise ValueError("Payment amount cannot be negative")

        if not self.currency:
            raise ValueError("Currency is required")

    @property
    def is_pending(self) -> bool:
        return self.status == PaymentStatus.PENDING

    def confirm(
        self,
        block_number: int,
        gas_used: Optional[int] = None,
        gas_price: Optional[int] = None,
    ) -> None:
        """
        Mark payment as confirmed by a successful receipt.

        Raises:
            InvalidStatusTransitionError: If not in PENDING status
        """
        self._transition(PaymentStatus.CONFIRMED)
        self._record_execution(block_number, gas_used, gas_price)
        self.confirmed_at = self.updated_at

    def fail(
        self,
        block_number: int,
        gas_used: Optional[int] = None,
        gas_price: Optional[int] = None,
    ) -> None:
        """
        Mark payment as failed by a reverted receipt.

        Raises:
            InvalidStatusTransitionError: If not in PENDING status
        """
        self._transition(PaymentStatus.FAILED)
        self._record_execution(block_number, gas_used, gas_price)

    def _transition(self, target: PaymentStatus) -> None:
        if self.status != PaymentStatus.PENDING:
            raise InvalidStatusTransitionError(self.status.value, target.value)
        self.status = target
        self.updated_at = datetime.now()

    def _record_execution(
        self,
        block_number: int,
        gas_used: Optional[int],
        gas_price: Optional[int],
    ) -> None:
        self.block_number = block_number
        if gas_used is not None:
            self.gas_used = gas_used
        if gas_price is not None:
            self.gas_price = gas_price
