"""
Payment repository interface.
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from caissier.domain.entities.payment import Payment, PaymentStatus


class IPaymentRepository(ABC):
    """Persistence port for payments."""

    @abstractmethod
    async def create(self, payment: Payment) -> Payment:
        """
        Insert a payment.

        Raises:
            DuplicateEntityError: If transaction_hash already exists
        """

    @abstractmethod
    async def get_by_id(self, payment_id: UUID) -> Optional[Payment]:
        """Get payment by id."""

    @abstractmethod
    async def get_by_tx_hash(self, transaction_hash: str) -> Optional[Payment]:
        """Get payment by lowercased transaction hash."""

    @abstractmethod
    async def update_status(
        self,
        payment: Payment,
        expected_status: PaymentStatus,
    ) -> bool:
        """
        Write status and execution fields if the row still has expected_status.

        Args:
            payment: Payment carrying the new state
            expected_status: Status the stored row must currently have

        Returns:
            True if exactly one row was updated
        """

    @abstractmethod
    async def list_by_user(
        self,
        user_id: UUID,
        status: Optional[PaymentStatus] = None,
        currency: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Payment]:
        """List a user's payments, newest first."""

    @abstractmethod
    async def count_by_user(
        self,
        user_id: UUID,
        status: Optional[PaymentStatus] = None,
        currency: Optional[str] = None,
    ) -> int:
        """Count a user's payments with the same filters as list_by_user."""

    @abstractmethod
    async def status_counts(self, user_id: UUID) -> dict[PaymentStatus, int]:
        """Count a user's payments per status."""

    @abstractmethod
    async def confirmed_amounts(self, user_id: UUID) -> list[int]:
        """Amounts of the user's confirmed payments."""
