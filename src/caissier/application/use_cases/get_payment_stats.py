"""
Get Payment Stats use case.
"""

from uuid import UUID

from caissier.application.dto.payment_dtos import PaymentStats
from caissier.domain.repositories.i_payment_repository import IPaymentRepository


class GetPaymentStats:
    """Per-status counts and the exact sum of confirmed amounts."""

    def __init__(self, payment_repository: IPaymentRepository):
        self.payment_repository = payment_repository

    async def execute(self, user_id: UUID) -> PaymentStats:
        counts = await self.payment_repository.status_counts(user_id)
        amounts = await self.payment_repository.confirmed_amounts(user_id)
        return PaymentStats(counts=counts, total_confirmed_amount=sum(amounts))
