"""
List Payments use case.
"""

from typing import Optional
from uuid import UUID

from caissier.application.dto.payment_dtos import PaymentPage
from caissier.domain.entities.payment import PaymentStatus
from caissier.domain.exceptions import ValidationError
from caissier.domain.repositories.i_payment_repository import IPaymentRepository

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


class ListPayments:
    """
    Paginated list of the caller's payments, newest first.

    Business rules:
    - page starts at 1
    - page_size between 1 and 100
    - Optional status and currency filters
    """

    def __init__(self, payment_repository: IPaymentRepository):
        self.payment_repository = payment_repository

    async def execute(
        self,
        user_id: UUID,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        status: Optional[PaymentStatus] = None,
        currency: Optional[str] = None,
    ) -> PaymentPage:
        if page < 1:
            raise ValidationError("page", "must be at least 1")
        if not 1 <= page_size <= MAX_PAGE_SIZE:
            raise ValidationError("page_size", f"must be between 1 and {MAX_PAGE_SIZE}")

        currency = currency.upper() if currency else None

        items = await self.payment_repository.list_by_user(
            user_id,
            status=status,
            currency=currency,
            limit=page_size,
            offset=(page - 1) * page_size,
        )
        total = await self.payment_repository.count_by_user(
            user_id, status=status, currency=currency
        )
        return PaymentPage(items=items, total=total, page=page, page_size=page_size)
