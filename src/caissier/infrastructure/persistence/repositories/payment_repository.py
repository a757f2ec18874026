"""
Payment repository implementation using SQLAlchemy.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from caissier.domain.entities.payment import Payment, PaymentStatus
from caissier.domain.exceptions import DuplicateEntityError
from caissier.domain.repositories.i_payment_repository import IPaymentRepository
from caissier.infrastructure.persistence.models import PaymentModel


class PaymentRepository(IPaymentRepository):
    """
    SQLAlchemy implementation of payment repository.

    Amounts and gas prices are stored as decimal-digit strings and
    converted back to int on load.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def create(self, payment: Payment) -> Payment:
        """
        Insert a payment.

        The unique index on transaction_hash is the arbiter when two
        submissions of the same transaction race.

        Raises:
            DuplicateEntityError: If transaction_hash already exists
        """
        model = PaymentModel(
            id=payment.id,
            user_id=payment.user_id,
            from_address=payment.from_address,
            to_address=payment.to_address,
            amount=str(payment.amount),
            currency=payment.currency,
            transaction_hash=payment.transaction_hash,
            block_number=payment.block_number,
            gas_used=payment.gas_used,
            gas_price=_int_to_str(payment.gas_price),
            status=payment.status.value,
            description=payment.description,
            created_at=payment.created_at,
            updated_at=payment.updated_at,
            confirmed_at=payment.confirmed_at,
        )

        self.session.add(model)
        try:
            await self.session.flush()
        except IntegrityError:
            await self.session.rollback()
            raise DuplicateEntityError(
                "Payment", "transaction_hash", payment.transaction_hash
            )

        return self._to_entity(model)

    async def get_by_id(self, payment_id: UUID) -> Optional[Payment]:
        stmt = select(PaymentModel).where(PaymentModel.id == payment_id)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()

        return self._to_entity(model) if model else None

    async def get_by_tx_hash(self, transaction_hash: str) -> Optional[Payment]:
        stmt = select(PaymentModel).where(
            PaymentModel.transaction_hash == transaction_hash
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()

        return self._to_entity(model) if model else None

    async def update_status(
        self,
        payment: Payment,
        expected_status: PaymentStatus,
    ) -> bool:
        """
        Compare-and-set status update.

        Returns:
            True if the row still had expected_status and was updated
        """
        stmt = (
            update(PaymentModel)
            .where(
                PaymentModel.id == payment.id,
                PaymentModel.status == expected_status.value,
            )
            .values(
                status=payment.status.value,
                block_number=payment.block_number,
                gas_used=payment.gas_used,
                gas_price=_int_to_str(payment.gas_price),
                updated_at=payment.updated_at,
                confirmed_at=payment.confirmed_at,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def list_by_user(
        self,
        user_id: UUID,
        status: Optional[PaymentStatus] = None,
        currency: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Payment]:
        stmt = self._filtered(select(PaymentModel), user_id, status, currency)
        stmt = (
            stmt.order_by(PaymentModel.created_at.desc(), PaymentModel.id.desc())
            .limit(limit)
            .offset(offset)
        )

        result = await self.session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    async def count_by_user(
        self,
        user_id: UUID,
        status: Optional[PaymentStatus] = None,
        currency: Optional[str] = None,
    ) -> int:
        stmt = self._filtered(
            select(func.count()).select_from(PaymentModel), user_id, status, currency
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def status_counts(self, user_id: UUID) -> dict[PaymentStatus, int]:
        stmt = (
            select(PaymentModel.status, func.count())
            .where(PaymentModel.user_id == user_id)
            .group_by(PaymentModel.status)
        )
        result = await self.session.execute(stmt)

        counts = {status: 0 for status in PaymentStatus}
        for status, count in result.all():
            counts[PaymentStatus(status)] = count
        return counts

    async def confirmed_amounts(self, user_id: UUID) -> list[int]:
        # Summed in Python: SQL numeric sums of strings would lose precision
        stmt = select(PaymentModel.amount).where(
            PaymentModel.user_id == user_id,
            PaymentModel.status == PaymentStatus.CONFIRMED.value,
        )
        result = await self.session.execute(stmt)
        return [int(amount) for amount in result.scalars().all()]

    @staticmethod
    def _filtered(stmt, user_id, status, currency):
        stmt = stmt.where(PaymentModel.user_id == user_id)
        if status is not None:
            stmt = stmt.where(PaymentModel.status == status.value)
        if currency is not None:
            stmt = stmt.where(PaymentModel.currency == currency)
        return stmt

    def _to_entity(self, model: PaymentModel) -> Payment:
        """Convert ORM model to domain entity."""
        return Payment(
            id=model.id,
            user_id=model.user_id,
            from_address=model.from_address,
            to_address=model.to_address,
            amount=int(model.amount),
            currency=model.currency,
            transaction_hash=model.transaction_hash,
            block_number=model.block_number,
            gas_used=model.gas_used,
            gas_price=int(model.gas_price) if model.gas_price is not None else None,
            status=PaymentStatus(model.status),
            description=model.description,
            created_at=model.created_at,
            updated_at=model.updated_at,
            confirmed_at=model.confirmed_at,
        )


def _int_to_str(value: Optional[int]) -> Optional[str]:
    return str(value) if value is not None else None
