"""
Wallet binding repository implementation using SQLAlchemy.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from caissier.domain.entities.wallet_binding import WalletBinding
from caissier.domain.exceptions import DuplicateEntityError
from caissier.domain.repositories.i_wallet_binding_repository import (
    IWalletBindingRepository,
)
from caissier.infrastructure.persistence.models import UserModel, WalletBindingModel


class WalletBindingRepository(IWalletBindingRepository):
    """SQLAlchemy implementation of wallet binding repository."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, binding: WalletBinding) -> WalletBinding:
        """
        Insert binding; the primary key on address enforces uniqueness.

        Raises:
            DuplicateEntityError: If address is already bound
        """
        model = WalletBindingModel(
            address=binding.address,
            phone_number=binding.phone_number,
            created_at=binding.created_at,
        )

        self.session.add(model)
        try:
            await self.session.flush()
        except IntegrityError:
            await self.session.rollback()
            raise DuplicateEntityError("WalletBinding", "address", binding.address)

        return self._to_entity(model)

    async def get_by_address(self, address: str) -> Optional[WalletBinding]:
        stmt = select(WalletBindingModel).where(WalletBindingModel.address == address)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()

        return self._to_entity(model) if model else None

    async def list_addresses_for_user(self, user_id: UUID) -> list[str]:
        stmt = (
            select(WalletBindingModel.address)
            .join(UserModel, UserModel.phone_number == WalletBindingModel.phone_number)
            .where(UserModel.id == user_id)
            .order_by(WalletBindingModel.created_at.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    def _to_entity(self, model: WalletBindingModel) -> WalletBinding:
        return WalletBinding(
            address=model.address,
            phone_number=model.phone_number,
            created_at=model.created_at,
        )
