"""
User repository implementation using SQLAlchemy.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from caissier.domain.entities.user import User
from caissier.domain.exceptions import DuplicateEntityError, EntityNotFoundError
from caissier.domain.repositories.i_user_repository import IUserRepository
from caissier.infrastructure.persistence.models import (
    PaymentModel,
    RefreshTokenModel,
    UserModel,
    WalletBindingModel,
)

UNIQUE_FIELDS = ("username", "email", "phone_number")


class UserRepository(IUserRepository):
    """
    SQLAlchemy implementation of user repository.

    On a unique violation the session's transaction is rolled back and
    DuplicateEntityError names the conflicting field.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def create(self, user: User) -> User:
        model = UserModel(
            id=user.id,
            username=user.username,
            email=user.email,
            phone_number=user.phone_number,
            password_hash=user.password_hash,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

        self.session.add(model)
        try:
            await self.session.flush()
        except IntegrityError:
            await self.session.rollback()
            raise await self._duplicate_error(user)

        return self._to_entity(model)

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        stmt = select(UserModel).where(UserModel.id == user_id)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()

        return self._to_entity(model) if model else None

    async def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(UserModel).where(UserModel.email == email)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()

        return self._to_entity(model) if model else None

    async def exists(self, field: str, value: str) -> bool:
        if field not in UNIQUE_FIELDS:
            raise ValueError(f"Not a unique user field: {field}")

        stmt = select(UserModel.id).where(getattr(UserModel, field) == value)
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def update(self, user: User) -> User:
        """
        Update email and password hash.

        Raises:
            EntityNotFoundError: If user not found
            DuplicateEntityError: If the new email is already used
        """
        stmt = select(UserModel).where(UserModel.id == user.id)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise EntityNotFoundError("User", str(user.id))

        model.email = user.email
        model.password_hash = user.password_hash
        model.updated_at = user.updated_at

        try:
            await self.session.flush()
        except IntegrityError:
            await self.session.rollback()
            raise DuplicateEntityError("User", "email", user.email)

        return self._to_entity(model)

    async def delete(self, user_id: UUID) -> bool:
        """
        Delete user and everything it owns.

        Children are deleted explicitly so the cascade does not depend
        on the backend enforcing foreign keys.
        """
        user = await self.get_by_id(user_id)
        if user is None:
            return False

        await self.session.execute(
            delete(WalletBindingModel).where(
                WalletBindingModel.phone_number == user.phone_number
            )
        )
        await self.session.execute(
            delete(RefreshTokenModel).where(RefreshTokenModel.user_id == user_id)
        )
        await self.session.execute(
            delete(PaymentModel).where(PaymentModel.user_id == user_id)
        )
        result = await self.session.execute(
            delete(UserModel).where(UserModel.id == user_id)
        )
        return result.rowcount == 1

    async def _duplicate_error(self, user: User) -> DuplicateEntityError:
        """Find which unique field collided (checked after rollback)."""
        for field in UNIQUE_FIELDS:
            value = getattr(user, field)
            if await self.exists(field, value):
                return DuplicateEntityError("User", field, value)
        return DuplicateEntityError("User", "id", str(user.id))

    def _to_entity(self, model: UserModel) -> User:
        """Convert ORM model to domain entity."""
        return User(
            id=model.id,
            username=model.username,
            email=model.email,
            phone_number=model.phone_number,
            password_hash=model.password_hash,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
