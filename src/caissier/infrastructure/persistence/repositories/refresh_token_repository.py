"""
Refresh token repository implementation using SQLAlchemy.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from caissier.domain.entities.refresh_session import RefreshSession
from caissier.domain.exceptions import DuplicateEntityError
from caissier.domain.repositories.i_refresh_token_repository import (
    IRefreshTokenRepository,
)
from caissier.infrastructure.persistence.models import RefreshTokenModel


class RefreshTokenRepository(IRefreshTokenRepository):
    """SQLAlchemy implementation of refresh token repository."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, session: RefreshSession) -> RefreshSession:
        model = RefreshTokenModel(
            id=session.id,
            user_id=session.user_id,
            token_hash=session.token_hash,
            expires_at=session.expires_at,
            created_at=session.created_at,
        )

        self.session.add(model)
        try:
            await self.session.flush()
        except IntegrityError:
            await self.session.rollback()
            raise DuplicateEntityError("RefreshToken", "token_hash", "<redacted>")

        return self._to_entity(model)

    async def get_by_hash(self, token_hash: str) -> Optional[RefreshSession]:
        stmt = select(RefreshTokenModel).where(
            RefreshTokenModel.token_hash == token_hash
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()

        return self._to_entity(model) if model else None

    async def delete_by_hash(self, token_hash: str) -> int:
        result = await self.session.execute(
            delete(RefreshTokenModel).where(RefreshTokenModel.token_hash == token_hash)
        )
        return result.rowcount

    async def delete_all_for_user(self, user_id: UUID) -> int:
        result = await self.session.execute(
            delete(RefreshTokenModel).where(RefreshTokenModel.user_id == user_id)
        )
        return result.rowcount

    async def delete_expired_for_user(self, user_id: UUID, now: datetime) -> int:
        result = await self.session.execute(
            delete(RefreshTokenModel).where(
                RefreshTokenModel.user_id == user_id,
                RefreshTokenModel.expires_at <= now,
            )
        )
        return result.rowcount

    def _to_entity(self, model: RefreshTokenModel) -> RefreshSession:
        return RefreshSession(
            id=model.id,
            user_id=model.user_id,
            token_hash=model.token_hash,
            expires_at=model.expires_at,
            created_at=model.created_at,
        )
