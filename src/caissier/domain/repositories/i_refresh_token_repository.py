"""
Refresh token repository interface.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from caissier.domain.entities.refresh_session import RefreshSession


class IRefreshTokenRepository(ABC):
    """Persistence port for hashed refresh tokens."""

    @abstractmethod
    async def create(self, session: RefreshSession) -> RefreshSession:
        """
        Store a refresh token hash.

        Raises:
            DuplicateEntityError: If the hash already exists
        """

    @abstractmethod
    async def get_by_hash(self, token_hash: str) -> Optional[RefreshSession]:
        """Look up a session by token hash."""

    @abstractmethod
    async def delete_by_hash(self, token_hash: str) -> int:
        """Delete a session by token hash and return the affected count."""

    @abstractmethod
    async def delete_all_for_user(self, user_id: UUID) -> int:
        """Delete every session of a user and return the affected count."""

    @abstractmethod
    async def delete_expired_for_user(self, user_id: UUID, now: datetime) -> int:
        """Delete a user's sessions that expired before now."""
