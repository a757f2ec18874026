"""
User repository interface.
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from caissier.domain.entities.user import User


class IUserRepository(ABC):
    """Persistence port for user identities."""

    @abstractmethod
    async def create(self, user: User) -> User:
        """
        Persist a new user.

        Raises:
            DuplicateEntityError: If username, email or phone is taken
        """

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by id, None if absent."""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email, None if absent."""

    @abstractmethod
    async def exists(self, field: str, value: str) -> bool:
        """Check whether username, email or phone_number is already used."""

    @abstractmethod
    async def update(self, user: User) -> User:
        """
        Save email and password hash changes.

        Raises:
            EntityNotFoundError: If user does not exist
            DuplicateEntityError: If the new email is taken
        """

    @abstractmethod
    async def delete(self, user_id: UUID) -> bool:
        """
        Delete user together with its wallets, sessions and payments.

        Returns:
            True if a user row was deleted
        """
