"""
Update Email use case.
"""

from uuid import UUID

from caissier.domain.entities.user import User
from caissier.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    InvalidCredentialsError,
)
from caissier.domain.repositories.i_user_repository import IUserRepository
from caissier.domain.services.i_password_hasher import IPasswordHasher
from caissier.domain.value_objects.credentials import validate_email


class UpdateEmail:
    """Change a user's email after re-verifying the password."""

    def __init__(
        self,
        user_repository: IUserRepository,
        password_hasher: IPasswordHasher,
    ):
        self.user_repository = user_repository
        self.password_hasher = password_hasher

    async def execute(self, user_id: UUID, password: str, new_email: str) -> User:
        """
        Raises:
            ValidationError: If email is malformed
            InvalidCredentialsError: If password is wrong
            DuplicateEntityError: If email is used by another user
        """
        new_email = validate_email(new_email)

        user = await self.user_repository.get_by_id(user_id)
        if not user:
            raise EntityNotFoundError(entity_type="User", entity_id=str(user_id))

        if not self.password_hasher.verify(user.password_hash, password):
            raise InvalidCredentialsError()

        if new_email == user.email:
            return user

        if await self.user_repository.exists("email", new_email):
            raise DuplicateEntityError("User", "email", new_email)

        user.change_email(new_email)
        return await self.user_repository.update(user)
