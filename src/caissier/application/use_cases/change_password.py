"""
Change Password use case.
"""

from uuid import UUID

from caissier.domain.exceptions import (
    EntityNotFoundError,
    InvalidCredentialsError,
    ValidationError,
)
from caissier.domain.repositories.i_user_repository import IUserRepository
from caissier.domain.services.i_password_hasher import IPasswordHasher
from caissier.domain.value_objects.credentials import validate_password
from caissier.infrastructure.auth.session_token_manager import SessionTokenManager


class ChangePassword:
    """
    Replace a user's password.

    Business rules:
    - Current password must verify
    - New password must pass complexity rules and differ from the current
    - Every refresh token of the user is revoked afterwards
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        password_hasher: IPasswordHasher,
        session_token_manager: SessionTokenManager,
    ):
        self.user_repository = user_repository
        self.password_hasher = password_hasher
        self.session_token_manager = session_token_manager

    async def execute(
        self,
        user_id: UUID,
        current_password: str,
        new_password: str,
    ) -> None:
        user = await self.user_repository.get_by_id(user_id)
        if not user:
            raise EntityNotFoundError(entity_type="User", entity_id=str(user_id))

        if not self.password_hasher.verify(user.password_hash, current_password):
            raise InvalidCredentialsError()

        validate_password(new_password)
        if new_password == current_password:
            raise ValidationError(
                "new_password", "must differ from the current password"
            )

        user.change_password_hash(self.password_hasher.hash(new_password))
        await self.user_repository.update(user)
        await self.session_token_manager.revoke_all(user_id)
