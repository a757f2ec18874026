"""
Delete Account use case.
"""

from uuid import UUID

from caissier.domain.exceptions import EntityNotFoundError, InvalidCredentialsError
from caissier.domain.repositories.i_user_repository import IUserRepository
from caissier.domain.services.i_password_hasher import IPasswordHasher
from caissier.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)


class DeleteAccount:
    """
    Delete a user after re-verifying the password.

    Wallet bindings, sessions and payments go with it.
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        password_hasher: IPasswordHasher,
    ):
        self.user_repository = user_repository
        self.password_hasher = password_hasher

    async def execute(self, user_id: UUID, password: str) -> None:
        user = await self.user_repository.get_by_id(user_id)
        if not user:
            raise EntityNotFoundError(entity_type="User", entity_id=str(user_id))

        if not self.password_hasher.verify(user.password_hash, password):
            raise InvalidCredentialsError()

        await self.user_repository.delete(user_id)
        logger.info("Account deleted", extra={"user_id": str(user_id)})
