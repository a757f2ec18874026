"""
Login User use case.
"""

from caissier.domain.exceptions import InvalidCredentialsError
from caissier.domain.repositories.i_user_repository import IUserRepository
from caissier.domain.services.i_password_hasher import IPasswordHasher
from caissier.infrastructure.auth.session_token_manager import (
    SessionTokenManager,
    TokenPair,
)
from caissier.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)


class LoginUser:
    """
    Authenticate by email and password and open a session.

    Unknown email and wrong password fail identically; a dummy hash
    verification keeps their timing alike.
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

    async def execute(self, email: str, password: str) -> TokenPair:
        """
        Raises:
            InvalidCredentialsError: If email or password is wrong
        """
        user = await self.user_repository.get_by_email((email or "").strip().lower())

        if user is None:
            self.password_hasher.verify_dummy(password)
            logger.info("Login failed: unknown email")
            raise InvalidCredentialsError()

        if not self.password_hasher.verify(user.password_hash, password):
            logger.info("Login failed: wrong password", extra={"user_id": str(user.id)})
            raise InvalidCredentialsError()

        logger.info("Login succeeded", extra={"user_id": str(user.id)})
        return await self.session_token_manager.issue(user.id)
