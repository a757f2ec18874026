"""
Sign Up use case.
"""

from caissier.domain.entities.user import User
from caissier.domain.exceptions import DuplicateEntityError
from caissier.domain.repositories.i_user_repository import IUserRepository
from caissier.domain.services.i_password_hasher import IPasswordHasher
from caissier.domain.value_objects.credentials import (
    validate_email,
    validate_password,
    validate_phone_number,
    validate_username,
)
from caissier.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)


class SignUp:
    """
    Create a new identity.

    Business rules:
    - Username, email and phone must be well-formed and unused
    - Password must pass complexity rules; only its Argon2id hash is kept
    - Email is stored lowercased
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        password_hasher: IPasswordHasher,
    ):
        self.user_repository = user_repository
        self.password_hasher = password_hasher

    async def execute(
        self,
        username: str,
        email: str,
        phone_number: str,
        password: str,
    ) -> User:
        """
        Execute signup.

        Raises:
            ValidationError: If a field is malformed
            DuplicateEntityError: If username, email or phone is taken
        """
        # 1. Validate fields
        username = validate_username(username)
        email = validate_email(email)
        phone_number = validate_phone_number(phone_number)
        validate_password(password)

        # 2. Uniqueness (the unique indexes still decide races)
        for field, value in (
            ("username", username),
            ("email", email),
            ("phone_number", phone_number),
        ):
            if await self.user_repository.exists(field, value):
                raise DuplicateEntityError("User", field, value)

        # 3. Create
        user = await self.user_repository.create(
            User(
                username=username,
                email=email,
                phone_number=phone_number,
                password_hash=self.password_hasher.hash(password),
            )
        )

        logger.info("User signed up", extra={"user_id": str(user.id)})
        return user
