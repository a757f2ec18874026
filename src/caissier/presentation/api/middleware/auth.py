"""
Authentication dependency for access token validation.
"""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from caissier.di.container import get_container
from caissier.di.dependencies import get_db_session, get_session_token_manager
from caissier.domain.entities.user import User
from caissier.domain.exceptions.auth import InvalidTokenError
from caissier.infrastructure.auth.session_token_manager import SessionTokenManager

# Bearer token security scheme; missing header handled below
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    session: AsyncSession = Depends(get_db_session),
    token_manager: SessionTokenManager = Depends(get_session_token_manager),
) -> User:
    """
    Resolve the authenticated user from the Bearer access token.

    Every failure (missing header, bad token, deleted user) raises an
    AuthenticationError, which the exception handler turns into one
    uniform 401. The specific reason only reaches the logs.

    Raises:
        InvalidTokenError: If not authenticated
    """
    if credentials is None:
        raise InvalidTokenError("Missing bearer token")

    claims = token_manager.validate(credentials.credentials)

    user = await get_container().get_user_repository(session).get_by_id(
        claims.subject
    )
    if not user:
        raise InvalidTokenError(f"Token subject {claims.subject} no longer exists")

    return user
