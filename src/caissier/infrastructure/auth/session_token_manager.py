"""
Session token lifecycle: issue, refresh, revoke, validate.

Access tokens are short-lived JWTs. Refresh tokens are 32 random bytes
hex-encoded; the server stores only their SHA-256 digest.
"""

import hashlib
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from uuid import UUID

from caissier.domain.entities.refresh_session import RefreshSession
from caissier.domain.exceptions.auth import (
    RefreshTokenExpiredError,
    RefreshTokenNotFoundError,
)
from caissier.domain.repositories.i_refresh_token_repository import (
    IRefreshTokenRepository,
)
from caissier.infrastructure.auth.jwt_handler import (
    AccessTokenClaims,
    create_access_token,
    decode_access_token,
)
from caissier.infrastructure.monitoring import metrics
from caissier.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)

REFRESH_TOKEN_BYTES = 32


def generate_refresh_token() -> str:
    """Random opaque refresh token; carries no identity data."""
    return secrets.token_hex(REFRESH_TOKEN_BYTES)


def hash_refresh_token(refresh_token: str) -> str:
    """Fixed-length (64 hex chars) SHA-256 digest of a refresh token."""
    return hashlib.sha256(refresh_token.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class TokenPair:
    """Credentials returned by login and refresh."""

    access_token: str
    refresh_token: str
    expires_in: int
    token_type: str = "bearer"


class SessionTokenManager:
    """
    Issues and exchanges session credentials.

    Refresh token state machine:
        issued -> (refreshed)* -> revoked | expired

    With rotation enabled every refresh deletes the presented token and
    hands out a new one; a replayed token then finds no row.
    """

    def __init__(
        self,
        refresh_token_repository: IRefreshTokenRepository,
        secret_key: str,
        algorithm: str = "HS256",
        access_token_expire_minutes: int = 15,
        refresh_token_expire_days: int = 7,
        rotate_refresh_tokens: bool = True,
    ):
        """
        Initialize token manager.

        Args:
            refresh_token_repository: Store for refresh token hashes
            secret_key: HMAC key for access tokens
            algorithm: HMAC algorithm for access tokens
            access_token_expire_minutes: Access token lifetime
            refresh_token_expire_days: Refresh token lifetime
            rotate_refresh_tokens: Replace refresh token on each refresh
        """
        self.refresh_token_repository = refresh_token_repository
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.access_token_expire_minutes = access_token_expire_minutes
        self.refresh_token_expire_days = refresh_token_expire_days
        self.rotate_refresh_tokens = rotate_refresh_tokens

    async def issue(self, user_id: UUID) -> TokenPair:
        """
        Issue a new access token and refresh token for user.

        Expired sessions of the same user are purged on the way.
        """
        now = datetime.now()
        await self.refresh_token_repository.delete_expired_for_user(user_id, now)

        refresh_token = generate_refresh_token()
        await self.refresh_token_repository.create(
            RefreshSession(
                user_id=user_id,
                token_hash=hash_refresh_token(refresh_token),
                expires_at=now + timedelta(days=self.refresh_token_expire_days),
            )
        )

        metrics.session_events_total.labels(event="issued").inc()
        return TokenPair(
            access_token=self._create_access_token(user_id),
            refresh_token=refresh_token,
            expires_in=self.access_token_expire_minutes * 60,
        )

    async def refresh(self, refresh_token: str) -> TokenPair:
        """
        Exchange a refresh token for a new access token.

        Raises:
            RefreshTokenNotFoundError: Unknown, revoked or already rotated
            RefreshTokenExpiredError: Known but past expiry
        """
        token_hash = hash_refresh_token(refresh_token)
        session = await self.refresh_token_repository.get_by_hash(token_hash)

        if session is None:
            logger.info("Refresh rejected: unknown token")
            metrics.session_events_total.labels(event="refresh_not_found").inc()
            raise RefreshTokenNotFoundError()

        if session.is_expired():
            logger.info(
                "Refresh rejected: token expired",
                extra={"user_id": str(session.user_id)},
            )
            metrics.session_events_total.labels(event="refresh_expired").inc()
            raise RefreshTokenExpiredError()

        if not self.rotate_refresh_tokens:
            metrics.session_events_total.labels(event="refreshed").inc()
            return TokenPair(
                access_token=self._create_access_token(session.user_id),
                refresh_token=refresh_token,
                expires_in=self.access_token_expire_minutes * 60,
            )

        # A concurrent refresh with the same token deletes zero rows
        deleted = await self.refresh_token_repository.delete_by_hash(token_hash)
        if deleted != 1:
            logger.warning(
                "Refresh rejected: token already rotated",
                extra={"user_id": str(session.user_id)},
            )
            metrics.session_events_total.labels(event="refresh_replayed").inc()
            raise RefreshTokenNotFoundError()

        metrics.session_events_total.labels(event="rotated").inc()
        return await self.issue(session.user_id)

    async def revoke(self, refresh_token: str) -> None:
        """Revoke a refresh token; unknown tokens are ignored."""
        deleted = await self.refresh_token_repository.delete_by_hash(
            hash_refresh_token(refresh_token)
        )
        metrics.session_events_total.labels(event="revoked").inc()
        if not deleted:
            logger.debug("Revoke of unknown refresh token ignored")

    async def revoke_all(self, user_id: UUID) -> int:
        """Revoke every session of a user (password change)."""
        return await self.refresh_token_repository.delete_all_for_user(user_id)

    def validate(self, access_token: str) -> AccessTokenClaims:
        """
        Validate access token.

        Raises:
            InvalidTokenError: On any anomaly (fails closed)
        """
        return decode_access_token(
            access_token,
            secret_key=self.secret_key,
            algorithm=self.algorithm,
        )

    def _create_access_token(self, user_id: UUID) -> str:
        return create_access_token(
            user_id,
            secret_key=self.secret_key,
            algorithm=self.algorithm,
            expires_minutes=self.access_token_expire_minutes,
        )
