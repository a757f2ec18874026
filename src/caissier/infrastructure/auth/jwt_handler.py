"""
JWT access token encoding and validation.

Access tokens are HMAC-signed and carry only sub, iat, exp and type.
Decoding returns a typed AccessTokenClaims; every failure becomes
InvalidTokenError.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from uuid import UUID

from jose import JWTError, jwt

from caissier.domain.exceptions.auth import InvalidTokenError

ACCESS_TOKEN_TYPE = "access"
HMAC_ALGORITHMS = ("HS256", "HS384", "HS512")


@dataclass(frozen=True)
class AccessTokenClaims:
    """Validated access token payload."""

    subject: UUID
    issued_at: datetime
    expires_at: datetime
    token_type: str = ACCESS_TOKEN_TYPE


def create_access_token(
    user_id: UUID,
    secret_key: str,
    algorithm: str = "HS256",
    expires_minutes: int = 15,
    now: datetime | None = None,
) -> str:
    """
    Create signed access token.

    Args:
        user_id: Identity the token is issued to
        secret_key: HMAC key
        algorithm: HS256, HS384 or HS512
        expires_minutes: Token lifetime
        now: Issue time (defaults to current UTC time)

    Returns:
        Encoded JWT string
    """
    if algorithm not in HMAC_ALGORITHMS:
        raise ValueError(f"Unsupported access token algorithm: {algorithm}")

    issued_at = now or datetime.now(timezone.utc)
    expires_at = issued_at + timedelta(minutes=expires_minutes)

    payload = {
        "sub": str(user_id),
        "iat": int(issued_at.timestamp()),
        "exp": int(expires_at.timestamp()),
        "type": ACCESS_TOKEN_TYPE,
    }
    return jwt.encode(payload, secret_key, algorithm=algorithm)


def decode_access_token(
    token: str,
    secret_key: str,
    algorithm: str = "HS256",
) -> AccessTokenClaims:
    """
    Decode and validate access token.

    Args:
        token: Encoded JWT
        secret_key: HMAC key
        algorithm: The only algorithm accepted

    Returns:
        AccessTokenClaims

    Raises:
        InvalidTokenError: If the header names another algorithm, the
            signature does not verify, the token is expired, or a claim
            is missing or malformed
    """
    try:
        header = jwt.get_unverified_header(token)
    except JWTError:
        raise InvalidTokenError("malformed token")

    if header.get("alg") != algorithm:
        raise InvalidTokenError(f"unexpected algorithm {header.get('alg')!r}")

    try:
        payload = jwt.decode(
            token,
            secret_key,
            algorithms=[algorithm],
            options={
                "require_sub": True,
                "require_iat": True,
                "require_exp": True,
            },
        )
    except jwt.ExpiredSignatureError:
        raise InvalidTokenError("token expired")
    except JWTError as e:
        raise InvalidTokenError(f"token rejected: {e}")

    if payload.get("type") != ACCESS_TOKEN_TYPE:
        raise InvalidTokenError("not an access token")

    try:
        return AccessTokenClaims(
            subject=UUID(payload["sub"]),
            issued_at=datetime.fromtimestamp(int(payload["iat"]), tz=timezone.utc),
            expires_at=datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc),
        )
    except (KeyError, TypeError, ValueError):
        raise InvalidTokenError("malformed claims")
