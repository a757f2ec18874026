"""
Unit tests for JWT access token handling.
"""

import base64
import json
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from jose import jwt

from caissier.domain.exceptions import InvalidTokenError
from caissier.infrastructure.auth.jwt_handler import (
    create_access_token,
    decode_access_token,
)

SECRET = "unit-test-secret-key-0123456789abcdef"


def _b64(data: dict) -> str:
    raw = json.dumps(data, separators=(",", ":")).encode()
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode()


class TestAccessTokens:
    """Unit tests for create_access_token / decode_access_token."""

    # ============================================================
    # Round trip
    # ============================================================

    def test_claims_carry_subject_and_times(self):
        """Test that decoded claims expose subject, iat and exp."""
        user_id = uuid4()
        now = datetime.now(timezone.utc).replace(microsecond=0)

        token = create_access_token(user_id, SECRET, expires_minutes=15, now=now)
        claims = decode_access_token(token, SECRET)

        assert claims.subject == user_id
        assert claims.issued_at == now
        assert claims.expires_at == now + timedelta(minutes=15)
        assert claims.token_type == "access"

    def test_create_rejects_non_hmac_algorithm(self):
        with pytest.raises(ValueError):
            create_access_token(uuid4(), SECRET, algorithm="RS256")

    # ============================================================
    # Rejections
    # ============================================================

    def test_expired_token_rejected(self):
        """Test that a token past exp is rejected."""
        issued = datetime.now(timezone.utc) - timedelta(hours=1)
        token = create_access_token(uuid4(), SECRET, expires_minutes=15, now=issued)

        with pytest.raises(InvalidTokenError, match="expired"):
            decode_access_token(token, SECRET)

    def test_wrong_secret_rejected(self):
        token = create_access_token(uuid4(), SECRET)
        with pytest.raises(InvalidTokenError):
            decode_access_token(token, SECRET + "x")

    def test_alg_none_rejected(self):
        """Test that an unsigned token is rejected."""
        now = int(datetime.now(timezone.utc).timestamp())
        token = ".".join(
            [
                _b64({"alg": "none", "typ": "JWT"}),
                _b64(
                    {"sub": str(uuid4()), "iat": now, "exp": now + 600, "type": "access"}
                ),
                "",
            ]
        )

        with pytest.raises(InvalidTokenError, match="algorithm"):
            decode_access_token(token, SECRET)

    def test_unexpected_hmac_algorithm_rejected(self):
        """Test that HS512 is rejected when HS256 is configured."""
        token = create_access_token(uuid4(), SECRET, algorithm="HS512")

        with pytest.raises(InvalidTokenError, match="algorithm"):
            decode_access_token(token, SECRET, algorithm="HS256")

    @pytest.mark.parametrize("missing", ["sub", "iat", "exp"])
    def test_missing_claim_rejected(self, missing):
        """Test that every required claim must be present."""
        now = int(datetime.now(timezone.utc).timestamp())
        payload = {"sub": str(uuid4()), "iat": now, "exp": now + 600, "type": "access"}
        del payload[missing]
        token = jwt.encode(payload, SECRET, algorithm="HS256")

        with pytest.raises(InvalidTokenError):
            decode_access_token(token, SECRET)

    def test_non_access_type_rejected(self):
        now = int(datetime.now(timezone.utc).timestamp())
        token = jwt.encode(
            {"sub": str(uuid4()), "iat": now, "exp": now + 600, "type": "refresh"},
            SECRET,
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError, match="access"):
            decode_access_token(token, SECRET)

    def test_non_uuid_subject_rejected(self):
        now = int(datetime.now(timezone.utc).timestamp())
        token = jwt.encode(
            {"sub": "alice", "iat": now, "exp": now + 600, "type": "access"},
            SECRET,
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError, match="claims"):
            decode_access_token(token, SECRET)

    @pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
    def test_garbage_rejected(self, token):
        with pytest.raises(InvalidTokenError):
            decode_access_token(token, SECRET)
