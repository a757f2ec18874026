"""
Authentication API schemas.
"""

from pydantic import BaseModel, Field

from caissier.infrastructure.auth.session_token_manager import TokenPair

# ================================================================
# Signup Schemas
# ================================================================


class SignUpRequest(BaseModel):
    """Request to create an account."""

    username: str = Field(..., description="3-20 letters, digits or underscores")
    email: str = Field(..., max_length=254, description="Email address")
    phone_number: str = Field(..., description="10-digit phone number")
    password: str = Field(..., description="8-64 printable ASCII characters")


# ================================================================
# Login / Session Schemas
# ================================================================


class LoginRequest(BaseModel):
    """Request to log in with email and password."""

    email: str = Field(..., max_length=254, description="Email address")
    password: str = Field(..., max_length=128, description="Password")


class RefreshRequest(BaseModel):
    """Request carrying a refresh token."""

    refresh_token: str = Field(
        ...,
        min_length=1,
        max_length=256,
        description="Opaque refresh token from login",
    )


class TokenResponse(BaseModel):
    """Session credentials."""

    access_token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., description="Opaque refresh token")
    token_type: str = Field(default="bearer")
    expires_in: int = Field(..., description="Access token lifetime in seconds")

    @classmethod
    def from_token_pair(cls, pair: TokenPair) -> "TokenResponse":
        return cls(
            access_token=pair.access_token,
            refresh_token=pair.refresh_token,
            token_type=pair.token_type,
            expires_in=pair.expires_in,
        )
