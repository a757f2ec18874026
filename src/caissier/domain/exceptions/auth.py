"""
Authentication domain exceptions.

Every subclass reaches the caller as the same 401 response; the
subclass only tells the logs what actually went wrong.
"""

from caissier.domain.exceptions.base import CaissierException


class AuthenticationError(CaissierException):
    """Base authentication error."""

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message, code="AUTHENTICATION_ERROR")


class InvalidCredentialsError(AuthenticationError):
    """Raised when login email or password is wrong."""

    def __init__(self):
        super().__init__("Invalid credentials")


class InvalidTokenError(AuthenticationError):
    """Raised when an access token is malformed, forged or expired."""

    def __init__(self, reason: str = "Invalid token"):
        self.reason = reason
        super().__init__(reason)


class RefreshTokenNotFoundError(AuthenticationError):
    """Raised when no session matches the presented refresh token."""

    def __init__(self):
        super().__init__("Refresh token not found")


class RefreshTokenExpiredError(AuthenticationError):
    """Raised when the presented refresh token is past its expiry."""

    def __init__(self):
        super().__init__("Refresh token expired")
