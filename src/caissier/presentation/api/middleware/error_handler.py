"""
Global error handling middleware.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from caissier.domain.exceptions import (
    AuthenticationError,
    CaissierException,
    ClaimMismatchError,
    InvalidCredentialsError,
    LedgerUnavailableError,
)
from caissier.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)

LEDGER_RETRY_AFTER_SECONDS = 5
UNAUTHORIZED_MESSAGE = "Not authenticated"

STATUS_CODE_MAP = {
    "ENTITY_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "DUPLICATE_ENTITY": status.HTTP_409_CONFLICT,
    "VALIDATION_ERROR": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "AUTHENTICATION_ERROR": status.HTTP_401_UNAUTHORIZED,
    "MALFORMED_SIGNATURE": status.HTTP_400_BAD_REQUEST,
    "SIGNATURE_RECOVERY_FAILED": status.HTTP_400_BAD_REQUEST,
    "WALLET_ALREADY_BOUND": status.HTTP_409_CONFLICT,
    "NO_WALLET_BOUND": status.HTTP_400_BAD_REQUEST,
    "LEDGER_UNAVAILABLE": status.HTTP_503_SERVICE_UNAVAILABLE,
    "LEDGER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "LEDGER_RPC_ERROR": status.HTTP_502_BAD_GATEWAY,
    "CLAIM_MISMATCH": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "TRANSACTION_NOT_FROM_OWNED_WALLET": status.HTTP_403_FORBIDDEN,
    "INVALID_STATUS_TRANSITION": status.HTTP_409_CONFLICT,
}


async def caissier_exception_handler(
    request: Request, exc: CaissierException
) -> JSONResponse:
    """
    Handle Caissier domain exceptions.

    Converts domain exceptions to appropriate HTTP responses.
    """
    if isinstance(exc, AuthenticationError):
        # Expired, forged and revoked all look the same to the caller
        message = (
            exc.message
            if isinstance(exc, InvalidCredentialsError)
            else UNAUTHORIZED_MESSAGE
        )
        logger.info(
            "Authentication failed",
            extra={"reason": exc.message, "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"error": "AUTHENTICATION_ERROR", "message": message},
            headers={"WWW-Authenticate": "Bearer"},
        )

    status_code = STATUS_CODE_MAP.get(
        exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    content = {"error": exc.code, "message": exc.message}
    headers = {}

    if isinstance(exc, ClaimMismatchError):
        content["field"] = exc.field
    if isinstance(exc, LedgerUnavailableError):
        headers["Retry-After"] = str(LEDGER_RETRY_AFTER_SECONDS)

    if status_code >= 500:
        logger.error(
            f"{exc.code}: {exc.message}", extra={"path": request.url.path}
        )

    return JSONResponse(status_code=status_code, content=content, headers=headers)
