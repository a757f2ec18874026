"""
Request ID middleware for request tracking.
"""

from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from caissier.infrastructure.monitoring.logger import (
    get_request_id,
    set_request_id,
)

MAX_REQUEST_ID_LENGTH = 128


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Accept or generate X-Request-ID and echo it on the response.

    The ID is stored in a context variable so every log record of the
    request carries it.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        incoming = request.headers.get("X-Request-ID")
        if incoming and len(incoming) <= MAX_REQUEST_ID_LENGTH:
            set_request_id(incoming)
        else:
            set_request_id()

        response = await call_next(request)
        response.headers["X-Request-ID"] = get_request_id() or ""
        return response
