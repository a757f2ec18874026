"""
API middleware.
"""

from caissier.presentation.api.middleware.error_handler import (
    caissier_exception_handler,
)
from caissier.presentation.api.middleware.metrics_middleware import MetricsMiddleware
from caissier.presentation.api.middleware.request_id_middleware import (
    RequestIDMiddleware,
)

__all__ = [
    "caissier_exception_handler",
    "MetricsMiddleware",
    "RequestIDMiddleware",
]
