"""
Main FastAPI application entry point.

Uses Application Factory Pattern.
"""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

import uvicorn
from fastapi import FastAPI, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from caissier import __version__
from caissier.config.settings import Settings, get_settings
from caissier.di import get_container, initialize_container, shutdown_container
from caissier.domain.exceptions import CaissierException
from caissier.infrastructure.monitoring import get_logger, setup_logging
from caissier.presentation.api.middleware import (
    MetricsMiddleware,
    RequestIDMiddleware,
    caissier_exception_handler,
)
from caissier.presentation.api.routes import account, auth, payments, wallet


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Application factory - creates and configures FastAPI app.

    Args:
        settings: Optional Settings instance (for testing)

    Returns:
        Configured FastAPI application
    """
    if settings is None:
        settings = get_settings()

    # Structured logging (JSON only in production)
    json_logs = settings.ENV == "production"
    setup_logging(level=settings.LOG_LEVEL, json_logs=json_logs)
    logger = get_logger(__name__)

    logger.info(f"Creating Caissier application (ENV={settings.ENV})")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info("Starting Caissier application...")
        await initialize_container(settings)
        logger.info("Caissier application started successfully")

        yield

        logger.info("Shutting down Caissier application...")
        await shutdown_container()
        logger.info("Caissier application shutdown complete")

    app = FastAPI(
        title="Caissier API",
        description="Wallet binding and on-chain payment reconciliation",
        version=__version__,
        lifespan=lifespan,
    )

    # Middleware chain; the last one added runs first
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=1000, compresslevel=6)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    app.add_exception_handler(CaissierException, caissier_exception_handler)

    # Register routes
    app.include_router(auth.router, prefix="/api")
    app.include_router(account.router, prefix="/api")
    app.include_router(wallet.router, prefix="/api")
    app.include_router(payments.router, prefix="/api")

    @app.get("/", tags=["Health"])
    async def root():
        """Root endpoint."""
        return {
            "service": settings.APP_NAME,
            "status": "running",
            "version": __version__,
            "description": "Wallet binding and on-chain payment reconciliation",
        }

    @app.get("/health", tags=["Health"])
    async def health_check(response: Response):
        """Database health; 503 when the database is unreachable."""
        db_healthy = await get_container().database.health_check()
        if not db_healthy:
            response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

        return {
            "status": "healthy" if db_healthy else "unhealthy",
            "version": __version__,
            "components": {
                "database": {"status": "healthy" if db_healthy else "unhealthy"},
            },
            "timestamp": datetime.now().isoformat(),
        }

    if settings.METRICS_ENABLED:

        @app.get("/metrics", tags=["Monitoring"])
        async def metrics():
            """Prometheus metrics in text format."""
            return Response(
                content=generate_latest(),
                media_type=CONTENT_TYPE_LATEST,
            )

    logger.info("Caissier application created successfully")
    return app


def get_app() -> FastAPI:
    """
    Create application instance.

    For uvicorn: uvicorn caissier.main:get_app --factory
    """
    return create_app()


def main() -> None:
    """Run API server with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "caissier.main:get_app",
        factory=True,
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.API_RELOAD,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
