"""FastAPI application initialization and configuration."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api import health, root
from app.core.config import AppConfig, get_settings, load_policy
from app.core.error_handlers import register_exception_handlers
from app.core.logging import setup_logging
from app.core.middleware import LoggingMiddleware
from app.core.security import SecurityHeadersMiddleware
from app.models.policy import SecurityPolicy
from app.services import HealthService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    policy: SecurityPolicy = app.state.policy

    logger.info("%s starting up...", app.state.settings.service_name)
    for name, value in policy.to_header_map().items():
        logger.info("Security header %s: %s", name, value)
    logger.info("Server header: %s", policy.server_identity)

    yield

    logger.info("%s shutting down...", app.state.settings.service_name)


def create_app(
    settings: AppConfig | None = None, policy: SecurityPolicy | None = None
) -> FastAPI:
    """Build the application.

    The security policy is resolved here, so an invalid environment value
    raises :class:`~app.core.exceptions.ConfigError` before anything is served.
    """
    settings = settings or get_settings()
    setup_logging(settings)
    policy = policy or load_policy(settings)

    app = FastAPI(
        title="Secure Origin Server",
        description="Origin service that applies a configurable security header policy",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.policy = policy
    app.state.health_service = HealthService(settings.service_name)

    # Registered last so it wraps everything, including logging.
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware, policy=policy)
    register_exception_handlers(app)

    app.include_router(root.router, tags=["root"])
    app.include_router(health.router, tags=["health"])

    return app


app = create_app()


def run() -> None:
    """Run the server with uvicorn."""
    import uvicorn  # noqa: PLC0415

    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=1 if settings.debug else settings.workers,
        server_header=False,
        log_config=None,
    )


if __name__ == "__main__":
    run()
