"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers (health and trading)
- Error handlers (centralized domain-to-HTTP mapping)
- Security middleware (headers, body size, rate limiting)
- Logging configuration
- Schema creation at startup

No business logic belongs here.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from backoffice.core.config import settings
from backoffice.infrastructure.trading.schema import create_schema
from backoffice.interfaces.health import router as health_router
from backoffice.interfaces.trading.dependencies import get_engine
from backoffice.interfaces.trading.router import router as trading_router
from backoffice.shared.errors.handlers import register_error_handlers
from backoffice.shared.logging import configure_logging
from backoffice.shared.security.headers import (
    RequestSizeLimitMiddleware,
    SecurityHeadersMiddleware,
)
from backoffice.shared.security.rate_limiting import (
    limiter,
    rate_limit_exceeded_handler,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: ensure the schema exists, dispose the engine on exit."""
    engine = app.dependency_overrides.get(get_engine, get_engine)()
    if settings.create_schema:
        create_schema(engine)
    logger.info("%s %s started", settings.project_name, settings.version)

    yield

    engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Registers routers, error handlers, and security middleware.
    This is the composition root of the application.

    Returns:
        A fully configured FastAPI application instance.
    """
    configure_logging(level=settings.log_level, sql_echo=settings.database_echo)

    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    # --- Rate Limiting ---
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # --- Security Middleware ---
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        RequestSizeLimitMiddleware, max_bytes=settings.max_request_size_bytes
    )

    # --- Error Handlers ---
    register_error_handlers(app)

    # --- Routers ---
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(trading_router, prefix="/api/v1")

    return app


app = create_app()
