"""
Health check router.

`/health` is the liveness check: it reports status and version and
never touches the database. `/health/ready` is the readiness check:
it round-trips a trivial statement through the order store's engine.
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from backoffice.core.config import settings
from backoffice.interfaces.trading.dependencies import get_engine
from backoffice.interfaces.trading.schemas import (
    ErrorResponse,
    HealthResponse,
    ReadinessResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns application health status and version.",
)
def health_check() -> HealthResponse:
    """Return current application health status."""
    return HealthResponse(status="ok", version=settings.version)


@router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    responses={503: {"model": ErrorResponse}},
    summary="Readiness check",
    description="Returns 503 while the database cannot be reached.",
)
def readiness_check(engine: Engine = Depends(get_engine)):
    """Return whether the order store accepts connections."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.error("Readiness check failed: %s", type(exc).__name__)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"error": "Database unavailable"},
        )
    return ReadinessResponse(status="ok", version=settings.version, database="ok")
