"""
Centralized error handlers for FastAPI.

Maps domain error families to HTTP responses:
    not found       -> 404
    invalid input   -> 400
    no market data  -> 422
    state conflict  -> 409
No stack traces or internal details are exposed to clients.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from backoffice.domain.trading.errors import (
    EntityNotFoundError,
    InvalidOrderInputError,
    OrderStateConflictError,
    QuoteUnavailableError,
    TradingDomainError,
)

logger = logging.getLogger(__name__)

HTTP_400 = 400
HTTP_404 = 404
HTTP_409 = 409
HTTP_422 = 422
HTTP_500 = 500


def _error_response(status_code: int, error: str, detail: str | None = None) -> JSONResponse:
    """Build a consistent JSON error response."""
    body: dict[str, str | None] = {"error": error}
    if detail:
        body["detail"] = detail
    return JSONResponse(status_code=status_code, content=body)


def register_error_handlers(app: FastAPI) -> None:
    """Register all domain error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(EntityNotFoundError)
    async def handle_not_found(
        _request: Request, exc: EntityNotFoundError
    ) -> JSONResponse:
        """Handle missing user, instrument or order."""
        logger.warning("Not found: %s", exc.message)
        return _error_response(HTTP_404, "Not found", exc.message)

    @app.exception_handler(InvalidOrderInputError)
    async def handle_invalid_input(
        _request: Request, exc: InvalidOrderInputError
    ) -> JSONResponse:
        """Handle malformed or impossible order requests."""
        logger.warning("Invalid order input: %s", exc.message)
        return _error_response(HTTP_400, "Invalid order", exc.message)

    @app.exception_handler(QuoteUnavailableError)
    async def handle_quote_unavailable(
        _request: Request, exc: QuoteUnavailableError
    ) -> JSONResponse:
        """Handle MARKET orders on instruments without market data."""
        logger.warning("Quote unavailable: instrument=%d", exc.instrument_id)
        return _error_response(HTTP_422, "Market data not available", exc.message)

    @app.exception_handler(OrderStateConflictError)
    async def handle_state_conflict(
        _request: Request, exc: OrderStateConflictError
    ) -> JSONResponse:
        """Handle transitions the order's status does not allow."""
        logger.warning("Order state conflict: %s", exc.message)
        return _error_response(HTTP_409, "Order state conflict", exc.message)

    @app.exception_handler(TradingDomainError)
    async def handle_trading_domain(
        _request: Request, exc: TradingDomainError
    ) -> JSONResponse:
        """Catch-all for unhandled trading domain errors."""
        logger.error("Unhandled trading domain error: %s", exc.message)
        return _error_response(HTTP_500, "Internal server error")

    @app.exception_handler(Exception)
    async def handle_unexpected(
        _request: Request, exc: Exception
    ) -> JSONResponse:
        """Catch-all for unexpected errors. Never exposes internals."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return _error_response(HTTP_500, "Internal server error")
