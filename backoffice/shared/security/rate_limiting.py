"""
Rate limiting configuration and setup.

Uses slowapi to enforce per-client limits. Order placement gets its
own, tighter limit since every call writes to the order store.
Limits come from settings so deployments can tune them without code.
"""

import logging

from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.requests import Request
from starlette.responses import JSONResponse

from backoffice.core.config import settings

logger = logging.getLogger(__name__)

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.rate_limit_default],
)


async def rate_limit_exceeded_handler(
    request: Request, exc: RateLimitExceeded
) -> JSONResponse:
    """Refuse a request over its limit with a 429 JSON body.

    The client address and path are logged; the body is not.
    """
    logger.warning(
        "Rate limit exceeded: client=%s path=%s limit=%s",
        get_remote_address(request),
        request.url.path,
        exc.detail,
    )
    return JSONResponse(
        status_code=429,
        content={"error": "Rate limit exceeded", "detail": str(exc.detail)},
    )
