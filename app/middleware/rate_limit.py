"""
Rate limiting middleware (SlowAPI).

One default limit applies to every route, keyed by client address
(first hop of X-Forwarded-For when behind a proxy). Configure with
RATE_LIMIT_ENABLED / RATE_LIMIT_DEFAULT.
"""
import logging

from fastapi import FastAPI, Request
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from app.core.config import settings
from app.core.errors import rate_limit_exception_handler

logger = logging.getLogger(__name__)


def get_client_identifier(request: Request) -> str:
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        # First IP in the chain is the original client
        return forwarded_for.split(",")[0].strip()
    return get_remote_address(request)


limiter = Limiter(
    key_func=get_client_identifier,
    default_limits=[settings.RATE_LIMIT_DEFAULT],
    enabled=settings.RATE_LIMIT_ENABLED,
)


def setup_rate_limiting(app: FastAPI, app_limiter: Limiter = limiter) -> None:
    app.state.limiter = app_limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exception_handler)
    app.add_middleware(SlowAPIMiddleware)
    logger.info(
        "Rate limiting %s (%s)",
        "enabled" if app_limiter.enabled else "disabled",
        settings.RATE_LIMIT_DEFAULT,
    )
