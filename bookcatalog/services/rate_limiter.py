"""
Rate Limiting Service

Per-client request limits using slowapi. Routes pick one of three tiers
from settings:

    rate_limit_default  reads                     (100/minute)
    rate_limit_write    creates/updates/deletes   (30/minute)
    rate_limit_auth     register and login        (10/minute)

Counters live in process memory unless RATE_LIMIT_STORAGE_URI names a shared
store such as redis://, which several workers need.
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from bookcatalog.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

RETRY_AFTER_SECONDS = 60


def get_client_ip(request: Request) -> str:
    """
    Identify the client for rate limiting.

    Proxy headers win over the socket address; for X-Forwarded-For the
    left-most entry is the original client.
    """
    forwarded_for = request.headers.get("X-Forwarded-For", "")
    client = forwarded_for.split(",")[0].strip()
    if client:
        return client

    real_ip = request.headers.get("X-Real-IP", "").strip()
    return real_ip or get_remote_address(request)


def create_limiter() -> Limiter:
    limiter = Limiter(
        key_func=get_client_ip,
        default_limits=[settings.rate_limit_default],
        storage_uri=settings.rate_limit_storage_uri,
        enabled=settings.rate_limit_enabled,
    )
    if settings.rate_limit_enabled:
        logger.info(
            f"Rate limiting on ({settings.rate_limit_storage_uri}): "
            f"read={settings.rate_limit_default}, write={settings.rate_limit_write}, "
            f"auth={settings.rate_limit_auth}"
        )
    else:
        logger.info("Rate limiting disabled")
    return limiter


limiter = create_limiter()


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Answer 429 in the API's usual {"detail": ...} error shape."""
    logger.warning(f"Rate limit hit by {get_client_ip(request)} on {request.url.path}: {exc.detail}")
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={"detail": f"Too many requests: limit is {exc.detail}"},
        headers={"Retry-After": str(RETRY_AFTER_SECONDS)},
    )
