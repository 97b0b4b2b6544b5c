"""
Rate Limiting for PitchSite API
===============================
Implements rate limiting using slowapi. Storage defaults to in-process memory;
point RATE_LIMIT_STORAGE_URI at Redis to share counters between workers.

Special endpoints have their own limits:
- /login: 5 req/min (brute force protection on the shared password)
- /generate: 10 req/min (expensive AI operations)
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from fastapi import Request
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.logging_config import logger


LOGIN_LIMIT = "5/minute"
GENERATE_LIMIT = "10/minute"


def get_client_identifier(request: Request) -> str:
    """
    Rate limit key: the socket peer address.

    X-Forwarded-For is client controlled and never used here. Behind a proxy,
    run uvicorn with --proxy-headers and --forwarded-allow-ips so the peer
    address is already the real client.
    """
    return f"ip:{get_remote_address(request)}"


limiter = Limiter(
    key_func=get_client_identifier,
    default_limits=[f"{settings.RATE_LIMIT_PER_MINUTE}/minute"],
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    strategy="fixed-window",
    enabled=settings.RATE_LIMIT_ENABLED,
)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """
    Handler for rate limit exceeded errors with a Retry-After header.
    """
    logger.warning(
        f"[RateLimit] Exceeded for {get_client_identifier(request)}: {exc.detail}",
        extra={"event_type": "rate_limited", "http_path": request.url.path}
    )

    return JSONResponse(
        status_code=429,
        content={
            "error": "rate_limit_exceeded",
            "message": "Too many requests. Please slow down.",
            "detail": str(exc.detail),
            "retry_after_seconds": 60,
        },
        headers={"Retry-After": "60"}
    )


def auth_rate_limit():
    """Rate limit for the login endpoint (5/min)"""
    return limiter.limit(LOGIN_LIMIT)


def ai_operation_rate_limit():
    """Rate limit for expensive AI operations (10/min)"""
    return limiter.limit(GENERATE_LIMIT)
