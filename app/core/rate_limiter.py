"""
Per-IP rate limiting using slowapi.

Fixed-window counters live in Redis when REDIS_URL is set (in-memory
otherwise). The check runs as an app-wide dependency so every route is
covered regardless of how routers are mounted. A storage outage lets
requests through instead of rejecting them.
"""

from fastapi import Request
from limits import parse
from redis.exceptions import RedisError
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import settings
from app.core.exceptions import TooManyRequestsError
from app.utils.logger import logger

DEFAULT_LIMIT = f"{settings.RATE_LIMIT_PER_MINUTE}/minute"

# one counter per client IP shared by every route
_limit_item = parse(DEFAULT_LIMIT)
_SCOPE = "portal"


def get_client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return get_remote_address(request)


limiter = Limiter(
    key_func=get_client_ip,
    default_limits=[DEFAULT_LIMIT],
    storage_uri=settings.REDIS_URL or "memory://",
    strategy="fixed-window",
    enabled=settings.RATE_LIMIT_ENABLED,
    headers_enabled=False,
)


def enforce_rate_limit(request: Request) -> None:
    if not limiter.enabled:
        return

    client_ip = get_client_ip(request)
    try:
        allowed = limiter.limiter.hit(_limit_item, _SCOPE, client_ip)
    except (RedisError, OSError) as e:
        # fail open
        logger.warning("[RateLimit] Storage unavailable, allowing %s: %s", client_ip, e)
        return

    if not allowed:
        logger.warning("[RateLimit] Exceeded for %s: %s", client_ip, DEFAULT_LIMIT)
        raise TooManyRequestsError()
