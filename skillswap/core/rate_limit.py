"""
Rate limiting configuration using slowapi.

Uses Redis as the backend so limits are shared across workers.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from skillswap.core.config import settings


def _get_user_or_ip(request: Request) -> str:
    """
    Rate-limit key: authenticated user ID if available, otherwise client IP.
    """
    user = getattr(request.state, "current_user", None)
    if user is not None and hasattr(user, "id"):
        return str(user.id)
    return get_remote_address(request)


limiter = Limiter(
    key_func=_get_user_or_ip,
    storage_uri=settings.limiter_storage_uri,
    strategy="fixed-window",
    enabled=settings.rate_limit_enabled,
)

# Rate limit strings for route decorators:
#   @limiter.limit(RATE_AUTH)
RATE_AUTH = "5/minute"              # login, register
RATE_CONNECTION_REQUEST = "20/hour"  # outgoing connection requests
RATE_MESSAGE = "60/minute"           # chat messages
