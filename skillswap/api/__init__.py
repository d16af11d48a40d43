"""
API package.
"""
from skillswap.api.routes import api_router
from skillswap.api.deps import get_current_user

__all__ = [
    "api_router",
    "get_current_user",
]
