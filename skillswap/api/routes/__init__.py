"""
API Routes package.
"""
from fastapi import APIRouter

from skillswap.api.routes.auth import router as auth_router
from skillswap.api.routes.health import router as health_router
from skillswap.api.routes.users import router as users_router
from skillswap.api.routes.discover import router as discover_router
from skillswap.api.routes.connections import router as connections_router
from skillswap.api.routes.exchanges import router as exchanges_router
from skillswap.api.routes.sessions import router as sessions_router
from skillswap.api.routes.notifications import router as notifications_router
from skillswap.api.routes.chats import router as chats_router

# Main API router
api_router = APIRouter()

# Include all routers
api_router.include_router(health_router)
api_router.include_router(auth_router)
api_router.include_router(users_router)
api_router.include_router(discover_router)
api_router.include_router(connections_router)
api_router.include_router(exchanges_router)
api_router.include_router(sessions_router)
api_router.include_router(notifications_router)
api_router.include_router(chats_router)

__all__ = [
    "api_router",
    "auth_router",
    "health_router",
    "users_router",
    "discover_router",
    "connections_router",
    "exchanges_router",
    "sessions_router",
    "notifications_router",
    "chats_router",
]
