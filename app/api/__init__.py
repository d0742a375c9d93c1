# API endpoints and routers

from .auth_endpoints import router as auth_router
from .content_endpoints import router as content_router
from .health_endpoints import router as health_router
from .users_endpoints import router as users_router

__all__ = [
    "auth_router",
    "content_router",
    "health_router",
    "users_router",
]
