"""Routers package."""
from .auth import router as auth_router
from .search import router as search_router
from .profiles import router as profiles_router
from .dashboard import router as dashboard_router

__all__ = [
    "auth_router",
    "search_router",
    "profiles_router",
    "dashboard_router",
]
