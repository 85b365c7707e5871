"""Version 1 API endpoints."""

from .endpoints import transfers_router, users_router

__all__ = ["transfers_router", "users_router"]
