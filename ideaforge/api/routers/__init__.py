"""API routers."""

from ideaforge.api.routers.ai import router as ai_router
from ideaforge.api.routers.health import router as health_router

__all__ = ["ai_router", "health_router"]
