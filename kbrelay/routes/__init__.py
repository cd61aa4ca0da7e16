"""FastAPI routes package."""

from kbrelay.routes.chat import router as chat_router
from kbrelay.routes.health import router as health_router

__all__ = ["chat_router", "health_router"]
