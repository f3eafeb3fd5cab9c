"""API route modules."""

from src.api.routes.admission import router as admission_router
from src.api.routes.health import router as health_router

__all__ = ["admission_router", "health_router"]
