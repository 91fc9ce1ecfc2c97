"""API routers."""

from .health import router as health_router
from .notes import router as notes_router

__all__ = [
    "health_router",
    "notes_router",
]
