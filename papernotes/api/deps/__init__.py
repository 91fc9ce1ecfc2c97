"""FastAPI dependencies."""

from papernotes.api.deps.dependencies import (
    ServiceCache,
    get_notes_pipeline,
    get_service_cache,
)

__all__ = ["ServiceCache", "get_notes_pipeline", "get_service_cache"]
