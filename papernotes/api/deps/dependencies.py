"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: papernotes.configs, papernotes.core.document_processing
System role: DI container for service injection
"""

from fastapi import HTTPException, status

from papernotes.configs import Settings, get_settings
from papernotes.core.document_processing.entrypoint import NotesPipeline
from papernotes.core.exceptions import ConfigurationError


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings
        self._notes_pipeline: NotesPipeline | None = None

    @property
    def settings(self) -> Settings:
        """Get settings (application settings unless given explicitly)."""
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def notes_pipeline(self) -> NotesPipeline:
        """
        Get cached notes pipeline.

        Raises:
            ConfigurationError: Required settings are missing
        """
        if self._notes_pipeline is None:
            self._notes_pipeline = NotesPipeline(self.settings)
        return self._notes_pipeline

    def clear(self) -> None:
        """Clear all cached instances."""
        self._notes_pipeline = None

    async def aclose(self) -> None:
        """Release pipeline resources (database pool) and clear the cache."""
        if self._notes_pipeline is not None:
            await self._notes_pipeline.close()
        self.clear()


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_notes_pipeline() -> NotesPipeline:
    """
    Get the notes pipeline for a request.

    Returns:
        NotesPipeline: Cached pipeline

    Raises:
        HTTPException(500): Service is missing required configuration
    """
    try:
        return get_service_cache().notes_pipeline
    except ConfigurationError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": type(e).__name__, "message": e.message, "details": e.details},
        ) from e
