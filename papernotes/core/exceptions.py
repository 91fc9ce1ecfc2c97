"""
Exception hierarchy for the paper notes service.

Provides layered exception structure for pipeline-stage and storage errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class NotesPipelineException(Exception):
    """Base exception for all paper notes errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(NotesPipelineException):
    """Raised when a required credential or URL is missing or a setting is invalid."""

    def __init__(
        self,
        message: str,
        setting: str | list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize configuration error.

        Args:
            message: Error message
            setting: Name(s) of the offending setting(s)
            details: Additional context
        """
        details = details or {}
        if setting:
            details["setting"] = setting
        super().__init__(message, details)


class DocumentProcessingError(NotesPipelineException):
    """Base exception for errors raised while preparing or reading a paper."""

    def __init__(
        self,
        message: str,
        source_location: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize document processing error.

        Args:
            message: Error message
            source_location: URL of the paper being processed
            details: Additional context
        """
        details = details or {}
        if source_location:
            details["source_location"] = source_location
        self.source_location = source_location
        super().__init__(message, details)


class FetchError(DocumentProcessingError):
    """Raised when the source document cannot be retrieved."""

    def __init__(
        self,
        message: str,
        source_location: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize fetch error.

        Args:
            message: Error message
            source_location: URL that was requested
            status_code: HTTP status code when a response was received
            details: Additional context
        """
        details = details or {}
        if status_code is not None:
            details["status_code"] = status_code
        self.status_code = status_code
        super().__init__(message, source_location, details)


class MalformedDocumentError(DocumentProcessingError):
    """Raised when bytes are not a readable PDF or a page index is out of range."""

    pass


class PartitioningError(DocumentProcessingError):
    """Raised when the partitioning service fails or yields no text."""

    pass


class ExtractionError(DocumentProcessingError):
    """Raised when the model gives no structured payload or an unparseable one."""

    pass


class PersistenceError(NotesPipelineException):
    """Base exception for dual-write outcomes that are not a full success."""

    def __init__(
        self,
        message: str,
        failures: dict[str, BaseException],
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize persistence error.

        Args:
            message: Error message
            failures: Failed side name mapped to its underlying error
            details: Additional context
        """
        details = details or {}
        details["failed_sides"] = sorted(failures)
        self.failures = dict(failures)
        super().__init__(message, details)

    @property
    def failed_sides(self) -> list[str]:
        """Names of the sides that failed, sorted."""
        return sorted(self.failures)


class PartialPersistenceFailure(PersistenceError):
    """Raised when exactly one of the two persistence writes failed."""

    pass


class PersistenceFailure(PersistenceError):
    """Raised when both persistence writes failed."""

    pass


class VectorStoreError(NotesPipelineException):
    """Raised when vector store operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (upsert, query, delete)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class DatabaseError(NotesPipelineException):
    """Raised when relational store operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)
