"""
Core business logic module.

Contains the exception hierarchy, the document processing pipeline and
note extraction. Pipeline classes are imported from their subpackages.
"""

from papernotes.core.exceptions import (
    ConfigurationError,
    DatabaseError,
    DocumentProcessingError,
    ExtractionError,
    FetchError,
    MalformedDocumentError,
    NotesPipelineException,
    PartialPersistenceFailure,
    PartitioningError,
    PersistenceError,
    PersistenceFailure,
    VectorStoreError,
)

__all__ = [
    "NotesPipelineException",
    "ConfigurationError",
    "DocumentProcessingError",
    "FetchError",
    "MalformedDocumentError",
    "PartitioningError",
    "ExtractionError",
    "PersistenceError",
    "PartialPersistenceFailure",
    "PersistenceFailure",
    "VectorStoreError",
    "DatabaseError",
]
