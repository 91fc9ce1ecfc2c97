"""
Models for the notes pipeline.

Exports: DocumentReference, TextSegment, TextChunk, PersistenceResult,
PersistenceSide, PersistenceStatus, PipelineRun, PipelineStage
"""

from .document import DocumentReference, TextChunk, TextSegment
from .persistence_result import PersistenceResult, PersistenceSide, PersistenceStatus
from .pipeline_result import PipelineRun, PipelineStage

__all__ = [
    "DocumentReference",
    "TextSegment",
    "TextChunk",
    "PersistenceResult",
    "PersistenceSide",
    "PersistenceStatus",
    "PipelineRun",
    "PipelineStage",
]
