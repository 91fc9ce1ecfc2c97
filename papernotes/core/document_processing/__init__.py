"""
Notes pipeline package.

Exports: NotesPipeline, DocumentReference, PipelineRun, PipelineStage
"""

from .entrypoint import NotesPipeline
from .models import DocumentReference, PipelineRun, PipelineStage

__all__ = [
    "NotesPipeline",
    "DocumentReference",
    "PipelineRun",
    "PipelineStage",
]
