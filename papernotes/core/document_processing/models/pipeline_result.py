"""
Pipeline run model for the notes pipeline.

Represents the terminal state of one run: Persisted, or Failed carrying the
stage that failed and its cause.

Dependencies: pydantic
System role: Return type for NotesPipeline.process()
"""

import enum

from pydantic import BaseModel, ConfigDict, Field

from papernotes.core.document_processing.models.document import DocumentReference
from papernotes.core.document_processing.models.persistence_result import PersistenceResult
from papernotes.core.note_extraction.notes_schema import NoteRecord


class PipelineStage(str, enum.Enum):
    """
    Pipeline run states.

    PENDING: Run created, nothing fetched yet
    FETCHED .. NOTES_EXTRACTED: Sequential stages completed
    PERSISTED: Both writes succeeded (terminal)
    FAILED: A stage failed; failed_stage names it (terminal)
    """

    PENDING = "Pending"
    FETCHED = "Fetched"
    PRUNED = "Pruned"
    PARTITIONED = "Partitioned"
    CHUNKED = "Chunked"
    NOTES_EXTRACTED = "NotesExtracted"
    PERSISTED = "Persisted"
    FAILED = "Failed"


class PipelineRun(BaseModel):
    """Result of running one paper through the pipeline."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    document: DocumentReference
    state: PipelineStage = Field(description="Terminal state (PERSISTED or FAILED)")
    failed_stage: PipelineStage | None = Field(
        default=None,
        description="State the failing transition was heading to",
    )
    error: BaseException | None = Field(default=None, description="Cause of the failure")
    notes: list[NoteRecord] = Field(default_factory=list)
    chunk_count: int = Field(default=0, description="Number of chunks produced")
    persistence: PersistenceResult | None = Field(default=None)
    processing_time_ms: float = Field(default=0.0, description="Total processing time in milliseconds")

    @property
    def succeeded(self) -> bool:
        return self.state == PipelineStage.PERSISTED

    def raise_for_failure(self) -> None:
        """
        Re-raise the recorded failure cause.

        Raises:
            Exception: Whatever stopped the run
        """
        if self.error is not None:
            raise self.error
