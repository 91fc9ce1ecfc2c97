"""
Persistence coordinator.

Runs the relational insert and the vector upsert concurrently, waits for
both, and reports success, partial failure, or total failure. There is no
rollback: a write that succeeded stays written.

Dependencies: asyncio
System role: Final stage of the notes pipeline
"""

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

from papernotes.core.document_processing.models import (
    DocumentReference,
    PersistenceResult,
    PersistenceSide,
    TextChunk,
)
from papernotes.core.document_processing.tasks.saving_task import SavingTask
from papernotes.core.document_processing.tasks.vector_store_task import VectorStoreTask
from papernotes.core.exceptions import DatabaseError, VectorStoreError
from papernotes.core.note_extraction.notes_schema import NoteRecord

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PersistenceTask:
    """Dual write of a processed paper."""

    def __init__(
        self,
        saving_task: SavingTask,
        vector_store_task: VectorStoreTask,
        timeout_seconds: float = 120.0,
    ) -> None:
        """
        Initialize persistence coordinator.

        Args:
            saving_task: Relational side
            vector_store_task: Vector side
            timeout_seconds: Upper bound for each write
        """
        self._saving_task = saving_task
        self._vector_store_task = vector_store_task
        self._timeout_seconds = timeout_seconds

    async def _bounded(self, operation: Awaitable[T], side: PersistenceSide) -> T:
        try:
            return await asyncio.wait_for(operation, timeout=self._timeout_seconds)
        except asyncio.TimeoutError as e:
            message = f"{side.value} write timed out after {self._timeout_seconds}s"
            if side is PersistenceSide.RELATIONAL:
                raise DatabaseError(message, operation="insert") from e
            raise VectorStoreError(message, operation="upsert") from e

    async def persist(
        self,
        document: DocumentReference,
        full_text: str,
        notes: list[NoteRecord],
        chunks: list[TextChunk],
    ) -> PersistenceResult:
        """
        Write the paper row and its chunk vectors concurrently.

        Args:
            document: Paper reference
            full_text: Full paper text
            notes: Extracted notes
            chunks: Chunks to embed and upsert

        Returns:
            PersistenceResult: Combined outcome; check `.succeeded` or call
                `.raise_for_status()`

        Raises:
            asyncio.CancelledError: Caller cancelled while writes were in flight
        """
        try:
            relational_outcome, vector_outcome = await asyncio.gather(
                self._bounded(
                    self._saving_task.save(document, full_text, notes),
                    PersistenceSide.RELATIONAL,
                ),
                self._bounded(
                    self._vector_store_task.upload(document, chunks),
                    PersistenceSide.VECTOR,
                ),
                return_exceptions=True,
            )
        except asyncio.CancelledError:
            logger.error(
                "Persistence cancelled with writes in flight; outcome unresolved",
                extra={"source_location": document.source_location},
            )
            raise

        failures: dict[PersistenceSide, BaseException] = {}
        paper_id = None
        chunk_ids = None

        if isinstance(relational_outcome, BaseException):
            failures[PersistenceSide.RELATIONAL] = relational_outcome
        else:
            paper_id = relational_outcome

        if isinstance(vector_outcome, BaseException):
            failures[PersistenceSide.VECTOR] = vector_outcome
        else:
            chunk_ids = vector_outcome

        result = PersistenceResult.from_outcomes(paper_id, chunk_ids, failures)

        if result.succeeded:
            logger.info(
                "Persisted paper",
                extra={
                    "source_location": document.source_location,
                    "paper_id": str(paper_id),
                    "chunk_count": len(result.chunk_ids),
                },
            )
        else:
            logger.error(
                "Persistence %s",
                result.status.value,
                extra={
                    "source_location": document.source_location,
                    "failed_sides": [side.value for side in result.failed_sides],
                    "errors": {side.value: str(exc) for side, exc in failures.items()},
                },
            )
        return result
