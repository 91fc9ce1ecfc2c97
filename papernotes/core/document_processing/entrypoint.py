"""
Notes pipeline orchestrator.

Coordinates fetch, page pruning, partitioning, chunking, note extraction
and the dual write, and reports the run as Persisted or Failed at the
stage that broke.

Dependencies: All task modules, papernotes.configs
System role: Pipeline orchestration (coordinates only)
"""

import asyncio
import logging
import time

from sqlalchemy.ext.asyncio import AsyncEngine

from papernotes.boundary.db.connection import get_async_engine, get_async_session_factory
from papernotes.boundary.db.create_tables import create_all_tables
from papernotes.boundary.vdb.vector_store_factory import get_vector_store
from papernotes.configs import Settings
from papernotes.core.exceptions import PartitioningError
from papernotes.core.note_extraction import NoteExtractor, NoteRecord

from .models import DocumentReference, PersistenceResult, PipelineRun, PipelineStage
from .tasks import (
    ChunkingTask,
    DownloadTask,
    PagePruningTask,
    PartitioningTask,
    PersistenceTask,
    SavingTask,
    VectorStoreTask,
    join_segments,
)

logger = logging.getLogger(__name__)


class NotesPipeline:
    """Orchestrate paper ingestion: fetch -> prune -> partition -> chunk -> notes -> persist."""

    def __init__(
        self,
        settings: Settings,
        *,
        download_task: DownloadTask | None = None,
        page_pruning_task: PagePruningTask | None = None,
        partitioning_task: PartitioningTask | None = None,
        chunking_task: ChunkingTask | None = None,
        note_extractor: NoteExtractor | None = None,
        persistence_task: PersistenceTask | None = None,
    ) -> None:
        """
        Initialize pipeline from explicit settings.

        Args:
            settings: Application settings
            download_task: Fetch stage override
            page_pruning_task: Pruning stage override
            partitioning_task: Partitioning stage override
            chunking_task: Chunking stage override
            note_extractor: Extraction stage override
            persistence_task: Persistence stage override

        Raises:
            ConfigurationError: Required credentials/URLs missing or chunk sizes invalid
        """
        settings.validate_required()
        self._settings = settings
        pipeline_config = settings.pipeline

        self._download_task = download_task or DownloadTask(
            timeout_seconds=pipeline_config.fetch_timeout_seconds,
        )
        self._page_pruning_task = page_pruning_task or PagePruningTask()
        self._partitioning_task = partitioning_task or PartitioningTask(settings.partitioning)
        self._chunking_task = chunking_task or ChunkingTask(
            chunk_size=pipeline_config.chunk_size,
            chunk_overlap=pipeline_config.chunk_overlap,
        )
        self._note_extractor = note_extractor or NoteExtractor(settings.llm)
        self._engine: AsyncEngine | None = None
        self._persistence_task = persistence_task or self._build_persistence_task()

    def _build_persistence_task(self) -> PersistenceTask:
        self._engine = get_async_engine(self._settings.database)
        return PersistenceTask(
            saving_task=SavingTask(get_async_session_factory(self._engine)),
            vector_store_task=VectorStoreTask(get_vector_store(self._settings)),
            timeout_seconds=self._settings.pipeline.persistence_timeout_seconds,
        )

    async def initialize(self) -> None:
        """
        Create the relational schema when this pipeline owns its engine.

        Raises:
            SQLAlchemyError: Database unreachable or DDL failed
        """
        if self._engine is not None:
            await create_all_tables(self._engine)

    async def close(self) -> None:
        """Dispose the database engine built for this pipeline."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None

    async def process(self, document: DocumentReference) -> PipelineRun:
        """
        Run one paper through the pipeline.

        Stage failures are captured in the returned run rather than raised;
        use `run.raise_for_failure()` to re-raise. Cancellation propagates.

        Args:
            document: Paper to process

        Returns:
            PipelineRun: PERSISTED, or FAILED with failed_stage and error set
        """
        start_time = time.perf_counter()
        source = document.source_location
        stage = PipelineStage.PENDING
        notes: list[NoteRecord] = []
        chunk_count = 0
        persistence: PersistenceResult | None = None

        logger.info(
            "Starting notes pipeline",
            extra={
                "source_location": source,
                "display_name": document.display_name,
                "excluded_pages": list(document.excluded_pages),
            },
        )

        try:
            stage = PipelineStage.FETCHED
            stage_start = time.perf_counter()
            data = await self._download_task.download(source)
            self._log_stage(stage, source, stage_start)

            stage = PipelineStage.PRUNED
            stage_start = time.perf_counter()
            data = await asyncio.to_thread(
                self._page_pruning_task.prune,
                data,
                document.excluded_pages,
            )
            self._log_stage(stage, source, stage_start)

            stage = PipelineStage.PARTITIONED
            stage_start = time.perf_counter()
            segments = await self._partitioning_task.partition(
                data,
                file_name=document.file_name,
                source_location=source,
            )
            if not segments:
                raise PartitioningError("Partitioning returned no segments", source_location=source)
            self._log_stage(stage, source, stage_start)

            stage = PipelineStage.CHUNKED
            stage_start = time.perf_counter()
            full_text = join_segments(segments)
            chunks = self._chunking_task.split(segments)
            chunk_count = len(chunks)
            self._log_stage(stage, source, stage_start)

            stage = PipelineStage.NOTES_EXTRACTED
            stage_start = time.perf_counter()
            notes = await self._note_extractor.extract(full_text, source_location=source)
            self._log_stage(stage, source, stage_start)

            stage = PipelineStage.PERSISTED
            stage_start = time.perf_counter()
            persistence = await self._persistence_task.persist(document, full_text, notes, chunks)
            persistence.raise_for_status()
            self._log_stage(stage, source, stage_start)

        except Exception as e:
            logger.exception(
                f"Notes pipeline failed at {stage.value}",
                extra={
                    "source_location": source,
                    "failed_stage": stage.value,
                    "error_type": type(e).__name__,
                },
            )
            return PipelineRun(
                document=document,
                state=PipelineStage.FAILED,
                failed_stage=stage,
                error=e,
                notes=notes,
                chunk_count=chunk_count,
                persistence=persistence,
                processing_time_ms=(time.perf_counter() - start_time) * 1000,
            )

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "Notes pipeline completed",
            extra={
                "source_location": source,
                "note_count": len(notes),
                "chunk_count": chunk_count,
                "elapsed_ms": round(elapsed_ms, 2),
            },
        )
        return PipelineRun(
            document=document,
            state=PipelineStage.PERSISTED,
            notes=notes,
            chunk_count=chunk_count,
            persistence=persistence,
            processing_time_ms=elapsed_ms,
        )

    @staticmethod
    def _log_stage(stage: PipelineStage, source: str, stage_start: float) -> None:
        logger.info(
            f"Stage {stage.value} reached",
            extra={
                "source_location": source,
                "stage": stage.value,
                "elapsed_ms": round((time.perf_counter() - stage_start) * 1000, 2),
            },
        )
