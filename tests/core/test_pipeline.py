"""
Tests for NotesPipeline orchestration.

The end-to-end scenario runs the real fetch (mock transport), pruning,
chunking, extraction parsing and relational write (SQLite); only the
partitioning service, chat model and vector store are stubbed.
"""

import asyncio
import logging
import uuid
from io import BytesIO
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from langchain_core.documents import Document
from langchain_core.messages import AIMessage
from pypdf import PdfReader
from sqlalchemy import inspect, select
from sqlalchemy.ext.asyncio import AsyncEngine

from papernotes.boundary.db import PaperModel
from papernotes.configs.database import DatabaseSettings
from papernotes.configs.partitioning import PartitioningSettings
from papernotes.core.document_processing import DocumentReference, NotesPipeline, PipelineStage
from papernotes.core.document_processing.models import PersistenceResult, PersistenceSide
from papernotes.core.document_processing.tasks import (
    DownloadTask,
    PartitioningTask,
    PersistenceTask,
    SavingTask,
    VectorStoreTask,
)
from papernotes.core.exceptions import (
    ConfigurationError,
    ExtractionError,
    FetchError,
    MalformedDocumentError,
    PartialPersistenceFailure,
    PartitioningError,
    VectorStoreError,
)
from papernotes.core.note_extraction import NoteExtractor, NoteRecord

PAPER_URL = "https://example.org/doc.pdf"
ENTRYPOINT_LOGGER = "papernotes.core.document_processing.entrypoint"


@pytest.fixture
def document() -> DocumentReference:
    return DocumentReference(source_location=PAPER_URL, display_name="Paper A", excluded_pages=[2])


@pytest.fixture
def download_task(three_page_pdf) -> DownloadTask:
    return DownloadTask(
        transport=httpx.MockTransport(lambda request: httpx.Response(200, content=three_page_pdf)),
    )


@pytest.fixture
def partition_calls() -> list[tuple[bytes, str]]:
    return []


@pytest.fixture
def partitioning_task(settings, partition_calls) -> PartitioningTask:
    def loader_factory(data: bytes, file_name: str):
        partition_calls.append((data, file_name))
        loader = MagicMock()
        loader.load.return_value = [
            Document(page_content="abcd " * 100, metadata={"page_number": 1, "category": "NarrativeText"}),
        ]
        return loader

    return PartitioningTask(settings.partitioning, loader_factory=loader_factory)


@pytest.fixture
def idle_persistence() -> MagicMock:
    persistence = MagicMock()
    persistence.persist = AsyncMock()
    return persistence


class TestEndToEnd:
    """Full run from URL to both stores."""

    @pytest.mark.asyncio
    async def test_reaches_persisted(
        self,
        settings,
        document,
        download_task,
        partitioning_task,
        partition_calls,
        mock_chat_model,
        mock_vector_store,
        session_factory,
    ) -> None:
        pipeline = NotesPipeline(
            settings,
            download_task=download_task,
            partitioning_task=partitioning_task,
            note_extractor=NoteExtractor(settings.llm, model=mock_chat_model),
            persistence_task=PersistenceTask(
                SavingTask(session_factory),
                VectorStoreTask(mock_vector_store),
            ),
        )

        run = await pipeline.process(document)

        assert run.state == PipelineStage.PERSISTED
        assert run.failed_stage is None
        assert run.notes == [NoteRecord(text="X uses Y", page_numbers=[1])]
        assert run.chunk_count >= 2

        # Page 2 was removed before partitioning
        pruned_bytes, file_name = partition_calls[0]
        assert len(PdfReader(BytesIO(pruned_bytes)).pages) == 2
        assert file_name == "doc.pdf"

        async with session_factory() as session:
            rows = (await session.execute(select(PaperModel))).scalars().all()
        assert len(rows) == 1
        assert rows[0].arxiv_url == PAPER_URL
        assert rows[0].name == "Paper A"
        assert rows[0].notes == [{"text": "X uses Y", "pageNumbers": [1]}]
        assert rows[0].id == run.persistence.paper_id

        documents, ids = mock_vector_store.add_chunks.call_args.args
        assert len(documents) == run.chunk_count
        assert all(doc.metadata["page"] == 1 for doc in documents)
        assert all(doc.metadata["source"] == PAPER_URL for doc in documents)
        assert run.persistence.chunk_ids == ids


class TestStageFailures:
    """Each failing stage ends the run at that stage."""

    @pytest.mark.asyncio
    async def test_free_text_reply_fails_at_extraction(
        self,
        settings,
        document,
        download_task,
        partitioning_task,
        idle_persistence,
    ) -> None:
        bound = MagicMock()
        bound.ainvoke = AsyncMock(return_value=AIMessage(content="Sure! Here are some notes."))
        model = MagicMock()
        model.bind_tools.return_value = bound
        pipeline = NotesPipeline(
            settings,
            download_task=download_task,
            partitioning_task=partitioning_task,
            note_extractor=NoteExtractor(settings.llm, model=model),
            persistence_task=idle_persistence,
        )

        run = await pipeline.process(document)

        assert run.state == PipelineStage.FAILED
        assert run.failed_stage == PipelineStage.NOTES_EXTRACTED
        assert isinstance(run.error, ExtractionError)
        assert run.error.message == "no structured response"
        idle_persistence.persist.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_fetch_failure(
        self,
        settings,
        document,
        partitioning_task,
        partition_calls,
        idle_persistence,
        caplog,
    ) -> None:
        pipeline = NotesPipeline(
            settings,
            download_task=DownloadTask(transport=httpx.MockTransport(lambda request: httpx.Response(404))),
            partitioning_task=partitioning_task,
            note_extractor=MagicMock(),
            persistence_task=idle_persistence,
        )

        with caplog.at_level(logging.ERROR, logger=ENTRYPOINT_LOGGER):
            run = await pipeline.process(document)

        assert run.failed_stage == PipelineStage.FETCHED
        failure_log = [record for record in caplog.records if record.name == ENTRYPOINT_LOGGER][-1]
        assert failure_log.failed_stage == "Fetched"
        assert failure_log.source_location == PAPER_URL
        assert failure_log.exc_info[0] is FetchError
        assert isinstance(run.error, FetchError)
        assert run.error.status_code == 404
        assert partition_calls == []

    @pytest.mark.asyncio
    async def test_page_out_of_range(self, settings, download_task, partitioning_task, idle_persistence) -> None:
        pipeline = NotesPipeline(
            settings,
            download_task=download_task,
            partitioning_task=partitioning_task,
            note_extractor=MagicMock(),
            persistence_task=idle_persistence,
        )
        document = DocumentReference(source_location=PAPER_URL, display_name="A", excluded_pages=[7])

        run = await pipeline.process(document)

        assert run.failed_stage == PipelineStage.PRUNED
        assert isinstance(run.error, MalformedDocumentError)

    @pytest.mark.asyncio
    async def test_zero_segments(self, settings, document, download_task, idle_persistence) -> None:
        partitioning = MagicMock()
        partitioning.partition = AsyncMock(return_value=[])
        pipeline = NotesPipeline(
            settings,
            download_task=download_task,
            partitioning_task=partitioning,
            note_extractor=MagicMock(),
            persistence_task=idle_persistence,
        )

        run = await pipeline.process(document)

        assert run.failed_stage == PipelineStage.PARTITIONED
        assert isinstance(run.error, PartitioningError)

    @pytest.mark.asyncio
    async def test_partial_persistence_fails_run(
        self,
        settings,
        document,
        download_task,
        partitioning_task,
        mock_chat_model,
    ) -> None:
        result = PersistenceResult.from_outcomes(
            uuid.uuid4(),
            None,
            {PersistenceSide.VECTOR: VectorStoreError("upsert failed")},
        )
        persistence = MagicMock()
        persistence.persist = AsyncMock(return_value=result)
        pipeline = NotesPipeline(
            settings,
            download_task=download_task,
            partitioning_task=partitioning_task,
            note_extractor=NoteExtractor(settings.llm, model=mock_chat_model),
            persistence_task=persistence,
        )

        run = await pipeline.process(document)

        assert run.state == PipelineStage.FAILED
        assert run.failed_stage == PipelineStage.PERSISTED
        assert isinstance(run.error, PartialPersistenceFailure)
        assert run.persistence is result
        assert run.notes == [NoteRecord(text="X uses Y", page_numbers=[1])]
        with pytest.raises(PartialPersistenceFailure):
            run.raise_for_failure()


class TestPipelineConstruction:
    """Configuration is checked before any I/O."""

    def test_missing_credentials_rejected(self, settings) -> None:
        settings.partitioning = PartitioningSettings(api_key="")

        with pytest.raises(ConfigurationError) as exc_info:
            NotesPipeline(settings, note_extractor=MagicMock(), persistence_task=MagicMock())

        assert exc_info.value.details["setting"] == ["UNSTRUCTURED_API_KEY"]

    def test_invalid_chunk_overlap_rejected(self, settings) -> None:
        settings.pipeline.chunk_overlap = settings.pipeline.chunk_size

        with pytest.raises(ConfigurationError):
            NotesPipeline(settings, note_extractor=MagicMock(), persistence_task=MagicMock())


class TestCancellation:
    @pytest.mark.asyncio
    async def test_cancel_propagates(self, settings, document, idle_persistence) -> None:
        started = asyncio.Event()

        async def hang(source_location):
            started.set()
            await asyncio.sleep(10)

        download = MagicMock()
        download.download = AsyncMock(side_effect=hang)
        pipeline = NotesPipeline(
            settings,
            download_task=download,
            note_extractor=MagicMock(),
            persistence_task=idle_persistence,
        )

        task = asyncio.create_task(pipeline.process(document))
        await started.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        idle_persistence.persist.assert_not_awaited()


class TestSchemaLifecycle:
    """A pipeline that builds its own engine owns the schema and the pool."""

    @pytest.fixture
    def fresh_database(self, settings, tmp_path, mock_vector_store, monkeypatch):
        settings.database = DatabaseSettings(url=f"sqlite+aiosqlite:///{tmp_path / 'papers.db'}")
        monkeypatch.setattr(
            "papernotes.core.document_processing.entrypoint.get_vector_store",
            lambda settings: mock_vector_store,
        )
        return settings

    @pytest.mark.asyncio
    async def test_initialize_creates_table_on_fresh_database(
        self,
        fresh_database,
        document,
        download_task,
        partitioning_task,
        mock_chat_model,
    ) -> None:
        pipeline = NotesPipeline(
            fresh_database,
            download_task=download_task,
            partitioning_task=partitioning_task,
            note_extractor=NoteExtractor(fresh_database.llm, model=mock_chat_model),
        )
        try:
            await pipeline.initialize()
            async with pipeline._engine.connect() as conn:
                tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())

            run = await pipeline.process(document)
        finally:
            await pipeline.close()

        assert "arxiv_papers" in tables
        assert run.state == PipelineStage.PERSISTED
        assert run.persistence.failed_sides == []

    @pytest.mark.asyncio
    async def test_close_disposes_engine_once(self, fresh_database, monkeypatch) -> None:
        pipeline = NotesPipeline(fresh_database, note_extractor=MagicMock())
        dispose = AsyncMock()
        monkeypatch.setattr(AsyncEngine, "dispose", dispose)

        await pipeline.close()
        await pipeline.close()

        dispose.assert_awaited_once()
        assert pipeline._engine is None

    @pytest.mark.asyncio
    async def test_injected_persistence_has_no_engine(self, settings, idle_persistence) -> None:
        pipeline = NotesPipeline(settings, note_extractor=MagicMock(), persistence_task=idle_persistence)

        await pipeline.initialize()
        await pipeline.close()

        assert pipeline._engine is None
