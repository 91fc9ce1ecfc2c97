"""
Tests for PartitioningTask.

The Unstructured loader is replaced through the loader_factory hook.
"""

import time
from unittest.mock import MagicMock

import pytest
from langchain_core.documents import Document

from papernotes.configs.partitioning import PartitioningSettings
from papernotes.core.document_processing.tasks.partitioning_task import PartitioningTask
from papernotes.core.exceptions import ConfigurationError, PartitioningError


def _loader(documents=None, side_effect=None) -> MagicMock:
    loader = MagicMock()
    loader.load.return_value = documents or []
    if side_effect is not None:
        loader.load.side_effect = side_effect
    return loader


@pytest.fixture
def partitioning_settings() -> PartitioningSettings:
    return PartitioningSettings(api_key="test-key", strategy="hi_res", timeout_seconds=5.0)


class TestPartitioningTask:
    """Test segment conversion and failure mapping."""

    @pytest.mark.asyncio
    async def test_missing_api_key_fails_before_call(self) -> None:
        factory = MagicMock()
        task = PartitioningTask(PartitioningSettings(api_key=""), loader_factory=factory)

        with pytest.raises(ConfigurationError) as exc_info:
            await task.partition(b"%PDF")

        assert exc_info.value.details["setting"] == "UNSTRUCTURED_API_KEY"
        factory.assert_not_called()

    @pytest.mark.asyncio
    async def test_converts_documents_to_segments(self, partitioning_settings) -> None:
        loader = _loader(
            [
                Document(
                    page_content="Attention Is All You Need",
                    metadata={
                        "page_number": 1,
                        "category": "Title",
                        "coordinates": {"points": [[0, 0]]},
                        "languages": ["eng"],
                    },
                ),
                Document(page_content="   ", metadata={"page_number": 1}),
                Document(page_content="The Transformer ...", metadata={"page_number": 2}),
            ]
        )
        factory = MagicMock(return_value=loader)
        task = PartitioningTask(partitioning_settings, loader_factory=factory)

        segments = await task.partition(b"%PDF bytes", file_name="1706.03762.pdf")

        factory.assert_called_once_with(b"%PDF bytes", "1706.03762.pdf")
        assert [segment.content for segment in segments] == [
            "Attention Is All You Need",
            "The Transformer ...",
        ]
        assert [segment.origin_page for segment in segments] == [1, 2]
        assert segments[0].metadata == {"page_number": 1, "category": "Title"}

    @pytest.mark.asyncio
    async def test_missing_page_number_gives_none(self, partitioning_settings) -> None:
        loader = _loader([Document(page_content="text", metadata={})])
        task = PartitioningTask(partitioning_settings, loader_factory=lambda data, name: loader)

        segments = await task.partition(b"%PDF")

        assert segments[0].origin_page is None

    @pytest.mark.asyncio
    async def test_no_text_raises(self, partitioning_settings) -> None:
        loader = _loader([Document(page_content="", metadata={"page_number": 1})])
        task = PartitioningTask(partitioning_settings, loader_factory=lambda data, name: loader)

        with pytest.raises(PartitioningError, match="no text"):
            await task.partition(b"%PDF", source_location="https://example.org/doc.pdf")

    @pytest.mark.asyncio
    async def test_service_failure_raises(self, partitioning_settings) -> None:
        loader = _loader(side_effect=RuntimeError("HTTP 401 from partition API"))
        task = PartitioningTask(partitioning_settings, loader_factory=lambda data, name: loader)

        with pytest.raises(PartitioningError) as exc_info:
            await task.partition(b"%PDF", source_location="https://example.org/doc.pdf")

        assert exc_info.value.source_location == "https://example.org/doc.pdf"
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    @pytest.mark.asyncio
    async def test_timeout_raises(self) -> None:
        loader = _loader(side_effect=lambda: time.sleep(0.5) or [])
        task = PartitioningTask(
            PartitioningSettings(api_key="test-key", timeout_seconds=0.05),
            loader_factory=lambda data, name: loader,
        )

        with pytest.raises(PartitioningError, match="timed out"):
            await task.partition(b"%PDF")
