"""
Partitioning task using the Unstructured API.

Sends PDF bytes to the Unstructured partition service through
langchain-unstructured and converts the returned elements into
TextSegments in reading order.

Dependencies: langchain_unstructured, langchain_core
System role: Third stage of the notes pipeline
"""

import asyncio
import logging
from collections.abc import Callable
from io import BytesIO
from typing import Any

from langchain_core.document_loaders import BaseLoader
from langchain_unstructured import UnstructuredLoader

from papernotes.configs.partitioning import PartitioningSettings
from papernotes.core.document_processing.models import TextSegment
from papernotes.core.exceptions import ConfigurationError, PartitioningError

logger = logging.getLogger(__name__)

LoaderFactory = Callable[[bytes, str], BaseLoader]

_SCALAR_TYPES = (str, int, float, bool)


def _scalar_metadata(metadata: dict[str, Any]) -> dict[str, Any]:
    """Keep only flat metadata values (drops coordinates, language lists, etc.)."""
    return {key: value for key, value in metadata.items() if isinstance(value, _SCALAR_TYPES)}


class PartitioningTask:
    """Partition PDF bytes into text segments via the Unstructured API."""

    def __init__(
        self,
        settings: PartitioningSettings,
        loader_factory: LoaderFactory | None = None,
    ) -> None:
        """
        Initialize partitioning task.

        Args:
            settings: Unstructured API credentials and options
            loader_factory: Builds a loader for (bytes, file name); defaults
                to an API-backed UnstructuredLoader
        """
        self._settings = settings
        self._loader_factory = loader_factory or self._create_loader

    def _create_loader(self, data: bytes, file_name: str) -> UnstructuredLoader:
        return UnstructuredLoader(
            file=BytesIO(data),
            metadata_filename=file_name,
            partition_via_api=True,
            api_key=self._settings.api_key,
            url=self._settings.api_url,
            strategy=self._settings.strategy,
        )

    async def partition(
        self,
        data: bytes,
        file_name: str = "paper.pdf",
        source_location: str | None = None,
    ) -> list[TextSegment]:
        """
        Partition a PDF into text segments.

        Args:
            data: PDF bytes
            file_name: File name reported to the service
            source_location: Paper URL, used for error context only

        Returns:
            list[TextSegment]: Non-empty segments in reading order

        Raises:
            ConfigurationError: Unstructured API key not configured (no call made)
            PartitioningError: Service failure, timeout, or no text returned
        """
        if not self._settings.api_key:
            raise ConfigurationError(
                "Unstructured API key is not configured",
                setting="UNSTRUCTURED_API_KEY",
            )

        loader = self._loader_factory(data, file_name)
        try:
            documents = await asyncio.wait_for(
                asyncio.to_thread(loader.load),
                timeout=self._settings.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise PartitioningError(
                f"Partitioning timed out after {self._settings.timeout_seconds}s",
                source_location=source_location,
            ) from e
        except Exception as e:
            raise PartitioningError(
                f"Partitioning failed: {e}",
                source_location=source_location,
                details={"strategy": self._settings.strategy},
            ) from e

        segments = []
        for doc in documents:
            if not doc.page_content or not doc.page_content.strip():
                continue
            metadata = _scalar_metadata(doc.metadata)
            page = metadata.get("page_number")
            segments.append(
                TextSegment(
                    content=doc.page_content,
                    metadata=metadata,
                    origin_page=page if isinstance(page, int) else None,
                )
            )

        if not segments:
            raise PartitioningError(
                "Partitioning returned no text",
                source_location=source_location,
                details={"element_count": len(documents)},
            )

        logger.info(
            "Partitioned document",
            extra={
                "source_location": source_location,
                "element_count": len(documents),
                "segment_count": len(segments),
            },
        )
        return segments
