"""
Vector store upload task.

Embeds paper chunks and upserts them into the vector store with
deterministic IDs and a small fixed set of metadata fields.

Dependencies: langchain_core, papernotes.boundary.vdb
System role: Vector side of the persistence stage
"""

import asyncio
import hashlib
import logging
from typing import Protocol

from langchain_core.documents import Document

from papernotes.core.document_processing.models import DocumentReference, TextChunk
from papernotes.core.exceptions import VectorStoreError

logger = logging.getLogger(__name__)


class ChunkStore(Protocol):
    """Write surface shared by PGVectorStore and FAISSStore."""

    def add_chunks(self, documents: list[Document], ids: list[str]) -> list[str]: ...


def generate_chunk_id(source_location: str, start_index: int, content: str) -> str:
    """
    Generate deterministic chunk ID.

    Args:
        source_location: Paper URL
        start_index: Chunk offset in the full text
        content: Chunk text

    Returns:
        str: SHA-256 hash prefix (16 chars)
    """
    hash_input = f"{source_location}:{start_index}:{content}"
    return hashlib.sha256(hash_input.encode()).hexdigest()[:16]


class VectorStoreTask:
    """Embed and upsert chunks for one paper."""

    def __init__(self, vector_store: ChunkStore) -> None:
        """
        Initialize vector store task.

        Args:
            vector_store: Store from get_vector_store()
        """
        self._vector_store = vector_store

    def _sanitize_metadata(
        self,
        chunk: TextChunk,
        document: DocumentReference,
        chunk_id: str,
    ) -> dict:
        """
        Keep only the fields used to find and filter chunks.

        Partitioner metadata (coordinates, file names, element IDs) is
        dropped.

        Args:
            chunk: Chunk being stored
            document: Paper the chunk belongs to
            chunk_id: Generated chunk ID

        Returns:
            dict: Sanitized metadata
        """
        return {
            "source": document.source_location,
            "name": document.display_name,
            "chunk_id": chunk_id,
            "chunk_index": chunk.metadata.get("chunk_index", 0),
            "start_index": chunk.metadata.get("start_index", 0),
            "page": chunk.metadata.get("page"),
            "pages": list(chunk.metadata.get("pages", [])),
        }

    async def upload(
        self,
        document: DocumentReference,
        chunks: list[TextChunk],
    ) -> list[str]:
        """
        Upsert a paper's chunks.

        Args:
            document: Paper reference
            chunks: Chunks from ChunkingTask.split()

        Returns:
            list[str]: Chunk IDs written

        Raises:
            VectorStoreError: When embedding or upsert fails
        """
        if not chunks:
            return []

        ids = []
        documents = []
        for chunk in chunks:
            chunk_id = generate_chunk_id(
                document.source_location,
                chunk.metadata.get("start_index", 0),
                chunk.content,
            )
            ids.append(chunk_id)
            documents.append(
                Document(
                    page_content=chunk.content,
                    metadata=self._sanitize_metadata(chunk, document, chunk_id),
                )
            )

        try:
            written = await asyncio.to_thread(self._vector_store.add_chunks, documents, ids)
        except VectorStoreError:
            raise
        except Exception as e:
            raise VectorStoreError(
                f"Failed to upload chunks: {e}",
                operation="upsert",
                details={"source_location": document.source_location, "chunk_count": len(chunks)},
            ) from e

        logger.info(
            "Uploaded chunks",
            extra={"source_location": document.source_location, "chunk_count": len(written)},
        )
        return written
