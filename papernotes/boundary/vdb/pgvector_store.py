"""
PostgreSQL pgvector store for production.

Wraps langchain_postgres PGVector over the `arxiv_embeddings` collection.
Writes upsert by chunk ID; searches retry on transient failures.

Dependencies: langchain_postgres, langchain_core, tenacity
System role: Production vector store for paper chunks
"""

import logging
from typing import Any

from langchain_core.documents import Document
from langchain_core.embeddings import Embeddings
from langchain_postgres import PGVector
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from papernotes.boundary.vdb.vector_schemas import VectorSearchResult, to_search_results
from papernotes.core.exceptions import VectorStoreError

logger = logging.getLogger(__name__)


class PGVectorStore:
    """
    pgvector-backed chunk store.

    The underlying PGVector connects and creates its tables on construction,
    so it is built lazily on first use.
    """

    def __init__(
        self,
        connection: str,
        embeddings: Embeddings,
        collection_name: str = "arxiv_embeddings",
        top_k: int = 5,
    ) -> None:
        """
        Initialize store settings.

        Args:
            connection: SQLAlchemy URL using the psycopg driver
            embeddings: Embedding model used for writes and queries
            collection_name: pgvector collection holding paper chunks
            top_k: Default number of search results
        """
        self._connection = connection
        self._embeddings = embeddings
        self._collection_name = collection_name
        self._top_k = top_k
        self._vector_store: PGVector | None = None

    def _get_vector_store(self) -> PGVector:
        """
        Get or create the PGVector instance.

        Returns:
            PGVector: Store bound to the configured collection
        """
        if self._vector_store is None:
            self._vector_store = PGVector(
                embeddings=self._embeddings,
                collection_name=self._collection_name,
                connection=self._connection,
                use_jsonb=True,
            )
        return self._vector_store

    def add_chunks(self, documents: list[Document], ids: list[str]) -> list[str]:
        """
        Embed and upsert chunks.

        Args:
            documents: Chunk documents with sanitized metadata
            ids: Deterministic chunk IDs, one per document

        Returns:
            list[str]: IDs written

        Raises:
            VectorStoreError: When the upsert fails
        """
        if not documents:
            return []

        try:
            written = self._get_vector_store().add_documents(documents, ids=ids)
        except Exception as e:
            raise VectorStoreError(
                f"Failed to upsert chunks into pgvector: {e}",
                operation="upsert",
                details={"collection": self._collection_name, "chunk_count": len(documents)},
            ) from e

        logger.info(
            "Upserted chunks into pgvector",
            extra={"collection": self._collection_name, "chunk_count": len(written)},
        )
        return written

    @retry(
        retry=retry_if_exception_type(Exception),
        stop=stop_after_attempt(5),
        wait=wait_exponential_jitter(initial=1, max=30, jitter=5),
        before_sleep=lambda retry_state: logger.warning(
            f"{__name__}:similarity_search - Retry {retry_state.attempt_number}/5"
        ),
        reraise=True,
    )
    def _search_with_retry(
        self,
        query: str,
        k: int,
        filter_dict: dict[str, Any] | None,
    ) -> list[tuple[Document, float]]:
        """Execute similarity search with retry on transient failures."""
        return self._get_vector_store().similarity_search_with_score(
            query=query,
            k=k,
            filter=filter_dict,
        )

    def similarity_search(
        self,
        query: str,
        k: int | None = None,
        source_location: str | None = None,
    ) -> list[VectorSearchResult]:
        """
        Search for chunks similar to a query.

        Args:
            query: Search query text
            k: Number of results to return (configured top_k if None)
            source_location: Restrict results to one paper URL

        Returns:
            list[VectorSearchResult]: Matches, closest first

        Raises:
            VectorStoreError: After retries are exhausted
        """
        k = k or self._top_k
        filter_dict = {"source": source_location} if source_location else None

        try:
            results = self._search_with_retry(query=query, k=k, filter_dict=filter_dict)
        except Exception as e:
            raise VectorStoreError(
                f"pgvector search failed: {e}",
                operation="query",
                details={"collection": self._collection_name},
            ) from e

        search_results = to_search_results(results)
        logger.info(
            f"{__name__}:similarity_search - Found {len(search_results)} results",
            extra={"source_location": source_location, "k": k},
        )
        return search_results

    def delete(self, ids: list[str]) -> None:
        """
        Delete chunks by ID.

        Args:
            ids: Chunk IDs to remove

        Raises:
            VectorStoreError: When deletion fails
        """
        if not ids:
            return

        try:
            self._get_vector_store().delete(ids=ids)
        except Exception as e:
            raise VectorStoreError(
                f"Failed to delete chunks from pgvector: {e}",
                operation="delete",
            ) from e
