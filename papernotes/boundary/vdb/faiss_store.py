"""
Local FAISS vector store for development.

Stores paper chunks in a FAISS index on disk so the pipeline can run
without PostgreSQL/pgvector.

Dependencies: langchain_community.vectorstores, langchain_core
System role: Development vector store (local testing only)
"""

import logging
from pathlib import Path

from langchain_community.vectorstores import FAISS
from langchain_core.documents import Document
from langchain_core.embeddings import Embeddings

from papernotes.boundary.vdb.vector_schemas import VectorSearchResult, to_search_results
from papernotes.core.exceptions import VectorStoreError

logger = logging.getLogger(__name__)


class FAISSStore:
    """
    Local FAISS chunk store.

    Exposes the same add/search/delete surface as PGVectorStore and
    persists the index after every write.
    """

    def __init__(
        self,
        embeddings: Embeddings,
        persist_directory: str = ".faiss_index",
        top_k: int = 5,
    ) -> None:
        """
        Initialize FAISS store, loading an existing index if present.

        Args:
            embeddings: Embedding model used for writes and queries
            persist_directory: Directory for FAISS index persistence
            top_k: Default number of search results
        """
        self._persist_dir = Path(persist_directory)
        self._persist_dir.mkdir(parents=True, exist_ok=True)
        self._embeddings = embeddings
        self._top_k = top_k

        self._index: FAISS | None = None
        self._load_or_create_index()

    def _load_or_create_index(self) -> None:
        """Load existing index or leave it empty until the first write."""
        index_path = self._persist_dir / "index.faiss"
        if index_path.exists():
            self._index = FAISS.load_local(
                str(self._persist_dir),
                self._embeddings,
                allow_dangerous_deserialization=True,
            )

    def add_chunks(self, documents: list[Document], ids: list[str]) -> list[str]:
        """
        Embed and upsert chunks.

        FAISS rejects duplicate IDs, so entries already in the index are
        removed before the new ones are added.

        Args:
            documents: Chunk documents with sanitized metadata
            ids: Deterministic chunk IDs, one per document

        Returns:
            list[str]: IDs written

        Raises:
            VectorStoreError: When the write fails
        """
        if not documents:
            return []

        try:
            if self._index is None:
                self._index = FAISS.from_documents(documents, self._embeddings, ids=ids)
            else:
                existing = [chunk_id for chunk_id in ids if chunk_id in self._index.docstore._dict]
                if existing:
                    self._index.delete(existing)
                self._index.add_documents(documents, ids=ids)

            self._index.save_local(str(self._persist_dir))
        except Exception as e:
            raise VectorStoreError(
                f"Failed to write chunks to FAISS: {e}",
                operation="upsert",
                details={"persist_directory": str(self._persist_dir)},
            ) from e

        logger.info(
            "Upserted chunks into FAISS",
            extra={"chunk_count": len(ids), "persist_directory": str(self._persist_dir)},
        )
        return list(ids)

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
        """
        if self._index is None:
            return []

        results = self._index.similarity_search_with_score(
            query,
            k=k or self._top_k,
            filter={"source": source_location} if source_location else None,
        )
        return to_search_results(results)

    def delete(self, ids: list[str]) -> None:
        """
        Delete chunks by ID.

        Args:
            ids: Chunk IDs to remove (unknown IDs are ignored)
        """
        if self._index is None:
            return

        present = [chunk_id for chunk_id in ids if chunk_id in self._index.docstore._dict]
        if present:
            self._index.delete(present)
            self._index.save_local(str(self._persist_dir))

    def count(self) -> int:
        """Number of chunks in the index."""
        if self._index is None:
            return 0
        return len(self._index.docstore._dict)
