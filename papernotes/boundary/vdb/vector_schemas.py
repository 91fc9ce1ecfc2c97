"""
Vector database schemas.

Pydantic models for chunk metadata and search results.

Dependencies: pydantic, langchain_core
System role: Type definitions for vector operations
"""

from langchain_core.documents import Document
from pydantic import BaseModel, Field


class ChunkMetadata(BaseModel):
    """
    Metadata stored with each chunk vector.

    `source` and `name` tie the chunk back to its arxiv_papers row.
    """

    source: str = Field(description="Source PDF URL")
    name: str = Field(default="", description="Paper display name")
    chunk_id: str = Field(description="Deterministic chunk identifier")
    chunk_index: int = Field(default=0, description="Position of the chunk in the paper")
    start_index: int = Field(default=0, description="Character offset in the full text")
    page: int | None = Field(default=None, description="First page the chunk covers")
    pages: list[int] = Field(default_factory=list, description="All pages the chunk covers")


class VectorSearchResult(BaseModel):
    """Single result from vector search."""

    chunk_id: str = Field(description="Chunk identifier")
    content: str = Field(description="Chunk text content")
    metadata: ChunkMetadata = Field(description="Chunk metadata")
    similarity_score: float = Field(description="Similarity score (higher is closer)")


def to_search_results(results: list[tuple[Document, float]]) -> list[VectorSearchResult]:
    """
    Convert (document, distance) pairs from a LangChain store into search results.

    Args:
        results: Scored documents, distance where lower is closer

    Returns:
        list[VectorSearchResult]: Results with similarity = 1 - distance
    """
    search_results = []
    for doc, distance in results:
        metadata = ChunkMetadata.model_validate(doc.metadata)
        search_results.append(
            VectorSearchResult(
                chunk_id=metadata.chunk_id,
                content=doc.page_content,
                metadata=metadata,
                similarity_score=float(1 - distance),
            )
        )
    return search_results
