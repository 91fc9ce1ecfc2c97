"""
Vector database boundary layer.

Provides vector store clients for chunk storage and retrieval.
- PGVectorStore: Production pgvector store (langchain_postgres)
- FAISSStore: Local development store

Dependencies: langchain_postgres, langchain_community
System role: Vector store adapter for paper chunks
"""

from papernotes.boundary.vdb.vector_schemas import ChunkMetadata, VectorSearchResult
from papernotes.boundary.vdb.vector_store_factory import create_embeddings, get_vector_store

__all__ = [
    "ChunkMetadata",
    "VectorSearchResult",
    "create_embeddings",
    "get_vector_store",
]
