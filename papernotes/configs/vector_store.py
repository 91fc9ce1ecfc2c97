"""
Vector store configuration settings.

Manages the vector collection used for paper chunks and the embedding model
that populates it.

Dependencies: pydantic, pydantic_settings
System role: Vector database configuration for chunk storage and retrieval
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from papernotes.configs.base import BaseSettings


class VectorStoreSettings(BaseSettings):
    """Vector store configuration (pgvector for prod, FAISS for local dev)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="VECTOR_STORE_",
        case_sensitive=False,
        extra="ignore",
    )

    store_type: str = Field(
        default="pgvector",
        description="Vector store type: 'pgvector' for production, 'faiss' for local dev",
    )
    collection_name: str = Field(
        default="arxiv_embeddings",
        description="pgvector collection holding paper chunks",
    )
    persist_directory: str = Field(
        default=".faiss_index",
        description="Directory for the local FAISS index",
    )

    embedding_model: str = Field(
        default="models/gemini-embedding-001",
        description="Google Gemini embedding model ID",
    )
    embedding_dimension: int = Field(
        default=1024,
        description="Embedding vector dimension (must match the pgvector column)",
    )

    top_k: int = Field(default=5, description="Number of top results to retrieve")
