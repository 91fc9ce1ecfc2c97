"""
Vector store factory for selecting between FAISS (dev) and pgvector (prod).

Depends on VECTOR_STORE_STORE_TYPE. Both stores expose add_chunks,
similarity_search and delete.

Dependencies: papernotes.boundary.vdb, papernotes.configs
System role: Vector store instantiation and selection
"""

import logging

from langchain_core.embeddings import Embeddings

from papernotes.boundary.vdb.embeddings_wrapper import FixedDimensionEmbeddings
from papernotes.boundary.vdb.faiss_store import FAISSStore
from papernotes.boundary.vdb.pgvector_store import PGVectorStore
from papernotes.configs import Settings, get_settings
from papernotes.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def create_embeddings(settings: Settings) -> FixedDimensionEmbeddings:
    """
    Build the embedding model from settings.

    Args:
        settings: Application settings

    Returns:
        FixedDimensionEmbeddings: Gemini embeddings with the configured dimension
    """
    return FixedDimensionEmbeddings(
        model=settings.vector_store.embedding_model,
        output_dimensionality=settings.vector_store.embedding_dimension,
        google_api_key=settings.llm.api_key or None,
    )


def get_vector_store(
    settings: Settings | None = None,
    embeddings: Embeddings | None = None,
) -> PGVectorStore | FAISSStore:
    """
    Factory function to get vector store based on configuration.

    Args:
        settings: Application settings (uses cached settings if None)
        embeddings: Embedding model override (built from settings if None)

    Returns:
        PGVectorStore or FAISSStore: Configured vector store instance

    Raises:
        ConfigurationError: If the store type is unknown
    """
    settings = settings or get_settings()
    store_type = settings.vector_store.store_type.lower()
    embeddings = embeddings or create_embeddings(settings)

    if store_type == "faiss":
        logger.info(f"{__name__}:get_vector_store - Creating FAISS vector store (local dev mode)")
        return FAISSStore(
            embeddings=embeddings,
            persist_directory=settings.vector_store.persist_directory,
            top_k=settings.vector_store.top_k,
        )

    if store_type == "pgvector":
        logger.info(f"{__name__}:get_vector_store - Creating pgvector store (production mode)")
        return PGVectorStore(
            connection=settings.database.psycopg_url,
            embeddings=embeddings,
            collection_name=settings.vector_store.collection_name,
            top_k=settings.vector_store.top_k,
        )

    raise ConfigurationError(
        f"Invalid vector store type: {store_type}. Must be 'faiss' (dev) or 'pgvector' (production).",
        setting="VECTOR_STORE_STORE_TYPE",
    )
