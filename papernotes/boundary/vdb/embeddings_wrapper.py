"""
Google Generative AI Embeddings wrapper with fixed output dimensionality.

Wraps GoogleGenerativeAIEmbeddings so every embedding call returns vectors
of the same size, matching the pgvector column the chunks are written to.

Dependencies: langchain_google_genai
System role: Embedding dimension consistency for the vector store
"""

import logging

from langchain_google_genai import GoogleGenerativeAIEmbeddings

logger = logging.getLogger(__name__)


class FixedDimensionEmbeddings(GoogleGenerativeAIEmbeddings):
    """
    GoogleGenerativeAIEmbeddings with a fixed output dimensionality.

    The base class does not apply output_dimensionality given at
    construction, so both embed methods pass it on every call.
    """

    _output_dimensionality: int = 1024

    def __init__(
        self,
        model: str = "models/gemini-embedding-001",
        output_dimensionality: int = 1024,
        **kwargs,
    ) -> None:
        """
        Initialize embeddings with fixed output dimensionality.

        Args:
            model: Google embedding model ID
            output_dimensionality: Dimension for all embeddings
            **kwargs: Additional arguments for GoogleGenerativeAIEmbeddings
                (e.g. google_api_key)
        """
        super().__init__(model=model, **kwargs)
        self._output_dimensionality = output_dimensionality
        logger.info(
            "Initialized embeddings",
            extra={"model": model, "output_dimensionality": output_dimensionality},
        )

    def embed_documents(
        self,
        texts: list[str],
        *,
        batch_size: int = 100,
        task_type: str | None = None,
        titles: list[str] | None = None,
        output_dimensionality: int | None = None,
    ) -> list[list[float]]:
        """
        Embed chunk texts with the configured dimension.

        Args:
            texts: Texts to embed
            batch_size: Batch size for API calls
            task_type: Optional task type for embedding
            titles: Optional titles for documents
            output_dimensionality: Override dimension (uses configured if None)

        Returns:
            List of embedding vectors
        """
        dim = output_dimensionality or self._output_dimensionality
        return super().embed_documents(
            texts,
            batch_size=batch_size,
            task_type=task_type,
            titles=titles,
            output_dimensionality=dim,
        )

    def embed_query(
        self,
        text: str,
        task_type: str | None = None,
        title: str | None = None,
        output_dimensionality: int | None = None,
    ) -> list[float]:
        """
        Embed a search query with the configured dimension.

        Args:
            text: Query text to embed
            task_type: Optional task type for embedding
            title: Optional title
            output_dimensionality: Override dimension (uses configured if None)

        Returns:
            Embedding vector
        """
        dim = output_dimensionality or self._output_dimensionality
        return super().embed_query(
            text,
            task_type=task_type,
            title=title,
            output_dimensionality=dim,
        )
