"""
Document domain models for the notes pipeline.

DocumentReference is the caller's input; TextSegment is what partitioning
yields; TextChunk is a bounded window over adjacent segments.

Dependencies: pydantic
System role: Data structures flowing between pipeline stages
"""

from typing import Any
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_FILE_NAME = "paper.pdf"


class DocumentReference(BaseModel):
    """Paper to ingest: where it lives, what to call it, which pages to drop."""

    model_config = ConfigDict(frozen=True)

    source_location: str = Field(min_length=1, description="URL of the source PDF")
    display_name: str = Field(description="Human-readable paper name")
    excluded_pages: tuple[int, ...] = Field(
        default=(),
        description="1-indexed pages to remove, ascending and de-duplicated",
    )

    @field_validator("excluded_pages")
    @classmethod
    def _normalize_pages(cls, value: tuple[int, ...]) -> tuple[int, ...]:
        return tuple(sorted(set(value)))

    @property
    def file_name(self) -> str:
        """Last path segment of the source URL, used to label the upload."""
        name = urlparse(self.source_location).path.rsplit("/", 1)[-1]
        if not name:
            return DEFAULT_FILE_NAME
        if not name.lower().endswith(".pdf"):
            return f"{name}.pdf"
        return name


class TextSegment(BaseModel):
    """Unit of extracted text in reading order."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(description="Segment text")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Partitioner metadata")
    origin_page: int | None = Field(default=None, description="1-indexed page the segment came from")


class TextChunk(BaseModel):
    """Bounded, overlapping window over one or more adjacent segments."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(description="Chunk text content")
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Chunk metadata (start_index, page, pages, chunk_index, inherited fields)",
    )
