"""
Notes API models and schemas.

Request/response schemas for the take-notes endpoint. Field names on the
wire are camelCase.

Dependencies: pydantic
System role: Notes API contracts
"""

from pydantic import BaseModel, ConfigDict, Field

from papernotes.core.document_processing.models import DocumentReference
from papernotes.core.note_extraction.notes_schema import NoteRecord


class TakeNotesRequest(BaseModel):
    """Request schema for processing a paper."""

    model_config = ConfigDict(populate_by_name=True)

    paper_url: str = Field(alias="paperUrl", min_length=1, description="URL of the paper PDF")
    name: str = Field(min_length=1, description="Display name for the paper")
    pages_to_delete: list[int] = Field(
        default_factory=list,
        alias="pagesToDelete",
        description="1-indexed pages to drop before partitioning",
    )

    def to_document(self) -> DocumentReference:
        """Build the pipeline input from the request."""
        return DocumentReference(
            source_location=self.paper_url,
            display_name=self.name,
            excluded_pages=tuple(self.pages_to_delete),
        )


class NoteResponse(BaseModel):
    """Single note returned to the caller."""

    model_config = ConfigDict(populate_by_name=True)

    text: str = Field(description="The note")
    page_numbers: list[int] = Field(alias="pageNumbers", description="Pages the note refers to")

    @classmethod
    def from_record(cls, record: NoteRecord) -> "NoteResponse":
        return cls(text=record.text, page_numbers=list(record.page_numbers))
