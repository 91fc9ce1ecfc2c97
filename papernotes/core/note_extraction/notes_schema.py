"""
Note record schemas.

Defines the validated note shape produced by the extractor and the
(de)serialization used for the relational notes column.

Dependencies: pydantic
System role: Note extraction output schema
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt, TypeAdapter, field_validator


class NoteRecord(BaseModel):
    """Single analytical note about a paper."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    text: str = Field(description="The note itself")
    page_numbers: list[StrictInt] = Field(
        default_factory=list,
        alias="pageNumbers",
        description="Page number(s) the note refers to, possibly empty",
    )

    @field_validator("text")
    @classmethod
    def _text_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("note text must not be blank")
        return value


NOTE_LIST_ADAPTER = TypeAdapter(list[NoteRecord])


def serialize_notes(notes: list[NoteRecord]) -> list[dict[str, Any]]:
    """Dump notes as JSON-ready dicts keyed by their wire names."""
    return [note.model_dump(by_alias=True) for note in notes]


def deserialize_notes(raw: list[dict[str, Any]] | None) -> list[NoteRecord]:
    """Validate stored note dicts back into NoteRecords."""
    return NOTE_LIST_ADAPTER.validate_python(raw or [])
