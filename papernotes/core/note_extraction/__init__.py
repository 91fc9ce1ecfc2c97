"""
Note extraction module.

Exports: NoteExtractor, NoteRecord, NOTES_PROMPT, NOTES_TOOL_SCHEMA,
isolate_notes_array, parse_notes_payload, serialize_notes, deserialize_notes
"""

from .note_extractor import NoteExtractor, isolate_notes_array, parse_notes_payload
from .notes_prompt import NOTES_PROMPT, NOTES_TOOL_NAME, NOTES_TOOL_SCHEMA
from .notes_schema import NoteRecord, deserialize_notes, serialize_notes

__all__ = [
    "NoteExtractor",
    "NoteRecord",
    "NOTES_PROMPT",
    "NOTES_TOOL_NAME",
    "NOTES_TOOL_SCHEMA",
    "isolate_notes_array",
    "parse_notes_payload",
    "serialize_notes",
    "deserialize_notes",
]
