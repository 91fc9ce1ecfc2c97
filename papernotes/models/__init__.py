"""API request/response models."""

from papernotes.models.notes import NoteResponse, TakeNotesRequest

__all__ = ["NoteResponse", "TakeNotesRequest"]
