"""
Paper ORM model.

Stores one processed paper per pipeline run: its source URL, display name,
extracted notes and full text.

Dependencies: sqlalchemy, papernotes.boundary.db.base
System role: Relational persistence for paper notes
"""

from sqlalchemy import JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from papernotes.boundary.db.base import Base, TimestampMixin, UUIDMixin


class PaperModel(Base, UUIDMixin, TimestampMixin):
    """
    Paper ORM model for the `arxiv_papers` table.

    Rows are insert-only: re-processing the same URL creates a new row.
    Chunks in the vector store refer back to a paper through their
    `source` metadata, not through a foreign key.

    Attributes:
        id: UUID primary key (auto-generated)
        arxiv_url: Source PDF URL
        name: Human-readable paper name
        notes: JSON list of {"text", "pageNumbers"} objects
        paper: Full text the notes were taken from
        created_at: Insert timestamp (UTC)
    """

    __tablename__ = "arxiv_papers"

    arxiv_url: Mapped[str] = mapped_column(
        String(2048),
        nullable=False,
        index=True,
        doc="Source PDF URL",
    )
    name: Mapped[str] = mapped_column(
        String(512),
        nullable=False,
        doc="Display name of the paper",
    )
    notes: Mapped[list] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        doc="Extracted notes as a JSON array",
    )
    paper: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        doc="Full paper text",
    )
