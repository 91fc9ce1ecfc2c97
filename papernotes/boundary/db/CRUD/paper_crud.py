"""
Paper CRUD operations.

Creates paper rows from validated notes and looks papers up by URL.

Dependencies: sqlalchemy, papernotes.boundary.db.models.paper_model
System role: Paper persistence operations
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from papernotes.boundary.db.CRUD.base_crud import BaseCRUD
from papernotes.boundary.db.models.paper_model import PaperModel
from papernotes.core.note_extraction.notes_schema import NoteRecord, serialize_notes


class PaperCRUD(BaseCRUD[PaperModel]):
    """CRUD operations for PaperModel."""

    def __init__(self) -> None:
        """Initialize PaperCRUD with PaperModel."""
        super().__init__(PaperModel)

    async def create_paper(
        self,
        session: AsyncSession,
        arxiv_url: str,
        name: str,
        notes: list[NoteRecord],
        paper: str,
    ) -> PaperModel:
        """
        Insert one paper row.

        Args:
            session: Async database session
            arxiv_url: Source PDF URL
            name: Display name
            notes: Validated notes, stored with their wire keys
            paper: Full paper text

        Returns:
            PaperModel: Created row
        """
        return await self.create(
            session,
            arxiv_url=arxiv_url,
            name=name,
            notes=serialize_notes(notes),
            paper=paper,
        )

    async def get_by_url(
        self,
        session: AsyncSession,
        arxiv_url: str,
    ) -> Sequence[PaperModel]:
        """
        Retrieve every row recorded for a URL, newest first.

        Args:
            session: Async database session
            arxiv_url: Source PDF URL

        Returns:
            Sequence of PaperModels (one per pipeline run)
        """
        stmt = (
            select(PaperModel)
            .where(PaperModel.arxiv_url == arxiv_url)
            .order_by(PaperModel.created_at.desc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()


paper_crud = PaperCRUD()
