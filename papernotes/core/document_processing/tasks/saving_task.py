"""
Paper saving task.

Inserts one arxiv_papers row per run in its own session and transaction.

Dependencies: sqlalchemy, papernotes.boundary.db
System role: Relational side of the persistence stage
"""

import logging
import uuid

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from papernotes.boundary.db.CRUD.paper_crud import PaperCRUD, paper_crud
from papernotes.core.document_processing.models import DocumentReference
from papernotes.core.exceptions import DatabaseError
from papernotes.core.note_extraction.notes_schema import NoteRecord

logger = logging.getLogger(__name__)


class SavingTask:
    """Persist a paper's notes and full text to the relational store."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        crud: PaperCRUD = paper_crud,
    ) -> None:
        """
        Initialize saving task.

        Args:
            session_factory: Async session factory bound to the database
            crud: Paper CRUD operations
        """
        self._session_factory = session_factory
        self._crud = crud

    async def save(
        self,
        document: DocumentReference,
        full_text: str,
        notes: list[NoteRecord],
    ) -> uuid.UUID:
        """
        Insert one paper row.

        Args:
            document: Paper reference (URL and display name)
            full_text: Full paper text
            notes: Extracted notes

        Returns:
            uuid.UUID: ID of the new row

        Raises:
            DatabaseError: When the insert or commit fails
        """
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    paper = await self._crud.create_paper(
                        session,
                        arxiv_url=document.source_location,
                        name=document.display_name,
                        notes=notes,
                        paper=full_text,
                    )
                    paper_id = paper.id
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Failed to insert paper: {e}",
                operation="insert",
                details={"source_location": document.source_location},
            ) from e

        logger.info(
            "Saved paper",
            extra={
                "paper_id": str(paper_id),
                "source_location": document.source_location,
                "note_count": len(notes),
            },
        )
        return paper_id
