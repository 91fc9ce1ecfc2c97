"""
CRUD operations for database models.

Usage:
    from papernotes.boundary.db.CRUD import paper_crud

    paper = await paper_crud.get_by_id(db, paper_id)
"""

from papernotes.boundary.db.CRUD.base_crud import BaseCRUD
from papernotes.boundary.db.CRUD.paper_crud import PaperCRUD, paper_crud

__all__ = [
    "BaseCRUD",
    "PaperCRUD",
    "paper_crud",
]
