"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(): Async connection management
  - create_all_tables(), drop_all_tables(): Schema management
  - PaperModel: arxiv_papers entity
  - PaperCRUD, paper_crud: CRUD operations

Dependencies: sqlalchemy, papernotes.configs
System role: Relational store adapter for processed papers
"""

from papernotes.boundary.db.base import Base, TimestampMixin, UUIDMixin
from papernotes.boundary.db.connection import (
    get_async_engine,
    get_async_session_factory,
)
from papernotes.boundary.db.create_tables import create_all_tables, drop_all_tables
from papernotes.boundary.db.models.paper_model import PaperModel
from papernotes.boundary.db.CRUD import BaseCRUD, PaperCRUD, paper_crud

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "get_async_engine",
    "get_async_session_factory",
    "create_all_tables",
    "drop_all_tables",
    "PaperModel",
    "BaseCRUD",
    "PaperCRUD",
    "paper_crud",
]
