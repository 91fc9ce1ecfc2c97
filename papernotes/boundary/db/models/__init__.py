"""
Database models package.

Exports:
  - PaperModel: arxiv_papers ORM model

Dependencies: sqlalchemy, papernotes.boundary.db.base
System role: Database model definitions for domain entities
"""

from papernotes.boundary.db.models.paper_model import PaperModel

__all__ = ["PaperModel"]
