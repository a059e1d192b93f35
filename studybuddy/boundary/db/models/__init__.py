"""
Database models package.

Exports:
  - DocumentModel, DocumentStatus: Document ORM model and status enum
  - DocumentChunkModel: Chunk ORM model

Dependencies: sqlalchemy, studybuddy.boundary.db.base
System role: Database model definitions for domain entities
"""

from studybuddy.boundary.db.models.chunk_model import DocumentChunkModel
from studybuddy.boundary.db.models.document_model import (
    ERROR_MESSAGE_MAX_LENGTH,
    DocumentModel,
    DocumentStatus,
)

__all__ = [
    "DocumentModel",
    "DocumentStatus",
    "DocumentChunkModel",
    "ERROR_MESSAGE_MAX_LENGTH",
]
