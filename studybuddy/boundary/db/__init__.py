"""
Database boundary layer: ORM models, CRUD operations, connection management
and the document record store.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), create_tables(): Connection management
  - DocumentModel, DocumentChunkModel: Core domain entities
  - DocumentStatus: Processing state enum with transition rules
  - document_crud, chunk_crud: CRUD operation singletons
  - DocumentRecordStore: Transaction-owning facade used by the services

Dependencies: sqlalchemy, studybuddy.configs
System role: Database adapter providing persistent storage for documents
and their chunks.
"""

from studybuddy.boundary.db.base import Base, TimestampMixin, UUIDMixin
from studybuddy.boundary.db.connection import (
    create_tables,
    get_async_engine,
    get_async_session_factory,
)
from studybuddy.boundary.db.CRUD import (
    BaseCRUD,
    ChunkCRUD,
    DocumentCRUD,
    chunk_crud,
    document_crud,
)
from studybuddy.boundary.db.document_store import DocumentRecordStore
from studybuddy.boundary.db.models import DocumentChunkModel, DocumentModel, DocumentStatus

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    # Connection
    "get_async_engine",
    "get_async_session_factory",
    "create_tables",
    # Models
    "DocumentModel",
    "DocumentChunkModel",
    "DocumentStatus",
    # CRUD
    "BaseCRUD",
    "DocumentCRUD",
    "ChunkCRUD",
    "document_crud",
    "chunk_crud",
    # Store
    "DocumentRecordStore",
]
