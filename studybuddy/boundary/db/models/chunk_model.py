"""
Document chunk ORM model.

One row per word-window chunk of a document's extracted text. Rows are
immutable once written; ids match the point ids in the vector index.

Dependencies: sqlalchemy, studybuddy.boundary.db.base
System role: Chunk persistence mirrored by the vector index
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from studybuddy.boundary.db.base import Base, UUIDMixin, utc_now


class DocumentChunkModel(Base, UUIDMixin):
    """
    Chunk ORM model.

    Attributes:
        id: Chunk UUID (deterministic, shared with the vector index point)
        document_id: Parent document (ON DELETE CASCADE)
        chunk_index: Zero-based position within the document
        content: Chunk text
        token_count: Estimated token count
        created_at: Insert timestamp (UTC)

    Constraints:
        (document_id, chunk_index) is unique
    """

    __tablename__ = "document_chunks"
    __table_args__ = (
        UniqueConstraint("document_id", "chunk_index", name="uq_document_chunks_document_index"),
    )

    document_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    chunk_index: Mapped[int] = mapped_column(Integer, nullable=False)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    token_count: Mapped[int | None] = mapped_column(Integer, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )

    # Relationships
    document = relationship("DocumentModel", back_populates="chunks", lazy="raise")
