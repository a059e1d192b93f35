"""
Document ORM model.

Represents uploaded documents with processing status and extraction output.
Tracks the ingestion lifecycle from upload to vector indexing.

Dependencies: sqlalchemy, studybuddy.boundary.db.base
System role: Document persistence for ingestion tracking
"""

import enum
import uuid

from sqlalchemy import Enum, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from studybuddy.boundary.db.base import Base, TimestampMixin, UUIDMixin

ERROR_MESSAGE_MAX_LENGTH = 2000


class DocumentStatus(str, enum.Enum):
    """
    Document processing lifecycle states.

    PENDING: Document record created, raw bytes not yet extracted
    PROCESSING: Text extracted; chunking, embedding and indexing under way
    COMPLETED: Chunk rows and index points written, ready for retrieval
    FAILED: A pipeline step failed; error_message holds the step and cause
    """

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        """True for states no transition may leave."""
        return self in (DocumentStatus.COMPLETED, DocumentStatus.FAILED)

    def can_transition_to(self, target: "DocumentStatus") -> bool:
        """Whether the state machine allows moving from this state to target."""
        return target in _ALLOWED_TRANSITIONS[self]


_ALLOWED_TRANSITIONS: dict[DocumentStatus, frozenset[DocumentStatus]] = {
    DocumentStatus.PENDING: frozenset({DocumentStatus.PROCESSING, DocumentStatus.FAILED}),
    DocumentStatus.PROCESSING: frozenset({DocumentStatus.COMPLETED, DocumentStatus.FAILED}),
    DocumentStatus.COMPLETED: frozenset(),
    DocumentStatus.FAILED: frozenset(),
}


class DocumentModel(Base, UUIDMixin, TimestampMixin):
    """
    Document ORM model tracking ingestion pipeline state.

    Lifecycle: upload (PENDING) → extraction (PROCESSING) → vector
    indexing (COMPLETED) or failure (FAILED). Only the ingestion
    orchestrator mutates status, page_count, extracted_text and
    error_message.

    Attributes:
        id: UUID primary key
        owner_id: Uploading user
        title: Display title
        file_name: Original filename
        file_url: Storage location of the raw bytes
        file_size: Size of the raw bytes
        page_count: Null until extraction succeeds
        status: Current processing state
        extracted_text: Null until extraction succeeds
        error_message: Null unless FAILED
        created_at: Upload timestamp (UTC)
        updated_at: Last change timestamp (UTC)

    Relationships:
        chunks: DocumentChunkModel rows (ON DELETE CASCADE, never lazy-loaded)
    """

    __tablename__ = "documents"

    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        nullable=False,
        index=True,
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    file_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        doc="Original filename",
    )

    file_url: Mapped[str] = mapped_column(
        String(1024),
        nullable=False,
        doc="Blob URL for the raw document",
    )

    file_size: Mapped[int] = mapped_column(Integer, nullable=False)

    page_count: Mapped[int | None] = mapped_column(Integer, nullable=True)

    status: Mapped[DocumentStatus] = mapped_column(
        Enum(
            DocumentStatus,
            native_enum=False,
            length=16,
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        nullable=False,
        default=DocumentStatus.PENDING,
    )

    extracted_text: Mapped[str | None] = mapped_column(Text, nullable=True)

    error_message: Mapped[str | None] = mapped_column(
        String(2048),
        nullable=True,
        doc="Failed step and cause if processing failed",
    )

    # Relationships
    chunks = relationship(
        "DocumentChunkModel",
        back_populates="document",
        passive_deletes=True,
        lazy="raise",
    )
