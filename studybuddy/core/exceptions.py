"""
Exception hierarchy for the StudyBuddy ingestion and retrieval core.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class StudyBuddyException(Exception):
    """Base exception for all StudyBuddy application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(StudyBuddyException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        self.field = field
        super().__init__(message, details)


class NotFoundOrAccessDenied(StudyBuddyException):
    """Raised when a document is missing or owned by someone else."""

    def __init__(self, document_id: Any, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["document_id"] = str(document_id)
        self.document_id = document_id
        super().__init__(f"Document not found or access denied: {document_id}", details)


class StoreError(StudyBuddyException):
    """Raised when a relational store operation fails."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if operation:
            details["operation"] = operation
        self.operation = operation
        super().__init__(message, details)


class DocumentProcessingError(StudyBuddyException):
    """Base exception for document processing errors."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize document processing error.

        Args:
            message: Error message
            document_id: ID of the document that failed
            details: Additional context
        """
        details = details or {}
        if document_id:
            details["document_id"] = document_id
        super().__init__(message, details)


class ExtractionError(DocumentProcessingError):
    """Raised when text extraction from raw bytes fails."""

    pass


class EmbeddingFailure(DocumentProcessingError):
    """Raised when the embedding service call fails for a batch."""

    pass


class VectorStoreError(StudyBuddyException):
    """Raised when vector index operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (upsert, search, delete, scroll)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        self.operation = operation
        super().__init__(message, details)


class IndexWriteFailure(VectorStoreError):
    """Raised when creating, upserting or deleting index points fails."""

    pass


class IndexReadFailure(VectorStoreError):
    """Raised when searching or scrolling the index fails."""

    pass


class RetrievalFailure(StudyBuddyException):
    """Raised when a similarity search cannot be answered."""

    def __init__(
        self,
        message: str,
        step: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if step:
            details["step"] = step
        self.step = step
        super().__init__(message, details)


class IngestionError(StudyBuddyException):
    """Raised when a step of the ingestion pipeline fails for a document."""

    def __init__(
        self,
        step: str,
        document_id: Any,
        cause: BaseException,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize ingestion error.

        Args:
            step: Pipeline step that failed (extract, embed, index, ...)
            document_id: Document being ingested
            cause: Underlying exception
            details: Additional context
        """
        details = details or {}
        details["step"] = step
        details["document_id"] = str(document_id)
        self.step = step
        self.document_id = document_id
        self.cause = cause
        super().__init__(f"Ingestion step '{step}' failed: {cause}", details)
