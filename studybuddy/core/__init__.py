"""
Core business logic module.

Contains the exception hierarchy and the document processing pipeline
(chunking, extraction, orchestration, background workers).
"""

from studybuddy.core.exceptions import (
    DocumentProcessingError,
    EmbeddingFailure,
    ExtractionError,
    IndexReadFailure,
    IndexWriteFailure,
    IngestionError,
    NotFoundOrAccessDenied,
    RetrievalFailure,
    StoreError,
    StudyBuddyException,
    ValidationError,
    VectorStoreError,
)

__all__ = [
    "StudyBuddyException",
    "ValidationError",
    "NotFoundOrAccessDenied",
    "StoreError",
    "DocumentProcessingError",
    "ExtractionError",
    "EmbeddingFailure",
    "VectorStoreError",
    "IndexWriteFailure",
    "IndexReadFailure",
    "RetrievalFailure",
    "IngestionError",
]
