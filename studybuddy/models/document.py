"""
Document domain models and schemas.

Request/response schemas for document operations.

Dependencies: pydantic
System role: Document API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class UploadDocumentRequest(BaseModel):
    """Request schema for registering an uploaded document."""

    title: str = Field(min_length=1, max_length=255, description="Display title")
    file_name: str = Field(min_length=1, max_length=255, description="Original filename")
    file_url: str = Field(min_length=1, max_length=1024, description="Blob URL of the raw file")
    file_size: int = Field(ge=0, description="File size in bytes")


class DocumentResponse(BaseModel):
    """Response schema for document operations."""

    id: uuid.UUID
    title: str
    file_name: str
    file_url: str
    file_size: int
    page_count: int | None = None
    processing_status: str = Field(description="pending, processing, completed or failed")
    error_message: str | None = None
    created_at: datetime

    @classmethod
    def from_model(cls, document) -> "DocumentResponse":
        """Build from a DocumentModel row."""
        return cls(
            id=document.id,
            title=document.title,
            file_name=document.file_name,
            file_url=document.file_url,
            file_size=document.file_size,
            page_count=document.page_count,
            processing_status=document.status.value,
            error_message=document.error_message,
            created_at=document.created_at,
        )


class DocumentListResponse(BaseModel):
    """Document list response."""

    documents: list[DocumentResponse]
    total: int
