"""Extraction output model."""

from pydantic import BaseModel, Field


class ExtractedText(BaseModel):
    """Plain text and page count pulled out of raw document bytes."""

    text: str = Field(description="Full extracted text")
    page_count: int = Field(ge=0, description="Number of pages in the source document")
