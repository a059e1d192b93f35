"""
Vector index schemas.

Pydantic models for vector operations (points, payloads, search hits).
ChunkPayload is the single mapping between chunk data and the untyped
payload dict stored next to each vector.

Dependencies: pydantic
System role: Type definitions for vector operations
"""

import uuid
from typing import Any

from pydantic import BaseModel, Field


class ChunkPayload(BaseModel):
    """
    Payload attached to each vector.

    document_id is indexed by keyword match, so it is stored as a string.
    """

    document_id: str = Field(description="Parent document ID, used for filtering")
    chunk_id: str = Field(description="Deterministic chunk identifier")
    content: str = Field(description="Chunk text content")

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the dict stored in the index."""
        return self.model_dump(mode="json")

    @classmethod
    def from_payload(cls, payload: dict[str, Any] | None) -> "ChunkPayload":
        """
        Hydrate from a stored payload.

        Raises:
            pydantic.ValidationError: Payload is missing fields
        """
        return cls.model_validate(payload or {})


class VectorPoint(BaseModel):
    """A chunk vector ready to be written to the index."""

    id: uuid.UUID = Field(description="Point ID (same as the chunk row ID)")
    vector: list[float] = Field(description="Embedding vector")
    payload: ChunkPayload


class VectorSearchHit(BaseModel):
    """Single result from vector search, hydrated from the stored payload."""

    document_id: uuid.UUID = Field(description="Parent document ID")
    chunk_id: uuid.UUID = Field(description="Chunk identifier")
    content: str = Field(description="Chunk text content")
    score: float = Field(description="Similarity score reported by the index")
