"""
Search and consistency schemas.

Dependencies: pydantic
System role: Retrieval API contracts
"""

import uuid

from pydantic import BaseModel, Field, computed_field


class SearchRequest(BaseModel):
    """
    Similarity search request.

    document_id is kept as a raw string; the retrieval service parses it
    and reports a ValidationError when it is not a UUID.
    """

    query: str = Field(description="Free-text query")
    document_id: str | None = Field(default=None, description="Restrict results to this document")
    limit: int = Field(default=5, description="Maximum number of results")


class SearchResultItem(BaseModel):
    """Single ranked chunk."""

    document_id: uuid.UUID
    chunk_id: uuid.UUID
    content: str
    score: float


class SearchResponse(BaseModel):
    """Search results, best first."""

    results: list[SearchResultItem]


class ConsistencyReport(BaseModel):
    """Comparison of a document's chunk rows with its index points."""

    document_id: uuid.UUID
    status: str
    chunk_count: int = Field(description="Chunk rows in the relational store")
    point_count: int = Field(description="Points in the vector index")
    missing_in_index: list[uuid.UUID] = Field(default_factory=list)
    orphaned_in_index: list[uuid.UUID] = Field(default_factory=list)

    @computed_field
    @property
    def consistent(self) -> bool:
        return not self.missing_in_index and not self.orphaned_in_index
