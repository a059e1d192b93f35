"""
Retrieval service orchestrator.

Answers similarity queries: validate, embed the query, search the vector
index (optionally restricted to one document) and return ranked chunks.
Runs inline in the caller's task; no locks are taken.

Dependencies: studybuddy.boundary.embeddings, studybuddy.boundary.vdb
System role: Retrieval orchestration
"""

import logging
import uuid

from studybuddy.boundary.embeddings.embedding_client import EmbeddingClient
from studybuddy.boundary.vdb.qdrant_store import VectorIndexClient
from studybuddy.core.exceptions import (
    EmbeddingFailure,
    IndexReadFailure,
    RetrievalFailure,
    ValidationError,
)
from studybuddy.models.search import SearchResultItem

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_LIMIT = 5


def parse_document_id(document_id: uuid.UUID | str | None) -> uuid.UUID | None:
    """
    Parse an optional document reference.

    Raises:
        ValidationError: Value is not a UUID
    """
    if document_id is None or isinstance(document_id, uuid.UUID):
        return document_id
    try:
        return uuid.UUID(document_id.strip())
    except (ValueError, AttributeError) as e:
        raise ValidationError(
            f"Invalid document reference: {document_id!r}",
            field="document_id",
        ) from e


class RetrievalService:
    """Retrieval service orchestrator."""

    def __init__(
        self,
        embedder: EmbeddingClient,
        index: VectorIndexClient,
        max_limit: int = 100,
    ) -> None:
        """
        Initialize retrieval service.

        Args:
            embedder: Client used to embed query text
            index: Vector index to search
            max_limit: Largest accepted result limit
        """
        self._embedder = embedder
        self._index = index
        self._max_limit = max_limit

    async def search(
        self,
        query: str,
        limit: int = DEFAULT_SEARCH_LIMIT,
        document_id: uuid.UUID | str | None = None,
    ) -> list[SearchResultItem]:
        """
        Return the chunks most similar to ``query``.

        Args:
            query: Free-text query
            limit: Maximum number of results
            document_id: Optional document restriction (UUID or its string form)

        Returns:
            list[SearchResultItem]: Best match first

        Raises:
            ValidationError: Blank query, limit out of range, bad document reference
            RetrievalFailure: Embedding or index search failed
        """
        if not query or not query.strip():
            raise ValidationError("Query must not be empty", field="query")
        if limit < 1 or limit > self._max_limit:
            raise ValidationError(
                f"Limit must be between 1 and {self._max_limit}",
                field="limit",
            )
        parsed_document_id = parse_document_id(document_id)

        try:
            query_vector = await self._embedder.embed_one(query)
        except EmbeddingFailure as e:
            raise RetrievalFailure(f"Query embedding failed: {e.message}", step="embed") from e

        try:
            hits = await self._index.search(query_vector, limit, parsed_document_id)
        except IndexReadFailure as e:
            raise RetrievalFailure(f"Index search failed: {e.message}", step="search") from e

        logger.info(
            f"{__name__}:search - Search completed",
            extra={
                "result_count": len(hits),
                "limit": limit,
                "document_id": str(parsed_document_id) if parsed_document_id else None,
            },
        )

        return [
            SearchResultItem(
                document_id=hit.document_id,
                chunk_id=hit.chunk_id,
                content=hit.content,
                score=hit.score,
            )
            for hit in hits
        ]
