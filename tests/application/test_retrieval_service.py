"""
Test suite for RetrievalService.

Uses mocked embedding client and vector index.

System role: Verification of retrieval orchestration layer
"""

import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest

from studybuddy.application.services.retrieval_service import RetrievalService
from studybuddy.boundary.vdb.vector_schemas import VectorSearchHit
from studybuddy.core.exceptions import (
    EmbeddingFailure,
    IndexReadFailure,
    RetrievalFailure,
    ValidationError,
)


@pytest.fixture
def mock_embedder() -> MagicMock:
    embedder = MagicMock()
    embedder.embed_one = AsyncMock(return_value=[0.1, 0.2, 0.3])
    return embedder


@pytest.fixture
def sample_hits() -> list[VectorSearchHit]:
    document_id = uuid.uuid4()
    return [
        VectorSearchHit(document_id=document_id, chunk_id=uuid.uuid4(), content="best", score=0.9),
        VectorSearchHit(document_id=document_id, chunk_id=uuid.uuid4(), content="next", score=0.5),
    ]


@pytest.fixture
def mock_index(sample_hits) -> MagicMock:
    index = MagicMock()
    index.search = AsyncMock(return_value=sample_hits)
    return index


@pytest.fixture
def retrieval_service(mock_embedder, mock_index) -> RetrievalService:
    return RetrievalService(mock_embedder, mock_index, max_limit=20)


class TestSearch:
    """Test suite for RetrievalService.search()."""

    @pytest.mark.asyncio
    async def test_search_should_embed_query_and_map_hits_in_order(
        self, retrieval_service, mock_embedder, mock_index, sample_hits
    ) -> None:
        # Act
        results = await retrieval_service.search("what is osmosis?", limit=2)

        # Assert
        mock_embedder.embed_one.assert_awaited_once_with("what is osmosis?")
        mock_index.search.assert_awaited_once_with([0.1, 0.2, 0.3], 2, None)
        assert [result.chunk_id for result in results] == [hit.chunk_id for hit in sample_hits]
        assert [result.score for result in results] == [0.9, 0.5]

    @pytest.mark.asyncio
    async def test_search_should_parse_document_id_string(self, retrieval_service, mock_index) -> None:
        document_id = uuid.uuid4()

        await retrieval_service.search("query", document_id=str(document_id))

        mock_index.search.assert_awaited_once_with([0.1, 0.2, 0.3], 5, document_id)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("query", "limit", "document_id", "field"),
        [
            ("", 5, None, "query"),
            ("   ", 5, None, "query"),
            ("ok", 0, None, "limit"),
            ("ok", 21, None, "limit"),
            ("ok", 5, "not-a-uuid", "document_id"),
        ],
    )
    async def test_invalid_input_should_raise_validation_error_before_embedding(
        self, retrieval_service, mock_embedder, query, limit, document_id, field
    ) -> None:
        with pytest.raises(ValidationError) as exc_info:
            await retrieval_service.search(query, limit=limit, document_id=document_id)

        assert exc_info.value.field == field
        mock_embedder.embed_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_embedding_failure_should_raise_retrieval_failure(
        self, retrieval_service, mock_embedder, mock_index
    ) -> None:
        mock_embedder.embed_one.side_effect = EmbeddingFailure("service down")

        with pytest.raises(RetrievalFailure) as exc_info:
            await retrieval_service.search("query")

        assert exc_info.value.step == "embed"
        assert isinstance(exc_info.value.__cause__, EmbeddingFailure)
        mock_index.search.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_index_failure_should_raise_retrieval_failure(self, retrieval_service, mock_index) -> None:
        mock_index.search.side_effect = IndexReadFailure("timeout", operation="search")

        with pytest.raises(RetrievalFailure, match="timeout") as exc_info:
            await retrieval_service.search("query")

        assert exc_info.value.step == "search"
