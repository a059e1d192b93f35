"""
Shared test fixtures and configuration for entire test suite.

Provides: in-memory SQLite session factory, record store, in-memory Qdrant
index, and an embedding client backed by an httpx.MockTransport that
returns deterministic bag-of-words vectors.
Dependencies: pytest, pytest-asyncio, sqlalchemy, aiosqlite, httpx, qdrant-client
System role: Test infrastructure and fixture management
"""

import json
import uuid
import zlib

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from studybuddy.boundary.db.base import Base
from studybuddy.boundary.db.document_store import DocumentRecordStore
from studybuddy.boundary.embeddings.embedding_client import EmbeddingClient
from studybuddy.boundary.vdb.qdrant_store import VectorIndexClient
from studybuddy.configs.embeddings import EmbeddingSettings
from studybuddy.configs.vector_store import VectorStoreSettings
from studybuddy.core.document_processing.leases import DocumentLeaseArena

TEST_DIMENSION = 256
EMBEDDING_URL = "http://embeddings.test/feature-extraction"


def hash_embed(text: str, dimension: int = TEST_DIMENSION) -> list[float]:
    """Deterministic bag-of-words vector: one bucket per word hash."""
    vector = [0.0] * dimension
    for word in text.split():
        vector[zlib.crc32(word.encode()) % dimension] += 1.0
    return vector


class RecordingEmbeddingEndpoint:
    """httpx handler that embeds inputs with hash_embed and records requests."""

    def __init__(self, dimension: int = TEST_DIMENSION) -> None:
        self.dimension = dimension
        self.requests: list[list[str]] = []
        self.fail_with_status: int | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        inputs = json.loads(request.content)["inputs"]
        self.requests.append(inputs)
        if self.fail_with_status is not None:
            return httpx.Response(self.fail_with_status, json={"error": "unavailable"})
        return httpx.Response(200, json=[hash_embed(text, self.dimension) for text in inputs])


@pytest.fixture
async def session_factory():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        async_sessionmaker: Factory bound to a fresh schema
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def record_store(session_factory) -> DocumentRecordStore:
    return DocumentRecordStore(session_factory)


@pytest.fixture
def vector_store_settings() -> VectorStoreSettings:
    return VectorStoreSettings(
        url=":memory:",
        collection_name="test_chunks",
        embedding_dimension=TEST_DIMENSION,
        distance="cosine",
    )


@pytest.fixture
async def vector_index(vector_store_settings: VectorStoreSettings):
    """In-process Qdrant collection, created empty for each test."""
    index = VectorIndexClient(vector_store_settings)
    await index.ensure_collection()
    yield index
    await index.close()


@pytest.fixture
def embedding_endpoint() -> RecordingEmbeddingEndpoint:
    return RecordingEmbeddingEndpoint()


@pytest.fixture
def embedding_settings() -> EmbeddingSettings:
    return EmbeddingSettings(api_url=EMBEDDING_URL, api_key="test-key", batch_size=8)


@pytest.fixture
async def embedding_client(embedding_settings, embedding_endpoint):
    client = EmbeddingClient(
        embedding_settings,
        dimension=TEST_DIMENSION,
        client=httpx.AsyncClient(transport=httpx.MockTransport(embedding_endpoint)),
    )
    yield client
    await client.aclose()


@pytest.fixture
def leases() -> DocumentLeaseArena:
    return DocumentLeaseArena()


@pytest.fixture
def owner_id() -> uuid.UUID:
    """Generate a test owner ID."""
    return uuid.uuid4()


@pytest.fixture
def one_hot():
    """Build unit vectors of the test dimension with a single hot component."""

    def build(hot: int) -> list[float]:
        vector = [0.0] * TEST_DIMENSION
        vector[hot] = 1.0
        return vector

    return build
