"""
Test suite for the service container.

System role: Verification of service wiring and lifecycle
"""

import uuid

import pytest

from studybuddy.application.services import DocumentService, RetrievalService
from studybuddy.configs import Settings
from studybuddy.configs.database import DatabaseSettings
from studybuddy.configs.ingestion import IngestionSettings
from studybuddy.configs.vector_store import VectorStoreSettings
from studybuddy.core.document_processing.worker_pool import IngestionWorkerPool
from studybuddy.dependencies import ServiceContainer, build_container


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        database=DatabaseSettings(url=f"sqlite+aiosqlite:///{tmp_path / 'studybuddy.db'}"),
        vector_store=VectorStoreSettings(
            url=":memory:",
            collection_name="container_chunks",
            embedding_dimension=16,
        ),
        ingestion=IngestionSettings(chunk_size=100, chunk_overlap=10, max_concurrency=2),
    )


class TestBuildContainer:
    def test_build_should_wire_services_from_settings(self, settings) -> None:
        # Act
        container = build_container(settings)

        # Assert
        assert isinstance(container, ServiceContainer)
        assert container.settings is settings
        assert isinstance(container.pool, IngestionWorkerPool)
        assert isinstance(container.retrieval, RetrievalService)
        assert isinstance(container.documents, DocumentService)
        assert container.embedder.dimension == 16

    @pytest.mark.asyncio
    async def test_start_and_close_should_prepare_and_release_resources(self, settings) -> None:
        container = build_container(settings)

        await container.start(create_schema=True, configure_logs=False)
        try:
            created = await container.store.create(
                owner_id=uuid.uuid4(),
                title="Notes",
                file_name="notes.pdf",
                file_url="https://blob.test/notes.pdf",
                file_size=10,
            )
            assert (await container.store.find_by_id(created.id)).title == "Notes"
            # Collection already exists after start()
            assert await container.index.ensure_collection() is False
        finally:
            await container.close()

        assert container.pool.pending_count == 0
