"""
Dependency injection container.

Builds every shared service handle from Settings once, explicitly, so
there are no module-level singletons: the HTTP layer (or a test) creates a
ServiceContainer, awaits start(), and awaits close() on shutdown.

Dependencies: studybuddy.configs, studybuddy.application, studybuddy.boundary
System role: DI container for service injection
"""

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncEngine

from studybuddy.application.services import DocumentService, RetrievalService
from studybuddy.boundary.db.connection import (
    create_tables,
    get_async_engine,
    get_async_session_factory,
)
from studybuddy.boundary.db.document_store import DocumentRecordStore
from studybuddy.boundary.embeddings.embedding_client import EmbeddingClient
from studybuddy.boundary.storage.blob_fetcher import BlobFetcher
from studybuddy.boundary.vdb.qdrant_store import VectorIndexClient
from studybuddy.configs import Settings, get_settings
from studybuddy.core.document_processing.leases import DocumentLeaseArena
from studybuddy.core.document_processing.orchestrator import IngestionOrchestrator
from studybuddy.core.document_processing.worker_pool import IngestionWorkerPool
from studybuddy.observability.logger import configure_logging

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Shared service handles for one application instance."""

    settings: Settings
    engine: AsyncEngine
    store: DocumentRecordStore
    embedder: EmbeddingClient
    index: VectorIndexClient
    fetcher: BlobFetcher
    leases: DocumentLeaseArena
    orchestrator: IngestionOrchestrator
    pool: IngestionWorkerPool
    retrieval: RetrievalService
    documents: DocumentService

    async def start(self, create_schema: bool = False, configure_logs: bool = True) -> None:
        """
        Prepare external resources.

        Args:
            create_schema: Also create relational tables (development only)
            configure_logs: Install the root log handler at settings.log_level
        """
        if configure_logs:
            configure_logging(self.settings.log_level)
        if create_schema:
            await create_tables(self.engine)
        await self.index.ensure_collection(
            self.settings.vector_store.embedding_dimension,
            self.settings.vector_store.distance,
        )
        logger.info(f"{__name__}:start - Services ready")

    async def close(self, cancel_pending: bool = False) -> None:
        """Drain background ingestion, then release clients and the engine."""
        await self.pool.shutdown(cancel=cancel_pending)
        await self.embedder.aclose()
        await self.fetcher.aclose()
        await self.index.close()
        await self.engine.dispose()
        logger.info(f"{__name__}:close - Services closed")


def build_container(settings: Settings | None = None) -> ServiceContainer:
    """
    Wire every service from settings.

    Args:
        settings: Application settings (loaded from the environment if None)

    Returns:
        ServiceContainer: Unstarted container
    """
    settings = settings or get_settings()

    engine = get_async_engine(settings.database)
    store = DocumentRecordStore(get_async_session_factory(engine))
    embedder = EmbeddingClient(
        settings.embeddings,
        dimension=settings.vector_store.embedding_dimension,
    )
    index = VectorIndexClient(settings.vector_store)
    fetcher = BlobFetcher(
        timeout_seconds=settings.ingestion.fetch_timeout_seconds,
        max_attempts=settings.ingestion.fetch_max_attempts,
    )
    leases = DocumentLeaseArena()
    orchestrator = IngestionOrchestrator(
        store=store,
        embedder=embedder,
        index=index,
        leases=leases,
        chunk_size=settings.ingestion.chunk_size,
        chunk_overlap=settings.ingestion.chunk_overlap,
        record_failures=settings.ingestion.record_failures,
    )
    pool = IngestionWorkerPool(
        orchestrator,
        fetcher,
        max_concurrency=settings.ingestion.max_concurrency,
    )
    retrieval = RetrievalService(
        embedder,
        index,
        max_limit=settings.ingestion.search_max_limit,
    )
    documents = DocumentService(
        store=store,
        index=index,
        retrieval=retrieval,
        pool=pool,
        leases=leases,
    )

    return ServiceContainer(
        settings=settings,
        engine=engine,
        store=store,
        embedder=embedder,
        index=index,
        fetcher=fetcher,
        leases=leases,
        orchestrator=orchestrator,
        pool=pool,
        retrieval=retrieval,
        documents=documents,
    )
