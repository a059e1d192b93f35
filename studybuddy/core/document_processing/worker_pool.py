"""
Background ingestion worker pool.

Runs uploads through the orchestrator as tracked asyncio tasks, at most
``max_concurrency`` at a time. Upload callers get control back as soon as
the task is scheduled; outcomes are reported through logs and the
document's status.

Dependencies: asyncio (stdlib), studybuddy.boundary.storage
System role: Background dispatcher between upload and ingestion
"""

import asyncio
import logging
import uuid

from studybuddy.boundary.storage.blob_fetcher import BlobFetcher
from studybuddy.core.document_processing.models import PipelineResult
from studybuddy.core.document_processing.orchestrator import IngestionOrchestrator
from studybuddy.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)


class IngestionWorkerPool:
    """Bounded-concurrency dispatcher for document ingestion."""

    def __init__(
        self,
        orchestrator: IngestionOrchestrator,
        fetcher: BlobFetcher,
        max_concurrency: int = 4,
    ) -> None:
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")

        self._orchestrator = orchestrator
        self._fetcher = fetcher
        self._semaphore = asyncio.Semaphore(max_concurrency)
        self._tasks: dict[asyncio.Task, uuid.UUID] = {}

    @property
    def pending_count(self) -> int:
        """Tasks submitted and not yet finished."""
        return len(self._tasks)

    def in_flight(self, document_id: uuid.UUID) -> bool:
        return document_id in self._tasks.values()

    def submit(self, document_id: uuid.UUID, file_url: str) -> asyncio.Task:
        """
        Schedule fetch + ingestion of a document.

        Must be called from a running event loop.

        Args:
            document_id: Document to ingest
            file_url: Where the raw bytes live

        Returns:
            asyncio.Task: Resolves to the PipelineResult, or None on failure
        """
        task = asyncio.create_task(
            self._process(document_id, file_url),
            name=f"ingest-{document_id}",
        )
        self._tasks[task] = document_id
        task.add_done_callback(self._tasks.pop)

        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:submit - Ingestion scheduled",
            document_id=document_id,
            file_url=file_url,
            pending=self.pending_count,
        )
        return task

    async def _process(self, document_id: uuid.UUID, file_url: str) -> PipelineResult | None:
        async with self._semaphore:
            try:
                raw_bytes = await self._fetcher.fetch(file_url)
            except Exception as e:
                await self._orchestrator.abandon(document_id, "fetch", e)
                return None

            try:
                return await self._orchestrator.run(document_id, raw_bytes)
            except Exception as e:
                # Already recorded on the document by the orchestrator
                log_with_context(
                    logger,
                    logging.WARNING,
                    f"{__name__}:_process - Ingestion failed",
                    document_id=document_id,
                    error=e,
                )
                return None

    async def drain(self) -> None:
        """Wait for every submitted task to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def shutdown(self, cancel: bool = False) -> None:
        """
        Stop the pool.

        Args:
            cancel: Cancel running tasks instead of letting them finish
        """
        if cancel:
            for task in list(self._tasks):
                task.cancel()
        await self.drain()
        logger.info(f"{__name__}:shutdown - Worker pool stopped", extra={"cancelled": cancel})
