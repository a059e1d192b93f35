"""
Document ingestion orchestrator.

Drives one document through the ingestion state machine:
extract -> claim (PENDING -> PROCESSING) -> chunk -> embed -> persist chunk
rows -> index -> finalize (PROCESSING -> COMPLETED). Each run holds the
document's lease, and the conditional claim keeps a second process from
ingesting the same document.

Dependencies: studybuddy.boundary (db, embeddings, vdb), studybuddy.core
System role: Pipeline orchestration (coordinates only)
"""

import asyncio
import logging
import time
import uuid

from studybuddy.boundary.db.document_store import DocumentRecordStore
from studybuddy.boundary.db.models import DocumentStatus
from studybuddy.boundary.embeddings.embedding_client import EmbeddingClient
from studybuddy.boundary.vdb.qdrant_store import VectorIndexClient
from studybuddy.boundary.vdb.vector_schemas import ChunkPayload, VectorPoint
from studybuddy.core.document_processing.chunker import (
    CHUNK_OVERLAP_WORDS,
    CHUNK_SIZE_WORDS,
    chunk_text,
    estimate_tokens,
)
from studybuddy.core.document_processing.extraction import PdfTextExtractor, TextExtractor
from studybuddy.core.document_processing.leases import DocumentLeaseArena
from studybuddy.core.document_processing.models import PipelineResult
from studybuddy.core.exceptions import (
    IngestionError,
    NotFoundOrAccessDenied,
    StoreError,
    StudyBuddyException,
)
from studybuddy.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


def chunk_id_for(document_id: uuid.UUID, chunk_index: int) -> uuid.UUID:
    """Deterministic chunk id shared by the chunk row and its index point."""
    return uuid.uuid5(document_id, f"chunk-{chunk_index}")


class IngestionOrchestrator:
    """Run the ingestion state machine for one document at a time."""

    def __init__(
        self,
        store: DocumentRecordStore,
        embedder: EmbeddingClient,
        index: VectorIndexClient,
        leases: DocumentLeaseArena,
        extractor: TextExtractor | None = None,
        chunk_size: int = CHUNK_SIZE_WORDS,
        chunk_overlap: int = CHUNK_OVERLAP_WORDS,
        record_failures: bool = True,
    ) -> None:
        """
        Initialize orchestrator with its collaborators.

        Args:
            store: Document and chunk persistence
            embedder: Embedding service client
            index: Vector index client
            leases: Lease arena shared with the document service
            extractor: Text extractor (PDF by default)
            chunk_size: Words per chunk window
            chunk_overlap: Words shared between consecutive chunks
            record_failures: Mark documents FAILED when a step fails

        Raises:
            ValueError: chunk_overlap is not in [0, chunk_size)
        """
        if chunk_size < 1 or not 0 <= chunk_overlap < chunk_size:
            raise ValueError("chunk_overlap must be >= 0 and smaller than chunk_size")

        self._store = store
        self._embedder = embedder
        self._index = index
        self._leases = leases
        self._extractor = extractor or PdfTextExtractor()
        self._chunk_size = chunk_size
        self._chunk_overlap = chunk_overlap
        self._record_failures = record_failures

    async def run(self, document_id: uuid.UUID, raw_bytes: bytes) -> PipelineResult:
        """
        Ingest a PENDING document from its raw bytes.

        A document that is no longer PENDING, or that another process claims
        first, is skipped rather than processed twice.

        Args:
            document_id: Document to ingest
            raw_bytes: Uploaded file contents

        Returns:
            PipelineResult: Outcome with chunk count and timing

        Raises:
            NotFoundOrAccessDenied: Document does not exist
            IngestionError: A pipeline step failed (step name and cause attached)
        """
        async with self._leases.lease(document_id):
            return await self._run_leased(document_id, raw_bytes)

    async def _run_leased(self, document_id: uuid.UUID, raw_bytes: bytes) -> PipelineResult:
        start_time = time.perf_counter()

        document = await self._store.find_by_id(document_id)
        if document is None:
            raise NotFoundOrAccessDenied(document_id)
        if document.status != DocumentStatus.PENDING:
            logger.info(
                f"{__name__}:run - Document not pending, skipping",
                extra={"document_id": str(document_id), "status": document.status.value},
            )
            return PipelineResult(
                document_id=document_id,
                status=document.status.value,
                page_count=document.page_count,
                skipped=True,
            )

        logger.info(
            f"{__name__}:run - Ingestion started",
            extra={"document_id": str(document_id), "byte_size": len(raw_bytes)},
        )

        # Extract
        try:
            extracted = await asyncio.to_thread(self._extractor.extract, raw_bytes)
        except Exception as e:
            await self._record_failure(document_id, DocumentStatus.PENDING, "extract", e)
            raise IngestionError("extract", document_id, e) from e

        # Claim
        try:
            claimed = await self._store.transition_status(
                document_id,
                DocumentStatus.PENDING,
                DocumentStatus.PROCESSING,
                extracted_text=extracted.text,
                page_count=extracted.page_count,
            )
        except StoreError as e:
            await self._record_failure(document_id, DocumentStatus.PENDING, "claim", e)
            raise IngestionError("claim", document_id, e) from e

        if not claimed:
            logger.info(
                f"{__name__}:run - Document claimed elsewhere, skipping",
                extra={"document_id": str(document_id)},
            )
            current = await self._store.find_by_id(document_id)
            return PipelineResult(
                document_id=document_id,
                status=current.status.value if current else DocumentStatus.PENDING.value,
                skipped=True,
            )

        chunks = chunk_text(extracted.text, self._chunk_size, self._chunk_overlap)

        # Embed
        try:
            vectors = await self._embedder.embed(chunks)
        except Exception as e:
            await self._record_failure(document_id, DocumentStatus.PROCESSING, "embed", e)
            raise IngestionError("embed", document_id, e) from e

        # Persist chunk rows in index order
        points: list[VectorPoint] = []
        try:
            for chunk_index, (content, vector) in enumerate(zip(chunks, vectors, strict=True)):
                chunk_id = chunk_id_for(document_id, chunk_index)
                await self._store.insert_chunk(
                    document_id=document_id,
                    chunk_id=chunk_id,
                    chunk_index=chunk_index,
                    content=content,
                    token_count=estimate_tokens(content),
                )
                points.append(
                    VectorPoint(
                        id=chunk_id,
                        vector=vector,
                        payload=ChunkPayload(
                            document_id=str(document_id),
                            chunk_id=str(chunk_id),
                            content=content,
                        ),
                    )
                )
        except Exception as e:
            await self._record_failure(document_id, DocumentStatus.PROCESSING, "persist_chunks", e)
            raise IngestionError("persist_chunks", document_id, e) from e

        # Index
        try:
            await self._index.upsert(points)
        except Exception as e:
            await self._remove_partial_points(document_id)
            await self._record_failure(document_id, DocumentStatus.PROCESSING, "index", e)
            raise IngestionError("index", document_id, e) from e

        # Finalize
        try:
            finalized = await self._store.transition_status(
                document_id,
                DocumentStatus.PROCESSING,
                DocumentStatus.COMPLETED,
                error_message=None,
            )
            if not finalized:
                raise StoreError(
                    "Document left the processing state before completion",
                    operation="finalize",
                )
        except StoreError as e:
            await self._record_failure(document_id, DocumentStatus.PROCESSING, "finalize", e)
            raise IngestionError("finalize", document_id, e) from e

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"{__name__}:run - Ingestion completed",
            extra={
                "document_id": str(document_id),
                "chunk_count": len(points),
                "page_count": extracted.page_count,
                "processing_time_ms": round(elapsed_ms, 1),
            },
        )

        return PipelineResult(
            document_id=document_id,
            status=DocumentStatus.COMPLETED.value,
            chunk_count=len(points),
            page_count=extracted.page_count,
            processing_time_ms=elapsed_ms,
        )

    async def abandon(self, document_id: uuid.UUID, step: str, error: BaseException) -> None:
        """
        Give up on a document whose raw bytes never arrived.

        Marks a still-PENDING document FAILED when failures are recorded.
        Never raises.

        Args:
            document_id: Document that could not be ingested
            step: Step that failed (e.g. fetch)
            error: Underlying error
        """
        async with self._leases.lease(document_id):
            await self._record_failure(document_id, DocumentStatus.PENDING, step, error)

    async def _record_failure(
        self,
        document_id: uuid.UUID,
        current: DocumentStatus,
        step: str,
        error: BaseException,
    ) -> None:
        log_exception_with_context(
            logger,
            f"{__name__}:run - Step '{step}' failed",
            error,
            document_id=document_id,
            step=step,
            status=current.value,
        )
        if not self._record_failures:
            return

        cause = error.message if isinstance(error, StudyBuddyException) else str(error)
        try:
            await self._store.transition_status(
                document_id,
                current,
                DocumentStatus.FAILED,
                error_message=f"{step}: {cause or type(error).__name__}",
            )
        except StoreError as store_error:
            logger.error(
                f"{__name__}:_record_failure - Could not mark document failed",
                extra={"document_id": str(document_id), "error": str(store_error)},
            )

    async def _remove_partial_points(self, document_id: uuid.UUID) -> None:
        try:
            await self._index.delete_by_document(document_id)
        except StudyBuddyException as cleanup_error:
            logger.error(
                f"{__name__}:_remove_partial_points - Cleanup after failed upsert failed",
                extra={"document_id": str(document_id), "error": str(cleanup_error)},
            )
