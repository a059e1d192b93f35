"""
Document service orchestrator.

Coordinates document upload, status listing, search, deletion and the
chunk/index consistency check. Upload returns as soon as the document
record exists; ingestion continues on the worker pool.

Dependencies: studybuddy.boundary.db, studybuddy.boundary.vdb, studybuddy.core
System role: Document management orchestration
"""

import logging
from uuid import UUID

from studybuddy.application.services.retrieval_service import RetrievalService
from studybuddy.boundary.db.document_store import DocumentRecordStore
from studybuddy.boundary.vdb.qdrant_store import VectorIndexClient
from studybuddy.core.document_processing.leases import DocumentLeaseArena
from studybuddy.core.document_processing.worker_pool import IngestionWorkerPool
from studybuddy.core.exceptions import ValidationError
from studybuddy.models.document import DocumentListResponse, DocumentResponse
from studybuddy.models.search import ConsistencyReport, SearchRequest, SearchResponse

logger = logging.getLogger(__name__)


class DocumentService:
    """
    Document service orchestrator.

    Owner checks happen here; the store, index and pool below it trust
    the ids they are given.
    """

    def __init__(
        self,
        store: DocumentRecordStore,
        index: VectorIndexClient,
        retrieval: RetrievalService,
        pool: IngestionWorkerPool,
        leases: DocumentLeaseArena,
    ) -> None:
        """
        Initialize document service.

        Args:
            store: Document and chunk persistence
            index: Vector index (for deletes and consistency checks)
            retrieval: Search orchestrator
            pool: Background ingestion dispatcher
            leases: Lease arena shared with the orchestrator
        """
        self._store = store
        self._index = index
        self._retrieval = retrieval
        self._pool = pool
        self._leases = leases

    async def upload_document(
        self,
        owner_id: UUID,
        title: str,
        file_name: str,
        file_url: str,
        file_size: int,
    ) -> DocumentResponse:
        """
        Register an uploaded document and schedule its ingestion.

        Steps:
        1. Create document record with PENDING status
        2. Submit fetch + ingestion to the worker pool (not awaited)
        3. Return the PENDING document

        Args:
            owner_id: Uploading user
            title: Display title
            file_name: Original filename
            file_url: Blob URL holding the raw bytes
            file_size: Size in bytes

        Returns:
            DocumentResponse: Newly created document (status pending)

        Raises:
            ValidationError: Missing title/url or negative size
            StoreError: Record could not be created
        """
        if not title or not title.strip():
            raise ValidationError("Title must not be empty", field="title")
        if not file_url or not file_url.strip():
            raise ValidationError("File URL must not be empty", field="file_url")
        if file_size < 0:
            raise ValidationError("File size must not be negative", field="file_size")

        document = await self._store.create(
            owner_id=owner_id,
            title=title.strip(),
            file_name=file_name,
            file_url=file_url,
            file_size=file_size,
        )
        self._pool.submit(document.id, file_url)

        return DocumentResponse.from_model(document)

    async def list_documents(self, owner_id: UUID) -> DocumentListResponse:
        documents = await self._store.list_by_owner(owner_id)
        return DocumentListResponse(
            documents=[DocumentResponse.from_model(document) for document in documents],
            total=len(documents),
        )

    async def get_document(self, document_id: UUID, owner_id: UUID) -> DocumentResponse:
        """
        Fetch one document for its owner.

        Raises:
            NotFoundOrAccessDenied: Missing or owned by someone else
        """
        document = await self._store.find_by_id_and_owner(document_id, owner_id)
        return DocumentResponse.from_model(document)

    async def delete_document(self, document_id: UUID, owner_id: UUID) -> None:
        """
        Delete document from vector index and database.

        Steps:
        1. Validate document exists and belongs to owner
        2. Wait for the document lease (no ingestion in progress)
        3. Delete index points by document id
        4. Delete chunk rows and the document row

        Index points go first, so a failure in between leaves chunk rows
        without points (detectable by check_consistency) rather than
        unreachable points.

        Raises:
            NotFoundOrAccessDenied: Missing or owned by someone else
            IndexWriteFailure: Index delete failed (nothing removed from the store)
            StoreError: Row delete failed
        """
        await self._store.find_by_id_and_owner(document_id, owner_id)

        async with self._leases.lease(document_id):
            await self._index.delete_by_document(document_id)
            await self._store.delete_cascade(document_id)

        logger.info(
            f"{__name__}:delete_document - Document deleted",
            extra={"document_id": str(document_id), "owner_id": str(owner_id)},
        )

    async def search(self, request: SearchRequest) -> SearchResponse:
        """
        Run a similarity search.

        Raises:
            ValidationError: Invalid request
            RetrievalFailure: Embedding or index failure
        """
        results = await self._retrieval.search(
            query=request.query,
            limit=request.limit,
            document_id=request.document_id,
        )
        return SearchResponse(results=results)

    async def check_consistency(self, document_id: UUID, owner_id: UUID) -> ConsistencyReport:
        """
        Compare a document's chunk rows with its vector index points.

        Args:
            document_id: Document to check
            owner_id: Expected owner

        Returns:
            ConsistencyReport: Ids missing from the index and ids the index
            holds without a chunk row

        Raises:
            NotFoundOrAccessDenied: Missing or owned by someone else
            IndexReadFailure: Index scroll failed
        """
        document = await self._store.find_by_id_and_owner(document_id, owner_id)
        chunks = await self._store.list_chunks(document_id)
        point_ids = await self._index.list_point_ids(document_id)

        chunk_ids = {chunk.id for chunk in chunks}
        report = ConsistencyReport(
            document_id=document_id,
            status=document.status.value,
            chunk_count=len(chunk_ids),
            point_count=len(point_ids),
            missing_in_index=sorted(chunk_ids - point_ids, key=str),
            orphaned_in_index=sorted(point_ids - chunk_ids, key=str),
        )

        if not report.consistent:
            logger.warning(
                f"{__name__}:check_consistency - Chunk rows and index points differ",
                extra={
                    "document_id": str(document_id),
                    "missing_in_index": len(report.missing_in_index),
                    "orphaned_in_index": len(report.orphaned_in_index),
                },
            )
        return report
