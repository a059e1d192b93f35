"""
Document record store.

Transaction-owning facade over the document and chunk CRUD classes. Every
operation opens its own session from the injected factory, commits on
success and rolls back on failure, so callers never hold a session across
network calls to the embedding service or the vector index.

Dependencies: sqlalchemy, studybuddy.boundary.db.CRUD
System role: Durable document/chunk persistence for ingestion and services
"""

import logging
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from typing import Any
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from studybuddy.boundary.db.CRUD import chunk_crud, document_crud
from studybuddy.boundary.db.models import (
    ERROR_MESSAGE_MAX_LENGTH,
    DocumentChunkModel,
    DocumentModel,
    DocumentStatus,
)
from studybuddy.core.exceptions import NotFoundOrAccessDenied, StoreError

logger = logging.getLogger(__name__)


def _truncate_error(fields: dict[str, Any]) -> dict[str, Any]:
    message = fields.get("error_message")
    if message is not None and len(message) > ERROR_MESSAGE_MAX_LENGTH:
        fields["error_message"] = message[:ERROR_MESSAGE_MAX_LENGTH]
    return fields


class DocumentRecordStore:
    """Persist documents and their chunk rows."""

    def __init__(self, session_factory: async_sessionmaker) -> None:
        """
        Initialize with a session factory.

        Args:
            session_factory: async_sessionmaker bound to the application engine
        """
        self._session_factory = session_factory

    @asynccontextmanager
    async def _transaction(self, operation: str) -> AsyncIterator[AsyncSession]:
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error(
                    f"{__name__}:{operation} - {type(e).__name__}: {e}",
                    extra={"operation": operation},
                )
                raise StoreError(
                    f"Document store operation failed: {e}",
                    operation=operation,
                ) from e
            except BaseException:
                await session.rollback()
                raise

    async def create(
        self,
        owner_id: UUID,
        title: str,
        file_name: str,
        file_url: str,
        file_size: int,
    ) -> DocumentModel:
        """
        Insert a new document in PENDING state.

        Returns:
            DocumentModel: Persisted document with generated id and timestamps
        """
        async with self._transaction("create") as session:
            document = await document_crud.create(
                session,
                owner_id=owner_id,
                title=title,
                file_name=file_name,
                file_url=file_url,
                file_size=file_size,
                status=DocumentStatus.PENDING,
            )

        logger.info(
            f"{__name__}:create - Document created",
            extra={"document_id": str(document.id), "owner_id": str(owner_id)},
        )
        return document

    async def find_by_id(self, document_id: UUID) -> DocumentModel | None:
        async with self._transaction("find_by_id") as session:
            return await document_crud.get_by_id(session, document_id)

    async def find_by_id_and_owner(self, document_id: UUID, owner_id: UUID) -> DocumentModel:
        """
        Fetch a document on behalf of its owner.

        Raises:
            NotFoundOrAccessDenied: Document missing or owned by another user
        """
        async with self._transaction("find_by_id_and_owner") as session:
            document = await document_crud.get_by_id_and_owner(session, document_id, owner_id)

        if document is None:
            raise NotFoundOrAccessDenied(document_id)
        return document

    async def list_by_owner(self, owner_id: UUID) -> Sequence[DocumentModel]:
        async with self._transaction("list_by_owner") as session:
            return await document_crud.get_by_owner_id(session, owner_id)

    async def update_status_and_fields(
        self,
        document_id: UUID,
        status: DocumentStatus | None = None,
        **fields: Any,
    ) -> DocumentModel:
        """
        Read-modify-write update of a document's status and columns.

        Not a compare-and-swap: concurrent writers are serialized by the
        document lease, or use transition_status instead.

        Args:
            document_id: Document UUID
            status: New status, or None to keep the current one
            **fields: Column values to set

        Returns:
            DocumentModel: Updated document

        Raises:
            NotFoundOrAccessDenied: Document missing
            ValueError: Status change not allowed from the current status
        """
        _truncate_error(fields)
        async with self._transaction("update_status_and_fields") as session:
            document = await document_crud.get_by_id(session, document_id)
            if document is None:
                raise NotFoundOrAccessDenied(document_id)
            if status is not None and status != document.status:
                if not document.status.can_transition_to(status):
                    raise ValueError(
                        f"Illegal status transition {document.status.value} -> {status.value}"
                    )
                document.status = status
            for name, value in fields.items():
                setattr(document, name, value)
            await session.flush()
            await session.refresh(document)
            return document

    async def transition_status(
        self,
        document_id: UUID,
        expected: DocumentStatus,
        new: DocumentStatus,
        **fields: Any,
    ) -> bool:
        """
        Conditionally move a document from ``expected`` to ``new``.

        Returns:
            bool: True if this call performed the transition
        """
        if not expected.can_transition_to(new):
            raise ValueError(f"Illegal status transition {expected.value} -> {new.value}")

        _truncate_error(fields)
        async with self._transaction("transition_status") as session:
            moved = await document_crud.transition_status(
                session, document_id, expected, new, **fields
            )

        logger.info(
            f"{__name__}:transition_status - {expected.value} -> {new.value}",
            extra={"document_id": str(document_id), "applied": moved},
        )
        return moved

    async def insert_chunk(
        self,
        document_id: UUID,
        chunk_id: UUID,
        chunk_index: int,
        content: str,
        token_count: int | None = None,
    ) -> DocumentChunkModel:
        async with self._transaction("insert_chunk") as session:
            return await chunk_crud.create(
                session,
                id=chunk_id,
                document_id=document_id,
                chunk_index=chunk_index,
                content=content,
                token_count=token_count,
            )

    async def list_chunks(self, document_id: UUID) -> Sequence[DocumentChunkModel]:
        async with self._transaction("list_chunks") as session:
            return await chunk_crud.get_by_document_id(session, document_id)

    async def delete_cascade(self, document_id: UUID) -> bool:
        """
        Delete a document and all of its chunk rows in one transaction.

        Chunk rows are deleted explicitly so the result does not depend on
        the database enforcing ON DELETE CASCADE.

        Returns:
            bool: True if the document existed
        """
        async with self._transaction("delete_cascade") as session:
            chunk_count = await chunk_crud.delete_by_document_id(session, document_id)
            existed = await document_crud.delete_by_id(session, document_id)

        logger.info(
            f"{__name__}:delete_cascade - Document deleted",
            extra={
                "document_id": str(document_id),
                "existed": existed,
                "chunks_deleted": chunk_count,
            },
        )
        return existed
