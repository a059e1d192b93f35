"""
Document CRUD operations.

Provides Create, Read, Update, Delete operations for DocumentModel
with document-specific queries for owner listing and guarded status changes.

Dependencies: sqlalchemy, studybuddy.boundary.db.models.document_model
System role: Document persistence operations
"""

from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from studybuddy.boundary.db.base import utc_now
from studybuddy.boundary.db.CRUD.base_crud import BaseCRUD
from studybuddy.boundary.db.models.document_model import DocumentModel, DocumentStatus


class DocumentCRUD(BaseCRUD[DocumentModel]):
    """
    CRUD operations for DocumentModel.

    Extends BaseCRUD with owner-scoped queries and the conditional
    status transition used to claim a document for processing.
    """

    def __init__(self) -> None:
        """Initialize DocumentCRUD with DocumentModel."""
        super().__init__(DocumentModel)

    async def get_by_id_and_owner(
        self,
        session: AsyncSession,
        id: UUID,
        owner_id: UUID,
    ) -> DocumentModel | None:
        """
        Retrieve a document only if it belongs to the given owner.

        Args:
            session: Async database session
            id: Document UUID
            owner_id: Expected owner UUID

        Returns:
            DocumentModel if found and owned, None otherwise
        """
        stmt = select(DocumentModel).where(
            DocumentModel.id == id,
            DocumentModel.owner_id == owner_id,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_owner_id(
        self,
        session: AsyncSession,
        owner_id: UUID,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[DocumentModel]:
        """
        Retrieve all documents for an owner, oldest first.

        Args:
            session: Async database session
            owner_id: Owner UUID
            limit: Maximum number of documents to return
            offset: Number of documents to skip

        Returns:
            Sequence of DocumentModels ordered by created_at
        """
        stmt = (
            select(DocumentModel)
            .where(DocumentModel.owner_id == owner_id)
            .order_by(DocumentModel.created_at, DocumentModel.id)
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def transition_status(
        self,
        session: AsyncSession,
        id: UUID,
        expected: DocumentStatus,
        new: DocumentStatus,
        **fields: Any,
    ) -> bool:
        """
        Move a document to ``new`` only if it is currently ``expected``.

        Args:
            session: Async database session
            id: Document UUID
            expected: Status the row must hold for the update to apply
            new: Target status
            **fields: Extra columns written in the same UPDATE

        Returns:
            True if the row was updated, False if it was missing or in another state
        """
        stmt = (
            update(DocumentModel)
            .where(DocumentModel.id == id, DocumentModel.status == expected)
            .values(status=new, updated_at=utc_now(), **fields)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount > 0


document_crud = DocumentCRUD()
