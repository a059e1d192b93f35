"""
Document chunk CRUD operations.

Dependencies: sqlalchemy, studybuddy.boundary.db.models.chunk_model
System role: Chunk persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from studybuddy.boundary.db.CRUD.base_crud import BaseCRUD
from studybuddy.boundary.db.models.chunk_model import DocumentChunkModel


class ChunkCRUD(BaseCRUD[DocumentChunkModel]):
    """CRUD operations for DocumentChunkModel."""

    def __init__(self) -> None:
        super().__init__(DocumentChunkModel)

    async def get_by_document_id(
        self,
        session: AsyncSession,
        document_id: UUID,
    ) -> Sequence[DocumentChunkModel]:
        """
        Retrieve all chunks of a document in chunk_index order.

        Args:
            session: Async database session
            document_id: Parent document UUID

        Returns:
            Sequence of DocumentChunkModels
        """
        stmt = (
            select(DocumentChunkModel)
            .where(DocumentChunkModel.document_id == document_id)
            .order_by(DocumentChunkModel.chunk_index)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def delete_by_document_id(self, session: AsyncSession, document_id: UUID) -> int:
        """Delete every chunk of a document and return how many rows went."""
        stmt = delete(DocumentChunkModel).where(DocumentChunkModel.document_id == document_id)
        result = await session.execute(stmt)
        return result.rowcount


chunk_crud = ChunkCRUD()
