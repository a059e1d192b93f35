"""
Qdrant vector index client.

Provides high-level interface for chunk vector storage and retrieval:
collection bootstrap, upsert, filtered similarity search, filtered delete
and id listing for consistency checks. No local caching; every call goes
to Qdrant with the configured timeout.

Dependencies: qdrant_client, studybuddy.configs, studybuddy.core.exceptions
System role: Vector store client for embedding operations
"""

import logging
import uuid

from qdrant_client import AsyncQdrantClient
from qdrant_client.models import (
    Distance,
    FieldCondition,
    Filter,
    FilterSelector,
    MatchValue,
    PointStruct,
    VectorParams,
)

from studybuddy.boundary.vdb.vector_schemas import ChunkPayload, VectorPoint, VectorSearchHit
from studybuddy.configs.vector_store import VectorStoreSettings
from studybuddy.core.exceptions import IndexReadFailure, IndexWriteFailure

logger = logging.getLogger(__name__)

MEMORY_LOCATION = ":memory:"
SCROLL_PAGE_SIZE = 256

_DISTANCES = {
    "cosine": Distance.COSINE,
    "dot": Distance.DOT,
    "euclid": Distance.EUCLID,
}


def _document_filter(document_id: uuid.UUID | str) -> Filter:
    return Filter(
        must=[
            FieldCondition(
                key="document_id",
                match=MatchValue(value=str(document_id)),
            )
        ]
    )


class VectorIndexClient:
    """
    Qdrant client for chunk vectors.

    Points are keyed by chunk id and carry a ChunkPayload. Every library
    error is wrapped in IndexWriteFailure or IndexReadFailure.
    """

    def __init__(self, config: VectorStoreSettings, client: AsyncQdrantClient | None = None) -> None:
        """
        Initialize the Qdrant client from configuration.

        Args:
            config: Vector store settings
            client: Pre-built client (tests); built from config when omitted
        """
        self.config = config
        self.collection_name = config.collection_name

        if client is not None:
            self.client = client
        elif config.url == MEMORY_LOCATION:
            self.client = AsyncQdrantClient(location=MEMORY_LOCATION)
        else:
            self.client = AsyncQdrantClient(
                url=config.url,
                api_key=config.api_key,
                timeout=config.timeout_seconds,
            )

    async def ensure_collection(self, dimension: int | None = None, distance: str | None = None) -> bool:
        """
        Create the collection if it does not exist.

        Args:
            dimension: Vector size (defaults to configured embedding dimension)
            distance: cosine, dot or euclid (defaults to configured metric)

        Returns:
            bool: True if the collection was created by this call

        Raises:
            ValueError: Unknown distance metric
            IndexWriteFailure: Existence check or creation failed
        """
        size = dimension or self.config.embedding_dimension
        metric_name = (distance or self.config.distance).lower()
        if metric_name not in _DISTANCES:
            raise ValueError(f"Unsupported distance metric: {metric_name}")

        try:
            if await self.client.collection_exists(self.collection_name):
                return False

            await self.client.create_collection(
                collection_name=self.collection_name,
                vectors_config=VectorParams(size=size, distance=_DISTANCES[metric_name]),
            )
        except Exception as e:
            raise IndexWriteFailure(
                message=f"Failed to ensure collection: {e}",
                operation="ensure_collection",
                details={"collection": self.collection_name},
            ) from e

        logger.info(
            f"{__name__}:ensure_collection - Collection created",
            extra={"collection": self.collection_name, "dimension": size, "distance": metric_name},
        )
        return True

    async def upsert(self, points: list[VectorPoint]) -> None:
        """
        Upsert points in a single call and wait for the write to apply.

        Chunk ids are deterministic, so re-upserting a document overwrites
        its points instead of duplicating them.

        Raises:
            IndexWriteFailure: If the upsert fails
        """
        if not points:
            return

        structs = [
            PointStruct(
                id=str(point.id),
                vector=point.vector,
                payload=point.payload.to_payload(),
            )
            for point in points
        ]

        try:
            await self.client.upsert(
                collection_name=self.collection_name,
                points=structs,
                wait=True,
            )
        except Exception as e:
            raise IndexWriteFailure(
                message=f"Failed to upsert vectors: {e}",
                operation="upsert",
                details={"point_count": len(points)},
            ) from e

        logger.info(
            f"{__name__}:upsert - Upserted points",
            extra={"collection": self.collection_name, "point_count": len(points)},
        )

    async def search(
        self,
        query_vector: list[float],
        limit: int,
        document_id: uuid.UUID | str | None = None,
    ) -> list[VectorSearchHit]:
        """
        Nearest-neighbour search, optionally restricted to one document.

        Hits keep the order the index returns them in (descending score;
        equal scores in whatever order Qdrant produces).

        Args:
            query_vector: Query embedding
            limit: Maximum hits
            document_id: Restrict to this document's chunks

        Returns:
            list[VectorSearchHit]: Hits hydrated from payload

        Raises:
            IndexReadFailure: If the query fails or a payload is malformed
        """
        query_filter = _document_filter(document_id) if document_id is not None else None

        try:
            response = await self.client.query_points(
                collection_name=self.collection_name,
                query=query_vector,
                query_filter=query_filter,
                limit=limit,
                with_payload=True,
            )
            hits = []
            for point in response.points:
                payload = ChunkPayload.from_payload(point.payload)
                hits.append(
                    VectorSearchHit(
                        document_id=payload.document_id,
                        chunk_id=payload.chunk_id,
                        content=payload.content,
                        score=point.score,
                    )
                )
        except Exception as e:
            raise IndexReadFailure(
                message=f"Failed to search vectors: {e}",
                operation="search",
                details={"limit": limit, "document_id": str(document_id) if document_id else None},
            ) from e

        return hits

    async def delete_by_document(self, document_id: uuid.UUID | str) -> None:
        """
        Delete every point whose payload document_id matches.

        Raises:
            IndexWriteFailure: If the delete fails
        """
        try:
            await self.client.delete(
                collection_name=self.collection_name,
                points_selector=FilterSelector(filter=_document_filter(document_id)),
                wait=True,
            )
        except Exception as e:
            raise IndexWriteFailure(
                message=f"Failed to delete vectors: {e}",
                operation="delete",
                details={"document_id": str(document_id)},
            ) from e

        logger.info(
            f"{__name__}:delete_by_document - Deleted document points",
            extra={"document_id": str(document_id)},
        )

    async def list_point_ids(self, document_id: uuid.UUID | str) -> set[uuid.UUID]:
        """
        Collect the ids of all points belonging to a document.

        Raises:
            IndexReadFailure: If scrolling fails
        """
        ids: set[uuid.UUID] = set()
        offset = None
        try:
            while True:
                points, offset = await self.client.scroll(
                    collection_name=self.collection_name,
                    scroll_filter=_document_filter(document_id),
                    limit=SCROLL_PAGE_SIZE,
                    offset=offset,
                    with_payload=False,
                    with_vectors=False,
                )
                ids.update(uuid.UUID(str(point.id)) for point in points)
                if offset is None:
                    break
        except Exception as e:
            raise IndexReadFailure(
                message=f"Failed to scroll vectors: {e}",
                operation="scroll",
                details={"document_id": str(document_id)},
            ) from e

        return ids

    async def close(self) -> None:
        await self.client.close()
