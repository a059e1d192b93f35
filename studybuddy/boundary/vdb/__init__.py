"""
Vector database boundary layer.

Exports:
  - VectorIndexClient: Qdrant-backed chunk vector index
  - ChunkPayload, VectorPoint, VectorSearchHit: Typed point and hit models

Dependencies: qdrant_client, pydantic
System role: Vector index adapter for ingestion and retrieval
"""

from studybuddy.boundary.vdb.qdrant_store import VectorIndexClient
from studybuddy.boundary.vdb.vector_schemas import ChunkPayload, VectorPoint, VectorSearchHit

__all__ = [
    "VectorIndexClient",
    "ChunkPayload",
    "VectorPoint",
    "VectorSearchHit",
]
