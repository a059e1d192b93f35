"""
Vector store configuration settings.

Manages the Qdrant connection and the shape of the chunk collection
(dimension and distance metric must match the embedding model).

Dependencies: pydantic, pydantic_settings
System role: Vector index configuration for RAG retrieval
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VectorStoreSettings(BaseSettings):
    """Qdrant vector index configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="VECTOR_STORE_",
        case_sensitive=False,
        extra="ignore",
    )

    url: str = Field(
        default="http://localhost:6333",
        description="Qdrant URL, or ':memory:' for the in-process local mode",
    )
    api_key: str | None = Field(default=None, description="Qdrant API key")
    collection_name: str = Field(default="documents", description="Collection holding chunk points")

    embedding_dimension: int = Field(
        default=384,
        description="Vector dimension (384 for all-MiniLM-L6-v2)",
    )
    distance: str = Field(
        default="cosine",
        description="Distance metric: cosine, dot or euclid",
    )
    timeout_seconds: int = Field(default=10, description="Per-request timeout")
