"""
Ingestion pipeline configuration settings.

Chunking policy, background concurrency, failure recording and blob
fetch behaviour for the document ingestion pipeline.

Dependencies: pydantic, pydantic_settings
System role: Centralized pipeline configuration
"""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from studybuddy.core.document_processing.chunker import (
    CHUNK_OVERLAP_WORDS,
    CHUNK_SIZE_WORDS,
)


class IngestionSettings(BaseSettings):
    """Settings for the document ingestion pipeline."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="INGESTION_",
        case_sensitive=False,
        extra="ignore",
    )

    # Chunking settings
    chunk_size: int = Field(
        default=CHUNK_SIZE_WORDS,
        ge=1,
        description="Words per chunk window",
    )
    chunk_overlap: int = Field(
        default=CHUNK_OVERLAP_WORDS,
        ge=0,
        description="Words shared between consecutive chunks",
    )

    # Background processing
    max_concurrency: int = Field(
        default=4,
        ge=1,
        description="Maximum documents ingested at the same time",
    )
    record_failures: bool = Field(
        default=True,
        description="Transition documents to FAILED when a pipeline step fails",
    )

    # Blob fetch
    fetch_timeout_seconds: float = Field(default=30.0, description="Timeout for downloading raw bytes")
    fetch_max_attempts: int = Field(default=3, ge=1, description="Download attempts on transport errors")

    # Retrieval
    search_max_limit: int = Field(default=100, ge=1, description="Upper bound for search limit")

    @model_validator(mode="after")
    def _check_overlap(self) -> "IngestionSettings":
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError("chunk_overlap must be smaller than chunk_size")
        return self
