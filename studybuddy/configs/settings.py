"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from studybuddy.configs.base import BaseSettings
from studybuddy.configs.database import DatabaseSettings
from studybuddy.configs.embeddings import EmbeddingSettings
from studybuddy.configs.ingestion import IngestionSettings
from studybuddy.configs.vector_store import VectorStoreSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    vector_store: VectorStoreSettings = Field(default_factory=VectorStoreSettings)
    embeddings: EmbeddingSettings = Field(default_factory=EmbeddingSettings)
    ingestion: IngestionSettings = Field(default_factory=IngestionSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Environment variables are read once; tests and scripts that need
    different values should build ``Settings(...)`` directly.

    Returns:
        Settings: Application settings instance

    Usage:
        from studybuddy.configs import get_settings
        settings = get_settings()
    """
    return Settings()
