"""
Configuration management module.

Provides centralized, type-safe configuration using Pydantic Settings.
Each concern (database, vector index, embeddings, ingestion) has its own
settings class with an environment variable prefix.
"""

from studybuddy.configs.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
