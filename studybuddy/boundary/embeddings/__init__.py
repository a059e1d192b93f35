"""Embedding service boundary: HTTP client for the feature-extraction endpoint."""

from studybuddy.boundary.embeddings.embedding_client import EmbeddingClient

__all__ = ["EmbeddingClient"]
