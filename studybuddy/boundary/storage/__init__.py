"""Blob storage boundary: raw document download."""

from studybuddy.boundary.storage.blob_fetcher import BlobFetcher

__all__ = ["BlobFetcher"]
