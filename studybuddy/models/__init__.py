"""
Request/response models exchanged with the (external) HTTP layer.

Exports:
  - UploadDocumentRequest, DocumentResponse, DocumentListResponse
  - SearchRequest, SearchResultItem, SearchResponse, ConsistencyReport
"""

from studybuddy.models.document import (
    DocumentListResponse,
    DocumentResponse,
    UploadDocumentRequest,
)
from studybuddy.models.search import (
    ConsistencyReport,
    SearchRequest,
    SearchResponse,
    SearchResultItem,
)

__all__ = [
    "UploadDocumentRequest",
    "DocumentResponse",
    "DocumentListResponse",
    "SearchRequest",
    "SearchResultItem",
    "SearchResponse",
    "ConsistencyReport",
]
