"""
Models for document processing pipeline.

Exports: ExtractedText, PipelineResult
"""

from .extracted_text import ExtractedText
from .pipeline_result import PipelineResult

__all__ = [
    "ExtractedText",
    "PipelineResult",
]
