"""
Pipeline result model for document processing.

Represents the outcome of driving one document through the ingestion
state machine.

Dependencies: pydantic
System role: Return type for IngestionOrchestrator.run()
"""

import uuid

from pydantic import BaseModel, Field


class PipelineResult(BaseModel):
    """Result of one ingestion run."""

    document_id: uuid.UUID = Field(description="Document that was processed")
    status: str = Field(description="Document status after the run")
    chunk_count: int = Field(default=0, description="Number of chunks persisted and indexed")
    page_count: int | None = Field(default=None, description="Pages found by extraction")
    processing_time_ms: float = Field(default=0.0, description="Wall time of the run in milliseconds")
    skipped: bool = Field(
        default=False,
        description="True when the document was not pending, so nothing was done",
    )
