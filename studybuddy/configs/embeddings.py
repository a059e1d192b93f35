"""
Embedding service configuration settings.

Settings for the external feature-extraction endpoint that turns chunk
text into vectors.

Dependencies: pydantic, pydantic_settings
System role: Embedding client configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MODEL_ID = "sentence-transformers/all-MiniLM-L6-v2"


class EmbeddingSettings(BaseSettings):
    """HuggingFace-style inference endpoint configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="EMBEDDING_",
        case_sensitive=False,
        extra="ignore",
    )

    api_url: str = Field(
        default=f"https://api-inference.huggingface.co/models/{DEFAULT_MODEL_ID}",
        description="Feature-extraction endpoint URL",
    )
    api_key: str = Field(default="", description="Bearer token for the inference API")
    batch_size: int = Field(default=32, ge=1, description="Texts sent per request")
    timeout_seconds: float = Field(default=30.0, description="Per-request timeout")
