"""
Embedding service client.

Calls a HuggingFace-style feature-extraction endpoint over HTTP to turn
chunk text into vectors. Inputs are batched; a call either returns one
vector per input, in input order, or fails as a whole.

Dependencies: httpx, studybuddy.configs, studybuddy.core.exceptions
System role: Embedding stage of ingestion and query embedding for retrieval
"""

import logging
import math
from typing import Any

import httpx

from studybuddy.configs.embeddings import EmbeddingSettings
from studybuddy.core.exceptions import EmbeddingFailure

logger = logging.getLogger(__name__)


class EmbeddingClient:
    """
    HTTP client for the embedding endpoint.

    Holds a pooled httpx.AsyncClient and no other state. Every returned
    vector has the configured dimension.
    """

    def __init__(
        self,
        config: EmbeddingSettings,
        dimension: int,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize embedding client.

        Args:
            config: Embedding endpoint settings
            dimension: Expected vector dimension (must match the index)
            client: Optional httpx client (for testing with mocks)
        """
        self.config = config
        self.dimension = dimension

        headers = {"Content-Type": "application/json"}
        if config.api_key:
            headers["Authorization"] = f"Bearer {config.api_key}"

        self._client = client or httpx.AsyncClient(timeout=config.timeout_seconds)
        self._headers = headers

    async def embed(self, texts: list[str]) -> list[list[float]]:
        """
        Embed texts in batches of ``batch_size``.

        Args:
            texts: Strings to embed

        Returns:
            list[list[float]]: One vector per input, same order

        Raises:
            EmbeddingFailure: Any batch failed or returned a malformed result
        """
        if not texts:
            return []

        batch_size = self.config.batch_size
        vectors: list[list[float]] = []
        for start in range(0, len(texts), batch_size):
            batch = texts[start:start + batch_size]
            vectors.extend(await self._embed_batch(batch, batch_number=start // batch_size))

        logger.debug(
            f"{__name__}:embed - Embedded texts",
            extra={"count": len(texts), "batches": math.ceil(len(texts) / batch_size)},
        )
        return vectors

    async def embed_one(self, text: str) -> list[float]:
        """Embed a single text (used for search queries)."""
        return (await self.embed([text]))[0]

    async def _embed_batch(self, batch: list[str], batch_number: int) -> list[list[float]]:
        body = {"inputs": batch, "options": {"wait_for_model": True}}
        try:
            response = await self._client.post(
                self.config.api_url,
                json=body,
                headers=self._headers,
            )
        except httpx.HTTPError as e:
            raise EmbeddingFailure(
                f"Embedding request failed: {type(e).__name__}: {e}",
                details={"batch": batch_number, "batch_size": len(batch)},
            ) from e

        if not response.is_success:
            raise EmbeddingFailure(
                f"Embedding service returned HTTP {response.status_code}",
                details={"batch": batch_number, "body": response.text[:500]},
            )

        try:
            data = response.json()
        except ValueError as e:
            raise EmbeddingFailure(
                "Embedding service returned a non-JSON body",
                details={"batch": batch_number},
            ) from e

        return self._validate(data, expected_count=len(batch), batch_number=batch_number)

    def _validate(self, data: Any, expected_count: int, batch_number: int) -> list[list[float]]:
        if not isinstance(data, list) or not data:
            raise EmbeddingFailure(
                "Embedding service returned no vectors",
                details={"batch": batch_number},
            )
        if len(data) != expected_count:
            raise EmbeddingFailure(
                f"Embedding count mismatch: expected {expected_count}, got {len(data)}",
                details={"batch": batch_number},
            )

        vectors: list[list[float]] = []
        for row in data:
            if not isinstance(row, list) or not all(
                isinstance(value, (int, float)) and not isinstance(value, bool) for value in row
            ):
                raise EmbeddingFailure(
                    "Embedding service returned a malformed vector",
                    details={"batch": batch_number},
                )
            if len(row) != self.dimension:
                raise EmbeddingFailure(
                    f"Embedding dimension mismatch: expected {self.dimension}, got {len(row)}",
                    details={"batch": batch_number},
                )
            vectors.append([float(value) for value in row])
        return vectors

    async def aclose(self) -> None:
        await self._client.aclose()
