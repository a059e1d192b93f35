"""
Blob fetcher.

Downloads the raw bytes of an uploaded document from its storage URL.
Transport errors are retried with exponential backoff; HTTP error
statuses are not.

Dependencies: httpx, tenacity
System role: Raw document download for background ingestion
"""

import logging

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

logger = logging.getLogger(__name__)


class BlobFetcher:
    """Fetch document bytes over HTTP(S)."""

    def __init__(
        self,
        timeout_seconds: float = 30.0,
        max_attempts: int = 3,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize fetcher.

        Args:
            timeout_seconds: Per-request timeout
            max_attempts: Total attempts on transport errors
            client: Optional httpx client (for testing with mocks)
        """
        self.max_attempts = max_attempts
        self._client = client or httpx.AsyncClient(timeout=timeout_seconds, follow_redirects=True)

    async def fetch(self, file_url: str) -> bytes:
        """
        Download a blob.

        Args:
            file_url: Absolute URL of the stored document

        Returns:
            bytes: Response body

        Raises:
            httpx.HTTPStatusError: Non-2xx response
            httpx.TransportError: Still failing after max_attempts
        """
        async for attempt in AsyncRetrying(
            retry=retry_if_exception_type(httpx.TransportError),
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential_jitter(initial=0.5, max=10, jitter=1),
            before_sleep=lambda retry_state: logger.warning(
                f"{__name__}:fetch - Retry {retry_state.attempt_number}/{self.max_attempts} after transport error"
            ),
            reraise=True,
        ):
            with attempt:
                response = await self._client.get(file_url)
                response.raise_for_status()

        logger.debug(
            f"{__name__}:fetch - Blob downloaded",
            extra={"byte_size": len(response.content)},
        )
        return response.content

    async def aclose(self) -> None:
        await self._client.aclose()
