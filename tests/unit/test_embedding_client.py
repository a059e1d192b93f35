"""
Test suite for the embedding service client.

Uses httpx.MockTransport in place of the inference endpoint.

System role: Verification of embedding batching and response validation
"""

import json

import httpx
import pytest

from studybuddy.boundary.embeddings.embedding_client import EmbeddingClient
from studybuddy.configs.embeddings import EmbeddingSettings
from studybuddy.core.exceptions import EmbeddingFailure

DIMENSION = 3


def _client(handler, batch_size: int = 2, api_key: str = "secret") -> EmbeddingClient:
    settings = EmbeddingSettings(
        api_url="http://embeddings.test/models/mini",
        api_key=api_key,
        batch_size=batch_size,
    )
    return EmbeddingClient(
        settings,
        dimension=DIMENSION,
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


def _echo_handler(seen: list[dict]):
    """Return the input length as the first component, so order is observable."""

    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        seen.append({"body": body, "headers": dict(request.headers)})
        return httpx.Response(200, json=[[float(len(text)), 0.0, 1.0] for text in body["inputs"]])

    return handler


class TestEmbed:
    """Test suite for EmbeddingClient.embed()."""

    @pytest.mark.asyncio
    async def test_embed_should_batch_and_preserve_order(self) -> None:
        # Arrange
        seen: list[dict] = []
        client = _client(_echo_handler(seen), batch_size=2)
        texts = ["a", "bb", "ccc", "dddd", "eeeee"]

        # Act
        vectors = await client.embed(texts)

        # Assert
        assert [vector[0] for vector in vectors] == [1.0, 2.0, 3.0, 4.0, 5.0]
        assert [request["body"]["inputs"] for request in seen] == [["a", "bb"], ["ccc", "dddd"], ["eeeee"]]
        assert seen[0]["body"]["options"] == {"wait_for_model": True}
        assert seen[0]["headers"]["authorization"] == "Bearer secret"
        await client.aclose()

    @pytest.mark.asyncio
    async def test_embed_without_api_key_should_not_send_authorization(self) -> None:
        seen: list[dict] = []
        client = _client(_echo_handler(seen), api_key="")

        await client.embed(["text"])

        assert "authorization" not in seen[0]["headers"]
        await client.aclose()

    @pytest.mark.asyncio
    async def test_embed_empty_input_should_not_call_service(self) -> None:
        seen: list[dict] = []
        client = _client(_echo_handler(seen))

        assert await client.embed([]) == []
        assert seen == []
        await client.aclose()

    @pytest.mark.asyncio
    async def test_embed_one_should_return_single_vector(self) -> None:
        client = _client(_echo_handler([]))

        assert await client.embed_one("four") == [4.0, 0.0, 1.0]
        await client.aclose()


class TestEmbedFailures:
    """Every malformed or failed response fails the whole call."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("status", "payload", "match"),
        [
            (503, {"error": "loading"}, "HTTP 503"),
            (200, {"embeddings": []}, "no vectors"),
            (200, [], "no vectors"),
            (200, [[1.0, 2.0, 3.0]], "count mismatch"),
            (200, [[1.0, 2.0], [1.0, 2.0]], "dimension mismatch"),
            (200, [[1.0, "x", 3.0], [1.0, 2.0, 3.0]], "malformed"),
        ],
    )
    async def test_bad_response_should_raise_embedding_failure(self, status, payload, match) -> None:
        client = _client(lambda request: httpx.Response(status, json=payload), batch_size=8)

        with pytest.raises(EmbeddingFailure, match=match):
            await client.embed(["one", "two"])
        await client.aclose()

    @pytest.mark.asyncio
    async def test_transport_error_should_raise_embedding_failure(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        client = _client(handler)

        with pytest.raises(EmbeddingFailure, match="ConnectTimeout") as exc_info:
            await client.embed(["one"])
        assert isinstance(exc_info.value.__cause__, httpx.ConnectTimeout)
        await client.aclose()

    @pytest.mark.asyncio
    async def test_failure_in_later_batch_should_discard_earlier_results(self) -> None:
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            if len(calls) == 2:
                return httpx.Response(500)
            inputs = json.loads(request.content)["inputs"]
            return httpx.Response(200, json=[[1.0, 1.0, 1.0] for _ in inputs])

        client = _client(handler, batch_size=1)

        with pytest.raises(EmbeddingFailure):
            await client.embed(["a", "b", "c"])
        assert len(calls) == 2
        await client.aclose()
