"""
Test suite for IngestionWorkerPool.

Uses AsyncMock for the orchestrator and fetcher.

System role: Verification of background ingestion dispatch
"""

import asyncio
import logging
import uuid
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from studybuddy.core.document_processing.models import PipelineResult
from studybuddy.core.document_processing.worker_pool import IngestionWorkerPool
from studybuddy.core.exceptions import IngestionError


@pytest.fixture
def mock_orchestrator() -> MagicMock:
    orchestrator = MagicMock()
    orchestrator.run = AsyncMock(
        side_effect=lambda document_id, raw_bytes: PipelineResult(
            document_id=document_id, status="completed", chunk_count=1
        )
    )
    orchestrator.abandon = AsyncMock()
    return orchestrator


@pytest.fixture
def mock_fetcher() -> MagicMock:
    fetcher = MagicMock()
    fetcher.fetch = AsyncMock(return_value=b"%PDF-1.4")
    return fetcher


class TestSubmit:
    """Test suite for IngestionWorkerPool.submit()."""

    @pytest.mark.asyncio
    async def test_submit_should_fetch_then_run(self, mock_orchestrator, mock_fetcher) -> None:
        # Arrange
        pool = IngestionWorkerPool(mock_orchestrator, mock_fetcher, max_concurrency=2)
        document_id = uuid.uuid4()

        # Act
        task = pool.submit(document_id, "https://blob.test/a.pdf")
        result = await task

        # Assert
        mock_fetcher.fetch.assert_awaited_once_with("https://blob.test/a.pdf")
        mock_orchestrator.run.assert_awaited_once_with(document_id, b"%PDF-1.4")
        assert result.status == "completed"
        assert pool.pending_count == 0

    @pytest.mark.asyncio
    async def test_fetch_failure_should_abandon_document(self, mock_orchestrator, mock_fetcher) -> None:
        error = httpx.ConnectError("refused")
        mock_fetcher.fetch.side_effect = error
        pool = IngestionWorkerPool(mock_orchestrator, mock_fetcher)
        document_id = uuid.uuid4()

        result = await pool.submit(document_id, "https://blob.test/a.pdf")

        assert result is None
        mock_orchestrator.abandon.assert_awaited_once_with(document_id, "fetch", error)
        mock_orchestrator.run.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_ingestion_failure_should_not_escape_task(self, mock_orchestrator, mock_fetcher) -> None:
        document_id = uuid.uuid4()
        mock_orchestrator.run.side_effect = IngestionError("embed", document_id, RuntimeError("down"))
        pool = IngestionWorkerPool(mock_orchestrator, mock_fetcher)

        task = pool.submit(document_id, "https://blob.test/a.pdf")
        result = await task

        assert result is None
        assert task.exception() is None

    @pytest.mark.asyncio
    async def test_submit_and_failure_should_log_document_context(
        self, mock_orchestrator, mock_fetcher, caplog
    ) -> None:
        # Arrange
        document_id = uuid.uuid4()
        mock_orchestrator.run.side_effect = RuntimeError("down")
        pool = IngestionWorkerPool(mock_orchestrator, mock_fetcher)
        logger_name = "studybuddy.core.document_processing.worker_pool"

        # Act
        with caplog.at_level(logging.INFO, logger=logger_name):
            await pool.submit(document_id, "https://blob.test/a.pdf")

        # Assert
        records = [record for record in caplog.records if record.name == logger_name]
        scheduled, failed = records
        assert scheduled.levelno == logging.INFO
        assert scheduled.document_id == str(document_id)
        assert scheduled.pending == "1"
        assert failed.levelno == logging.WARNING
        assert failed.document_id == str(document_id)
        assert failed.error == "down"

    @pytest.mark.asyncio
    async def test_in_flight_should_track_running_documents(self, mock_orchestrator, mock_fetcher) -> None:
        release = asyncio.Event()

        async def slow_fetch(file_url: str) -> bytes:
            await release.wait()
            return b"%PDF"

        mock_fetcher.fetch.side_effect = slow_fetch
        pool = IngestionWorkerPool(mock_orchestrator, mock_fetcher)
        document_id = uuid.uuid4()

        pool.submit(document_id, "https://blob.test/a.pdf")
        await asyncio.sleep(0)

        assert pool.in_flight(document_id)
        assert pool.pending_count == 1

        release.set()
        await pool.drain()

        assert not pool.in_flight(document_id)
        assert pool.pending_count == 0


class TestConcurrencyLimit:
    @pytest.mark.asyncio
    async def test_pool_should_not_exceed_max_concurrency(self, mock_orchestrator, mock_fetcher) -> None:
        # Arrange
        active = 0
        peak = 0

        async def tracked_fetch(file_url: str) -> bytes:
            nonlocal active, peak
            active += 1
            peak = max(peak, active)
            await asyncio.sleep(0.01)
            active -= 1
            return b"%PDF"

        mock_fetcher.fetch.side_effect = tracked_fetch
        pool = IngestionWorkerPool(mock_orchestrator, mock_fetcher, max_concurrency=2)

        # Act
        for _ in range(6):
            pool.submit(uuid.uuid4(), "https://blob.test/x.pdf")
        await pool.drain()

        # Assert
        assert peak == 2
        assert mock_orchestrator.run.await_count == 6

    def test_invalid_concurrency_should_raise(self, mock_orchestrator, mock_fetcher) -> None:
        with pytest.raises(ValueError):
            IngestionWorkerPool(mock_orchestrator, mock_fetcher, max_concurrency=0)


class TestShutdown:
    @pytest.mark.asyncio
    async def test_shutdown_with_cancel_should_stop_waiting_tasks(self, mock_orchestrator, mock_fetcher) -> None:
        never = asyncio.Event()

        async def stuck_fetch(file_url: str) -> bytes:
            await never.wait()
            return b""

        mock_fetcher.fetch.side_effect = stuck_fetch
        pool = IngestionWorkerPool(mock_orchestrator, mock_fetcher)
        task = pool.submit(uuid.uuid4(), "https://blob.test/a.pdf")
        await asyncio.sleep(0)

        await pool.shutdown(cancel=True)

        assert task.cancelled()
        assert pool.pending_count == 0
        mock_orchestrator.run.assert_not_awaited()
