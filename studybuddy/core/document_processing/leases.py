"""
Per-document lease arena.

Serializes work on the same document inside one process: ingestion and
deletion of a document never interleave. Locks are created on demand and
dropped when nobody holds or waits for them, so the arena does not grow
with the number of documents ever seen.

Dependencies: asyncio (stdlib)
System role: In-process single-flight guard for document pipelines
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from uuid import UUID


@dataclass
class _LeaseEntry:
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    refs: int = 0


class DocumentLeaseArena:
    """Reference-counted map of document id to asyncio.Lock."""

    def __init__(self) -> None:
        self._entries: dict[UUID, _LeaseEntry] = {}

    @asynccontextmanager
    async def lease(self, document_id: UUID) -> AsyncIterator[None]:
        """
        Hold the document's lease for the duration of the block.

        Usage:
            async with arena.lease(document_id):
                ...
        """
        entry = self._entries.get(document_id)
        if entry is None:
            entry = self._entries[document_id] = _LeaseEntry()
        entry.refs += 1
        try:
            async with entry.lock:
                yield
        finally:
            entry.refs -= 1
            if entry.refs == 0:
                del self._entries[document_id]

    def is_leased(self, document_id: UUID) -> bool:
        entry = self._entries.get(document_id)
        return entry is not None and entry.lock.locked()

    def __len__(self) -> int:
        return len(self._entries)
