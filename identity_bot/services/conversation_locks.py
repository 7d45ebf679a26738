"""Per-conversation ordering of message processing."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager


class ConversationLocks:
    """Hands out one asyncio lock per conversation id.

    Entries are reference-counted and dropped once no task holds or waits
    for them. Must be used from a single event loop.
    """

    def __init__(self) -> None:
        self._locks: dict[int, asyncio.Lock] = {}
        self._holders: dict[int, int] = {}

    @asynccontextmanager
    async def hold(self, conversation_id: int) -> AsyncIterator[None]:
        """Serialize the enclosed block with every other block for the same conversation."""
        lock = self._locks.get(conversation_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[conversation_id] = lock
        self._holders[conversation_id] = self._holders.get(conversation_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._holders[conversation_id] -= 1
            if self._holders[conversation_id] == 0:
                del self._holders[conversation_id]
                del self._locks[conversation_id]

    def tracked_count(self) -> int:
        """Number of conversations with a task holding or waiting for their lock."""
        return len(self._locks)
