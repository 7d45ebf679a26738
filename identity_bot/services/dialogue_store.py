"""Persistence adapter mapping a conversation to its dialogue state."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Generic, TypeVar

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticSerializationError

from identity_bot.core.errors import EncodingError
from identity_bot.interfaces.store_gateway import StoreGateway

logger = logging.getLogger(__name__)

S = TypeVar("S")


class DialogueStore(Generic[S]):
    """Stores any pydantic-serializable state as JSON snapshots.

    Reads are tolerant: a snapshot that no longer decodes into ``S`` is
    reported as absent. Writes are strict and raise ``EncodingError``.
    Store failures surface as ``StoreError`` from the gateway.
    """

    def __init__(self, gateway: StoreGateway, state_type: Any, *, default: S | None = None) -> None:
        self.gateway = gateway
        self.default = default
        self._adapter: TypeAdapter[S] = TypeAdapter(state_type)

    async def get(self, conversation_id: int) -> S | None:
        """Return the latest state of a conversation, or ``None``."""
        raw = await asyncio.to_thread(self.gateway.dialogue_latest, conversation_id)
        if raw is None:
            return None
        if not isinstance(raw, (str, bytes)):
            logger.warning("Ignoring non-text dialogue snapshot for chat %s", conversation_id)
            return None
        try:
            state = self._adapter.validate_json(raw)
        except PydanticValidationError as exc:
            logger.warning("Ignoring undecodable dialogue snapshot for chat %s: %s", conversation_id, exc)
            return None
        logger.debug("Fetched dialogue for chat %s: %r", conversation_id, state)
        return state

    async def load(self, conversation_id: int) -> S:
        """Return the latest state, falling back to the default when absent."""
        state = await self.get(conversation_id)
        if state is not None:
            return state
        if self.default is None:
            raise LookupError(f"No dialogue stored for chat {conversation_id} and no default configured.")
        return self.default

    async def update(self, conversation_id: int, state: S) -> None:
        """Append a new snapshot holding ``state``."""
        try:
            data = self._adapter.dump_json(state, warnings="error").decode("utf-8")
        except PydanticSerializationError as exc:
            raise EncodingError(f"Cannot serialize dialogue state {state!r}.") from exc
        logger.debug("Updating dialogue for chat %s: %s", conversation_id, data)
        await asyncio.to_thread(self.gateway.dialogue_append, conversation_id, data)

    async def remove(self, conversation_id: int) -> None:
        """Delete the whole history of a conversation; absent ones are fine."""
        await asyncio.to_thread(self.gateway.dialogue_delete, conversation_id)
        logger.debug("Removed dialogue for chat %s", conversation_id)
