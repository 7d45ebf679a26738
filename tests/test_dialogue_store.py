"""Unit tests for DialogueStore."""

from __future__ import annotations

import unittest
from typing import Any

from identity_bot.core.errors import EncodingError, StoreError
from identity_bot.interfaces.store_gateway import StoreGateway
from identity_bot.schemas.dialogue import DialogueState
from identity_bot.services.dialogue_store import DialogueStore


class StubGateway(StoreGateway):
    """Keeps dialogue snapshots in memory and records every call."""

    def __init__(self) -> None:
        self.snapshots: dict[int, list[Any]] = {}
        self.calls: list[tuple[str, int]] = []
        self.fail = False

    def _record(self, name: str, chat_id: int) -> None:
        self.calls.append((name, chat_id))
        if self.fail:
            raise StoreError(f"{name} failed")

    def ping(self) -> None:
        pass

    def chat_update(self, chat_id: int, login: str) -> None:
        raise AssertionError("not used")

    def login_get(self, chat_id: int) -> str | None:
        raise AssertionError("not used")

    def name_update(self, login: str, first: str, last: str) -> None:
        raise AssertionError("not used")

    def name_get(self, login: str) -> str | None:
        raise AssertionError("not used")

    def dialogue_append(self, chat_id: int, data: str) -> None:
        self._record("dialogue_append", chat_id)
        self.snapshots.setdefault(chat_id, []).append(data)

    def dialogue_latest(self, chat_id: int) -> Any:
        self._record("dialogue_latest", chat_id)
        history = self.snapshots.get(chat_id)
        return history[-1] if history else None

    def dialogue_delete(self, chat_id: int) -> None:
        self._record("dialogue_delete", chat_id)
        self.snapshots.pop(chat_id, None)


class DialogueStoreTestCase(unittest.IsolatedAsyncioTestCase):
    """Covers tolerant reads, strict writes and removal."""

    def setUp(self) -> None:
        self.gateway = StubGateway()
        self.store: DialogueStore[DialogueState] = DialogueStore(
            self.gateway,
            DialogueState,
            default=DialogueState.START,
        )

    async def test_absent_conversation(self) -> None:
        self.assertIsNone(await self.store.get(42))
        self.assertIs(await self.store.load(42), DialogueState.START)

    async def test_read_after_write_for_every_state(self) -> None:
        for state in DialogueState:
            await self.store.update(42, state)
            self.assertIs(await self.store.get(42), state)

    async def test_snapshot_is_json_text(self) -> None:
        await self.store.update(42, DialogueState.REQUEST_FULL_NAME)
        self.assertEqual(self.gateway.snapshots[42], ['"RequestFullName"'])

    async def test_each_call_is_one_round_trip(self) -> None:
        await self.store.update(42, DialogueState.REQUEST_LOGIN)
        await self.store.get(42)
        await self.store.remove(42)
        self.assertEqual(
            self.gateway.calls,
            [("dialogue_append", 42), ("dialogue_latest", 42), ("dialogue_delete", 42)],
        )

    async def test_undecodable_snapshot_reads_as_absent(self) -> None:
        self.gateway.snapshots[42] = ['"ReceiveFullName"']
        self.assertIsNone(await self.store.get(42))
        self.assertIs(await self.store.load(42), DialogueState.START)

        self.gateway.snapshots[42] = ["{not json"]
        self.assertIsNone(await self.store.get(42))

    async def test_non_text_snapshot_reads_as_absent(self) -> None:
        self.gateway.snapshots[42] = [123]
        self.assertIsNone(await self.store.get(42))

    async def test_remove_is_idempotent(self) -> None:
        await self.store.update(42, DialogueState.IDENTIFIED_USER)
        await self.store.remove(42)
        await self.store.remove(42)
        self.assertIsNone(await self.store.get(42))

    async def test_store_errors_propagate(self) -> None:
        self.gateway.fail = True
        with self.assertRaises(StoreError):
            await self.store.get(42)
        with self.assertRaises(StoreError):
            await self.store.update(42, DialogueState.START)
        with self.assertRaises(StoreError):
            await self.store.remove(42)

    async def test_unserializable_state_is_an_encoding_error(self) -> None:
        store: DialogueStore[dict[str, Any]] = DialogueStore(self.gateway, dict[str, Any])
        with self.assertRaises(EncodingError):
            await store.update(42, {"payload": object()})
        self.assertNotIn(42, self.gateway.snapshots)

    async def test_structured_state_type(self) -> None:
        store: DialogueStore[dict[str, Any]] = DialogueStore(self.gateway, dict[str, Any])
        await store.update(42, {"state": "RequestFullName", "login": "ada"})
        self.assertEqual(await store.get(42), {"state": "RequestFullName", "login": "ada"})

    async def test_load_without_default_raises(self) -> None:
        store: DialogueStore[DialogueState] = DialogueStore(self.gateway, DialogueState)
        with self.assertRaises(LookupError):
            await store.load(42)


if __name__ == "__main__":
    unittest.main()
