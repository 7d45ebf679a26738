"""Tests for ProfileRepository backed by SqlStoreGateway."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from identity_bot.db.base import Base
from identity_bot.db.session import create_db_engine, create_session_factory
from identity_bot.providers.store.sql_gateway import SqlStoreGateway
from identity_bot.schemas.profile import FullName, NameSplitPolicy, UserProfile
from identity_bot.services.profile_repository import ProfileRepository


class ProfileRepositoryTestCase(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self._tmpdir = tempfile.TemporaryDirectory()
        db_path = Path(self._tmpdir.name) / "bot.db"
        self.engine = create_db_engine(f"sqlite:///{db_path}", pool_size=2, pool_timeout=5)
        Base.metadata.create_all(self.engine)
        self.gateway = SqlStoreGateway(create_session_factory(self.engine))
        self.profiles = ProfileRepository(self.gateway)

    def tearDown(self) -> None:
        self.engine.dispose()
        self._tmpdir.cleanup()

    async def test_login_never_recorded(self) -> None:
        self.assertIsNone(await self.profiles.get_login_for_conversation(42))

    async def test_recording_login_twice_is_idempotent(self) -> None:
        await self.profiles.record_login_for_conversation(42, "ada")
        once = await self.profiles.get_login_for_conversation(42)
        await self.profiles.record_login_for_conversation(42, "ada")
        twice = await self.profiles.get_login_for_conversation(42)
        self.assertEqual(once, "ada")
        self.assertEqual(twice, once)

    async def test_name_is_keyed_by_login(self) -> None:
        await self.profiles.record_name("ada", FullName(first="Ada", last="Lovelace"))
        self.assertEqual(await self.profiles.get_name("ada"), FullName(first="Ada", last="Lovelace"))
        self.assertIsNone(await self.profiles.get_name("charles"))

    async def test_one_word_name_survives(self) -> None:
        await self.profiles.record_name("ada", FullName(first="Ada"))
        self.assertEqual(await self.profiles.get_name("ada"), FullName(first="Ada", last=""))

    async def test_empty_stored_name_counts_as_absent(self) -> None:
        await self.profiles.record_name("ghost", FullName())
        self.assertIsNone(await self.profiles.get_name("ghost"))

    async def test_multi_word_surname_round_trips_with_join_policy(self) -> None:
        await self.profiles.record_name("ada", FullName(first="Ada", last="King Lovelace"))
        self.assertEqual(await self.profiles.get_name("ada"), FullName(first="Ada", last="King Lovelace"))

    async def test_second_token_policy_truncates_stored_surname(self) -> None:
        profiles = ProfileRepository(self.gateway, name_policy=NameSplitPolicy.SECOND_TOKEN)
        await profiles.record_name("ada", FullName(first="Ada", last="King Lovelace"))
        self.assertEqual(await profiles.get_name("ada"), FullName(first="Ada", last="King"))

    async def test_structured_split_is_not_preserved_on_read_back(self) -> None:
        await self.profiles.record_name("mary", FullName(first="Mary Ann", last="Smith"))
        self.assertEqual(await self.profiles.get_name("mary"), FullName(first="Mary", last="Ann Smith"))

    async def test_profile(self) -> None:
        self.assertIsNone(await self.profiles.get_profile(42))
        await self.profiles.record_login_for_conversation(42, "ada")
        self.assertEqual(await self.profiles.get_profile(42), UserProfile(login="ada", name=None))

        await self.profiles.record_name("ada", FullName(first="Ada", last="Lovelace"))
        profile = await self.profiles.get_profile(42)
        self.assertEqual(profile, UserProfile(login="ada", name=FullName(first="Ada", last="Lovelace")))


if __name__ == "__main__":
    unittest.main()
