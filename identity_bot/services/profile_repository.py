"""Accessors for login and full-name profile data."""

from __future__ import annotations

import asyncio

from identity_bot.interfaces.store_gateway import StoreGateway
from identity_bot.schemas.profile import FullName, NameSplitPolicy, UserProfile


class ProfileRepository:
    """Reads and writes user profile fields through the store gateway."""

    def __init__(
        self,
        gateway: StoreGateway,
        name_policy: NameSplitPolicy = NameSplitPolicy.JOIN_REMAINDER,
    ) -> None:
        self.gateway = gateway
        self.name_policy = name_policy

    async def record_login_for_conversation(self, conversation_id: int, login: str) -> None:
        await asyncio.to_thread(self.gateway.chat_update, conversation_id, login)

    async def get_login_for_conversation(self, conversation_id: int) -> str | None:
        return await asyncio.to_thread(self.gateway.login_get, conversation_id)

    async def record_name(self, login: str, name: FullName) -> None:
        await asyncio.to_thread(self.gateway.name_update, login, name.first, name.last)

    async def get_name(self, login: str) -> FullName | None:
        """Return the stored name; text that does not parse counts as no name."""
        raw = await asyncio.to_thread(self.gateway.name_get, login)
        return FullName.try_parse(raw, self.name_policy)

    async def get_profile(self, conversation_id: int) -> UserProfile | None:
        login = await self.get_login_for_conversation(conversation_id)
        if login is None:
            return None
        return UserProfile(login=login, name=await self.get_name(login))
