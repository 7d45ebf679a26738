"""Schemas for inbound messages and the test message endpoint."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from identity_bot.schemas.profile import FullName


class InboundMessage(BaseModel):
    """One message delivered by the transport."""

    conversation_id: int = Field(..., description="Chat identifier", examples=[42])
    text: str | None = Field(default=None, description="Message text", examples=["Ada Lovelace"])
    chat_username: str | None = Field(default=None, description="Public handle of the chat", examples=["ada"])
    first_name: str | None = Field(default=None, description="Platform first name hint")
    last_name: str | None = Field(default=None, description="Platform last name hint")

    @field_validator("text", "chat_username", mode="after")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        return value or None

    def structured_name(self) -> FullName | None:
        """Name hint carried by the transport, when both parts are present."""
        return FullName.from_parts(self.first_name, self.last_name)


class DispatchReplies(BaseModel):
    """Response payload for /test-message."""

    conversation_id: int
    replies: list[str]
