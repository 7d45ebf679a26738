"""Webhook endpoints for inbound chat updates."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError as PydanticValidationError

from identity_bot.api.deps import get_bot_service
from identity_bot.core.errors import EncodingError, StoreError
from identity_bot.schemas.inbound import InboundMessage
from identity_bot.services.bot_service import BotService

router = APIRouter()


@router.post("/webhook/messages")
async def receive_webhook(
    payload: dict[str, Any],
    bot_service: BotService = Depends(get_bot_service),
) -> dict[str, str]:
    """Receive a chat update and drive the conversation one step."""
    try:
        message = normalize_update(payload=payload)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    if message is None:
        return {"status": "ignored"}

    try:
        await bot_service.handle_message(message)
    except (StoreError, EncodingError) as exc:
        raise HTTPException(status_code=503, detail="Message could not be processed.") from exc
    return {"status": "accepted"}


def normalize_update(payload: dict[str, Any]) -> InboundMessage | None:
    """Turn a flat or Telegram-style update into an ``InboundMessage``.

    Returns ``None`` for updates that carry no message.
    """
    if "conversation_id" in payload:
        return _validate(payload)

    message = payload.get("message")
    if message is None:
        return None
    if not isinstance(message, dict):
        raise ValueError("Update field 'message' must be an object.")

    chat = message.get("chat")
    if not isinstance(chat, dict) or chat.get("id") is None:
        raise ValueError("Update message is missing 'chat.id'.")

    fields: dict[str, Any] = {
        "conversation_id": chat["id"],
        "text": message.get("text"),
    }
    # Identity hints are only trusted from one-to-one chats.
    if chat.get("type") == "private":
        fields["chat_username"] = chat.get("username")
        fields["first_name"] = chat.get("first_name")
        fields["last_name"] = chat.get("last_name")
    return _validate(fields)


def _validate(fields: dict[str, Any]) -> InboundMessage:
    try:
        return InboundMessage.model_validate(fields)
    except PydanticValidationError as exc:
        raise ValueError(f"Invalid inbound message: {exc.errors(include_url=False)}") from exc
