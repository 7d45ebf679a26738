"""Test endpoints for driving the dialogue by hand."""

from fastapi import APIRouter, Depends, HTTPException

from identity_bot.api.deps import get_bot_service
from identity_bot.core.errors import EncodingError, StoreError
from identity_bot.schemas.inbound import DispatchReplies, InboundMessage
from identity_bot.services.bot_service import BotService

router = APIRouter()


@router.post("/test-message", response_model=DispatchReplies)
async def test_message(
    payload: InboundMessage,
    bot_service: BotService = Depends(get_bot_service),
) -> DispatchReplies:
    """Process one message and return the replies it produced."""
    try:
        replies = await bot_service.handle_message(payload)
    except (StoreError, EncodingError) as exc:
        raise HTTPException(status_code=503, detail="Message could not be processed.") from exc
    return DispatchReplies(conversation_id=payload.conversation_id, replies=replies)
