"""Bot service entrypoint that delegates processing to the Dispatcher."""

from __future__ import annotations

import logging

from identity_bot.core.errors import ConfigurationError, EncodingError, StoreError
from identity_bot.core.settings import Settings
from identity_bot.interfaces.messaging_provider import MessagingProvider
from identity_bot.interfaces.store_gateway import StoreGateway
from identity_bot.schemas.dialogue import DialogueState
from identity_bot.schemas.inbound import InboundMessage
from identity_bot.schemas.profile import NameSplitPolicy
from identity_bot.services.command_parser import CommandParser
from identity_bot.services.conversation_flow import ConversationFlow
from identity_bot.services.dialogue_store import DialogueStore
from identity_bot.services.dispatcher import Dispatcher
from identity_bot.services.profile_repository import ProfileRepository

logger = logging.getLogger(__name__)

FAILURE_NOTICE = "Something went wrong on our side. Please send your message again."


class BotService:
    """Thin facade that reports engine failures back to the chat."""

    def __init__(self, dispatcher: Dispatcher, messaging_provider: MessagingProvider) -> None:
        self.dispatcher = dispatcher
        self.messaging_provider = messaging_provider

    async def handle_message(self, message: InboundMessage) -> list[str]:
        """Dispatch one message; store and encoding failures are re-raised after notifying the user."""
        try:
            return await self.dispatcher.dispatch(message)
        except (StoreError, EncodingError):
            logger.exception("Failed to process message for chat %s", message.conversation_id)
            await self._notify_failure(message.conversation_id)
            raise

    async def _notify_failure(self, conversation_id: int) -> None:
        try:
            await self.messaging_provider.send_message(chat_id=conversation_id, text=FAILURE_NOTICE)
        except Exception:
            logger.exception("Could not deliver failure notice to chat %s", conversation_id)


def check_store_connectivity(gateway: StoreGateway) -> None:
    """Fail fast when the store cannot be reached at startup."""
    try:
        gateway.ping()
    except StoreError as exc:
        raise ConfigurationError("Durable store is unreachable.") from exc
    logger.info("Connection to the database was established")


def build_bot_service(
    *,
    settings: Settings,
    gateway: StoreGateway,
    messaging_provider: MessagingProvider,
) -> BotService:
    """Wire repositories, flow and dispatcher around a store gateway."""
    profiles = ProfileRepository(gateway=gateway, name_policy=NameSplitPolicy(settings.name_split_policy))
    flow = ConversationFlow(profiles=profiles)
    dispatcher = Dispatcher(
        dialogue_store=DialogueStore(gateway, DialogueState, default=DialogueState.START),
        messaging_provider=messaging_provider,
        routes=flow.routes(),
        fallback=flow.invalid_command,
        command_parser=CommandParser(bot_username=settings.bot_username),
    )
    return BotService(dispatcher=dispatcher, messaging_provider=messaging_provider)
