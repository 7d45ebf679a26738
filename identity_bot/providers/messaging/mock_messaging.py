"""Mock messaging provider implementation."""

import logging

from identity_bot.interfaces.messaging_provider import MessagingProvider

logger = logging.getLogger(__name__)


class MockMessagingProvider(MessagingProvider):
    """Log-based sender for local testing."""

    async def send_message(self, chat_id: int, text: str) -> None:
        logger.info("[MockMessaging] -> chat=%s | message=%s", chat_id, text)
