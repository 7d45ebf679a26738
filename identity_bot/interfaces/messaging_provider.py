"""Interface contract for messaging providers."""

from abc import ABC, abstractmethod


class MessagingProvider(ABC):
    """Defines outbound message delivery behavior."""

    @abstractmethod
    async def send_message(self, chat_id: int, text: str) -> None:
        """Send a text message to a chat."""
        raise NotImplementedError
