"""Slash-command recognition for inbound messages."""

from enum import Enum


class Command(str, Enum):
    """Commands understood once a user is identified."""

    GET = "get"
    RESET = "reset"


class CommandParser:
    """Parses ``/command`` or ``/command@botname`` messages without arguments."""

    def __init__(self, bot_username: str | None = None) -> None:
        self.bot_username = self._normalize_mention(bot_username) if bot_username else None
        self._commands = {command.value: command for command in Command}

    def parse(self, text: str | None) -> Command | None:
        """Return the command in ``text``, or ``None`` when it is not a recognized command."""
        if text is None:
            return None
        parts = text.strip().split()
        if len(parts) != 1:
            return None

        token = parts[0]
        if not token.startswith("/"):
            return None

        name, _, mention = token[1:].partition("@")
        if mention and not self._addressed_to_us(mention):
            return None
        return self._commands.get(name)

    def _addressed_to_us(self, mention: str) -> bool:
        if self.bot_username is None:
            return True
        return self._normalize_mention(mention) == self.bot_username

    def _normalize_mention(self, mention: str) -> str:
        return mention.strip().lstrip("@").lower()
