"""Domain models package."""

from identity_bot.models.chat_login import ChatLogin
from identity_bot.models.dialogue_snapshot import DialogueSnapshot
from identity_bot.models.user_name import UserName

__all__ = [
    "ChatLogin",
    "UserName",
    "DialogueSnapshot",
]
