"""User profile value types."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from identity_bot.core.errors import ValidationError

UNKNOWN_USER_NAME = "Unknown user name"


class NameSplitPolicy(str, Enum):
    """How free text is split into first and last name."""

    # Everything after the first token becomes the last name.
    JOIN_REMAINDER = "join"
    # Only the second token is kept; further tokens are dropped.
    SECOND_TOKEN = "second_token"


class FullName(BaseModel):
    """First and last name; either part may be empty."""

    model_config = ConfigDict(frozen=True)

    first: str = ""
    last: str = ""

    @classmethod
    def parse(cls, text: str, policy: NameSplitPolicy = NameSplitPolicy.JOIN_REMAINDER) -> FullName:
        """Split free text into a name, raising ``ValidationError`` when it holds no tokens."""
        parts = text.strip().split(maxsplit=1)
        if not parts:
            raise ValidationError("Full name is empty.")

        first = parts[0]
        if len(parts) == 1:
            return cls(first=first)

        remainder = parts[1]
        if policy is NameSplitPolicy.SECOND_TOKEN:
            return cls(first=first, last=remainder.split()[0])
        return cls(first=first, last=remainder)

    @classmethod
    def try_parse(
        cls,
        text: str | None,
        policy: NameSplitPolicy = NameSplitPolicy.JOIN_REMAINDER,
    ) -> FullName | None:
        """Like ``parse`` but returns ``None`` instead of raising."""
        if text is None:
            return None
        try:
            return cls.parse(text, policy)
        except ValidationError:
            return None

    @classmethod
    def from_parts(cls, first: str | None, last: str | None) -> FullName | None:
        """Build a name from structured fields; both must be present."""
        if first is None or last is None:
            return None
        first, last = first.strip(), last.strip()
        if not first or not last:
            return None
        return cls(first=first, last=last)

    def is_empty(self) -> bool:
        return not self.first and not self.last

    def display(self) -> str:
        if self.is_empty():
            return UNKNOWN_USER_NAME
        return f"{self.first} {self.last}".strip()


class UserProfile(BaseModel):
    """Identity collected for a conversation."""

    model_config = ConfigDict(frozen=True)

    login: str
    name: FullName | None = None
