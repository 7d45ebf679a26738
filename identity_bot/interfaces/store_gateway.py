"""Interface contract for the durable store."""

from abc import ABC, abstractmethod


class StoreGateway(ABC):
    """Procedure-style access to the durable store.

    Every method is a single round trip with no transaction spanning calls.
    Implementations raise ``StoreError`` on any store failure.
    """

    @abstractmethod
    def ping(self) -> None:
        """Check that the store is reachable."""
        raise NotImplementedError

    @abstractmethod
    def chat_update(self, chat_id: int, login: str) -> None:
        """Upsert the login associated with a chat."""
        raise NotImplementedError

    @abstractmethod
    def login_get(self, chat_id: int) -> str | None:
        """Return the login recorded for a chat, if any."""
        raise NotImplementedError

    @abstractmethod
    def name_update(self, login: str, first: str, last: str) -> None:
        """Upsert the full name recorded for a login."""
        raise NotImplementedError

    @abstractmethod
    def name_get(self, login: str) -> str | None:
        """Return the stored full name text for a login, if any."""
        raise NotImplementedError

    @abstractmethod
    def dialogue_append(self, chat_id: int, data: str) -> None:
        """Append a serialized dialogue snapshot for a chat."""
        raise NotImplementedError

    @abstractmethod
    def dialogue_latest(self, chat_id: int) -> str | None:
        """Return the most recent dialogue snapshot for a chat, if any."""
        raise NotImplementedError

    @abstractmethod
    def dialogue_delete(self, chat_id: int) -> None:
        """Delete every dialogue snapshot of a chat."""
        raise NotImplementedError
