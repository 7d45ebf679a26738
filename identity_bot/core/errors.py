"""Error kinds raised by the dialogue engine."""


class BotError(Exception):
    """Base class for identity bot errors."""


class StoreError(BotError):
    """The durable store failed: connectivity, pool exhaustion or a malformed response."""


class EncodingError(BotError):
    """A value could not be serialized for writing."""


class ValidationError(BotError):
    """User input could not be interpreted; handlers recover by re-prompting."""


class ConfigurationError(BotError):
    """Fatal startup problem: incomplete routing table or unreachable store."""
