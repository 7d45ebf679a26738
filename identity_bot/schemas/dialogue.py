"""Dialogue state of a conversation."""

from enum import Enum


class DialogueState(str, Enum):
    """Position of a conversation in the identification flow.

    Values are the persisted JSON form, so renaming a member is a schema change.
    """

    START = "Start"
    REQUEST_LOGIN = "RequestLogin"
    REQUEST_FULL_NAME = "RequestFullName"
    IDENTIFIED_USER = "IdentifiedUser"
