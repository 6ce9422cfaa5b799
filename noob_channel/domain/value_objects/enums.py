"""Domain enums — pure Python, no external dependencies."""

from enum import Enum


class ChannelLevel(str, Enum):
    PUBLIC = "Public"
    PRIVATE = "Private"
    SECRET = "Secret"


class StateKey(str, Enum):
    """Names of the records kept in the key-value store."""

    MANAGER_IDENTITY = "managerIdentity"
    CHANNEL_COUNT = "channelCount"
    IN_CURRENT_CHANNEL = "inCurrentChannel"
    CURRENT_CHANNEL = "currentChannel"
