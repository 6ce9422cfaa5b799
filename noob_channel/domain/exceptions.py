"""Exception hierarchy for the noob channel bot."""

from __future__ import annotations


class NoobChannelError(Exception):
    """Base exception for all noob channel errors."""


class InitializationError(NoobChannelError):
    """Raised when stored state cannot be loaded and the bot must not start."""


class PersistenceError(NoobChannelError):
    """Raised when the key-value store fails to read or write a record."""


class ChannelGenerationError(NoobChannelError):
    """Raised when a new channel definition cannot be constructed."""


class MalformedChannelError(NoobChannelError, ValueError):
    """Raised when serialized channel bytes cannot be decoded."""


class VaultError(NoobChannelError):
    """Raised when admin credentials cannot be written to disk."""


class CredentialCollisionError(VaultError):
    """Raised when a credential directory already exists for a codename."""


class TransportError(NoobChannelError):
    """Raised when the network relay rejects a send, respond or confirm."""
