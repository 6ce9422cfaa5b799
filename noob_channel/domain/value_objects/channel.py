"""Channel value objects — a broadcast channel definition and its admin key."""

from __future__ import annotations

from dataclasses import dataclass

from noob_channel.domain.value_objects.enums import ChannelLevel


@dataclass(frozen=True)
class ChannelDefinition:
    """Public description of a broadcast channel.

    Immutable: rotation swaps the reference held by the rotation state,
    it never edits a definition in place.
    """

    name: str
    description: str
    level: ChannelLevel
    max_payload_length: int
    rsa_public_key_pem: str
    salt: bytes
    channel_id: str


@dataclass(frozen=True)
class AdminCredential:
    """Private administrative key for exactly one ChannelDefinition."""

    channel_id: str
    private_key: object  # opaque to the domain; only the crypto port reads it

    def __repr__(self) -> str:
        return f"AdminCredential(channel_id={self.channel_id!r})"
