"""Inbound event entities delivered by the network client."""

from dataclasses import dataclass, field


@dataclass
class ReceivedMessage:
    """A message that arrived over an authenticated end-to-end channel."""

    sender_id: str
    payload: bytes
    message_type: int = 0
    round_id: int | None = None


@dataclass
class Contact:
    """A partner asking to establish an authenticated relationship."""

    partner_id: str
    dh_public_key: bytes | None = None
    round_id: int | None = None


@dataclass
class SendReport:
    """Rounds a reply was sent on, as reported by the network client."""

    round_ids: list[int] = field(default_factory=list)
