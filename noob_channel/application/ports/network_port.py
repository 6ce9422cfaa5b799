"""Port interfaces for the network client the bot replies through."""

from abc import ABC, abstractmethod

from noob_channel.domain.entities.events import Contact, SendReport


class E2EPort(ABC):
    @abstractmethod
    async def has_authenticated_channel(self, partner_id: str) -> bool:
        ...

    @abstractmethod
    async def send_e2e(self, partner_id: str, payload: bytes) -> SendReport:
        """Send ``payload`` to an authenticated partner.

        Raises:
            TransportError: if the client refused or failed the send.
        """
        ...


class AuthPort(ABC):
    @abstractmethod
    async def confirm(self, partner: Contact) -> int:
        """Confirm a relationship request; returns the round it was sent on."""
        ...


class SingleUseRequest(ABC):
    """An anonymous request that may be answered exactly once."""

    request_id: str
    ephemeral_id: int
    payload: bytes

    @abstractmethod
    async def respond(self, payload: bytes, timeout: float) -> SendReport:
        """Answer the requester, giving up after ``timeout`` seconds.

        Raises:
            TransportError: if the response could not be delivered.
        """
        ...
