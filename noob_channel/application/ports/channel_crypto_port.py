"""Port interface for broadcast channel construction and encoding."""

from abc import ABC, abstractmethod
from collections.abc import Callable

from noob_channel.domain.value_objects.channel import AdminCredential, ChannelDefinition
from noob_channel.domain.value_objects.manager_identity import ManagerIdentity

RandomSource = Callable[[int], bytes]


class ChannelCryptoPort(ABC):
    @abstractmethod
    def new_channel(
        self,
        name: str,
        description: str,
        max_payload_length: int,
        rng: RandomSource,
    ) -> tuple[ChannelDefinition, AdminCredential]:
        """Build a new public channel and its admin key.

        Raises:
            ChannelGenerationError: if the channel cannot be constructed.
        """
        ...

    @abstractmethod
    def marshal(self, definition: ChannelDefinition) -> bytes:
        ...

    @abstractmethod
    def unmarshal(self, data: bytes) -> ChannelDefinition:
        """Decode bytes produced by ``marshal``.

        Raises:
            MalformedChannelError: if ``data`` is not a valid definition.
        """
        ...

    @abstractmethod
    def pem_encode(self, credential: AdminCredential) -> bytes:
        ...

    @abstractmethod
    def generate_identity(self, rng: RandomSource) -> ManagerIdentity:
        """Create the bot's own channel signing identity."""
        ...

    @abstractmethod
    def marshal_identity(self, identity: ManagerIdentity) -> bytes:
        ...

    @abstractmethod
    def unmarshal_identity(self, data: bytes) -> ManagerIdentity:
        """Raises ValueError if ``data`` is not a marshalled identity."""
        ...
