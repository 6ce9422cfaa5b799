"""Port interface for the versioned key-value store."""

from abc import ABC, abstractmethod

from noob_channel.domain.value_objects.versioned_object import VersionedObject


class KeyValueStore(ABC):
    @abstractmethod
    async def get(self, key: str) -> VersionedObject | None:
        """Return the record stored under ``key``, or None if absent.

        Raises:
            PersistenceError: if the store cannot be read.
        """
        ...

    @abstractmethod
    async def set(self, key: str, obj: VersionedObject) -> None:
        """Durably write ``obj`` under ``key``, replacing any previous record.

        Raises:
            PersistenceError: if the write did not commit.
        """
        ...

    @abstractmethod
    async def delete(self, key: str) -> None:
        ...
