"""Port interface for deriving human-readable codenames."""

from abc import ABC, abstractmethod


class CodenamePort(ABC):
    @abstractmethod
    def codename(self, hash_bytes: bytes) -> str:
        """Deterministically map hash bytes to a codename."""
        ...
