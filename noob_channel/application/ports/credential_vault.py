"""Port interface for durable admin credential storage."""

from abc import ABC, abstractmethod


class CredentialVault(ABC):
    @abstractmethod
    async def write_admin_credential(
        self, codename: str, channel_info: bytes, admin_key_pem: bytes
    ) -> None:
        """Store the public channel info and admin key under ``codename``.

        Raises:
            CredentialCollisionError: if credentials already exist for ``codename``.
            VaultError: if either file cannot be written.
        """
        ...
