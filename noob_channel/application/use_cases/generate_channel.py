"""GenerateChannelUseCase — mint, persist and vault a new broadcast channel."""

from __future__ import annotations

import asyncio
import logging
import secrets
from dataclasses import dataclass

from noob_channel.application.ports.channel_crypto_port import ChannelCryptoPort, RandomSource
from noob_channel.application.ports.codename_port import CodenamePort
from noob_channel.application.ports.credential_vault import CredentialVault
from noob_channel.application.ports.key_value_store import KeyValueStore
from noob_channel.application.use_cases.rotation_state import persist_channel
from noob_channel.domain.exceptions import ChannelGenerationError
from noob_channel.domain.policies.naming import (
    CHANNEL_DESCRIPTION,
    CHANNEL_SALT,
    channel_name,
    channel_seed,
)
from noob_channel.domain.value_objects.channel import ChannelDefinition
from noob_channel.domain.value_objects.enums import StateKey

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratedChannel:
    codename: str
    definition: ChannelDefinition


class GenerateChannelUseCase:
    """Builds the channel for a sequence number and records it durably."""

    def __init__(
        self,
        store: KeyValueStore,
        crypto: ChannelCryptoPort,
        codenames: CodenamePort,
        vault: CredentialVault,
        max_payload_length: int,
        rng: RandomSource = secrets.token_bytes,
        salt: str = CHANNEL_SALT,
    ):
        self._store = store
        self._crypto = crypto
        self._codenames = codenames
        self._vault = vault
        self._max_payload_length = max_payload_length
        self._rng = rng
        self._salt = salt

    def codename_for(self, sequence: int) -> str:
        return self._codenames.codename(channel_seed(sequence, self._salt))

    async def execute(
        self, sequence: int, previous: ChannelDefinition | None = None
    ) -> GeneratedChannel:
        """Generate the channel for ``sequence``.

        Pipeline:
        1. Hash the sequence with the salt and derive the codename
        2. Build the channel and its admin key
        3. Persist the definition as the current channel
        4. Write the admin credential to the vault

        If step 4 fails, the stored current channel is put back to
        ``previous`` (or removed when there was none) before re-raising.

        Raises:
            ChannelGenerationError: if the channel cannot be built.
            PersistenceError: if the definition cannot be stored.
            VaultError: if the credential cannot be written.
        """
        codename = self.codename_for(sequence)
        name = channel_name(codename)
        logger.info("Generating channel %s for sequence %d", name, sequence)

        try:
            definition, credential = await asyncio.to_thread(
                self._crypto.new_channel,
                name,
                CHANNEL_DESCRIPTION,
                self._max_payload_length,
                self._rng,
            )
        except ChannelGenerationError:
            raise
        except Exception as e:
            raise ChannelGenerationError(f"failed to generate channel {name}") from e

        await persist_channel(self._store, self._crypto, definition)

        try:
            await self._vault.write_admin_credential(
                codename,
                self._crypto.marshal(definition),
                self._crypto.pem_encode(credential),
            )
        except Exception:
            logger.error("Failed to write admin credential for %s", name)
            await self._restore_channel(previous)
            raise

        return GeneratedChannel(codename=codename, definition=definition)

    async def _restore_channel(self, previous: ChannelDefinition | None) -> None:
        try:
            if previous is None:
                await self._store.delete(StateKey.CURRENT_CHANNEL.value)
            else:
                await persist_channel(self._store, self._crypto, previous)
        except Exception:
            logger.exception("Failed to restore the stored current channel")
