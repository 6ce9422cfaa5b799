"""Load or create the bot's own channel identity."""

from __future__ import annotations

import logging

from noob_channel.application.ports.channel_crypto_port import ChannelCryptoPort, RandomSource
from noob_channel.application.ports.key_value_store import KeyValueStore
from noob_channel.domain.exceptions import InitializationError, NoobChannelError
from noob_channel.domain.value_objects.enums import StateKey
from noob_channel.domain.value_objects.manager_identity import ManagerIdentity
from noob_channel.domain.value_objects.versioned_object import VersionedObject

logger = logging.getLogger(__name__)


async def load_manager_identity(
    store: KeyValueStore, crypto: ChannelCryptoPort, rng: RandomSource
) -> ManagerIdentity:
    """Return the stored identity, generating and saving one on first start.

    Raises:
        InitializationError: if the stored identity is malformed or a new
            one cannot be saved.
    """
    key = StateKey.MANAGER_IDENTITY.value
    try:
        obj = await store.get(key)
    except NoobChannelError as e:
        raise InitializationError("failed to read channel manager identity") from e

    if obj is not None:
        try:
            return crypto.unmarshal_identity(obj.data)
        except ValueError as e:
            raise InitializationError("failed to unmarshal stored channel manager identity") from e

    identity = crypto.generate_identity(rng)
    try:
        await store.set(key, VersionedObject(data=crypto.marshal_identity(identity)))
    except NoobChannelError as e:
        raise InitializationError("failed to save new channel manager identity") from e
    logger.info("Generated new channel manager identity %s", identity.public_key.hex())
    return identity
