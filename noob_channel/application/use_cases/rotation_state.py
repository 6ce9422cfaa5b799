"""Load and persist the rotation state records."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from noob_channel.application.ports.channel_crypto_port import ChannelCryptoPort
from noob_channel.application.ports.key_value_store import KeyValueStore
from noob_channel.domain.entities.rotation_state import RotationState
from noob_channel.domain.exceptions import (
    InitializationError,
    MalformedChannelError,
    NoobChannelError,
)
from noob_channel.domain.value_objects.channel import ChannelDefinition
from noob_channel.domain.value_objects.enums import StateKey
from noob_channel.domain.value_objects.versioned_object import VersionedObject

if TYPE_CHECKING:
    from noob_channel.application.use_cases.generate_channel import GenerateChannelUseCase

logger = logging.getLogger(__name__)


async def persist_occupancy(store: KeyValueStore, occupancy: int) -> None:
    await store.set(StateKey.IN_CURRENT_CHANNEL.value, VersionedObject.from_uint64(occupancy))


async def persist_sequence(store: KeyValueStore, sequence: int) -> None:
    await store.set(StateKey.CHANNEL_COUNT.value, VersionedObject.from_uint64(sequence))


async def persist_channel(
    store: KeyValueStore, crypto: ChannelCryptoPort, definition: ChannelDefinition
) -> None:
    await store.set(StateKey.CURRENT_CHANNEL.value, VersionedObject(data=crypto.marshal(definition)))


async def _load_counter(store: KeyValueStore, key: StateKey) -> int:
    try:
        obj = await store.get(key.value)
    except NoobChannelError as e:
        raise InitializationError(f"failed to read {key.value}") from e
    if obj is None:
        return 0
    try:
        return obj.as_uint64()
    except ValueError as e:
        raise InitializationError(f"stored {key.value} is malformed") from e


async def load_rotation_state(
    store: KeyValueStore,
    crypto: ChannelCryptoPort,
    generate_channel: GenerateChannelUseCase,
) -> RotationState:
    """Rebuild the rotation state from the store.

    Missing counters default to 0. A missing current channel is generated
    for the loaded sequence number (not an incremented one), so the very
    first channel of a fresh bot has sequence 0.

    Raises:
        InitializationError: if a record is unreadable or malformed, or the
            first channel cannot be generated.
    """
    sequence = await _load_counter(store, StateKey.CHANNEL_COUNT)
    occupancy = await _load_counter(store, StateKey.IN_CURRENT_CHANNEL)

    try:
        obj = await store.get(StateKey.CURRENT_CHANNEL.value)
    except NoobChannelError as e:
        raise InitializationError("failed to read current channel info") from e

    if obj is None:
        logger.info("No stored channel, generating one for sequence %d", sequence)
        try:
            generated = await generate_channel.execute(sequence)
        except NoobChannelError as e:
            raise InitializationError("failed to generate new channel") from e
        current = generated.definition
    else:
        try:
            current = crypto.unmarshal(obj.data)
        except MalformedChannelError as e:
            raise InitializationError("failed to unmarshal current channel info") from e

    logger.info(
        "Loaded rotation state: sequence=%d, occupancy=%d, channel=%s",
        sequence, occupancy, current.name,
    )
    return RotationState(
        channel_sequence=sequence,
        occupancy=occupancy,
        current_channel=current,
    )
