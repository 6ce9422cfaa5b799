"""ChannelAllocator — admits joiners and rotates full channels."""

from __future__ import annotations

import asyncio
import logging

from noob_channel.application.ports.channel_crypto_port import ChannelCryptoPort
from noob_channel.application.ports.key_value_store import KeyValueStore
from noob_channel.application.use_cases.generate_channel import GenerateChannelUseCase
from noob_channel.application.use_cases.rotation_state import (
    persist_occupancy,
    persist_sequence,
)
from noob_channel.domain.entities.rotation_state import RotationState
from noob_channel.domain.policies.rotation import (
    DEFAULT_CHANNEL_CAP,
    RotationDecision,
    RotationPolicy,
    rotate_when_over_cap,
)

logger = logging.getLogger(__name__)


class ChannelAllocator:
    """Owns the rotation state and serializes every change to it.

    All of ``admit_join`` runs under one lock: the rollback steps rely on
    the before/after values of a single call, so two joins must never
    interleave.
    """

    def __init__(
        self,
        state: RotationState,
        store: KeyValueStore,
        crypto: ChannelCryptoPort,
        generate_channel: GenerateChannelUseCase,
        cap: int = DEFAULT_CHANNEL_CAP,
        policy: RotationPolicy = rotate_when_over_cap,
    ):
        if cap < 1:
            raise ValueError("Channel cap must be at least 1")
        self._state = state
        self._store = store
        self._crypto = crypto
        self._generate = generate_channel
        self._cap = cap
        self._policy = policy
        self._lock = asyncio.Lock()

    @property
    def state(self) -> RotationState:
        return self._state

    @property
    def cap(self) -> int:
        return self._cap

    async def admit_join(self) -> bytes:
        """Admit one joiner and return the serialized channel to hand out.

        1. Increment occupancy and persist it
        2. Ask the rotation policy whether this join overflows the channel
        3. If so, increment and persist the sequence, then generate a channel
        4. Marshal the (possibly new) current channel

        New values reach ``state`` only after their store write succeeds, so
        a reader between awaits never sees an uncommitted sequence or
        occupancy. A failure after the occupancy write leaves occupancy
        counted and the sequence and current channel at their pre-call
        values.

        Raises:
            PersistenceError, ChannelGenerationError, VaultError: the join
            was not served; nothing is returned to the joiner.
        """
        async with self._lock:
            state = self._state
            occupancy = state.occupancy + 1
            try:
                await persist_occupancy(self._store, occupancy)
            except Exception:
                logger.error("Failed to save new position %d", occupancy)
                raise
            state.occupancy = occupancy

            decision = self._policy(occupancy, self._cap)
            if decision.rotate:
                await self._rotate(decision)

            return self._crypto.marshal(state.current_channel)

    async def _rotate(self, decision: RotationDecision) -> None:
        state = self._state
        previous_sequence = state.channel_sequence
        sequence = previous_sequence + 1

        try:
            await persist_sequence(self._store, sequence)
        except Exception:
            logger.error("Failed to save channel count %d", sequence)
            raise

        try:
            generated = await self._generate.execute(sequence, previous=state.current_channel)
        except Exception:
            await self._restore_sequence(previous_sequence)
            raise

        state.channel_sequence = sequence
        state.current_channel = generated.definition
        logger.info(
            "Rotated to channel %s (sequence %d, occupancy %d)",
            generated.definition.name, sequence, state.occupancy,
        )

        if decision.occupancy_after_rotation != state.occupancy:
            try:
                await persist_occupancy(self._store, decision.occupancy_after_rotation)
            except Exception:
                logger.exception(
                    "Failed to reset position to %d, keeping %d",
                    decision.occupancy_after_rotation, state.occupancy,
                )
            else:
                state.occupancy = decision.occupancy_after_rotation

    async def _restore_sequence(self, sequence: int) -> None:
        try:
            await persist_sequence(self._store, sequence)
        except Exception:
            logger.exception("Failed to restore stored channel count to %d", sequence)
