"""NoobChannelBot — wires the rotation core to its collaborators."""

from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass

from noob_channel.application.ports.channel_crypto_port import ChannelCryptoPort, RandomSource
from noob_channel.application.ports.codename_port import CodenamePort
from noob_channel.application.ports.credential_vault import CredentialVault
from noob_channel.application.ports.key_value_store import KeyValueStore
from noob_channel.application.ports.network_port import AuthPort, E2EPort
from noob_channel.application.use_cases.admit_join import ChannelAllocator
from noob_channel.application.use_cases.dispatch import (
    DEFAULT_SINGLE_USE_TIMEOUT,
    AuthCallbacks,
    MessageListener,
    RequestDispatcher,
    SingleUseCallback,
)
from noob_channel.application.use_cases.generate_channel import GenerateChannelUseCase
from noob_channel.application.use_cases.manager_identity import load_manager_identity
from noob_channel.application.use_cases.rotation_state import load_rotation_state
from noob_channel.domain.policies.relationship import ConfirmationPolicy, accept_all
from noob_channel.domain.policies.rotation import (
    DEFAULT_CHANNEL_CAP,
    RotationPolicy,
    rotate_when_over_cap,
)
from noob_channel.domain.value_objects.manager_identity import ManagerIdentity

logger = logging.getLogger(__name__)


@dataclass
class NoobChannelBot:
    identity: ManagerIdentity
    allocator: ChannelAllocator
    dispatcher: RequestDispatcher

    def name(self) -> str:
        return self.dispatcher.name()


async def start_bot(
    store: KeyValueStore,
    crypto: ChannelCryptoPort,
    codenames: CodenamePort,
    vault: CredentialVault,
    e2e: E2EPort,
    auth: AuthPort,
    max_payload_length: int,
    cap: int = DEFAULT_CHANNEL_CAP,
    policy: RotationPolicy = rotate_when_over_cap,
    confirmation_policy: ConfirmationPolicy = accept_all,
    single_use_timeout: float = DEFAULT_SINGLE_USE_TIMEOUT,
    rng: RandomSource = secrets.token_bytes,
) -> NoobChannelBot:
    """Load (or create) all persisted state and build the handlers.

    Raises:
        InitializationError: if any stored record is unusable.
    """
    identity = await load_manager_identity(store, crypto, rng)

    generate_channel = GenerateChannelUseCase(
        store=store,
        crypto=crypto,
        codenames=codenames,
        vault=vault,
        max_payload_length=max_payload_length,
        rng=rng,
    )
    state = await load_rotation_state(store, crypto, generate_channel)

    allocator = ChannelAllocator(
        state=state,
        store=store,
        crypto=crypto,
        generate_channel=generate_channel,
        cap=cap,
        policy=policy,
    )
    dispatcher = RequestDispatcher(
        listener=MessageListener(allocator, e2e),
        auth=AuthCallbacks(auth, confirmation_policy),
        single_use=SingleUseCallback(allocator, single_use_timeout),
    )
    bot = NoobChannelBot(identity=identity, allocator=allocator, dispatcher=dispatcher)
    logger.info("Running %s", bot.name())
    return bot
