"""Dependency wiring — builds the bot from concrete adapters."""

from __future__ import annotations

import logging

from fastapi import Request

from noob_channel.adapters.codename.wordlist_codename import WordlistCodename
from noob_channel.adapters.crypto.rsa_channel_adapter import RsaChannelCrypto
from noob_channel.adapters.network.http_relay_adapter import HttpRelayClient
from noob_channel.adapters.persistence.database import async_session_factory
from noob_channel.adapters.persistence.repositories import SqlKeyValueStore
from noob_channel.adapters.vault.filesystem_vault import FilesystemCredentialVault
from noob_channel.application.use_cases.bot import NoobChannelBot, start_bot
from noob_channel.config import Settings, settings
from noob_channel.domain.exceptions import InitializationError, VaultError
from noob_channel.domain.policies.relationship import select_confirmation_policy
from noob_channel.domain.policies.rotation import select_policy

logger = logging.getLogger(__name__)


async def build_bot(
    relay: HttpRelayClient, config: Settings = settings
) -> NoobChannelBot:
    """Wire the SQL store, RSA crypto, word-list codenames and vault into a bot."""
    vault = FilesystemCredentialVault(config.admin_keys_dir)
    try:
        vault.ensure_root()
    except VaultError as e:
        raise InitializationError(str(e)) from e
    vault.purge_incomplete()

    if config.occupancy_reset_on_rotation:
        logger.warning("Occupancy will be reset to 1 after each rotation")

    return await start_bot(
        store=SqlKeyValueStore(async_session_factory),
        crypto=RsaChannelCrypto(key_bits=config.rsa_key_bits),
        codenames=WordlistCodename(),
        vault=vault,
        e2e=relay,
        auth=relay,
        max_payload_length=config.max_message_length,
        cap=config.channel_cap,
        policy=select_policy(config.occupancy_reset_on_rotation),
        confirmation_policy=select_confirmation_policy(config.allowed_partners),
        single_use_timeout=config.single_use_timeout_seconds,
    )


def get_bot(request: Request) -> NoobChannelBot:
    return request.app.state.bot


def get_relay(request: Request) -> HttpRelayClient:
    return request.app.state.relay
