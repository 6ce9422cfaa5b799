"""Inbound event handlers — every join path ends in ChannelAllocator.admit_join."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from noob_channel.application.ports.network_port import AuthPort, E2EPort, SingleUseRequest
from noob_channel.application.use_cases.admit_join import ChannelAllocator
from noob_channel.domain.entities.events import Contact, ReceivedMessage
from noob_channel.domain.policies.relationship import ConfirmationPolicy, accept_all

logger = logging.getLogger(__name__)

BOT_NAME = "noob-channel-bot"
DEFAULT_SINGLE_USE_TIMEOUT = 60.0


class MessageListener:
    """Answers hellos that arrive over an authenticated channel."""

    def __init__(self, allocator: ChannelAllocator, e2e: E2EPort):
        self._allocator = allocator
        self._e2e = e2e

    def name(self) -> str:
        return BOT_NAME

    async def hear(self, message: ReceivedMessage) -> None:
        try:
            authenticated = await self._e2e.has_authenticated_channel(message.sender_id)
        except Exception:
            logger.exception("Could not look up partner %s", message.sender_id)
            return
        if not authenticated:
            logger.warning(
                "Should have authenticated channel to respond to %s", message.sender_id
            )
            return

        try:
            channel_info = await self._allocator.admit_join()
        except Exception:
            logger.exception("Failed to respond to hello with a noob channel")
            return

        try:
            report = await self._e2e.send_e2e(message.sender_id, channel_info)
        except Exception:
            logger.exception("Failed to send noob channel to user %s", message.sender_id)
            return

        logger.info(
            "Sent hello channel to %s on rounds %s", message.sender_id, report.round_ids
        )


class AuthCallbacks:
    """Handles relationship requests according to a confirmation policy."""

    def __init__(self, auth: AuthPort, policy: ConfirmationPolicy = accept_all):
        self._auth = auth
        self._policy = policy

    async def request(self, partner: Contact) -> None:
        if not self._policy(partner.partner_id):
            logger.warning("Not confirming relationship request from %s", partner.partner_id)
            return
        try:
            round_id = await self._auth.confirm(partner)
        except Exception:
            logger.exception("Failed to confirm auth for %s", partner.partner_id)
            return
        logger.info("Confirmed relationship with %s on round %s", partner.partner_id, round_id)

    async def confirm(self, partner: Contact) -> None:
        logger.debug("Relationship confirmed by %s", partner.partner_id)

    async def reset(self, partner: Contact) -> None:
        logger.debug("Relationship reset by %s", partner.partner_id)


class SingleUseCallback:
    """Answers anonymous single-use hello requests."""

    def __init__(self, allocator: ChannelAllocator, timeout: float = DEFAULT_SINGLE_USE_TIMEOUT):
        self._allocator = allocator
        self._timeout = timeout

    async def callback(self, request: SingleUseRequest) -> None:
        logger.info("Received hello from %d", request.ephemeral_id)
        try:
            channel_info = await self._allocator.admit_join()
        except Exception:
            logger.exception("Failed to respond to hello with a noob channel")
            return

        try:
            report = await request.respond(channel_info, self._timeout)
        except Exception:
            logger.exception("Failed to send noob channel to user %d", request.ephemeral_id)
            return

        logger.info(
            "Sent hello channel to %d on rounds %s", request.ephemeral_id, report.round_ids
        )


@dataclass
class RequestDispatcher:
    """The three handler roles the network client calls into."""

    listener: MessageListener
    auth: AuthCallbacks
    single_use: SingleUseCallback

    def name(self) -> str:
        return self.listener.name()
