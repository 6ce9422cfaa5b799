"""Inbound event webhooks posted by the network relay."""

from __future__ import annotations

import base64
import binascii

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, field_validator

from noob_channel.adapters.network.http_relay_adapter import HttpRelayClient, HttpSingleUseRequest
from noob_channel.application.use_cases.bot import NoobChannelBot
from noob_channel.domain.entities.events import Contact, ReceivedMessage
from noob_channel.infrastructure.api.dependencies import get_bot, get_relay

router = APIRouter(prefix="/events", tags=["events"])


def _decode(v: object) -> bytes:
    if v is None or v == "":
        return b""
    if not isinstance(v, str):
        raise ValueError("payload must be a base64 string")
    try:
        return base64.b64decode(v, validate=True)
    except binascii.Error as e:
        raise ValueError("payload must be base64") from e


class MessageEvent(BaseModel):
    sender_id: str
    payload: bytes = b""
    message_type: int = 0
    round_id: int | None = None

    @field_validator("payload", mode="before")
    @classmethod
    def decode_payload(cls, v):
        return _decode(v)


class SingleUseEvent(BaseModel):
    request_id: str
    ephemeral_id: int
    payload: bytes = b""

    @field_validator("payload", mode="before")
    @classmethod
    def decode_payload(cls, v):
        return _decode(v)


class AuthRequestEvent(BaseModel):
    partner_id: str
    dh_public_key: bytes | None = None
    round_id: int | None = None

    @field_validator("dh_public_key", mode="before")
    @classmethod
    def decode_key(cls, v):
        return _decode(v) if v is not None else None


ACCEPTED = {"status": "accepted"}


@router.post("/message", status_code=status.HTTP_202_ACCEPTED)
async def on_message(event: MessageEvent, bot: NoobChannelBot = Depends(get_bot)):
    """A hello that arrived over an authenticated channel."""
    await bot.dispatcher.listener.hear(
        ReceivedMessage(
            sender_id=event.sender_id,
            payload=event.payload,
            message_type=event.message_type,
            round_id=event.round_id,
        )
    )
    return ACCEPTED


@router.post("/single-use", status_code=status.HTTP_202_ACCEPTED)
async def on_single_use(
    event: SingleUseEvent,
    bot: NoobChannelBot = Depends(get_bot),
    relay: HttpRelayClient = Depends(get_relay),
):
    """An anonymous single-use hello."""
    request = HttpSingleUseRequest(
        relay=relay,
        request_id=event.request_id,
        ephemeral_id=event.ephemeral_id,
        payload=event.payload,
    )
    await bot.dispatcher.single_use.callback(request)
    return ACCEPTED


@router.post("/auth-request", status_code=status.HTTP_202_ACCEPTED)
async def on_auth_request(event: AuthRequestEvent, bot: NoobChannelBot = Depends(get_bot)):
    """A partner asking to set up an authenticated relationship."""
    await bot.dispatcher.auth.request(
        Contact(
            partner_id=event.partner_id,
            dh_public_key=event.dh_public_key,
            round_id=event.round_id,
        )
    )
    return ACCEPTED
