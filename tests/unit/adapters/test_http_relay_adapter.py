"""Tests for HttpRelayClient using httpx.MockTransport (no network)."""

from __future__ import annotations

import base64
import json

import httpx
import pytest

from noob_channel.adapters.network.http_relay_adapter import (
    XX_MESSAGE_TYPE,
    HttpRelayClient,
    HttpSingleUseRequest,
)
from noob_channel.domain.entities.events import Contact
from noob_channel.domain.exceptions import TransportError


def _relay(handler) -> tuple[HttpRelayClient, list[httpx.Request]]:
    seen: list[httpx.Request] = []

    def record(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    client = httpx.AsyncClient(base_url="http://relay.test", transport=httpx.MockTransport(record))
    return HttpRelayClient(client=client), seen


@pytest.mark.asyncio
async def test_partner_lookup():
    def handler(request):
        if request.url.path == "/e2e/partners/alice":
            return httpx.Response(200, json={"authenticated": True})
        return httpx.Response(404)

    relay, _ = _relay(handler)
    assert await relay.has_authenticated_channel("alice") is True
    assert await relay.has_authenticated_channel("bob") is False
    await relay.aclose()


@pytest.mark.asyncio
async def test_send_e2e_posts_base64_payload():
    relay, seen = _relay(lambda r: httpx.Response(200, json={"round_ids": [11, 12]}))

    report = await relay.send_e2e("alice", b"\x00channel")

    body = json.loads(seen[0].content)
    assert seen[0].url.path == "/e2e/messages"
    assert body["partner_id"] == "alice"
    assert body["message_type"] == XX_MESSAGE_TYPE
    assert base64.b64decode(body["payload"]) == b"\x00channel"
    assert report.round_ids == [11, 12]
    await relay.aclose()


@pytest.mark.asyncio
async def test_confirm_returns_round():
    relay, seen = _relay(lambda r: httpx.Response(200, json={"round_id": 5}))
    assert await relay.confirm(Contact(partner_id="bob")) == 5
    assert json.loads(seen[0].content) == {"partner_id": "bob"}
    await relay.aclose()


@pytest.mark.asyncio
async def test_server_error_becomes_transport_error():
    relay, _ = _relay(lambda r: httpx.Response(503))
    with pytest.raises(TransportError):
        await relay.send_e2e("alice", b"x")
    with pytest.raises(TransportError):
        await relay.has_authenticated_channel("alice")
    await relay.aclose()


@pytest.mark.asyncio
async def test_connection_error_becomes_transport_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    relay, _ = _relay(handler)
    with pytest.raises(TransportError):
        await relay.confirm(Contact(partner_id="bob"))
    await relay.aclose()


@pytest.mark.asyncio
async def test_single_use_request_responds_once():
    relay, seen = _relay(lambda r: httpx.Response(200, json={"round_ids": [3]}))
    request = HttpSingleUseRequest(relay, request_id="r1", ephemeral_id=9, payload=b"hi")

    report = await request.respond(b"channel", timeout=60.0)

    assert report.round_ids == [3]
    assert seen[0].url.path == "/single-use/r1/respond"
    assert json.loads(seen[0].content)["timeout"] == 60.0

    with pytest.raises(TransportError, match="already answered"):
        await request.respond(b"channel", timeout=60.0)
    assert len(seen) == 1
    await relay.aclose()


@pytest.mark.asyncio
async def test_ids_are_escaped_in_paths():
    relay, seen = _relay(lambda r: httpx.Response(200, json={"authenticated": True, "round_ids": []}))

    await relay.has_authenticated_channel("a/b?c#d")
    await relay.respond_single_use("r/1", b"x", timeout=1.0)

    assert seen[0].url.raw_path == b"/e2e/partners/a%2Fb%3Fc%23d"
    assert seen[1].url.raw_path == b"/single-use/r%2F1/respond"
    await relay.aclose()
