"""HTTP relay adapter — implements the network ports against a relay REST API.

The relay owns the actual network client session. Inbound events reach
the bot as webhooks (see ``infrastructure/api/routes_events.py``); replies
go back out through this client.
"""

from __future__ import annotations

import base64
import logging
from urllib.parse import quote

import httpx

from noob_channel.application.ports.network_port import AuthPort, E2EPort, SingleUseRequest
from noob_channel.config import settings
from noob_channel.domain.entities.events import Contact, SendReport
from noob_channel.domain.exceptions import TransportError

logger = logging.getLogger(__name__)

XX_MESSAGE_TYPE = 2


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _report(body: dict) -> SendReport:
    return SendReport(round_ids=[int(r) for r in body.get("round_ids", [])])


class HttpRelayClient(E2EPort, AuthPort):
    """Talks to the relay over one shared ``httpx.AsyncClient``."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self._client = client or httpx.AsyncClient(
            base_url=base_url or settings.relay_url,
            timeout=timeout if timeout is not None else settings.relay_timeout,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _post(self, path: str, payload: dict, timeout: float | None = None) -> dict:
        try:
            if timeout is None:
                response = await self._client.post(path, json=payload)
            else:
                response = await self._client.post(path, json=payload, timeout=timeout)
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise TransportError(f"relay request to {path} failed: {e}") from e

    async def has_authenticated_channel(self, partner_id: str) -> bool:
        try:
            response = await self._client.get(f"/e2e/partners/{quote(partner_id, safe='')}")
            if response.status_code == httpx.codes.NOT_FOUND:
                return False
            response.raise_for_status()
            return bool(response.json().get("authenticated", False))
        except (httpx.HTTPError, ValueError) as e:
            raise TransportError(f"failed to look up partner {partner_id}: {e}") from e

    async def send_e2e(self, partner_id: str, payload: bytes) -> SendReport:
        body = await self._post(
            "/e2e/messages",
            {"partner_id": partner_id, "message_type": XX_MESSAGE_TYPE, "payload": _b64(payload)},
        )
        return _report(body)

    async def confirm(self, partner: Contact) -> int:
        body = await self._post("/auth/confirm", {"partner_id": partner.partner_id})
        return int(body.get("round_id", 0))

    async def respond_single_use(
        self, request_id: str, payload: bytes, timeout: float
    ) -> SendReport:
        body = await self._post(
            f"/single-use/{quote(request_id, safe='')}/respond",
            {"payload": _b64(payload), "timeout": timeout},
            timeout=timeout,
        )
        return _report(body)


class HttpSingleUseRequest(SingleUseRequest):
    """A single-use request whose response is posted back through the relay."""

    def __init__(
        self, relay: HttpRelayClient, request_id: str, ephemeral_id: int, payload: bytes
    ):
        self._relay = relay
        self.request_id = request_id
        self.ephemeral_id = ephemeral_id
        self.payload = payload
        self._responded = False

    async def respond(self, payload: bytes, timeout: float) -> SendReport:
        if self._responded:
            raise TransportError(f"single-use request {self.request_id} already answered")
        self._responded = True
        return await self._relay.respond_single_use(self.request_id, payload, timeout)
