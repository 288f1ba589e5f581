"""One-shot HTTP delivery of serialised webhook messages."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from embedhook import serializer
from embedhook.errors import DeliveryError, WebhookTransportError

if TYPE_CHECKING:
    from embedhook.message import Message

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = None
JSON_HEADERS = {"Content-Type": "application/json"}


class WebhookDispatcher:
    """POST webhook bodies to their endpoint, once, with no retries."""

    def __init__(
        self,
        timeout: float | None = DEFAULT_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.timeout = timeout
        self._external_client = client is not None
        self._client = client

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            # without an explicit timeout httpx applies its own default
            kwargs = {} if self.timeout is None else {"timeout": self.timeout}
            self._client = httpx.AsyncClient(**kwargs)
        return self._client

    async def close(self) -> None:
        if self._client and not self._external_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> WebhookDispatcher:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # ── send ─────────────────────────────────────────────────────────

    async def post(self, url: str, body: bytes, *, wait: bool = False) -> httpx.Response:
        """POST a JSON *body* to *url* and return the 2xx response.

        ``wait=True`` adds ``?wait=true`` so the service answers with the
        created message instead of an empty 204.
        """
        client = await self._get_client()
        target = httpx.URL(url)
        if wait:
            target = target.copy_merge_params({"wait": "true"})
        try:
            resp = await client.post(target, content=body, headers=JSON_HEADERS)
        except httpx.RequestError as exc:
            logger.warning("Webhook request failed: %s", exc)
            raise WebhookTransportError(f"Webhook request failed: {exc}") from exc

        if not resp.is_success:
            logger.warning("Webhook HTTP %s: %s", resp.status_code, resp.text)
            raise DeliveryError(resp.status_code, resp.text, response=resp)

        logger.debug("Webhook delivered (HTTP %s)", resp.status_code)
        return resp

    async def send(self, message: Message, *, wait: bool = False) -> httpx.Response:
        """Serialise *message* and POST it to ``message.endpoint``."""
        return await self.post(message.endpoint, serializer.dumps(message), wait=wait)
