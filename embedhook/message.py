"""Message builder: the webhook-level payload and its ``send()``."""

from __future__ import annotations

import copy
from typing import Iterable

import httpx

from embedhook import serializer
from embedhook.dispatcher import WebhookDispatcher
from embedhook.embed import Embed
from embedhook.errors import InvalidEndpointError


def validate_endpoint(endpoint: str) -> str:
    """Return *endpoint* unchanged if it is an absolute http(s) URL."""
    if not isinstance(endpoint, str) or not endpoint.strip():
        raise InvalidEndpointError("Webhook endpoint must be a non-empty URL")
    try:
        url = httpx.URL(endpoint)
    except httpx.InvalidURL as exc:
        raise InvalidEndpointError(f"Webhook endpoint is not a valid URL: {endpoint!r}") from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise InvalidEndpointError(
            f"Webhook endpoint must be an absolute http(s) URL: {endpoint!r}"
        )
    return endpoint


class Message:
    """Chainable builder for a webhook message.

    The endpoint is fixed at construction. Embeds are copied when added,
    so changing an :class:`Embed` afterwards does not touch the message.
    """

    def __init__(self, endpoint: str) -> None:
        self._endpoint = validate_endpoint(endpoint)
        self.username: str | None = None
        self.avatar_url: str | None = None
        self.content: str | None = None
        self.embeds: list[Embed] = []

    def __repr__(self) -> str:
        return f"Message(endpoint={self._endpoint!r}, embeds={len(self.embeds)})"

    @property
    def endpoint(self) -> str:
        return self._endpoint

    # ── setters ──────────────────────────────────────────────────────

    def set_username(self, name: str) -> Message:
        self.username = name
        return self

    def set_avatar_url(self, url: str) -> Message:
        self.avatar_url = url
        return self

    def set_content(self, text: str) -> Message:
        self.content = text
        return self

    def add_embed(self, embed: Embed) -> Message:
        self.embeds.append(embed.copy())
        return self

    def add_embeds(self, embeds: Iterable[Embed]) -> Message:
        for embed in embeds:
            self.add_embed(embed)
        return self

    # ── output ───────────────────────────────────────────────────────

    def copy(self) -> Message:
        return copy.deepcopy(self)

    def to_dict(self) -> dict:
        return serializer.message_to_dict(self)

    def to_json(self) -> bytes:
        return serializer.dumps(self)

    async def send(
        self,
        dispatcher: WebhookDispatcher | None = None,
        *,
        wait: bool = False,
    ) -> httpx.Response:
        """POST this message once and return the 2xx response.

        Without a *dispatcher* a temporary one is created and closed
        afterwards. Raises :class:`~embedhook.errors.DeliveryError` on a
        non-2xx answer and :class:`~embedhook.errors.WebhookTransportError`
        when no answer arrives.
        """
        if dispatcher is not None:
            return await dispatcher.send(self, wait=wait)
        async with WebhookDispatcher() as owned:
            return await owned.send(self, wait=wait)
