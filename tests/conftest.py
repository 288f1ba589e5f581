"""Shared fixtures for the embedhook test suite."""

from __future__ import annotations

import json

import httpx
import pytest

from embedhook.colour import Hex
from embedhook.embed import Embed, Field
from embedhook.message import Message

HOOK_URL = "https://example.test/hook"

# ── transport helpers ─────────────────────────────────────────────────


class MockTransport(httpx.AsyncBaseTransport):
    """Feeds every request to *handler* and records it."""

    def __init__(self, handler):
        self._handler = handler
        self.requests: list[httpx.Request] = []

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    def bodies(self) -> list[dict]:
        return [json.loads(r.content) for r in self.requests]


class RaisingTransport(httpx.AsyncBaseTransport):
    """Fails every request with *exc_type* before any response exists."""

    def __init__(self, exc_type: type[httpx.TransportError], text: str) -> None:
        self._exc_type = exc_type
        self._text = text

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        raise self._exc_type(self._text, request=request)


def _status_handler(status: int, **kwargs):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, request=request, **kwargs)

    return handler


# ── transport fixtures ────────────────────────────────────────────────


@pytest.fixture
def make_transport():
    """Factory: ``make_transport(204)`` or ``make_transport(400, json={...})``.

    A callable ``handler(request) -> Response`` is accepted as well.
    """

    def _make(status_or_handler=204, **kwargs) -> MockTransport:
        if callable(status_or_handler):
            return MockTransport(status_or_handler)
        return MockTransport(_status_handler(status_or_handler, **kwargs))

    return _make


@pytest.fixture
def ok_transport(make_transport) -> MockTransport:
    return make_transport(204)


@pytest.fixture
def timeout_transport() -> RaisingTransport:
    return RaisingTransport(httpx.ReadTimeout, "timed out")


@pytest.fixture
def refused_transport() -> RaisingTransport:
    return RaisingTransport(httpx.ConnectError, "connection refused")


# ── builder fixtures ──────────────────────────────────────────────────


@pytest.fixture
def hook_url() -> str:
    return HOOK_URL


@pytest.fixture
def message() -> Message:
    return Message(HOOK_URL)


@pytest.fixture
def sample_embed() -> Embed:
    """Title, red colour and two fields in order."""
    return (
        Embed()
        .set_title("Title")
        .set_colour(Hex("#FF0000"))
        .add_field(Field("A", "1", True))
        .add_field(Field("B", "2", False))
    )
