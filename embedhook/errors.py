"""Exception hierarchy for embedhook."""

from __future__ import annotations

import httpx


class WebhookError(Exception):
    """Base class for every error raised by embedhook."""


class InvalidEndpointError(WebhookError, ValueError):
    """The webhook endpoint is empty or not an absolute http(s) URL."""


class ColourError(WebhookError, ValueError):
    """A colour specification is malformed or out of range."""


class ConfigError(WebhookError):
    """The configuration cannot produce a usable message or dispatcher."""


class WebhookTransportError(WebhookError):
    """The request never got an HTTP response (DNS, refused, timeout...)."""


class DeliveryError(WebhookError):
    """The endpoint answered with a non-2xx status.

    ``status_code`` and ``body`` are exposed so callers can inspect
    validation messages sent back by the remote service.
    """

    def __init__(self, status_code: int, body: str, response: httpx.Response | None = None) -> None:
        super().__init__(f"Webhook delivery failed with HTTP {status_code}: {body}")
        self.status_code = status_code
        self.body = body
        self.response = response
