"""Build Discord-style webhook messages and deliver them with one POST."""

from __future__ import annotations

from embedhook.colour import (
    BLACK,
    BLURPLE,
    GREEN,
    RED,
    RGB,
    WHITE,
    YELLOW,
    Decimal,
    Hex,
    normalize_colour,
)
from embedhook.dispatcher import WebhookDispatcher
from embedhook.embed import Author, Embed, Field, Footer, Media, Provider
from embedhook.errors import (
    ColourError,
    ConfigError,
    DeliveryError,
    InvalidEndpointError,
    WebhookError,
    WebhookTransportError,
)
from embedhook.message import Message
from embedhook.queue import QueueResult, WebhookQueue

__version__ = "0.1.0"

__all__ = [
    "BLACK",
    "BLURPLE",
    "GREEN",
    "RED",
    "WHITE",
    "YELLOW",
    "Author",
    "ColourError",
    "ConfigError",
    "Decimal",
    "DeliveryError",
    "Embed",
    "Field",
    "Footer",
    "Hex",
    "InvalidEndpointError",
    "Media",
    "Message",
    "Provider",
    "QueueResult",
    "RGB",
    "WebhookDispatcher",
    "WebhookError",
    "WebhookQueue",
    "WebhookTransportError",
    "normalize_colour",
]
