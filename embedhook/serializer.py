"""Render messages and embeds into the webhook wire format.

Keys that were never set are left out entirely, never sent as ``null``.
An embed always carries its ``fields`` list; a message without embeds
has no ``embeds`` key.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from embedhook.embed import Embed, Field
    from embedhook.message import Message


def _put(target: dict[str, Any], key: str, value: Any) -> None:
    if value is not None:
        target[key] = value


def field_to_dict(field: Field) -> dict[str, Any]:
    return {"name": field.name, "value": field.value, "inline": field.inline}


def embed_to_dict(embed: Embed) -> dict[str, Any]:
    data: dict[str, Any] = {}
    _put(data, "title", embed.title)
    _put(data, "description", embed.description)
    _put(data, "url", embed.url)
    _put(data, "timestamp", embed.timestamp)
    _put(data, "color", embed.colour)

    if embed.footer is not None:
        footer = {"text": embed.footer.text}
        _put(footer, "icon_url", embed.footer.icon_url)
        data["footer"] = footer

    if embed.image is not None:
        data["image"] = {"url": embed.image.url}
    if embed.thumbnail is not None:
        data["thumbnail"] = {"url": embed.thumbnail.url}
    if embed.video is not None:
        data["video"] = {"url": embed.video.url}

    if embed.provider is not None:
        provider: dict[str, Any] = {}
        _put(provider, "name", embed.provider.name)
        _put(provider, "url", embed.provider.url)
        data["provider"] = provider

    if embed.author is not None:
        author = {"name": embed.author.name}
        _put(author, "url", embed.author.url)
        _put(author, "icon_url", embed.author.icon_url)
        data["author"] = author

    data["fields"] = [field_to_dict(f) for f in embed.fields]
    return data


def message_to_dict(message: Message) -> dict[str, Any]:
    data: dict[str, Any] = {}
    _put(data, "username", message.username)
    _put(data, "avatar_url", message.avatar_url)
    _put(data, "content", message.content)
    if message.embeds:
        data["embeds"] = [embed_to_dict(e) for e in message.embeds]
    return data


def dumps(message: Message) -> bytes:
    """Serialise *message* to the compact UTF-8 JSON request body."""
    return json.dumps(
        message_to_dict(message),
        ensure_ascii=False,
        separators=(",", ":"),
    ).encode("utf-8")
