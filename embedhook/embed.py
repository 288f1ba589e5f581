"""Embed builder and the small value types an embed is made of."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable

from embedhook import serializer
from embedhook.colour import ColourSpec, normalize_colour


@dataclass(frozen=True)
class Field:
    name: str
    value: str
    inline: bool = False


@dataclass(frozen=True)
class Footer:
    text: str
    icon_url: str | None = None


@dataclass(frozen=True)
class Media:
    """Image, thumbnail or video reference."""

    url: str


@dataclass(frozen=True)
class Author:
    name: str
    url: str | None = None
    icon_url: str | None = None


@dataclass(frozen=True)
class Provider:
    name: str | None = None
    url: str | None = None


def _now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """Render *value* as ISO-8601; naive datetimes are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


class Embed:
    """Chainable builder for one rich embed.

    Every setter mutates the embed and returns it, so calls compose::

        embed = Embed().set_title("Deploy").set_colour(Hex("#57F287"))

    Unset attributes stay ``None`` and are left out of the wire payload.
    """

    def __init__(self) -> None:
        self.title: str | None = None
        self.description: str | None = None
        self.url: str | None = None
        self.timestamp: str | None = None
        self.colour: int | None = None
        self.footer: Footer | None = None
        self.image: Media | None = None
        self.thumbnail: Media | None = None
        self.video: Media | None = None
        self.provider: Provider | None = None
        self.author: Author | None = None
        self.fields: list[Field] = []

    def __repr__(self) -> str:
        return f"Embed(title={self.title!r}, fields={len(self.fields)})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Embed):
            return NotImplemented
        return vars(self) == vars(other)

    __hash__ = None  # mutable

    @property
    def color(self) -> int | None:
        return self.colour

    # ── text ─────────────────────────────────────────────────────────

    def set_title(self, title: str) -> Embed:
        self.title = title
        return self

    def set_description(self, description: str) -> Embed:
        self.description = description
        return self

    def set_url(self, url: str) -> Embed:
        self.url = url
        return self

    def set_timestamp(self, value: str | datetime | None = None) -> Embed:
        """Set the embed timestamp.

        A string is stored as given. ``None`` captures the current UTC time
        right now, not when the message is later sent.
        """
        if value is None:
            self.timestamp = format_timestamp(_now())
        elif isinstance(value, datetime):
            self.timestamp = format_timestamp(value)
        else:
            self.timestamp = value
        return self

    # ── colour ───────────────────────────────────────────────────────

    def _apply_colour(self, spec: ColourSpec) -> Embed:
        # normalise first so a bad spec leaves the previous colour intact
        self.colour = normalize_colour(spec)
        return self

    def set_colour(self, spec: ColourSpec) -> Embed:
        """Set the sidebar colour from a Hex, RGB or Decimal specification.

        Raises :class:`~embedhook.errors.ColourError` on malformed input.
        """
        return self._apply_colour(spec)

    def set_color(self, spec: ColourSpec) -> Embed:
        return self._apply_colour(spec)

    # ── compound parts ───────────────────────────────────────────────

    def set_footer(self, text: str, icon_url: str | None = None) -> Embed:
        self.footer = Footer(text, icon_url)
        return self

    def set_image(self, url: str) -> Embed:
        self.image = Media(url)
        return self

    def set_thumbnail(self, url: str) -> Embed:
        self.thumbnail = Media(url)
        return self

    def set_video(self, url: str) -> Embed:
        self.video = Media(url)
        return self

    def set_provider(self, name: str | None = None, url: str | None = None) -> Embed:
        self.provider = Provider(name, url)
        return self

    def set_author(
        self,
        name: str,
        url: str | None = None,
        icon_url: str | None = None,
    ) -> Embed:
        self.author = Author(name, url, icon_url)
        return self

    # ── fields ───────────────────────────────────────────────────────

    def add_field(
        self,
        field: Field | str,
        value: str | None = None,
        inline: bool = False,
    ) -> Embed:
        """Append a field.

        Accepts either a ready :class:`Field` or ``name, value, inline``.
        """
        if isinstance(field, Field):
            if value is not None:
                raise TypeError("value must not be given together with a Field")
            self.fields.append(field)
        else:
            if value is None:
                raise TypeError("add_field() needs a value when called with a name")
            self.fields.append(Field(field, value, inline))
        return self

    def add_fields(self, fields: Iterable[Field]) -> Embed:
        self.fields.extend(fields)
        return self

    # ── output ───────────────────────────────────────────────────────

    def copy(self) -> Embed:
        return copy.deepcopy(self)

    def to_dict(self) -> dict:
        return serializer.embed_to_dict(self)
