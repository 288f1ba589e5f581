"""Colour specifications and their normalisation to the wire integer."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

from embedhook.errors import ColourError

MAX_COLOUR = 0xFFFFFF

_HEX_PATTERN = re.compile(r"#[0-9A-Fa-f]{6}")


@dataclass(frozen=True)
class Hex:
    """A ``#RRGGBB`` colour string."""

    value: str


@dataclass(frozen=True)
class RGB:
    """Red, green and blue components, each 0-255."""

    r: int
    g: int
    b: int


@dataclass(frozen=True)
class Decimal:
    """A colour already expressed as an integer (0 to 0xFFFFFF)."""

    value: int


ColourSpec = Union[Hex, RGB, Decimal, int, str]

BLURPLE = Decimal(0x5865F2)
GREEN = Decimal(0x57F287)
YELLOW = Decimal(0xFEE75C)
RED = Decimal(0xED4245)
WHITE = Decimal(0xFFFFFF)
BLACK = Decimal(0x000000)

NAMED_COLOURS: dict[str, Decimal] = {
    "blurple": BLURPLE,
    "green": GREEN,
    "yellow": YELLOW,
    "red": RED,
    "white": WHITE,
    "black": BLACK,
}


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _from_hex(value: object) -> int:
    if not isinstance(value, str) or not _HEX_PATTERN.fullmatch(value):
        raise ColourError(f"Hex colour must look like '#RRGGBB', got {value!r}")
    return int(value[1:], 16)


def _from_rgb(r: object, g: object, b: object) -> int:
    for name, component in (("r", r), ("g", g), ("b", b)):
        if not _is_int(component) or not 0 <= component <= 255:
            raise ColourError(f"RGB component {name} must be an integer 0-255, got {component!r}")
    return (r << 16) | (g << 8) | b


def _from_decimal(value: object) -> int:
    if not _is_int(value) or not 0 <= value <= MAX_COLOUR:
        raise ColourError(f"Decimal colour must be an integer 0-{MAX_COLOUR}, got {value!r}")
    return value


def normalize_colour(spec: ColourSpec) -> int:
    """Return the wire integer for *spec*.

    Bare ``str`` values are read as :class:`Hex` and bare ``int`` values as
    :class:`Decimal`. Raises :class:`ColourError` instead of clamping.
    """
    if isinstance(spec, Hex):
        return _from_hex(spec.value)
    if isinstance(spec, RGB):
        return _from_rgb(spec.r, spec.g, spec.b)
    if isinstance(spec, Decimal):
        return _from_decimal(spec.value)
    if isinstance(spec, str):
        return _from_hex(spec)
    if _is_int(spec):
        return _from_decimal(spec)
    raise ColourError(f"Unsupported colour specification: {spec!r}")
