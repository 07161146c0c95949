"""Conversion options and the sprite transparency setting."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from .errors import UsageError
from .palette import Color


class Target(Enum):
    BKG = "bkg"
    WINDOW = "win"
    SPRITE = "sprite"


@dataclass(frozen=True)
class PaletteIndex:
    """Transparent color given as an index into the source palette."""

    index: int

    def encode(self) -> int:
        return self.index + 1

    def __str__(self) -> str:
        return str(self.index)


@dataclass(frozen=True)
class RgbTransparency:
    """Transparent color given as an RGB value to look up in the palette."""

    r: int
    g: int
    b: int

    @property
    def rgb(self) -> Color:
        return (self.r, self.g, self.b)

    def encode(self) -> int:
        return -(((self.r << 16) | (self.g << 8) | self.b) + 1)

    def __str__(self) -> str:
        return f"RGB({self.r}, {self.g}, {self.b})"


Transparency = Union[PaletteIndex, RgbTransparency]

_HEX_COLOR = re.compile(r"#([0-9a-fA-F]{6})")


def parse_number(text: str) -> int:
    """Parse a decimal integer, rejecting trailing garbage."""
    try:
        return int(text, 10)
    except ValueError as exc:
        raise UsageError(f"Couldn't parse {text} as a number") from exc


def parse_transparency(text: str) -> Transparency:
    """Parse ``#RRGGBB`` or a decimal source palette index."""
    if text.startswith("#"):
        match = _HEX_COLOR.fullmatch(text)
        if match is None:
            raise UsageError(f"Couldn't parse {text[1:]} as a number")
        value = int(match.group(1), 16)
        return RgbTransparency((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)
    index = parse_number(text)
    if index < 0:
        raise UsageError(f"Transparent color index must not be negative: {text}")
    return PaletteIndex(index)


def decode_transparency(value: int) -> Transparency:
    """Inverse of ``encode()``: negative values hold ``-(rgb + 1)``."""
    if value < 0:
        rgb = -(value + 1)
        return RgbTransparency((rgb >> 16) & 0xFF, (rgb >> 8) & 0xFF, rgb & 0xFF)
    if value == 0:
        return PaletteIndex(0)
    return PaletteIndex(value - 1)


@dataclass(frozen=True)
class ConvertOptions:
    """Everything that steers a conversion. Never mutated; see ``validate``."""

    target: Target = Target.BKG
    big_sprite: bool = False  # 8x16 sprites; only meaningful for SPRITE
    transparent: Transparency = field(default_factory=lambda: PaletteIndex(0))
    grayscale: bool = False
    create_palette: bool = False
    sort_palette: bool = False
    create_map: bool = False
    test_code: bool = False
    tile_reduction: bool = False
    palnumber: int = 0
    base_index: int = 1
    name: str = "gbpic"
    verbose: bool = False

    @property
    def is_sprite(self) -> bool:
        return self.target is Target.SPRITE

    @property
    def is_8x16(self) -> bool:
        return self.big_sprite and self.target is Target.SPRITE

    @property
    def tile_height(self) -> int:
        return 16 if self.is_8x16 else 8

    def describe_target(self) -> str:
        if self.target is Target.BKG:
            return "BKG"
        if self.target is Target.WINDOW:
            return "WIN"
        return "SPRITE (8x16)" if self.big_sprite else "SPRITE (8x8)"
