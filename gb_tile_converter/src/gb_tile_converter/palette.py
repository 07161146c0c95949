"""Colors, the four Game Boy shades and palette remapping helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, MutableSequence, Optional, Sequence, Tuple

Color = Tuple[int, int, int]

# Shade values, lightest first. Index i is Game Boy color i.
WHITE = 255
LIGHTGRAY = 172
DARKGRAY = 82
BLACK = 0
GRAY_SHADES: Tuple[int, int, int, int] = (WHITE, LIGHTGRAY, DARKGRAY, BLACK)

_LIGHTNESS_WEIGHTS = (0.2989, 0.5870, 0.1140)


def color_lightness(r: int, g: int, b: int) -> int:
    wr, wg, wb = _LIGHTNESS_WEIGHTS
    return max(0, min(255, int(round(r * wr + g * wg + b * wb))))


@dataclass(frozen=True)
class RGBColor:
    """An 8-bit per channel color with its cached lightness ``L``."""

    r: int
    g: int
    b: int
    L: int = field(init=False, compare=False)

    def __post_init__(self) -> None:
        for name in ("r", "g", "b"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"Color channel {name}={value} out of range 0-255")
        object.__setattr__(self, "L", color_lightness(self.r, self.g, self.b))

    @property
    def rgb(self) -> Color:
        return (self.r, self.g, self.b)

    def __str__(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"


OPAQUE_BLACK = RGBColor(0, 0, 0)


def gb_gray_palette() -> List[RGBColor]:
    """Return the 4-shade palette used for grayscale conversion."""
    return [RGBColor(v, v, v) for v in GRAY_SHADES]


def match_lightness(lightness: int, intensity_set: Sequence[int]) -> int:
    """Index of the intensity closest to ``lightness`` (first one wins ties)."""
    nearest = 0
    shortest = abs(intensity_set[0] - lightness)
    for i in range(1, len(intensity_set)):
        dist = abs(intensity_set[i] - lightness)
        if dist < shortest:
            shortest = dist
            nearest = i
    return nearest


def nearest_shade(lightness: int, sprite: bool = False) -> int:
    """Map a lightness value to the closest Game Boy shade index.

    Sprites reserve color 0 for transparency, so white is not a candidate and
    the result is always in ``1..3``.
    """
    if sprite:
        return match_lightness(lightness, GRAY_SHADES[1:]) + 1
    return match_lightness(lightness, GRAY_SHADES)


def find_palette_color(palette: Sequence[RGBColor], rgb: Color) -> Optional[int]:
    for i, entry in enumerate(palette):
        if entry.rgb == tuple(rgb):
            return i
    return None


def swap_palette_entries(palette: MutableSequence[RGBColor], a: int, b: int) -> None:
    if a == b:
        return
    palette[a], palette[b] = palette[b], palette[a]


def swap_palette_indexes(palette_map: MutableSequence[int], a: int, b: int) -> None:
    """Exchange every reference to target index ``a`` with ``b`` and back."""
    if a == b:
        return
    for i, value in enumerate(palette_map):
        if value == a:
            palette_map[i] = b
        elif value == b:
            palette_map[i] = a


def sort_palette(
    palette: MutableSequence[RGBColor],
    palette_map: MutableSequence[int],
    start_at: int = 0,
) -> None:
    """Bubble sort ``palette[start_at:]`` from light to dark.

    Every swap of two entries is mirrored in ``palette_map`` so source colors
    keep pointing at the same RGB value.
    """
    n = len(palette)
    while True:
        new_n = start_at
        for i in range(start_at + 1, n):
            if palette[i - 1].L < palette[i].L:
                swap_palette_indexes(palette_map, i - 1, i)
                swap_palette_entries(palette, i - 1, i)
                new_n = i
        n = new_n
        if n <= start_at:
            break


def pack_gbc_color(color: RGBColor) -> int:
    """Reduce a color to the 15-bit BGR word used by Game Boy Color palettes."""
    return (color.r >> 3) | ((color.g >> 3) << 5) | ((color.b >> 3) << 10)
