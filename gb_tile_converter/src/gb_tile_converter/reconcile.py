"""Reduce a source palette to the 4 Game Boy colors.

The result is a 4 entry target palette plus a map from every source palette
index to a target index. Whatever reordering happens to the target palette
is mirrored in the map, so a source color always lands on the target entry
holding the same RGB value (or its nearest gray shade in grayscale mode).
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass
from typing import List, Sequence

from .errors import ResolutionWarning
from .options import PaletteIndex, RgbTransparency, Transparency
from .palette import (
    OPAQUE_BLACK,
    RGBColor,
    find_palette_color,
    gb_gray_palette,
    nearest_shade,
    sort_palette,
    swap_palette_entries,
    swap_palette_indexes,
)

logger = logging.getLogger(__name__)

TARGET_COLORS = 4


@dataclass
class ReconciledPalette:
    palette: List[RGBColor]
    palette_map: List[int]
    transparent_index: int
    grayscale: bool


def resolve_transparency(palette: Sequence[RGBColor], transparency: Transparency) -> int:
    """Turn the configured transparent color into a source palette index."""
    if isinstance(transparency, RgbTransparency):
        index = find_palette_color(palette, transparency.rgb)
        if index is None:
            r, g, b = transparency.rgb
            warnings.warn(
                f"RGB Color #{r:02x}{g:02x}{b:02x} Not Found. Defaulting to color 0.",
                ResolutionWarning,
                stacklevel=2,
            )
            return 0
        return index

    index = transparency.index
    if index >= len(palette):
        warnings.warn(
            f"The selected transparent color (#{index:03d}) is invalid! "
            f"The image has {len(palette)} colors only. Defaulting to Color 0!",
            ResolutionWarning,
            stacklevel=2,
        )
        return 0
    return index


def _pad_palette(palette: List[RGBColor]) -> None:
    palette.extend(OPAQUE_BLACK for _ in range(TARGET_COLORS - len(palette)))


def _log_mapping(palette: Sequence[RGBColor], palette_map: Sequence[int]) -> None:
    for src, dst in enumerate(palette_map):
        logger.info("[%02x] --> [%02x] L: %03d", src, dst, palette[dst].L)


def reconcile_palette(
    source: Sequence[RGBColor],
    sprite: bool = False,
    grayscale: bool = False,
    sort: bool = False,
    transparency: Transparency = PaletteIndex(0),
) -> ReconciledPalette:
    """Build the target palette and the source-to-target palette map.

    Args:
        source: The PNG palette, 1 to 256 entries.
        sprite: Sprite output; target color 0 becomes the transparent one.
        grayscale: Map every color to the nearest of the 4 gray shades.
            Palettes with more than 4 entries always take this path.
        sort: Reorder small palettes from light to dark.
        transparency: The transparent color for sprites.
    """
    if not source:
        raise ValueError("Source palette is empty")

    logger.info("\n<ANALYZING COLORS>")
    n = len(source)
    transparent = resolve_transparency(source, transparency) if sprite else 0

    if grayscale or n > TARGET_COLORS:
        logger.info("-- Mapping to a grayscale palette.")
        palette_map = [
            0 if sprite and c == transparent else nearest_shade(color.L, sprite)
            for c, color in enumerate(source)
        ]
        return ReconciledPalette(gb_gray_palette(), palette_map, transparent, True)

    palette = list(source)
    palette_map = list(range(n))
    base = 0

    if sprite:
        # color 0 is always transparent for sprites
        swap_palette_entries(palette, 0, transparent)
        swap_palette_indexes(palette_map, 0, transparent)
        base = 1

    if sort:
        logger.info("-- RE-ARRANGING THE PALETTE FROM LIGHT TO DARK")
        if n < TARGET_COLORS:
            _pad_palette(palette)
            for c in range(base, n):
                new_pos = nearest_shade(palette[c].L, sprite)
                swap_palette_entries(palette, c, new_pos)
                swap_palette_indexes(palette_map, c, new_pos)
        else:
            sort_palette(palette, palette_map, base)
        _log_mapping(palette, palette_map)

    _pad_palette(palette)
    return ReconciledPalette(palette, palette_map, transparent, False)
