"""Core conversion pipeline: indexed PNG to Game Boy tiles, map and palette."""

# Reference: Game Boy tile data
# Item                  | Size           | Notes
# ----------------------|----------------|-----------------------------------------------
# Tile (8x8)            | 16 bytes       | 2 bytes per row: low bit plane, high bit plane
# Tile (8x16 sprite)    | 32 bytes       | two 8x8 tiles stacked; even tile index required
# BKG/WIN map           | 32x32 cells    | one tile index per cell
# Tile VRAM             | 256 tiles      | per addressing mode
# OAM                   | 40 sprites     | at most 10 per scanline
# CGB palettes          | 8 x 4 colors   | 15-bit BGR words; sprite color 0 is transparent

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from .emitter import render_c_code, render_disclaimer
from .errors import InputError
from .options import ConvertOptions, Target
from .png_reader import IndexedImage, read_indexed_png
from .reconcile import TARGET_COLORS, ReconciledPalette, reconcile_palette
from .reduction import reduce_tiles
from .tiles import PicData, fill_palette, rasterize
from .validate import check_warnings

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    pic: PicData
    options: ConvertOptions  # as corrected by the validator
    reconciled: ReconciledPalette


def convert_image(image: IndexedImage, options: ConvertOptions) -> ConversionResult:
    if len(image.palette) > TARGET_COLORS and not options.grayscale:
        raise InputError(
            "PNG has more than 4 colors! Select grayscale conversion (-g) and try again."
        )

    reconciled = reconcile_palette(
        image.palette,
        sprite=options.is_sprite,
        grayscale=options.grayscale,
        sort=options.sort_palette,
        transparency=options.transparent,
    )

    pic = rasterize(image, reconciled.palette_map, options.tile_height)

    if options.tile_reduction:
        logger.info("\n<PERFORMING TILE REDUCTION>")
        reduce_tiles(pic)

    checked = check_warnings(pic, options)
    # sorting may have switched palette output on
    if checked.create_palette:
        fill_palette(pic, reconciled.palette)
    return ConversionResult(pic=pic, options=checked, reconciled=reconciled)


def convert_png(path: str | Path, options: ConvertOptions) -> ConversionResult:
    return convert_image(read_indexed_png(path), options)


def describe_options(
    options: ConvertOptions,
    input_name: str,
    output_name: str,
    transparent_index: int = 0,
) -> List[str]:
    """Parameter summary printed in verbose mode.

    ``transparent_index`` is the source palette index the transparency
    setting resolved to, after color lookup and fallback.
    """

    def yes_no(flag: bool) -> str:
        return "YES" if flag else "NO"

    lines = ["", "<PARAMETERS DEBUG>", "INPUT -", f" File            : {input_name}"]
    if options.target is Target.SPRITE:
        lines.append(f" Sprite transp.  : {transparent_index}")
    lines += [
        "",
        "OUTPUT -",
        f" File            : {output_name}",
        f" Data name       : {options.name}",
        f" Grayscale       : {yes_no(options.grayscale)}",
        f" Data type       : {options.describe_target()}",
        f" Palette         : {yes_no(options.create_palette)}",
        f" TileMap         : {yes_no(options.create_map)}",
        f" Test Code       : {yes_no(options.test_code)}",
        f" Palette Index   : {options.palnumber}",
    ]
    if options.test_code or options.create_map:
        lines.append(f" Tile Base Index : {options.base_index}")
    lines += ["", "ADDITIONAL ACTIONS -"]
    if not options.grayscale:
        lines.append(f" Sort Palette    : {yes_no(options.sort_palette)}")
    lines += [f" Tile reduction  : {yes_no(options.tile_reduction)}", ""]
    return lines


def convert_png_to_c(
    input_path: str | Path,
    output_name: str,
    options: ConvertOptions,
    now: Optional[datetime] = None,
) -> str:
    """Convert a PNG file and return the complete C source text."""
    result = convert_png(input_path, options)
    for line in describe_options(
        result.options, str(input_path), output_name, result.reconciled.transparent_index
    ):
        logger.info(line)
    return render_disclaimer(str(input_path), output_name, now) + render_c_code(
        result.pic, result.options
    )
