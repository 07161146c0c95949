"""Hardware limit checks run after conversion, before code output."""

from __future__ import annotations

import warnings
from dataclasses import replace

from .errors import CapacityWarning, ResolutionWarning
from .options import ConvertOptions, Target
from .tiles import PicData

MAX_PALETTE_NUMBER = 7
MAP_SIZE_LIMIT = 32  # tiles per side of the BKG/WIN map
VRAM_TILE_LIMIT = 256
SPRITE_LIMIT = 40
SPRITE_ROW_LIMIT = 10


def _warn(message: str, category: type[Warning] = ResolutionWarning) -> None:
    warnings.warn(message, category, stacklevel=3)


def check_warnings(pic: PicData, options: ConvertOptions) -> ConvertOptions:
    """Return ``options`` corrected to values the Game Boy can use.

    Every correction is reported as a ``ResolutionWarning``; sizes beyond the
    hardware limits are reported as ``CapacityWarning`` and left alone.
    """
    changes = {}

    if options.palnumber > MAX_PALETTE_NUMBER:
        _warn("Palette Number can't be > 7. This will be corrected.")
        changes["palnumber"] = MAX_PALETTE_NUMBER

    if options.is_8x16 and options.base_index & 1:
        base = options.base_index & ~1
        _warn(f"In 8x16 mode base index must be even. Base will be rounded to {base}.")
        changes["base_index"] = base

    if options.test_code and not options.create_map:
        _warn(
            "For the test code to work, the tilemap output option has been "
            "activated despite not being selected."
        )
        changes["create_map"] = True

    if options.sort_palette and not options.create_palette:
        _warn(
            "Palette sorting is activated but palette output is disabled, "
            "so it will be enabled now."
        )
        changes["create_palette"] = True

    fixed = replace(options, **changes) if changes else options
    name = fixed.name

    if fixed.target in (Target.BKG, Target.WINDOW):
        func = "bkg" if fixed.target is Target.BKG else "win"
        if pic.cols > MAP_SIZE_LIMIT or pic.rows > MAP_SIZE_LIMIT:
            _warn(
                f"The image is more than 32x32 tiles in size. The set_{func}_tiles() "
                "calls will most probably overflow.",
                CapacityWarning,
            )
        if pic.total_tiles + fixed.base_index > VRAM_TILE_LIMIT:
            _warn(
                f"There are more than 256 tiles in {name}_dat[] or the chosen base "
                f"index is too high. This may cause problems with set_{func}_data().",
                CapacityWarning,
            )
    else:
        if pic.total_tiles + fixed.base_index > SPRITE_LIMIT:
            _warn(
                f"There are more than 40 frames in {name}_dat[] or the chosen base "
                "index is too high. This may cause problems with set_sprite_data().",
                CapacityWarning,
            )
        # the sprite grid layout only matters to the demo code
        if fixed.test_code and (pic.map_size > SPRITE_LIMIT or pic.cols > SPRITE_ROW_LIMIT):
            _warn(
                "The picture is more than 40 sprites in size or more than 10 sprites "
                "wide. The sample code won't display correctly.",
                CapacityWarning,
            )

    return fixed
