"""Indexed PNG to Game Boy converter.

Turns a PNG with up to 4 colors (or any indexed PNG, in grayscale mode) into
GBDK C source with 2bpp tile data, a tile map, an attribute table, an
optional GBC palette and optional demo code. It can be invoked through the
CLI (``python -m gb_tile_converter``) or imported to convert a single file.
"""

__version__ = "1.0.0"

from .converter import (
    ConversionResult,
    convert_image,
    convert_png,
    convert_png_to_c,
)
from .errors import (
    CapacityWarning,
    ConversionError,
    InputError,
    ResolutionWarning,
    UsageError,
)
from .options import ConvertOptions, PaletteIndex, RgbTransparency, Target

__all__ = [
    "CapacityWarning",
    "ConversionError",
    "ConversionResult",
    "ConvertOptions",
    "InputError",
    "PaletteIndex",
    "ResolutionWarning",
    "RgbTransparency",
    "Target",
    "UsageError",
    "convert_image",
    "convert_png",
    "convert_png_to_c",
]
