"""Indexed PNG loading.

Pillow opens the file; the mode tells whether it is indexed, the decoder
tile carries the file's bit depth and ``getpalette()`` returns exactly the
PLTE entries. The indices are packed at that bit depth so every pixel
occupies ``bit_depth`` bits, MSB first, each row starting on a byte
boundary.
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Tuple

from PIL import Image, UnidentifiedImageError

from .errors import InputError
from .palette import RGBColor

# PNG rawmodes of color type 3, by bit depth
_BIT_DEPTHS: Dict[str, int] = {"P;1": 1, "P;2": 2, "P;4": 4, "P": 8}


@dataclass(frozen=True)
class IndexedImage:
    width: int
    height: int
    bit_depth: int
    palette: Tuple[RGBColor, ...]
    pixels: bytes
    row_stride: int

    def index_at(self, x: int, y: int) -> int:
        """Unpack the source palette index stored for pixel ``(x, y)``."""
        bit = x * self.bit_depth
        byte = self.pixels[y * self.row_stride + bit // 8]
        shift = 8 - self.bit_depth - (bit % 8)
        return (byte >> shift) & ((1 << self.bit_depth) - 1)


def decode_indexed_png(png_bytes: bytes) -> IndexedImage:
    try:
        with Image.open(io.BytesIO(png_bytes)) as image:
            if image.format != "PNG":
                raise InputError(f"PNG file expected, got {image.format}")
            if image.mode != "P":
                raise InputError("PNG colortype 3 (indexed, 256 colors max) expected!")
            # the decoder tile is dropped once the pixels are loaded
            rawmode = image.tile[0][3] if image.tile else None
            bit_depth = _BIT_DEPTHS.get(rawmode)
            if bit_depth is None:
                raise InputError(f"Unsupported bit depth for an indexed PNG: {rawmode}")
            image.load()
            flat_palette = image.getpalette()
            if not flat_palette:
                raise InputError("Indexed PNG has no palette")
            pixels = image.tobytes("raw", rawmode)
            width, height = image.size
    except UnidentifiedImageError as exc:
        raise InputError(f"Not a PNG file: {exc}") from exc
    except (OSError, SyntaxError, ValueError) as exc:
        raise InputError(f"Could not decode PNG: {exc}") from exc

    palette = tuple(
        RGBColor(*flat_palette[i : i + 3]) for i in range(0, len(flat_palette) - 2, 3)
    )
    return IndexedImage(
        width=width,
        height=height,
        bit_depth=bit_depth,
        palette=palette,
        pixels=pixels,
        row_stride=(width * bit_depth + 7) // 8,
    )


def read_indexed_png(path: str | Path) -> IndexedImage:
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise InputError(f"Could not read {path}: {exc}") from exc
    return decode_indexed_png(data)
