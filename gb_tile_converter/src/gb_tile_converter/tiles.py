"""Game Boy tile storage and rasterization.

A tile is 8 pixels wide and 8 or 16 rows high. Each row takes two bytes:
the first holds bit 0 of every pixel's color and the second holds bit 1,
with the leftmost pixel in the most significant bit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from .palette import RGBColor, pack_gbc_color
from .png_reader import IndexedImage

logger = logging.getLogger(__name__)

TILE_WIDTH = 8


@dataclass
class PicData:
    """Tiles, tilemap and palette of one converted picture."""

    w: int
    h: int
    cols: int
    rows: int
    tileh: int
    total_tiles: int
    tiles: bytearray
    tilemap: List[int]
    pal: List[int] = field(default_factory=lambda: [0, 0, 0, 0])

    @property
    def tile_size(self) -> int:
        return self.tileh * 2

    @property
    def map_size(self) -> int:
        return self.cols * self.rows


def allocate_pic_data(w: int, h: int, tileh: int = 8) -> PicData:
    if tileh not in (8, 16):
        raise ValueError(f"Tile height must be 8 or 16, got {tileh}")
    cols = (w + TILE_WIDTH - 1) // TILE_WIDTH
    rows = (h + tileh - 1) // tileh
    total = cols * rows
    return PicData(
        w=w,
        h=h,
        cols=cols,
        rows=rows,
        tileh=tileh,
        total_tiles=total,
        tiles=bytearray(total * tileh * 2),
        tilemap=list(range(total)),
    )


def _valid_tile(pic: PicData, tile: int) -> bool:
    return 0 <= tile < pic.total_tiles


def set_tile_pixel(pic: PicData, tile: int, x: int, y: int, color: int) -> None:
    if not _valid_tile(pic, tile) or not 0 <= x < TILE_WIDTH or not 0 <= y < pic.tileh:
        return
    if not 0 <= color < 4:
        return
    base = tile * pic.tile_size + y * 2
    mask = 0x80 >> x
    pic.tiles[base] &= ~mask & 0xFF
    pic.tiles[base + 1] &= ~mask & 0xFF
    if color & 1:
        pic.tiles[base] |= mask
    if color & 2:
        pic.tiles[base + 1] |= mask


def get_tile_pixel(pic: PicData, tile: int, x: int, y: int) -> int:
    base = tile * pic.tile_size + y * 2
    mask = 0x80 >> x
    low = 1 if pic.tiles[base] & mask else 0
    high = 2 if pic.tiles[base + 1] & mask else 0
    return low | high


def get_tile_row(pic: PicData, tile: int, row: int) -> int:
    """Both plane bytes of a tile row packed as ``low << 8 | high``."""
    if not _valid_tile(pic, tile) or not 0 <= row < pic.tileh:
        return 0
    base = tile * pic.tile_size + row * 2
    return (pic.tiles[base] << 8) | pic.tiles[base + 1]


def tile_data(pic: PicData, tile: int) -> bytes:
    start = tile * pic.tile_size
    return bytes(pic.tiles[start : start + pic.tile_size])


def decode_tile(pic: PicData, tile: int) -> List[List[int]]:
    return [
        [get_tile_pixel(pic, tile, x, y) for x in range(TILE_WIDTH)]
        for y in range(pic.tileh)
    ]


def set_gb_pal_entry(pic: PicData, index: int, color: RGBColor) -> None:
    if not 0 <= index < 4:
        return
    pic.pal[index] = pack_gbc_color(color)


def fill_palette(pic: PicData, palette: Sequence[RGBColor]) -> None:
    logger.info("\n<GENERATING OUTPUT PALETTE>")
    logger.info("-- Palette Data")
    logger.info("  IN  R  G  B      15B")
    for c, color in enumerate(palette[:4]):
        set_gb_pal_entry(pic, c, color)
        logger.info(" [%02x] %02x %02x %02x --> %04x", c, color.r, color.g, color.b, pic.pal[c])


def rasterize(image: IndexedImage, palette_map: Sequence[int], tileh: int = 8) -> PicData:
    """Write every pixel of ``image`` into freshly allocated 2bpp tiles.

    Pixels of pad tiles (beyond the image edges) keep color 0, and so do
    pixels whose index lies outside the palette.
    """
    pic = allocate_pic_data(image.width, image.height, tileh)
    colors = len(palette_map)
    logger.info("\n<ALLOCATING PICTURE DATA>")
    logger.info("input tiles: %d (%dx%d map)\n", pic.map_size, pic.cols, pic.rows)

    for y in range(image.height):
        ty, yi = divmod(y, tileh)
        for x in range(image.width):
            tx, xi = divmod(x, TILE_WIDTH)
            index = image.index_at(x, y)
            if index >= colors:
                continue
            set_tile_pixel(pic, ty * pic.cols + tx, xi, yi, palette_map[index])
    return pic


def render_pixels(pic: PicData) -> List[List[int]]:
    """Rebuild the padded picture from the tilemap and the tile store."""
    grid = [[0] * (pic.cols * TILE_WIDTH) for _ in range(pic.rows * pic.tileh)]
    for cell, tile in enumerate(pic.tilemap):
        row, col = divmod(cell, pic.cols)
        for yi, line in enumerate(decode_tile(pic, tile)):
            y = row * pic.tileh + yi
            grid[y][col * TILE_WIDTH : (col + 1) * TILE_WIDTH] = line
    return grid
