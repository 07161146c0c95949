"""Removal of duplicate tiles."""

from __future__ import annotations

import logging

from .tiles import PicData

logger = logging.getLogger(__name__)


def compare_tiles(pic: PicData, t0: int, t1: int) -> bool:
    """True when two different tiles hold identical bytes."""
    if t0 == t1:
        return False
    if not (0 <= t0 < pic.total_tiles and 0 <= t1 < pic.total_tiles):
        return False
    size = pic.tile_size
    return pic.tiles[t0 * size : (t0 + 1) * size] == pic.tiles[t1 * size : (t1 + 1) * size]


def copy_tile(pic: PicData, dest: int, src: int) -> None:
    if not (0 <= dest < pic.total_tiles and 0 <= src < pic.total_tiles):
        return
    size = pic.tile_size
    pic.tiles[dest * size : (dest + 1) * size] = pic.tiles[src * size : (src + 1) * size]


def replace_in_tilemap(pic: PicData, old: int, new: int) -> None:
    for i, tile in enumerate(pic.tilemap):
        if tile == old:
            pic.tilemap[i] = new


def reduce_tiles(pic: PicData) -> int:
    """Delete duplicate tiles in place and return how many were removed.

    A duplicate of ``t1`` found at ``t2`` is dropped by pointing its map
    cells at ``t1`` and moving the last tile into slot ``t2``. The moved tile
    is compared against ``t1`` again before the scan goes on.
    """
    old_total = pic.total_tiles
    t1 = 0
    while t1 < pic.total_tiles:
        t2 = t1 + 1
        while t2 < pic.total_tiles:
            if compare_tiles(pic, t1, t2):
                last = pic.total_tiles - 1
                replace_in_tilemap(pic, t2, t1)
                copy_tile(pic, t2, last)
                replace_in_tilemap(pic, last, t2)
                pic.total_tiles -= 1
            else:
                t2 += 1
        t1 += 1

    del pic.tiles[pic.total_tiles * pic.tile_size :]
    removed = old_total - pic.total_tiles
    logger.info("-- %d tiles reduced. New tile count: %d", removed, pic.total_tiles)
    return removed
