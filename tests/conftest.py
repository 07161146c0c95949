import itertools
import logging
from pathlib import Path
from typing import Callable, Sequence, Tuple

import pytest
from PIL import Image

from gb_tile_converter.png_reader import read_indexed_png


def save_indexed_png(
    path: Path,
    palette: Sequence[Tuple[int, int, int]],
    pixels: Sequence[int],
    width: int,
    height: int,
) -> Path:
    image = Image.new("P", (width, height))
    image.putpalette([c for rgb in palette for c in rgb])
    image.putdata(list(pixels))
    image.save(path)
    return path


@pytest.fixture
def make_png(tmp_path: Path) -> Callable[..., Path]:
    counter = itertools.count()

    def _make(palette, pixels, width, height):
        path = tmp_path / f"input{next(counter)}.png"
        return save_indexed_png(path, palette, pixels, width, height)

    return _make


@pytest.fixture
def make_image(make_png):
    def _make(palette, pixels, width, height):
        return read_indexed_png(make_png(palette, pixels, width, height))

    return _make


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    package_logger = logging.getLogger("gb_tile_converter")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
