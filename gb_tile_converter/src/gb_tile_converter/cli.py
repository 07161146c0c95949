"""Command line interface for the Game Boy tile converter."""

from __future__ import annotations

import argparse
import logging
import sys
import warnings
from pathlib import Path

from . import __version__
from .converter import convert_png_to_c
from .errors import ConversionError, UsageError
from .options import ConvertOptions, Target, parse_number, parse_transparency

_MODES = {
    "K": (Target.BKG, False),
    "W": (Target.WINDOW, False),
    "S": (Target.SPRITE, False),
    "B": (Target.SPRITE, True),
}

EXAMPLES = """Examples
   gb-tile-converter -S spritesheet.png sprite.h
   gb-tile-converter -S -base 1 -pal 2 -name my_sprite spritesheet.png sprite.h
   gb-tile-converter -Kgpcmsev -name my_tileset tileset.png tileset.c
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gb-tile-converter",
        usage="%(prog)s <options> {input file} {output file}",
        description=(
            f"gb_tile_converter v{__version__}\n"
            "Converts indexed PNG images to Game Boy (GBDK) C code."
        ),
        epilog=EXAMPLES,
        formatter_class=argparse.RawTextHelpFormatter,
        add_help=False,
        allow_abbrev=False,
    )

    parser.add_argument("files", nargs="*", metavar="FILE", help="input PNG and output source file")
    parser.add_argument(
        "-K", dest="mode", action="store_const", const="K",
        help="Generate code and data for the BKG layer.",
    )
    parser.add_argument(
        "-W", dest="mode", action="store_const", const="W",
        help="Generate code and data for the WIN layer.",
    )
    parser.add_argument(
        "-S", dest="mode", action="store_const", const="S",
        help="Generate code and data for 8x8 Sprites.",
    )
    parser.add_argument(
        "-B", dest="mode", action="store_const", const="B",
        help="Generate code and data for 8x16 Sprites.",
    )
    parser.add_argument(
        "-p", dest="create_palette", action="store_true",
        help="Generate 15 bit palette data (for GBC).",
    )
    parser.add_argument(
        "-m", dest="create_map", action="store_true",
        help="Generate a Tile Map of the source picture.",
    )
    parser.add_argument(
        "-c", dest="test_code", action="store_true",
        help="Output ready to compile test code with the data.",
    )
    parser.add_argument("-g", dest="grayscale", action="store_true", help="Convert to grayscale.")
    parser.add_argument(
        "-s", dest="sort_palette", action="store_true",
        help="Sort the palette from light to dark (helps with GB compatibility).",
    )
    parser.add_argument(
        "-e", dest="tile_reduction", action="store_true",
        help="Tile reduction; Remove identical/redundant tiles from the set.",
    )
    parser.add_argument(
        "-v", dest="verbose", action="store_true",
        help="Verbose output during conversion.",
    )
    parser.add_argument("-base", metavar="NUM", help="Set the base tile/sprite index.")
    parser.add_argument("-pal", metavar="NUM", help="Set the palette number.")
    parser.add_argument("-name", metavar="NAME", help="Set the name of the sprite/tileset.")
    parser.add_argument(
        "-tr",
        metavar="COLOR",
        help=(
            "Set the transparent color for Sprites. COLOR is either\n"
            "an index from the source palette, or a color in #RRGGBB format."
        ),
    )
    return parser


def build_options(args: argparse.Namespace) -> ConvertOptions:
    target, big_sprite = _MODES[args.mode or "K"]
    values = dict(
        target=target,
        big_sprite=big_sprite,
        grayscale=args.grayscale,
        create_palette=args.create_palette,
        sort_palette=args.sort_palette,
        create_map=args.create_map,
        test_code=args.test_code,
        tile_reduction=args.tile_reduction,
        verbose=args.verbose,
    )
    if args.base is not None:
        base = parse_number(args.base)
        if not 0 <= base <= 255:
            raise UsageError(f"Base index must be between 0 and 255: {base}")
        values["base_index"] = base
    if args.pal is not None:
        palnumber = parse_number(args.pal)
        if palnumber < 0:
            raise UsageError(f"Palette number must not be negative: {palnumber}")
        values["palnumber"] = palnumber
    if args.name is not None:
        values["name"] = args.name
    if args.tr is not None:
        values["transparent"] = parse_transparency(args.tr)
    return ConvertOptions(**values)


def configure_logging(verbose: bool) -> None:
    package_logger = logging.getLogger(__package__)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.INFO if verbose else logging.WARNING)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_intermixed_args(argv)

    try:
        if len(args.files) > 2:
            raise UsageError("Too many parameters")
        if len(args.files) < 2:
            parser.print_help()
            return 0

        options = build_options(args)
        configure_logging(options.verbose)
        input_path, output_path = (Path(name) for name in args.files)

        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            code = convert_png_to_c(input_path, str(output_path), options)
        for warning in caught:
            print(f"Warning: {warning.message}", file=sys.stderr)

        try:
            output_path.write_text(code)
        except OSError as exc:
            raise ConversionError(f"Could not write {output_path}: {exc}") from exc
        return 0
    except ConversionError as exc:
        print(exc, file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
