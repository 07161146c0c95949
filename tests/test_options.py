import pytest

from gb_tile_converter.errors import UsageError
from gb_tile_converter.options import (
    ConvertOptions,
    PaletteIndex,
    RgbTransparency,
    Target,
    decode_transparency,
    parse_number,
    parse_transparency,
)


@pytest.mark.parametrize(
    "transparency, encoded",
    [
        (PaletteIndex(0), 1),
        (PaletteIndex(5), 6),
        (PaletteIndex(255), 256),
        (RgbTransparency(0, 0, 0), -1),
        (RgbTransparency(0, 0, 255), -256),
        (RgbTransparency(255, 255, 255), -0x1000000),
    ],
)
def test_signed_transparency_encoding(transparency, encoded: int) -> None:
    assert transparency.encode() == encoded
    assert decode_transparency(encoded) == transparency


def test_zero_decodes_to_the_default_index() -> None:
    assert decode_transparency(0) == PaletteIndex(0)


def test_transparency_text() -> None:
    assert str(PaletteIndex(3)) == "3"
    assert str(RgbTransparency(1, 2, 3)) == "RGB(1, 2, 3)"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("0", PaletteIndex(0)),
        ("12", PaletteIndex(12)),
        ("#000000", RgbTransparency(0, 0, 0)),
        ("#12aBcD", RgbTransparency(0x12, 0xAB, 0xCD)),
    ],
)
def test_parse_transparency(text: str, expected) -> None:
    assert parse_transparency(text) == expected


@pytest.mark.parametrize("text", ["#12345", "#1234567", "#gg0000", "abc", "-2"])
def test_parse_transparency_rejects(text: str) -> None:
    with pytest.raises(UsageError):
        parse_transparency(text)


def test_parse_number() -> None:
    assert parse_number("42") == 42
    with pytest.raises(UsageError, match="Couldn't parse 0x10 as a number"):
        parse_number("0x10")


def test_option_defaults_and_tile_height() -> None:
    options = ConvertOptions()
    assert options.target is Target.BKG
    assert options.base_index == 1
    assert options.name == "gbpic"
    assert options.transparent == PaletteIndex(0)
    assert options.tile_height == 8
    # 8x16 only applies to sprites
    assert ConvertOptions(big_sprite=True).tile_height == 8
    assert ConvertOptions(target=Target.SPRITE, big_sprite=True).tile_height == 16
    assert ConvertOptions(target=Target.SPRITE, big_sprite=True).describe_target() == "SPRITE (8x16)"
    assert ConvertOptions(target=Target.WINDOW).describe_target() == "WIN"
