import re
from datetime import datetime

import pytest

from gb_tile_converter.emitter import (
    _half_diff,
    render_c_code,
    render_demo_code,
    render_disclaimer,
    sanitize_name,
)
from gb_tile_converter.options import ConvertOptions, Target
from gb_tile_converter.tiles import allocate_pic_data, set_tile_pixel

C_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


@pytest.mark.parametrize(
    "name, expected",
    [
        ("gbpic", "gbpic"),
        ("9lives-x", "_lives_x"),
        ("my sprite.v2", "my_sprite_v2"),
        ("héllo", "h_llo"),
        ("_ok", "_ok"),
        ("", "_"),
    ],
)
def test_sanitize_name(name: str, expected: str) -> None:
    result = sanitize_name(name)
    assert result == expected
    assert C_IDENTIFIER.fullmatch(result)


def test_half_diff_truncates_toward_zero() -> None:
    assert _half_diff(160, 16) == 72
    assert _half_diff(160, 171) == -5


def _strip_pic(tileh: int = 8):
    """A white tile followed by a tile of color 1."""
    pic = allocate_pic_data(16, tileh, tileh)
    for y in range(tileh):
        for x in range(8):
            set_tile_pixel(pic, 1, x, y, 1)
    return pic


def test_data_arrays() -> None:
    pic = _strip_pic()
    options = ConvertOptions(name="strip", create_map=True, palnumber=3)

    code = render_c_code(pic, options)

    assert "#include" not in code
    assert "#define strip_cols\t2\n" in code
    assert "#define strip_rows\t1\n" in code
    assert "#define strip_base\t1\n" in code
    assert "#define strip_tsize\tstrip_cols*strip_rows\n" in code
    assert "#define strip_tiles\t2\n" in code
    assert "strip_pal" not in code
    tile0 = ", ".join(["0x00, 0x00"] * 8)
    tile1 = ", ".join(["0xff, 0x00"] * 8)
    assert f"const unsigned char strip_dat[] = {{\n\t{tile0},\n\t{tile1}\n}};\n" in code
    assert "const unsigned char strip_att[] = {\n\t0x03, 0x03\n};\n" in code
    assert "const unsigned char strip_map[] = {\n\t0x01, 0x02\n};\n" in code


def test_map_is_omitted_unless_requested() -> None:
    code = render_c_code(_strip_pic(), ConvertOptions(name="strip"))
    assert "strip_map" not in code


def test_palette_words() -> None:
    pic = _strip_pic()
    pic.pal = [0x7FFF, 0x001F, 0x0000, 0x7C00]

    code = render_c_code(pic, ConvertOptions(name="p", create_palette=True))

    assert "const unsigned int p_pal[] = { 0x7fff, 0x001f, 0x0000, 0x7c00 };\n" in code


def test_map_rows_follow_the_picture_width() -> None:
    pic = allocate_pic_data(16, 16)
    code = render_c_code(pic, ConvertOptions(name="sq", create_map=True, base_index=0))
    assert "const unsigned char sq_map[] = {\n\t0x00, 0x01,\n\t0x02, 0x03\n};\n" in code


def test_sprite_attributes_cover_every_tile() -> None:
    pic = _strip_pic()
    pic.total_tiles = 1  # as after tile reduction
    del pic.tiles[16:]
    pic.tilemap = [0, 0]

    code = render_c_code(pic, ConvertOptions(target=Target.SPRITE, name="s", palnumber=2))

    assert "const unsigned char s_att[] = {\n\t0x02\n};\n" in code


def test_disclaimer() -> None:
    text = render_disclaimer("in.png", "out.c", datetime(2024, 1, 2, 3, 4, 5))

    assert text.startswith("/****")
    assert "<out.c>" in text
    assert "v1.00" in text
    assert "** Date:\t2024-01-02 03:04:05\n" in text
    assert "** Source:\tin.png\n" in text
    assert text.endswith("*/\n\n")


def test_background_demo() -> None:
    pic = _strip_pic()
    options = ConvertOptions(name="strip", create_map=True, test_code=True, create_palette=True)

    code = render_c_code(pic, options)

    assert code.startswith("#include <gb/gb.h>\n\n#define")
    assert "int main(void) {" in code
    assert "\tset_bkg_palette(0, 1, strip_pal);\n" in code
    assert "\tset_bkg_data(0x01, strip_tiles, strip_dat);\n" in code
    assert "\tset_bkg_tiles(0, 0, strip_cols, strip_rows, strip_map);\n" in code
    assert "\tmove_bkg (-72, -68);\n" in code
    assert "\tSHOW_BKG;\n" in code


def test_window_demo() -> None:
    options = ConvertOptions(target=Target.WINDOW, name="w", create_map=True)

    code = render_demo_code(_strip_pic(), options, "w")

    assert "set_bkg_palette" not in code
    assert "\tset_win_data(0x01, w_tiles, w_dat);\n" in code
    assert "\tmove_win (79, 68);\n" in code
    assert "\tSHOW_WIN;\n" in code


def test_big_sprite_demo() -> None:
    options = ConvertOptions(
        target=Target.SPRITE, big_sprite=True, name="hero", base_index=2, palnumber=1, create_palette=True
    )

    code = render_demo_code(_strip_pic(16), options, "hero")

    assert "void set_hero_sprite(" in code
    assert "\tSPRITES_8x16;\n" in code
    assert "\tset_sprite_palette(1, 1, hero_pal);\n" in code
    assert "\tset_sprite_data(0x02, hero_tiles*2, hero_dat);\n" in code
    assert "yt=y*16U;" in code
    assert "hero_map[i]*2" in code
    assert "xt+80U, yt+80U" in code


def test_small_sprite_demo() -> None:
    options = ConvertOptions(target=Target.SPRITE, name="s")

    code = render_demo_code(_strip_pic(), options, "s")

    assert "SPRITES_8x16" not in code
    assert "\tset_sprite_data(0x01, s_tiles, s_dat);\n" in code
    assert "*2" not in code
    assert "yt=y*8U;" in code
