"""GBDK C source output."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional, Sequence

import jinja2

from .options import ConvertOptions, Target
from .tiles import PicData, get_tile_row

logger = logging.getLogger(__name__)

TOOL_NAME = "gb_tile_converter"
TOOL_VERSION = (1, 0)

disclaimer_template = """/*********************************************************************
 **  <{{ output_name }}>
 *********************************************************************
 **   Code generated with {{ tool }} v{{ version }}
 **
 ** Date:\t{{ date }}
 ** Source:\t{{ input_name }}
 *********************************************************************/

"""

data_template = """{% if test_code %}
#include <gb/gb.h>

{% endif %}
#define {{ name }}_cols\t{{ cols }}
#define {{ name }}_rows\t{{ rows }}
#define {{ name }}_base\t{{ base }}
#define {{ name }}_tsize\t{{ name }}_cols*{{ name }}_rows
#define {{ name }}_tiles\t{{ total_tiles }}

{% if pal_words %}
const unsigned int {{ name }}_pal[] = { {{ pal_words | join(", ") }} };

{% endif %}
const unsigned char {{ name }}_dat[] = {
{{ tile_lines | join(",\\n") }}
};

const unsigned char {{ name }}_att[] = {
{{ att_lines | join(",\\n") }}
};

{% if map_lines %}
const unsigned char {{ name }}_map[] = {
{{ map_lines | join(",\\n") }}
};

{% endif %}
"""

# BKG and WIN share everything but the GBDK function names.
layer_demo_template = """

int main(void) {
{% if create_palette %}
\tset_bkg_palette({{ palnumber }}, 1, {{ name }}_pal);
{% endif %}
\tset_{{ func }}_data(0x{{ "%02x" | format(base) }}, {{ name }}_tiles, {{ name }}_dat);
\tVBK_REG = 1;
\tset_{{ func }}_tiles(0, 0, {{ name }}_cols, {{ name }}_rows, {{ name }}_att);
\tVBK_REG = 0;
\tset_{{ func }}_tiles(0, 0, {{ name }}_cols, {{ name }}_rows, {{ name }}_map);
\tmove_{{ func }} ({{ dx }}, {{ dy }});

\tSHOW_{{ func | upper }};
\tenable_interrupts();
\tDISPLAY_ON;

\treturn 0;
}
"""

sprite_demo_template = """
/* This function sets a sprite tile, attributes (palette) and position. It's just for demo purposes, this is NOT efficient at ALL! */
void set_{{ name }}_sprite(unsigned char index, unsigned char tile, unsigned char attr, unsigned char x, unsigned char y) {
\tif (index >= 40) return;
\tset_sprite_tile (index, tile);
\tset_sprite_prop (index, attr);
\tmove_sprite (index, x, y);
}


int main(void) {
\tunsigned char x, y, xt, yt, i=0;
{% if big_sprite %}
\tSPRITES_8x16;
{% endif %}
{% if create_palette %}
\tset_sprite_palette({{ palnumber }}, 1, {{ name }}_pal);
{% endif %}
\tset_sprite_data(0x{{ "%02x" | format(base) }}, {{ name }}_tiles{{ '*2' if big_sprite }}, {{ name }}_dat);
\tVBK_REG = 0;

\tfor(y=0; y< {{ name }}_rows; y++){
\t\tyt=y*{{ tileh }}U;
\t\tfor(x=0; x < {{ name }}_cols; x++){
\t\t\txt=x*8;
\t\t\tif (i >= {{ name }}_tsize) break;
\t\t\tset_{{ name }}_sprite (i, {{ name }}_map[i]{{ '*2' if big_sprite }}, {{ name }}_att[{{ name }}_map[i]-{{ name }}_base], xt+{{ dx }}U, yt+{{ dy }}U);
\t\t\ti++;
\t\t}
\t}

\tSHOW_SPRITES;
\tenable_interrupts();
\tDISPLAY_ON;

\treturn 0;
}
"""

SCREEN_WIDTH = 160
SCREEN_HEIGHT = 144


def _template(source: str) -> jinja2.Template:
    return jinja2.Template(source, trim_blocks=True, lstrip_blocks=True, keep_trailing_newline=True)


def sanitize_name(name: str) -> str:
    """Make ``name`` usable as a C identifier prefix."""
    if not name:
        return "_"
    chars = list(name)
    if not (chars[0].isascii() and chars[0].isalpha()):
        chars[0] = "_"
    for i in range(1, len(chars)):
        if not (chars[i].isascii() and chars[i].isalnum()):
            chars[i] = "_"
    return "".join(chars)


def _half_diff(screen: int, size: int) -> int:
    # C integer division, truncating toward zero
    return int((screen - size) / 2)


def _byte_lines(values: Sequence[int], per_line: int) -> List[str]:
    per_line = max(1, per_line)
    return [
        "\t" + ", ".join(f"0x{v:02x}" for v in values[i : i + per_line])
        for i in range(0, len(values), per_line)
    ]


def _tile_lines(pic: PicData) -> List[str]:
    lines = []
    for t in range(pic.total_tiles):
        row_bytes = []
        for y in range(pic.tileh):
            word = get_tile_row(pic, t, y)
            row_bytes.append(f"0x{word >> 8:02x}, 0x{word & 0xFF:02x}")
        lines.append("\t" + ", ".join(row_bytes))
    return lines


def render_disclaimer(input_name: str, output_name: str, now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    return _template(disclaimer_template).render(
        output_name=output_name,
        input_name=input_name,
        tool=TOOL_NAME,
        version="%d.%02d" % TOOL_VERSION,
        date=now.strftime("%Y-%m-%d %H:%M:%S"),
    )


def render_c_code(pic: PicData, options: ConvertOptions) -> str:
    """Render the data arrays (and the demo program, if requested)."""
    logger.info("\n<GENERATING CODE>")
    name = sanitize_name(options.name)
    attr_count = pic.total_tiles if options.is_sprite else pic.map_size

    text = _template(data_template).render(
        name=name,
        test_code=options.test_code,
        cols=pic.cols,
        rows=pic.rows,
        base=options.base_index,
        total_tiles=pic.total_tiles,
        pal_words=[f"0x{word:04x}" for word in pic.pal] if options.create_palette else None,
        tile_lines=_tile_lines(pic),
        att_lines=_byte_lines([options.palnumber] * attr_count, pic.cols),
        map_lines=(
            _byte_lines([options.base_index + t for t in pic.tilemap], pic.cols)
            if options.create_map
            else None
        ),
    )

    if options.test_code:
        text += render_demo_code(pic, options, name)

    logger.info("-- Done\n")
    return text


def render_demo_code(pic: PicData, options: ConvertOptions, name: str) -> str:
    common = dict(
        name=name,
        base=options.base_index,
        palnumber=options.palnumber,
        create_palette=options.create_palette,
    )
    if options.is_sprite:
        return _template(sprite_demo_template).render(
            big_sprite=options.big_sprite,
            tileh=pic.tileh,
            dx=_half_diff(SCREEN_WIDTH, pic.w) + 8,
            dy=_half_diff(SCREEN_HEIGHT, pic.h) + 16,
            **common,
        )

    if options.target is Target.BKG:
        func = "bkg"
        dx = -_half_diff(SCREEN_WIDTH, pic.w)
        dy = -_half_diff(SCREEN_HEIGHT, pic.h)
    else:
        func = "win"
        dx = _half_diff(SCREEN_WIDTH, pic.w) + 7
        dy = _half_diff(SCREEN_HEIGHT, pic.h)
    return _template(layer_demo_template).render(func=func, dx=dx, dy=dy, **common)
