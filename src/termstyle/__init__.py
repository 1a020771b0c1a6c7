"""Terminal styling and layout: render styles to ANSI text and compose blocks."""

from .ansi import ANSI_RESET, encode_attributes, sgr
from .borders import (
    ASCII,
    BLOCK,
    BORDERS,
    DOUBLE,
    HIDDEN,
    INNER_HALF_BLOCK,
    NORMAL,
    OUTER_HALF_BLOCK,
    ROUNDED,
    THICK,
    Border,
    border_by_name,
)
from .color import (
    AdaptiveColor,
    Color,
    ColorError,
    HexColor,
    IndexedColor,
    NamedColor,
    as_color,
    color_sequence,
    parse_color,
)
from .layout import join_horizontal, join_vertical, place, place_horizontal, place_vertical
from .measure import clip, line_count, size, strip_ansi, truncate, width, width_per_line
from .position import BOTTOM, CENTER, LEFT, MIDDLE, RIGHT, TOP, Position
from .render import render
from .style import Style
from .terminal import ColorProfile, TerminalContext, detect_light_background

__all__ = [
    "ANSI_RESET",
    "ASCII",
    "AdaptiveColor",
    "BLOCK",
    "BORDERS",
    "BOTTOM",
    "Border",
    "CENTER",
    "Color",
    "ColorError",
    "ColorProfile",
    "DOUBLE",
    "HIDDEN",
    "HexColor",
    "INNER_HALF_BLOCK",
    "IndexedColor",
    "LEFT",
    "MIDDLE",
    "NORMAL",
    "NamedColor",
    "OUTER_HALF_BLOCK",
    "Position",
    "RIGHT",
    "ROUNDED",
    "Style",
    "THICK",
    "TOP",
    "TerminalContext",
    "as_color",
    "border_by_name",
    "clip",
    "color_sequence",
    "detect_light_background",
    "encode_attributes",
    "join_horizontal",
    "join_vertical",
    "line_count",
    "parse_color",
    "place",
    "place_horizontal",
    "place_vertical",
    "render",
    "sgr",
    "size",
    "strip_ansi",
    "truncate",
    "width",
    "width_per_line",
]
