"""ANSI SGR sequence construction for colors and text attributes."""
from __future__ import annotations

import re
from typing import Dict, List, Optional, Tuple

# CSI: parameter bytes 0x30-0x3F, intermediate bytes 0x20-0x2F, final byte 0x40-0x7E.
ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-?]*[ -/]*[@-~]")
# Full resets, including the short `ESC[m` form.
ANSI_RESET_RE = re.compile(r"\x1b\[0*m")
ANSI_RESET = "\x1b[0m"

# Canonical 16-color names mapped to their palette index.
NAMED_COLOR_INDEX: Dict[str, int] = {
    "black": 0,
    "red": 1,
    "green": 2,
    "yellow": 3,
    "blue": 4,
    "magenta": 5,
    "cyan": 6,
    "white": 7,
    "bright-black": 8,
    "bright-red": 9,
    "bright-green": 10,
    "bright-yellow": 11,
    "bright-blue": 12,
    "bright-magenta": 13,
    "bright-cyan": 14,
    "bright-white": 15,
    "gray": 8,
    "grey": 8,
    "bright-gray": 15,
    "bright-grey": 15,
}

# Attribute name -> SGR code, in emission order.
ATTRIBUTE_CODES: Tuple[Tuple[str, int], ...] = (
    ("bold", 1),
    ("faint", 2),
    ("italic", 3),
    ("underline", 4),
    ("blink", 5),
    ("reverse", 7),
    ("strikethrough", 9),
)

# xterm defaults for the 16 system colors.
_SYSTEM_RGB: Tuple[Tuple[int, int, int], ...] = (
    (0, 0, 0),
    (205, 0, 0),
    (0, 205, 0),
    (205, 205, 0),
    (0, 0, 238),
    (205, 0, 205),
    (0, 205, 205),
    (229, 229, 229),
    (127, 127, 127),
    (255, 0, 0),
    (0, 255, 0),
    (255, 255, 0),
    (92, 92, 255),
    (255, 0, 255),
    (0, 255, 255),
    (255, 255, 255),
)

_CUBE_LEVELS: Tuple[int, ...] = (0, 95, 135, 175, 215, 255)


def sgr(*codes: object) -> str:
    """Return a single SGR sequence for ``codes`` (empty string when none are given)."""

    if not codes:
        return ""
    return f"\x1b[{';'.join(str(code) for code in codes)}m"


def named_color_index(name: str) -> Optional[int]:
    """Return the 0-15 palette index for a color name, or ``None`` when unknown."""

    return NAMED_COLOR_INDEX.get((name or "").strip().lower())


def palette_sequence(index: int, *, background: bool = False) -> str:
    """
    Build the SGR sequence selecting one of the 16 base palette colors.

    Indices 0-7 use the normal ranges (30-37 / 40-47); indices 8-15 use the bright
    ranges (90-97 / 100-107). Out-of-range indices produce an empty string.
    """
    if not 0 <= index <= 15:
        return ""
    if index < 8:
        base = 40 if background else 30
        return sgr(base + index)
    base = 100 if background else 90
    return sgr(base + index - 8)


def indexed_sequence(index: int, *, background: bool = False) -> str:
    if not 0 <= index <= 255:
        return ""
    return sgr(48 if background else 38, 5, index)


def rgb_sequence(red: int, green: int, blue: int, *, background: bool = False) -> str:
    return sgr(48 if background else 38, 2, red, green, blue)


def encode_attributes(
    *,
    bold: Optional[bool] = None,
    faint: Optional[bool] = None,
    italic: Optional[bool] = None,
    underline: Optional[bool] = None,
    blink: Optional[bool] = None,
    reverse: Optional[bool] = None,
    strikethrough: Optional[bool] = None,
) -> str:
    """
    Combine the enabled text attributes into their SGR opening sequences.

    Each enabled attribute contributes its own sequence in a fixed order (bold, faint,
    italic, underline, blink, reverse, strikethrough), so the result does not depend on
    the order in which a style was built. Attributes that are unset or ``False`` emit
    nothing; there are no partial "attribute off" codes because every styled run is
    closed with a full :data:`ANSI_RESET`.

    Returns:
        str: The concatenated sequences, or an empty string when no attribute is enabled.
    """
    flags = {
        "bold": bold,
        "faint": faint,
        "italic": italic,
        "underline": underline,
        "blink": blink,
        "reverse": reverse,
        "strikethrough": strikethrough,
    }
    parts: List[str] = [sgr(code) for name, code in ATTRIBUTE_CODES if flags[name]]
    return "".join(parts)


def ansi256_to_rgb(index: int) -> Tuple[int, int, int]:
    """Return the RGB triple xterm uses for a 256-color palette entry."""

    if index < 16:
        return _SYSTEM_RGB[index]
    if index < 232:
        offset = index - 16
        return (
            _CUBE_LEVELS[offset // 36],
            _CUBE_LEVELS[(offset // 6) % 6],
            _CUBE_LEVELS[offset % 6],
        )
    level = 8 + (index - 232) * 10
    return (level, level, level)


def _distance(first: Tuple[int, int, int], second: Tuple[int, int, int]) -> int:
    return sum((a - b) ** 2 for a, b in zip(first, second))


def _nearest_level(value: int) -> int:
    return min(range(len(_CUBE_LEVELS)), key=lambda idx: abs(_CUBE_LEVELS[idx] - value))


def rgb_to_ansi256(red: int, green: int, blue: int) -> int:
    """
    Map an RGB triple to the closest entry of the xterm 256-color palette.

    Both the 6x6x6 color cube and the 24-step grayscale ramp are considered; the
    candidate with the smaller squared distance wins (the cube on ties).
    """
    r_idx, g_idx, b_idx = (_nearest_level(channel) for channel in (red, green, blue))
    cube_index = 16 + 36 * r_idx + 6 * g_idx + b_idx
    average = (red + green + blue) // 3
    gray_step = min(23, max(0, round((average - 8) / 10)))
    gray_index = 232 + gray_step
    target = (red, green, blue)
    if _distance(ansi256_to_rgb(gray_index), target) < _distance(ansi256_to_rgb(cube_index), target):
        return gray_index
    return cube_index


def rgb_to_ansi16(red: int, green: int, blue: int) -> int:
    """Map an RGB triple to the closest of the 16 base palette colors."""

    target = (red, green, blue)
    return min(range(16), key=lambda idx: _distance(_SYSTEM_RGB[idx], target))


__all__ = [
    "ANSI_ESCAPE_RE",
    "ANSI_RESET",
    "ANSI_RESET_RE",
    "ATTRIBUTE_CODES",
    "NAMED_COLOR_INDEX",
    "ansi256_to_rgb",
    "encode_attributes",
    "indexed_sequence",
    "named_color_index",
    "palette_sequence",
    "rgb_sequence",
    "rgb_to_ansi16",
    "rgb_to_ansi256",
    "sgr",
]
