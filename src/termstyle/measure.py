"""Display-width measurement and width-aware truncation of (possibly styled) text."""
from __future__ import annotations

import re
from typing import List, Tuple

from wcwidth import wcwidth

from .ansi import ANSI_ESCAPE_RE, ANSI_RESET

_ANSI_SPLIT_RE = re.compile(f"({ANSI_ESCAPE_RE.pattern})")
_ZWJ = "\u200d"


def strip_ansi(text: str) -> str:
    """Remove every CSI sequence (``ESC [``, parameter bytes, final byte) from ``text``."""

    return ANSI_ESCAPE_RE.sub("", text)


def char_width(char: str) -> int:
    """
    Return the terminal cell width of a single code point.

    Combining marks and other zero-width characters count 0, wide and fullwidth
    characters (CJK, most emoji) count 2, everything else counts 1. Control characters,
    for which ``wcwidth`` reports ``-1``, count 0.
    """
    cells = wcwidth(char)
    return cells if cells > 0 else 0


def cell_width(text: str) -> int:
    """Return the cell width of a single line, ignoring ANSI sequences."""

    return sum(char_width(char) for char in strip_ansi(text))


def width_per_line(text: str) -> List[int]:
    return [cell_width(line) for line in text.split("\n")]


def width(text: str) -> int:
    """Return the width of the widest line in ``text``."""

    return max(width_per_line(text))


def line_count(text: str) -> int:
    """Return the number of lines; the empty string is one empty line."""

    return text.count("\n") + 1


def size(text: str) -> Tuple[int, int]:
    """Return ``(width, height)`` of a block."""

    return width(text), line_count(text)


def _take_cells(plain: str, limit: int) -> str:
    """
    Return the longest prefix of ``plain`` whose width does not exceed ``limit``.

    A zero-width joiner left dangling at the cut is dropped with the rest of its sequence.
    """
    used = 0
    for index, char in enumerate(plain):
        cells = char_width(char)
        if used + cells > limit:
            return plain[:index].rstrip(_ZWJ)
        used += cells
    return plain


def _truncate_line(line: str, limit: int, tail: str) -> str:
    if limit <= 0:
        return ""
    if cell_width(line) <= limit:
        return line
    tail_width = cell_width(tail)
    if tail_width >= limit:
        return _take_cells(strip_ansi(tail), limit)
    return _take_cells(strip_ansi(line), limit - tail_width) + tail


def truncate(text: str, limit: int, tail: str = "") -> str:
    """
    Shorten ``text`` so that no line is wider than ``limit`` cells.

    Lines that already fit are returned untouched, escape sequences included. Lines that
    are too wide lose their styling and are cut at the last code point that still fits,
    followed by ``tail``. A wide character is never split; when it straddles the limit the
    result is one cell narrower than ``limit``. If ``tail`` alone is at least ``limit``
    wide, the tail itself is truncated. A non-positive ``limit`` yields ``""``.

    Parameters:
        text (str): Text to shorten; may span several lines and contain ANSI sequences.
        limit (int): Maximum width in terminal cells.
        tail (str): Marker appended to shortened lines (for example ``"…"``).

    Returns:
        str: The shortened text.
    """
    if limit <= 0:
        return ""
    return "\n".join(_truncate_line(line, limit, tail) for line in text.split("\n"))


def _clip_line(line: str, limit: int) -> str:
    if cell_width(line) <= limit:
        return line
    pieces: List[str] = []
    used = 0
    kept_escape = False
    for position, chunk in enumerate(_ANSI_SPLIT_RE.split(line)):
        if position % 2:
            pieces.append(chunk)
            kept_escape = True
            continue
        prefix = _take_cells(chunk, limit - used)
        pieces.append(prefix)
        used += cell_width(prefix)
        if len(prefix) < len(chunk):
            break
    if kept_escape:
        pieces.append(ANSI_RESET)
    return "".join(pieces)


def clip(text: str, limit: int) -> str:
    """
    Cut every line of ``text`` to at most ``limit`` cells, keeping its escape sequences.

    Unlike :func:`truncate` no tail is appended and the styling of the surviving prefix is
    preserved; a reset is appended to clipped lines that carried any escape sequence so
    the cut never leaks attributes into whatever follows.
    """
    if limit <= 0:
        return "\n".join("" for _ in text.split("\n"))
    return "\n".join(_clip_line(line, limit) for line in text.split("\n"))


def repeat_to_width(pattern: str, cells: int) -> str:
    """Repeat ``pattern`` until it fills exactly ``cells`` columns, padding with spaces."""

    if cells <= 0:
        return ""
    pattern_width = cell_width(pattern)
    if pattern_width <= 0:
        return " " * cells
    repeated = _take_cells(strip_ansi(pattern) * (cells // pattern_width + 1), cells)
    return repeated + " " * (cells - cell_width(repeated))


__all__ = [
    "cell_width",
    "char_width",
    "clip",
    "line_count",
    "repeat_to_width",
    "size",
    "strip_ansi",
    "truncate",
    "width",
    "width_per_line",
]
