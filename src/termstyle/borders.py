"""Border character sets used to frame rendered blocks."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from .measure import repeat_to_width


@dataclass(frozen=True)
class Border:
    """
    The characters that draw a box outline.

    The eight edge and corner characters are required; the ``middle_*`` connectors are
    only used by :meth:`divider` and may be left empty.
    """

    top: str
    bottom: str
    left: str
    right: str
    top_left: str
    top_right: str
    bottom_left: str
    bottom_right: str
    middle_left: str = ""
    middle_right: str = ""
    middle: str = ""
    middle_top: str = ""
    middle_bottom: str = ""

    def divider(self, width: int) -> str:
        """Return a separator row spanning ``width`` inner cells plus both side connectors."""

        left = self.middle_left or self.left
        right = self.middle_right or self.right
        return f"{repeat_to_width(left, 1)}{repeat_to_width(self.top, width)}{repeat_to_width(right, 1)}"


NORMAL = Border(
    "─", "─", "│", "│", "┌", "┐", "└", "┘",
    middle_left="├", middle_right="┤", middle="┼", middle_top="┬", middle_bottom="┴",
)
ROUNDED = Border(
    "─", "─", "│", "│", "╭", "╮", "╰", "╯",
    middle_left="├", middle_right="┤", middle="┼", middle_top="┬", middle_bottom="┴",
)
THICK = Border(
    "━", "━", "┃", "┃", "┏", "┓", "┗", "┛",
    middle_left="┣", middle_right="┫", middle="╋", middle_top="┳", middle_bottom="┻",
)
DOUBLE = Border(
    "═", "═", "║", "║", "╔", "╗", "╚", "╝",
    middle_left="╠", middle_right="╣", middle="╬", middle_top="╦", middle_bottom="╩",
)
BLOCK = Border("█", "█", "█", "█", "█", "█", "█", "█")
OUTER_HALF_BLOCK = Border("▀", "▄", "▌", "▐", "▛", "▜", "▙", "▟")
INNER_HALF_BLOCK = Border("▄", "▀", "▐", "▌", "▗", "▖", "▝", "▘")
HIDDEN = Border(
    " ", " ", " ", " ", " ", " ", " ", " ",
    middle_left=" ", middle_right=" ", middle=" ", middle_top=" ", middle_bottom=" ",
)
# Plain ASCII fallback for terminals without box-drawing glyphs.
ASCII = Border(
    "-", "-", "|", "|", "+", "+", "+", "+",
    middle_left="+", middle_right="+", middle="+", middle_top="+", middle_bottom="+",
)

BORDERS: Dict[str, Border] = {
    "normal": NORMAL,
    "rounded": ROUNDED,
    "thick": THICK,
    "double": DOUBLE,
    "block": BLOCK,
    "outer-half-block": OUTER_HALF_BLOCK,
    "inner-half-block": INNER_HALF_BLOCK,
    "hidden": HIDDEN,
    "ascii": ASCII,
}


def border_by_name(name: str) -> Optional[Border]:
    """Look up a preset by name; ``_`` and ``-`` are interchangeable and case is ignored."""

    return BORDERS.get(str(name).strip().lower().replace("_", "-"))


__all__ = [
    "ASCII",
    "BLOCK",
    "BORDERS",
    "Border",
    "DOUBLE",
    "HIDDEN",
    "INNER_HALF_BLOCK",
    "NORMAL",
    "OUTER_HALF_BLOCK",
    "ROUNDED",
    "THICK",
    "border_by_name",
]
