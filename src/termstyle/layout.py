"""Composition of rendered blocks: horizontal and vertical joins, and placement."""
from __future__ import annotations

from typing import List

from .measure import cell_width, clip
from .position import LEFT, TOP, Position, distribute


def _lines(block: str) -> List[str]:
    return block.split("\n")


def _align_line(line: str, target: int, position: Position) -> str:
    before, after = distribute(target - cell_width(line), position)
    return f"{' ' * before}{line}{' ' * after}"


def join_horizontal(position: object, *blocks: str) -> str:
    """
    Place ``blocks`` side by side.

    Shorter blocks receive blank rows according to ``position`` (top, center or bottom;
    center puts the odd row below). Each block's lines are right-padded with spaces to
    that block's own width so columns line up. No gap is inserted between blocks; pass a
    separator string such as ``" "`` as a block of its own to get one.

    Parameters:
        position (Position | str): Vertical alignment of shorter blocks.
        *blocks (str): Rendered blocks, left to right.

    Returns:
        str: The joined block (``""`` for no blocks, the block itself for a single one).
    """
    if not blocks:
        return ""
    if len(blocks) == 1:
        return blocks[0]
    pos = Position.coerce(position, TOP)
    columns = [_lines(block) for block in blocks]
    height = max(len(column) for column in columns)
    rows: List[List[str]] = [[] for _ in range(height)]
    for column in columns:
        column_width = max(cell_width(line) for line in column)
        padded = [f"{line}{' ' * (column_width - cell_width(line))}" for line in column]
        above, below = distribute(height - len(column), pos)
        blank = " " * column_width
        for index, line in enumerate([blank] * above + padded + [blank] * below):
            rows[index].append(line)
    return "\n".join("".join(row) for row in rows)


def join_vertical(position: object, *blocks: str) -> str:
    """
    Stack ``blocks`` top to bottom, aligning narrower lines per ``position``.

    Lines narrower than the widest line among all blocks are filled with unstyled spaces
    on the left, right or both sides (center puts the odd cell on the right).
    """
    if not blocks:
        return ""
    if len(blocks) == 1:
        return blocks[0]
    pos = Position.coerce(position, LEFT)
    lines = [line for block in blocks for line in _lines(block)]
    target = max(cell_width(line) for line in lines)
    return "\n".join(_align_line(line, target, pos) for line in lines)


def place_horizontal(width: int, position: object, block: str) -> str:
    """Fit every line of ``block`` to exactly ``width`` cells, clipping wide lines."""

    width = max(0, width)
    pos = Position.coerce(position, LEFT)
    return "\n".join(_align_line(clip(line, width), width, pos) for line in _lines(block))


def place_vertical(height: int, position: object, block: str) -> str:
    """
    Fit ``block`` to exactly ``height`` lines.

    Short blocks get blank rows of the block's width; tall blocks are cropped, keeping the
    top rows for ``top``, the bottom rows for ``bottom`` and the middle rows for
    ``center``.
    """
    height = max(0, height)
    pos = Position.coerce(position, TOP)
    lines = _lines(block)
    if len(lines) > height:
        drop_above, _ = distribute(len(lines) - height, pos)
        return "\n".join(lines[drop_above:drop_above + height])
    blank = " " * max(cell_width(line) for line in lines)
    above, below = distribute(height - len(lines), pos)
    return "\n".join([blank] * above + lines + [blank] * below)


def place(width: int, height: int, h_position: object, v_position: object, block: str) -> str:
    """
    Position ``block`` inside a ``width`` x ``height`` area of unstyled spaces.

    Horizontal placement runs first (lines are clipped with their escape sequences
    intact, then padded), vertical placement second, so the result always has exactly
    ``height`` lines of exactly ``width`` cells. A zero ``height`` yields ``""``.
    """
    return place_vertical(height, v_position, place_horizontal(width, h_position, block))


__all__ = [
    "join_horizontal",
    "join_vertical",
    "place",
    "place_horizontal",
    "place_vertical",
]
