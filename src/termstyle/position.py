"""Alignment positions shared by the box renderer and the layout helpers."""
from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple


class Position(str, Enum):
    """Where content sits inside the space available to it."""

    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"

    @classmethod
    def coerce(cls, value: object, default: Optional["Position"] = None) -> "Position":
        """
        Convert ``value`` (a Position or its name, case-insensitive) into a Position.

        ``"middle"`` is accepted as an alias of ``center``. Unknown values raise
        ``ValueError`` unless ``default`` is given, in which case it is returned instead.
        """
        if isinstance(value, cls):
            return value
        normalized = str(getattr(value, "value", value)).strip().lower()
        if normalized == "middle":
            normalized = cls.CENTER.value
        try:
            return cls(normalized)
        except ValueError:
            if default is not None:
                return default
            choices = ", ".join(member.value for member in cls)
            raise ValueError(f"Unknown position {value!r}; expected one of {choices}") from None

    @property
    def is_start(self) -> bool:
        return self in (Position.TOP, Position.LEFT)

    @property
    def is_end(self) -> bool:
        return self in (Position.BOTTOM, Position.RIGHT)


TOP = Position.TOP
BOTTOM = Position.BOTTOM
LEFT = Position.LEFT
RIGHT = Position.RIGHT
CENTER = Position.CENTER
MIDDLE = Position.CENTER


def distribute(total: int, position: Position) -> Tuple[int, int]:
    """
    Split ``total`` units of filler into ``(before, after)`` for ``position``.

    Start positions (top/left) put everything after the content, end positions
    (bottom/right) put everything before it. Center gives ``before`` the floor of half,
    so an odd unit always lands after the content.
    """
    if total <= 0:
        return 0, 0
    if position.is_start:
        return 0, total
    if position.is_end:
        return total, 0
    before = total // 2
    return before, total - before


__all__ = [
    "BOTTOM",
    "CENTER",
    "LEFT",
    "MIDDLE",
    "Position",
    "RIGHT",
    "TOP",
    "distribute",
]
