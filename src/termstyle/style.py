"""The immutable :class:`Style` descriptor and its builder methods."""
from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional, Tuple

from .borders import Border
from .color import Color, as_color
from .position import Position
from .render import render as _render
from .terminal import TerminalContext

_COLOR_FIELDS = ("foreground", "background", "border_foreground", "border_background")
_POSITION_FIELDS = ("align", "align_vertical")


def _clamp(value: Optional[int]) -> Optional[int]:
    if value is None:
        return None
    return max(0, int(value))


def _expand_box(values: Tuple[int, ...], what: str) -> Tuple[int, int, int, int]:
    """Expand CSS-style 1/2/3/4-value shorthand into (top, right, bottom, left)."""

    count = len(values)
    if count == 1:
        top = right = bottom = left = values[0]
    elif count == 2:
        top = bottom = values[0]
        right = left = values[1]
    elif count == 3:
        top, right, bottom = values
        left = right
    elif count == 4:
        top, right, bottom, left = values
    else:
        raise ValueError(f"{what} takes 1 to 4 values, got {count}")
    return top, right, bottom, left


@dataclass(frozen=True)
class Style:
    """
    Declarative description of how a piece of text should look.

    Every field defaults to ``None`` meaning "unset", which is distinct from ``False`` or
    ``0``. Styles are immutable: each ``with_*`` builder returns a new instance and the
    receiver is never modified, so a base style can be shared and derived from freely.
    Color fields accept plain strings (``"#FF0000"``, ``"red"``, ``"42"``) and
    ``(light, dark)`` pairs; they are coerced without validation and anything that does
    not resolve simply renders without that color.
    """

    bold: Optional[bool] = None
    italic: Optional[bool] = None
    underline: Optional[bool] = None
    strikethrough: Optional[bool] = None
    faint: Optional[bool] = None
    blink: Optional[bool] = None
    reverse: Optional[bool] = None

    foreground: Optional[Color] = None
    background: Optional[Color] = None

    width: Optional[int] = None
    height: Optional[int] = None
    max_width: Optional[int] = None
    max_height: Optional[int] = None

    align: Optional[Position] = None
    align_vertical: Optional[Position] = None

    padding_top: Optional[int] = None
    padding_right: Optional[int] = None
    padding_bottom: Optional[int] = None
    padding_left: Optional[int] = None

    margin_top: Optional[int] = None
    margin_right: Optional[int] = None
    margin_bottom: Optional[int] = None
    margin_left: Optional[int] = None

    border: Optional[Border] = None
    border_top: Optional[bool] = None
    border_right: Optional[bool] = None
    border_bottom: Optional[bool] = None
    border_left: Optional[bool] = None
    border_foreground: Optional[Color] = None
    border_background: Optional[Color] = None

    def __post_init__(self) -> None:
        for name in _COLOR_FIELDS:
            value = getattr(self, name)
            coerced = as_color(value)
            if coerced is not value:
                object.__setattr__(self, name, coerced)
        for name in _POSITION_FIELDS:
            value = getattr(self, name)
            if value is not None and not isinstance(value, Position):
                object.__setattr__(self, name, Position.coerce(value))

    # -- generic helpers -------------------------------------------------

    def replace(self, **changes: Any) -> "Style":
        """Return a copy with ``changes`` applied."""

        return replace(self, **changes)

    def merge(self, other: "Style") -> "Style":
        """Return a copy where every field set on ``other`` overrides this style."""

        changes: Dict[str, Any] = {}
        for item in fields(other):
            value = getattr(other, item.name)
            if value is not None:
                changes[item.name] = value
        return replace(self, **changes) if changes else self

    @property
    def is_unset(self) -> bool:
        return all(getattr(self, item.name) is None for item in fields(self))

    def set_fields(self) -> Dict[str, Any]:
        """Return the fields that carry a value, in declaration order."""

        return {
            item.name: getattr(self, item.name)
            for item in fields(self)
            if getattr(self, item.name) is not None
        }

    def render(self, text: str, context: Optional[TerminalContext] = None) -> str:
        """Render ``text`` with this style; see :func:`termstyle.render.render`."""

        return _render(self, text, context)

    def __call__(self, text: str, context: Optional[TerminalContext] = None) -> str:
        return self.render(text, context)

    # -- text attributes -------------------------------------------------

    def with_bold(self, value: bool = True) -> "Style":
        return replace(self, bold=value)

    def with_italic(self, value: bool = True) -> "Style":
        return replace(self, italic=value)

    def with_underline(self, value: bool = True) -> "Style":
        return replace(self, underline=value)

    def with_strikethrough(self, value: bool = True) -> "Style":
        return replace(self, strikethrough=value)

    def with_faint(self, value: bool = True) -> "Style":
        return replace(self, faint=value)

    def with_blink(self, value: bool = True) -> "Style":
        return replace(self, blink=value)

    def with_reverse(self, value: bool = True) -> "Style":
        return replace(self, reverse=value)

    # -- colors ----------------------------------------------------------

    def with_foreground(self, color: object) -> "Style":
        return replace(self, foreground=as_color(color))

    def with_background(self, color: object) -> "Style":
        return replace(self, background=as_color(color))

    def with_border_foreground(self, color: object) -> "Style":
        return replace(self, border_foreground=as_color(color))

    def with_border_background(self, color: object) -> "Style":
        return replace(self, border_background=as_color(color))

    # -- dimensions and alignment ----------------------------------------

    def with_width(self, value: int) -> "Style":
        return replace(self, width=_clamp(value))

    def with_height(self, value: int) -> "Style":
        return replace(self, height=_clamp(value))

    def with_max_width(self, value: int) -> "Style":
        return replace(self, max_width=_clamp(value))

    def with_max_height(self, value: int) -> "Style":
        return replace(self, max_height=_clamp(value))

    def with_align(self, horizontal: object, vertical: object = None) -> "Style":
        """Set horizontal alignment and, optionally, vertical alignment in one call."""

        changes: Dict[str, Any] = {"align": Position.coerce(horizontal)}
        if vertical is not None:
            changes["align_vertical"] = Position.coerce(vertical)
        return replace(self, **changes)

    def with_align_vertical(self, position: object) -> "Style":
        return replace(self, align_vertical=Position.coerce(position))

    # -- spacing ---------------------------------------------------------

    def with_padding(self, *values: int) -> "Style":
        """
        Set padding using CSS shorthand.

        One value applies to all sides, two are (vertical, horizontal), three are
        (top, horizontal, bottom) and four are (top, right, bottom, left). Negative values
        are clamped to zero.

        Raises:
            ValueError: If fewer than one or more than four values are given.
        """
        top, right, bottom, left = _expand_box(values, "with_padding")
        return replace(
            self,
            padding_top=_clamp(top),
            padding_right=_clamp(right),
            padding_bottom=_clamp(bottom),
            padding_left=_clamp(left),
        )

    def with_padding_top(self, value: int) -> "Style":
        return replace(self, padding_top=_clamp(value))

    def with_padding_right(self, value: int) -> "Style":
        return replace(self, padding_right=_clamp(value))

    def with_padding_bottom(self, value: int) -> "Style":
        return replace(self, padding_bottom=_clamp(value))

    def with_padding_left(self, value: int) -> "Style":
        return replace(self, padding_left=_clamp(value))

    def with_margin(self, *values: int) -> "Style":
        """Set margin using the same 1 to 4 value shorthand as :meth:`with_padding`."""

        top, right, bottom, left = _expand_box(values, "with_margin")
        return replace(
            self,
            margin_top=_clamp(top),
            margin_right=_clamp(right),
            margin_bottom=_clamp(bottom),
            margin_left=_clamp(left),
        )

    def with_margin_top(self, value: int) -> "Style":
        return replace(self, margin_top=_clamp(value))

    def with_margin_right(self, value: int) -> "Style":
        return replace(self, margin_right=_clamp(value))

    def with_margin_bottom(self, value: int) -> "Style":
        return replace(self, margin_bottom=_clamp(value))

    def with_margin_left(self, value: int) -> "Style":
        return replace(self, margin_left=_clamp(value))

    # -- border ----------------------------------------------------------

    def with_border(self, border: Border, *sides: bool) -> "Style":
        """
        Set the border character set and which sides draw it.

        With no ``sides`` every side is drawn. Otherwise ``sides`` follows the same
        1 to 4 value shorthand as :meth:`with_padding`.

        Raises:
            ValueError: If more than four side flags are given.
        """
        if sides:
            top, right, bottom, left = _expand_box(sides, "with_border")
        else:
            top = right = bottom = left = True
        return replace(
            self,
            border=border,
            border_top=bool(top),
            border_right=bool(right),
            border_bottom=bool(bottom),
            border_left=bool(left),
        )

    def with_border_style(self, border: Border) -> "Style":
        """Set the character set only, leaving side flags untouched."""

        return replace(self, border=border)

    def with_border_top(self, value: bool = True) -> "Style":
        return replace(self, border_top=value)

    def with_border_right(self, value: bool = True) -> "Style":
        return replace(self, border_right=value)

    def with_border_bottom(self, value: bool = True) -> "Style":
        return replace(self, border_bottom=value)

    def with_border_left(self, value: bool = True) -> "Style":
        return replace(self, border_left=value)


__all__ = ["Style"]
