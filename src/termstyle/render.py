"""Box-model rendering of a :class:`~termstyle.style.Style` applied to text."""
from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, List, Optional, Tuple

from .ansi import ANSI_RESET, ANSI_RESET_RE, encode_attributes
from .color import color_sequence
from .measure import cell_width, repeat_to_width, truncate
from .position import LEFT, TOP, distribute
from .terminal import TerminalContext

if TYPE_CHECKING:  # pragma: no cover
    from .style import Style

logger = logging.getLogger(__name__)

DEFAULT_TAIL = "…"
TAB_WIDTH = 4

# C0 controls other than newline, tab and ESC, plus DEL.
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b-\x1a\x1c-\x1f\x7f]")


def _size(value: Optional[int]) -> int:
    return max(0, value) if value is not None else 0


def _sanitize(text: str) -> str:
    """Normalize line endings, expand tabs to spaces and drop other control characters."""

    text = text.replace("\r\n", "\n").replace("\t", " " * TAB_WIDTH)
    return _CONTROL_RE.sub("", text)


class BoxRenderer:
    """
    Apply one style to text, producing a rectangular block.

    The stages run in a fixed order: width normalization and truncation, the per-line
    attribute/color wrap, horizontal alignment fill, height normalization of the content
    box, padding, border and finally margin. Alignment fill, padding and blank height
    lines carry the style's background; border segments carry only the border colors;
    margins are plain spaces.
    """

    def __init__(self, style: "Style", context: TerminalContext) -> None:
        self.style = style
        self.context = context
        self._background = color_sequence(style.background, context, background=True)
        self._prefix = "".join(
            (
                encode_attributes(
                    bold=style.bold,
                    faint=style.faint,
                    italic=style.italic,
                    underline=style.underline,
                    blink=style.blink,
                    reverse=style.reverse,
                    strikethrough=style.strikethrough,
                ),
                color_sequence(style.foreground, context),
                self._background,
            )
        )
        self._border_prefix = color_sequence(style.border_foreground, context) + color_sequence(
            style.border_background, context, background=True
        )

    # -- painting helpers -------------------------------------------------

    def _wrap(self, line: str) -> str:
        """Wrap one content line in the style prefix, re-opening it after nested resets."""

        if not line or not self._prefix:
            return line
        body = ANSI_RESET_RE.sub(lambda match: match.group(0) + self._prefix, line)
        return f"{self._prefix}{body}{ANSI_RESET}"

    def _fill(self, cells: int) -> str:
        if cells <= 0:
            return ""
        if self._background:
            return f"{self._background}{' ' * cells}{ANSI_RESET}"
        return " " * cells

    def _paint_border(self, segment: str) -> str:
        if not segment or not self._border_prefix:
            return segment
        return f"{self._border_prefix}{segment}{ANSI_RESET}"

    # -- stages -----------------------------------------------------------

    def _has_box(self) -> bool:
        style = self.style
        spacing = (
            style.padding_top,
            style.padding_right,
            style.padding_bottom,
            style.padding_left,
            style.margin_top,
            style.margin_right,
            style.margin_bottom,
            style.margin_left,
        )
        return (
            style.width is not None
            or bool(style.height)
            or any(_size(value) for value in spacing)
            or any(self._border_sides())
        )

    def _content_width(self, lines: List[str]) -> int:
        style = self.style
        if style.width is not None:
            target = _size(style.width)
        else:
            target = max(cell_width(line) for line in lines)
        if style.max_width is not None:
            target = min(target, _size(style.max_width))
        return target

    def _fit_line(self, line: str, target: int) -> str:
        visible = cell_width(line)
        if visible > target:
            logger.debug("Truncating line from %d to %d cells", visible, target)
            line = truncate(line, target, DEFAULT_TAIL)
            visible = cell_width(line)
        before, after = distribute(target - visible, self.style.align or LEFT)
        return f"{self._fill(before)}{self._wrap(line)}{self._fill(after)}"

    def _apply_height(self, lines: List[str], block_width: int) -> List[str]:
        style = self.style
        if style.height is not None and len(lines) < style.height:
            above, below = distribute(style.height - len(lines), style.align_vertical or TOP)
            blank = self._fill(block_width)
            lines = [blank] * above + lines + [blank] * below
        if style.max_height is not None and len(lines) > _size(style.max_height):
            lines = lines[: _size(style.max_height)]
        return lines

    def _apply_padding(self, lines: List[str], block_width: int) -> Tuple[List[str], int]:
        style = self.style
        top = _size(style.padding_top)
        right = _size(style.padding_right)
        bottom = _size(style.padding_bottom)
        left = _size(style.padding_left)
        if not (top or right or bottom or left):
            return lines, block_width
        padded = [f"{self._fill(left)}{line}{self._fill(right)}" for line in lines]
        block_width += left + right
        blank = self._fill(block_width)
        return [blank] * top + padded + [blank] * bottom, block_width

    def _border_sides(self) -> Tuple[bool, bool, bool, bool]:
        style = self.style
        if style.border is None:
            return False, False, False, False
        return tuple(  # type: ignore[return-value]
            True if side is None else bool(side)
            for side in (style.border_top, style.border_right, style.border_bottom, style.border_left)
        )

    def _apply_border(self, lines: List[str], block_width: int) -> Tuple[List[str], int]:
        border = self.style.border
        top, right, bottom, left = self._border_sides()
        if border is None or not (top or right or bottom or left):
            return lines, block_width

        left_edge = self._paint_border(repeat_to_width(border.left, 1)) if left else ""
        right_edge = self._paint_border(repeat_to_width(border.right, 1)) if right else ""
        framed = [f"{left_edge}{line}{right_edge}" for line in lines]

        def rule(fill: str, start: str, end: str) -> str:
            segment = "".join(
                (
                    repeat_to_width(start, 1) if left else "",
                    repeat_to_width(fill, block_width),
                    repeat_to_width(end, 1) if right else "",
                )
            )
            return self._paint_border(segment)

        if top:
            framed.insert(0, rule(border.top, border.top_left, border.top_right))
        if bottom:
            framed.append(rule(border.bottom, border.bottom_left, border.bottom_right))
        return framed, block_width + int(left) + int(right)

    def _apply_margin(self, lines: List[str], block_width: int) -> List[str]:
        style = self.style
        top = _size(style.margin_top)
        right = _size(style.margin_right)
        bottom = _size(style.margin_bottom)
        left = _size(style.margin_left)
        if not (top or right or bottom or left):
            return lines
        blank = " " * (block_width + left + right)
        spaced = [f"{' ' * left}{line}{' ' * right}" for line in lines]
        return [blank] * top + spaced + [blank] * bottom

    def render(self, text: str) -> str:
        if text == "" and not self._has_box():
            return ""
        lines = _sanitize(text).split("\n")
        content_width = self._content_width(lines)
        lines = [self._fit_line(line, content_width) for line in lines]
        lines = self._apply_height(lines, content_width)
        lines, block_width = self._apply_padding(lines, content_width)
        lines, block_width = self._apply_border(lines, block_width)
        lines = self._apply_margin(lines, block_width)
        return "\n".join(lines)


def render(style: "Style", text: str, context: Optional[TerminalContext] = None) -> str:
    """
    Render ``text`` with ``style`` into a block of ANSI-styled lines.

    A completely unset style returns ``text`` unchanged. Otherwise every output line has
    the same display width. Rendering never raises: malformed colors are dropped and
    negative dimensions are treated as zero.

    Parameters:
        style (Style): The style to apply.
        text (str): Content to render; ``\\n`` separates lines.
        context (TerminalContext | None): Terminal facts to render against. When omitted
            the background signal is read from the environment once for this call.

    Returns:
        str: The rendered block.
    """
    text = "" if text is None else str(text)
    if style.is_unset:
        return text
    ctx = context if context is not None else TerminalContext.from_env()
    return BoxRenderer(style, ctx).render(text)


__all__ = ["BoxRenderer", "DEFAULT_TAIL", "TAB_WIDTH", "render"]
