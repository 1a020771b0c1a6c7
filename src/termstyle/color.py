"""Color descriptors and their translation into ANSI sequences."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple, Union

from .ansi import (
    ansi256_to_rgb,
    indexed_sequence,
    named_color_index,
    palette_sequence,
    rgb_sequence,
    rgb_to_ansi16,
    rgb_to_ansi256,
)
from .terminal import ColorProfile, TerminalContext

logger = logging.getLogger(__name__)

_HEX_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_INDEX_RE = re.compile(r"^[0-9]+$")
_DEFAULT_CONTEXT = TerminalContext()


class ColorError(ValueError):
    """Raised when a color description cannot be parsed."""


def _context(context: Optional[TerminalContext]) -> TerminalContext:
    return _DEFAULT_CONTEXT if context is None else context


@dataclass(frozen=True)
class HexColor:
    """A ``#RGB`` or ``#RRGGBB`` truecolor value."""

    value: str

    def rgb(self) -> Optional[Tuple[int, int, int]]:
        """Return the ``(r, g, b)`` triple, or ``None`` when the value is malformed."""

        text = (self.value or "").strip()
        if not _HEX_RE.match(text):
            return None
        digits = text[1:]
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))

    def sequence(self, context: Optional[TerminalContext] = None, *, background: bool = False) -> str:
        ctx = _context(context)
        if ctx.no_color:
            return ""
        rgb = self.rgb()
        if rgb is None:
            logger.debug("Ignoring malformed hex color %r", self.value)
            return ""
        if ctx.profile is ColorProfile.ANSI256:
            return indexed_sequence(rgb_to_ansi256(*rgb), background=background)
        if ctx.profile is ColorProfile.ANSI:
            return palette_sequence(rgb_to_ansi16(*rgb), background=background)
        return rgb_sequence(*rgb, background=background)


@dataclass(frozen=True)
class NamedColor:
    """One of the 16 base palette colors, by name (``red``, ``bright-blue``, ``gray``...)."""

    name: str

    def sequence(self, context: Optional[TerminalContext] = None, *, background: bool = False) -> str:
        if _context(context).no_color:
            return ""
        index = named_color_index(self.name)
        if index is None:
            logger.debug("Ignoring unknown color name %r", self.name)
            return ""
        return palette_sequence(index, background=background)


@dataclass(frozen=True)
class IndexedColor:
    """A 256-color palette entry; accepts an int or an integer string."""

    value: Union[int, str]

    def index(self) -> Optional[int]:
        raw = self.value
        if isinstance(raw, bool):
            return None
        if isinstance(raw, int):
            number = raw
        else:
            text = str(raw).strip()
            if not _INDEX_RE.match(text):
                return None
            number = int(text)
        if not 0 <= number <= 255:
            return None
        return number

    def sequence(self, context: Optional[TerminalContext] = None, *, background: bool = False) -> str:
        ctx = _context(context)
        if ctx.no_color:
            return ""
        index = self.index()
        if index is None:
            logger.debug("Ignoring out-of-range color index %r", self.value)
            return ""
        if ctx.profile is ColorProfile.ANSI:
            if index < 16:
                return palette_sequence(index, background=background)
            return palette_sequence(rgb_to_ansi16(*ansi256_to_rgb(index)), background=background)
        return indexed_sequence(index, background=background)


@dataclass(frozen=True)
class AdaptiveColor:
    """A pair of colors chosen between by the terminal background at render time."""

    light: "Color"
    dark: "Color"

    def pick(self, context: Optional[TerminalContext] = None) -> "Color":
        return self.light if _context(context).light_background else self.dark

    def sequence(self, context: Optional[TerminalContext] = None, *, background: bool = False) -> str:
        return self.pick(context).sequence(context, background=background)


Color = Union[HexColor, NamedColor, IndexedColor, AdaptiveColor]
_COLOR_TYPES = (HexColor, NamedColor, IndexedColor, AdaptiveColor)


def parse_color(value: object) -> Color:
    """
    Parse ``value`` into a validated color, normalizing on the way.

    Accepted forms are ``#RGB``/``#RRGGBB`` (normalized to uppercase ``#RRGGBB``), a
    palette name (normalized to lowercase), an integer or integer string in ``[0, 255]``,
    an existing color object, and a mapping with ``light`` and ``dark`` keys.

    Raises:
        ColorError: If the value is not a recognizable color.
    """
    if isinstance(value, _COLOR_TYPES):
        return value
    if isinstance(value, Mapping):
        missing = [key for key in ("light", "dark") if key not in value]
        if missing:
            raise ColorError(f"Adaptive color is missing {' and '.join(missing)}")
        extra = sorted(set(value) - {"light", "dark"})
        if extra:
            raise ColorError(f"Adaptive color has unknown keys: {', '.join(map(str, extra))}")
        return AdaptiveColor(light=parse_color(value["light"]), dark=parse_color(value["dark"]))
    if isinstance(value, bool):
        raise ColorError(f"Not a color: {value!r}")
    if isinstance(value, int):
        if 0 <= value <= 255:
            return IndexedColor(value)
        raise ColorError(f"Color index must be between 0 and 255, got {value}")
    if not isinstance(value, str):
        raise ColorError(f"Not a color: {value!r}")

    text = value.strip()
    if text.startswith("#"):
        rgb = HexColor(text).rgb()
        if rgb is None:
            raise ColorError(f"Malformed hex color: {value!r}")
        return HexColor("#{:02X}{:02X}{:02X}".format(*rgb))
    if _INDEX_RE.match(text):
        return parse_color(int(text))
    if named_color_index(text) is not None:
        return NamedColor(text.lower())
    raise ColorError(f"Unknown color: {value!r}")


def _adaptive(light: object, dark: object) -> AdaptiveColor:
    return AdaptiveColor(light=as_color(light) or NamedColor(""), dark=as_color(dark) or NamedColor(""))


def as_color(value: object) -> Optional[Color]:
    """
    Leniently coerce ``value`` into a color without validating it.

    ``None`` stays ``None``. Strings starting with ``#`` become :class:`HexColor`, digit
    strings and ints become :class:`IndexedColor`, ``(light, dark)`` pairs and mappings
    become :class:`AdaptiveColor`, and anything else is treated as a name. Values that do
    not resolve simply render as "no color".
    """
    if value is None or isinstance(value, _COLOR_TYPES):
        return value
    if isinstance(value, Mapping):
        return _adaptive(value.get("light"), value.get("dark"))
    if isinstance(value, tuple) and len(value) == 2:
        return _adaptive(value[0], value[1])
    if isinstance(value, int) and not isinstance(value, bool):
        return IndexedColor(value)
    text = str(value).strip()
    if text.startswith("#"):
        return HexColor(text)
    if _INDEX_RE.match(text):
        return IndexedColor(text)
    return NamedColor(text)


def color_sequence(
    color: Optional[Color],
    context: Optional[TerminalContext] = None,
    *,
    background: bool = False,
) -> str:
    """Return the SGR sequence for ``color`` (``""`` for ``None`` or unresolvable values)."""

    if color is None:
        return ""
    return color.sequence(context, background=background)


__all__ = [
    "AdaptiveColor",
    "Color",
    "ColorError",
    "HexColor",
    "IndexedColor",
    "NamedColor",
    "as_color",
    "color_sequence",
    "parse_color",
]
