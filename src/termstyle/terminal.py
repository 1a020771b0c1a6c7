"""Terminal environment signals: background brightness and color capability."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

logger = logging.getLogger(__name__)


class ColorProfile(str, Enum):
    """Color depth the output terminal is assumed to support."""

    TRUECOLOR = "truecolor"
    ANSI256 = "ansi256"
    ANSI = "ansi"


def _is_truthy_flag(raw_value: str) -> bool:
    """Return True when an environment-style flag requests enabling behavior."""

    normalized = raw_value.strip().lower()
    return bool(normalized) and normalized not in {"0", "false", "no", "off"}


def _coerce_override(override: object) -> Optional[bool]:
    """Translate an explicit background override into ``True`` (light), ``False`` (dark) or ``None``."""

    if override is None:
        return None
    if isinstance(override, bool):
        return override
    value = getattr(override, "value", override)
    normalized = str(value).strip().lower()
    if normalized == "light":
        return True
    if normalized == "dark":
        return False
    return None


def detect_light_background(
    environ: Optional[Mapping[str, str]] = None,
    *,
    override: object = None,
) -> bool:
    """
    Decide whether the terminal background is light.

    Precedence is: an explicit ``override`` (``"light"``/``"dark"``, a bool, or an enum
    carrying one of those values; ``"auto"`` and ``None`` defer), then the
    ``TERM_BACKGROUND`` variable, then the ``COLORFGBG`` heuristic (the last
    ``;``-separated field is the background palette index and values above 6 mean a light
    background), then dark.

    Parameters:
        environ (Mapping[str, str] | None): Environment to consult; defaults to ``os.environ``.
        override (object): Explicit caller preference that wins over the environment.

    Returns:
        bool: ``True`` for a light background, ``False`` otherwise.
    """
    explicit = _coerce_override(override)
    if explicit is not None:
        logger.debug("Background %s from explicit override", "light" if explicit else "dark")
        return explicit

    env = os.environ if environ is None else environ
    term_background = env.get("TERM_BACKGROUND", "").strip().lower()
    if term_background in {"light", "dark"}:
        logger.debug("Background %s from TERM_BACKGROUND", term_background)
        return term_background == "light"

    colorfgbg = env.get("COLORFGBG", "").strip()
    if colorfgbg:
        last_field = colorfgbg.split(";")[-1].strip()
        if last_field.isascii() and last_field.isdigit():
            light = int(last_field) > 6
            logger.debug("Background %s from COLORFGBG=%r", "light" if light else "dark", colorfgbg)
            return light
    return False


def detect_color_profile(environ: Optional[Mapping[str, str]] = None) -> ColorProfile:
    """
    Determine the terminal color profile from environment variables.

    ``TERMSTYLE_FORCE_TRUECOLOR`` set to a truthy value always wins. ``COLORTERM``
    advertising ``truecolor``/``24bit`` (or a Windows Terminal session) means truecolor,
    a ``TERM`` containing ``256color`` means the 256-color palette, and anything else
    falls back to the 16 base colors.
    """
    env = os.environ if environ is None else environ
    if _is_truthy_flag(env.get("TERMSTYLE_FORCE_TRUECOLOR", "")):
        return ColorProfile.TRUECOLOR
    colorterm = env.get("COLORTERM", "").lower()
    if any(token in colorterm for token in ("truecolor", "24bit")):
        return ColorProfile.TRUECOLOR
    if env.get("WT_SESSION"):
        return ColorProfile.TRUECOLOR
    term = env.get("TERM", "").lower()
    if "truecolor" in term or "direct" in term:
        return ColorProfile.TRUECOLOR
    if "256color" in term:
        return ColorProfile.ANSI256
    return ColorProfile.ANSI


@dataclass(frozen=True)
class TerminalContext:
    """
    Snapshot of the terminal facts rendering depends on.

    Attributes:
        light_background (bool): Selects the ``light`` branch of adaptive colors.
        profile (ColorProfile): Color depth used when encoding colors.
        no_color (bool): Suppress every color sequence while keeping text attributes.
    """

    light_background: bool = False
    profile: ColorProfile = ColorProfile.TRUECOLOR
    no_color: bool = False

    @classmethod
    def light(cls) -> "TerminalContext":
        return cls(light_background=True)

    @classmethod
    def dark(cls) -> "TerminalContext":
        return cls(light_background=False)

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        *,
        background: object = None,
    ) -> "TerminalContext":
        """Read only the background signal; profile stays truecolor and colors stay enabled."""

        return cls(light_background=detect_light_background(environ, override=background))

    @classmethod
    def detect(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        *,
        background: object = None,
        profile: Optional[ColorProfile] = None,
        no_color: bool = False,
    ) -> "TerminalContext":
        """
        Build a context for interactive output.

        In addition to the background signal this honors ``NO_COLOR`` and detects the
        color profile unless one is given explicitly.
        """
        env = os.environ if environ is None else environ
        disabled = no_color or bool(env.get("NO_COLOR"))
        return cls(
            light_background=detect_light_background(env, override=background),
            profile=profile if profile is not None else detect_color_profile(env),
            no_color=disabled,
        )


__all__ = [
    "ColorProfile",
    "TerminalContext",
    "detect_color_profile",
    "detect_light_background",
]
