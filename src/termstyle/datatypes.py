"""Configuration dataclasses for termstyle stylesheets."""
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Mapping, Optional

from .style import Style
from .terminal import ColorProfile, TerminalContext


class BackgroundMode(str, Enum):
    """How the terminal background brightness is determined."""

    AUTO = "auto"
    LIGHT = "light"
    DARK = "dark"


class ProfileMode(str, Enum):
    """Color depth selection; ``auto`` detects it from the environment."""

    AUTO = "auto"
    TRUECOLOR = "truecolor"
    ANSI256 = "ansi256"
    ANSI = "ansi"

    def as_profile(self) -> Optional[ColorProfile]:
        if self is ProfileMode.AUTO:
            return None
        return ColorProfile(self.value)


@dataclass
class TerminalConfig:
    """Terminal assumptions declared by a stylesheet's ``[terminal]`` table."""

    background: BackgroundMode = BackgroundMode.AUTO
    color_profile: ProfileMode = ProfileMode.AUTO
    no_color: bool = False


@dataclass
class Stylesheet:
    """A loaded stylesheet: terminal settings plus named, fully resolved styles."""

    terminal: TerminalConfig = field(default_factory=TerminalConfig)
    styles: Dict[str, Style] = field(default_factory=dict)
    source: Optional[Path] = None

    def get(self, name: str) -> Style:
        """Return the style called ``name``; raises ``KeyError`` listing the known names."""

        try:
            return self.styles[name]
        except KeyError:
            known = ", ".join(sorted(self.styles)) or "none"
            raise KeyError(f"Unknown style {name!r} (defined: {known})") from None

    def terminal_context(
        self,
        environ: Optional[Mapping[str, str]] = None,
        *,
        background: Optional[BackgroundMode] = None,
        color_profile: Optional[ProfileMode] = None,
        no_color: bool = False,
    ) -> TerminalContext:
        """
        Build the rendering context for this stylesheet.

        Explicit arguments win over the ``[terminal]`` table, which wins over the
        environment. ``auto`` values defer to the next source.
        """
        chosen_background = self.terminal.background
        if background is not None and background is not BackgroundMode.AUTO:
            chosen_background = background
        chosen_profile = self.terminal.color_profile
        if color_profile is not None and color_profile is not ProfileMode.AUTO:
            chosen_profile = color_profile
        return TerminalContext.detect(
            environ,
            background=chosen_background,
            profile=chosen_profile.as_profile(),
            no_color=no_color or self.terminal.no_color,
        )
