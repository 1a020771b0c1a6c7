from collections.abc import Callable
from pathlib import Path

import pytest

from termstyle.borders import NORMAL, ROUNDED
from termstyle.color import AdaptiveColor, HexColor, IndexedColor, NamedColor
from termstyle.config_loader import ConfigError, load_stylesheet, loads_stylesheet
from termstyle.datatypes import BackgroundMode, ProfileMode, Stylesheet, TerminalConfig
from termstyle.measure import width
from termstyle.position import CENTER
from termstyle.terminal import ColorProfile, TerminalContext

StylesheetWriter = Callable[..., Path]

TITLE_SHEET = """
[terminal]
background = "auto"
color_profile = "auto"
no_color = false

[styles.base]
foreground = { light = "#202020", dark = "#E0E0E0" }

[styles.title]
extends = "base"
bold = true
padding = [0, 1]
border = "rounded"
border_sides = [true, true, true, true]
align = "center"
width = 30
"""


def test_title_stylesheet(write_stylesheet: StylesheetWriter) -> None:
    sheet = load_stylesheet(write_stylesheet(TITLE_SHEET))
    title = sheet.get("title")
    assert title.foreground == AdaptiveColor(HexColor("#202020"), HexColor("#E0E0E0"))
    assert title.bold is True
    assert (title.padding_top, title.padding_right, title.padding_bottom, title.padding_left) == (0, 1, 0, 1)
    assert title.border is ROUNDED
    assert title.border_left is True
    assert title.align is CENTER
    assert title.width == 30
    assert sheet.get("base").bold is None
    assert sheet.terminal == TerminalConfig()
    assert sheet.source is not None and sheet.source.name == "styles.toml"


def test_loaded_style_renders_rectangular(write_stylesheet: StylesheetWriter) -> None:
    title = load_stylesheet(write_stylesheet(TITLE_SHEET)).get("title")
    rendered = title.render("Hello", TerminalContext.dark())
    assert {width(line) for line in rendered.split("\n")} == {30 + 2 + 2}


def test_terminal_section(write_stylesheet: StylesheetWriter) -> None:
    sheet = load_stylesheet(
        write_stylesheet('[terminal]\nbackground = "Light"\ncolor_profile = "ansi256"\nno_color = 1\n')
    )
    assert sheet.terminal.background is BackgroundMode.LIGHT
    assert sheet.terminal.color_profile is ProfileMode.ANSI256
    assert sheet.terminal.no_color is True
    assert sheet.styles == {}


def test_bom_is_accepted(tmp_path: Path) -> None:
    path = tmp_path / "bom.toml"
    path.write_bytes(b"\xef\xbb\xbf[styles.x]\nitalic = true\n")
    assert load_stylesheet(path).get("x").italic is True


def test_non_utf8_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "latin1.toml"
    path.write_bytes('[styles.x]\nforeground = "r\xe9d"\n'.encode("latin-1"))
    with pytest.raises(ConfigError, match="UTF-8"):
        load_stylesheet(path)


def test_syntax_error() -> None:
    with pytest.raises(ConfigError, match="Failed to parse TOML"):
        loads_stylesheet("[styles.x\nbold = true")


@pytest.mark.parametrize(
    ("text", "message"),
    [
        ("[styles.x]\ncolour = 'red'\n", r"Invalid keys in \[styles.x\]: colour"),
        ("[styles.x]\nforeground = '#12'\n", "styles.x.foreground"),
        ("[styles.x]\nbackground = { light = 'red' }\n", "styles.x.background"),
        ("[styles.x]\nborder = 'wavy'\n", "styles.x.border must be one of"),
        ("[styles.x]\nborder_sides = [true]\n", "requires styles.x.border"),
        ("[styles.x]\nborder = 'normal'\nborder_sides = [true, true, true, true, true]\n", "between 1 and 4"),
        ("[styles.x]\nwidth = -1\n", "styles.x.width must be >= 0"),
        ("[styles.x]\nwidth = 'wide'\n", "styles.x.width must be an integer"),
        ("[styles.x]\nbold = 'yes'\n", "styles.x.bold must be a boolean"),
        ("[styles.x]\nalign = 'diagonal'\n", "styles.x.align"),
        ("[styles.x]\npadding = [1, 2, 3, 4, 5]\n", "styles.x.padding must have between 1 and 4"),
        ("[styles.x]\nextends = 3\n", "styles.x.extends must be a style name"),
        ("[styles.x]\nextends = 'missing'\n", "unknown style 'missing'"),
        ("[styles.a]\nextends = 'b'\n[styles.b]\nextends = 'a'\n", "inheritance cycle"),
        ("[styles.a]\nextends = 'a'\n", "a -> a"),
        ("styles = 3\n", r"\[styles\] must be a table"),
        ("[styles]\nx = 3\n", r"\[styles.x\] must be a table"),
        ("[terminal]\nbackground = 'beige'\n", "terminal.background must be one of"),
        ("[terminal]\nshell = 'zsh'\n", r"Invalid keys in \[terminal\]"),
        ("terminal = 'dark'\n", r"\[terminal\] must be a table"),
    ],
)
def test_validation_errors(text: str, message: str) -> None:
    with pytest.raises(ConfigError, match=message):
        loads_stylesheet(text)


def test_config_error_is_value_error() -> None:
    assert issubclass(ConfigError, ValueError)


def test_per_side_keys_override_shorthand() -> None:
    style = loads_stylesheet("[styles.x]\npadding = 2\npadding_left = 0\nmargin = [1, 3]\n").get("x")
    assert (style.padding_top, style.padding_right, style.padding_bottom, style.padding_left) == (2, 2, 2, 0)
    assert (style.margin_top, style.margin_right, style.margin_bottom, style.margin_left) == (1, 3, 1, 3)


def test_border_sides_shorthand() -> None:
    style = loads_stylesheet("[styles.x]\nborder = 'NORMAL'\nborder_sides = [true, false]\n").get("x")
    assert style.border is NORMAL
    assert (style.border_top, style.border_right, style.border_bottom, style.border_left) == (
        True,
        False,
        True,
        False,
    )


def test_inheritance_chain() -> None:
    sheet = loads_stylesheet(
        """
        [styles.child]
        extends = "parent"
        foreground = "blue"

        [styles.parent]
        extends = "grandparent"
        italic = true
        foreground = 33

        [styles.grandparent]
        bold = true
        foreground = "red"
        """
    )
    child = sheet.get("child")
    assert child.bold is True
    assert child.italic is True
    assert child.foreground == NamedColor("blue")
    assert sheet.get("parent").foreground == IndexedColor(33)


def test_unknown_style_lookup() -> None:
    sheet = loads_stylesheet("[styles.one]\nbold = true\n")
    with pytest.raises(KeyError, match="one"):
        sheet.get("two")


class TestTerminalContext:
    """Explicit arguments beat the [terminal] table, which beats the environment."""

    def test_stylesheet_background_beats_environment(self) -> None:
        sheet = loads_stylesheet("[terminal]\nbackground = 'light'\n")
        context = sheet.terminal_context({"TERM_BACKGROUND": "dark"})
        assert context.light_background is True

    def test_explicit_background_beats_stylesheet(self) -> None:
        sheet = loads_stylesheet("[terminal]\nbackground = 'light'\n")
        assert sheet.terminal_context({}, background=BackgroundMode.DARK).light_background is False

    def test_auto_falls_through_to_environment(self) -> None:
        context = Stylesheet().terminal_context({"COLORFGBG": "0;15"}, background=BackgroundMode.AUTO)
        assert context.light_background is True

    def test_profile_and_no_color(self) -> None:
        sheet = loads_stylesheet("[terminal]\ncolor_profile = 'ansi256'\nno_color = true\n")
        context = sheet.terminal_context({"COLORTERM": "truecolor"})
        assert context.profile is ColorProfile.ANSI256
        assert context.no_color is True

    def test_explicit_profile(self) -> None:
        context = Stylesheet().terminal_context({"TERM": "xterm"}, color_profile=ProfileMode.TRUECOLOR)
        assert context.profile is ColorProfile.TRUECOLOR
