from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner

from termstyle.borders import ROUNDED
from termstyle.cli_entry import describe_style, main
from termstyle.style import Style

StylesheetWriter = Callable[..., Path]

RESET = "\x1b[0m"


class TestRender:
    def test_inline_attributes_and_color(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["render", "hi", "--bold", "--fg", "#FF0000", "--color-profile", "truecolor"])
        assert result.exit_code == 0, result.output
        assert result.output == f"\x1b[1m\x1b[38;2;255;0;0mhi{RESET}\n"

    def test_no_color_flag_keeps_attributes(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["render", "hi", "--bold", "--fg", "red", "--no-color"])
        assert result.exit_code == 0, result.output
        assert result.output == f"\x1b[1mhi{RESET}\n"

    def test_no_color_environment(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["render", "hi", "--bold", "--fg", "red"], env={"NO_COLOR": "1"})
        assert result.exit_code == 0, result.output
        assert result.output == f"\x1b[1mhi{RESET}\n"

    def test_named_color_on_basic_terminal(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["render", "hi", "--fg", "red"], env={"TERM": "xterm"})
        assert result.output == f"\x1b[31mhi{RESET}\n"

    def test_invalid_color_is_a_usage_error(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["render", "hi", "--fg", "#12"])
        assert result.exit_code == 2
        assert "--fg" in result.output

    def test_width_and_alignment(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["render", "hi", "--width", "6", "--align", "center"])
        assert result.output == "  hi  \n"

    def test_border(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["render", "hi", "--border", "normal"])
        assert result.output == "┌──┐\n│hi│\n└──┘\n"

    def test_padding_shorthand(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["render", "hi", "--padding", "0,1"])
        assert result.output == " hi \n"

    @pytest.mark.parametrize("value", ["1,2,3,4,5", "a,b"])
    def test_bad_padding(self, runner: CliRunner, value: str) -> None:
        result = runner.invoke(main, ["render", "hi", "--padding", value])
        assert result.exit_code == 2

    def test_reads_standard_input(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["render", "--width", "3"], input="ab\n")
        assert result.output == "ab \n"

    def test_dash_reads_standard_input(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["render", "-", "--max-width", "3"], input="hello\n")
        assert result.output == "he…\n"

    def test_plain_text_passes_through(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["render", "plain"])
        assert result.output == "plain\n"


class TestRenderWithStylesheet:
    SHEET = "[styles.warn]\nbold = true\n"

    def test_named_style(self, runner: CliRunner, write_stylesheet: StylesheetWriter) -> None:
        path = write_stylesheet(self.SHEET)
        result = runner.invoke(main, ["render", "hi", "--stylesheet", str(path), "--style", "warn"])
        assert result.exit_code == 0, result.output
        assert result.output == f"\x1b[1mhi{RESET}\n"

    def test_inline_options_extend_named_style(
        self, runner: CliRunner, write_stylesheet: StylesheetWriter
    ) -> None:
        path = write_stylesheet(self.SHEET)
        result = runner.invoke(
            main, ["render", "hi", "--stylesheet", str(path), "--style", "warn", "--width", "4"]
        )
        assert result.output == f"\x1b[1mhi{RESET}  \n"

    def test_stylesheet_terminal_settings(
        self, runner: CliRunner, write_stylesheet: StylesheetWriter
    ) -> None:
        path = write_stylesheet(
            "[terminal]\nbackground = 'light'\ncolor_profile = 'truecolor'\n"
            "[styles.ink]\nforeground = { light = '#000000', dark = '#FFFFFF' }\n"
        )
        result = runner.invoke(main, ["render", "x", "--stylesheet", str(path), "--style", "ink"])
        assert result.output == f"\x1b[38;2;0;0;0mx{RESET}\n"

    def test_background_option_beats_stylesheet(
        self, runner: CliRunner, write_stylesheet: StylesheetWriter
    ) -> None:
        path = write_stylesheet(
            "[terminal]\nbackground = 'light'\ncolor_profile = 'truecolor'\n"
            "[styles.ink]\nforeground = { light = '#000000', dark = '#FFFFFF' }\n"
        )
        result = runner.invoke(
            main, ["render", "x", "--stylesheet", str(path), "--style", "ink", "--background", "dark"]
        )
        assert result.output == f"\x1b[38;2;255;255;255mx{RESET}\n"

    def test_unknown_style(self, runner: CliRunner, write_stylesheet: StylesheetWriter) -> None:
        path = write_stylesheet(self.SHEET)
        result = runner.invoke(main, ["render", "hi", "--stylesheet", str(path), "--style", "nope"])
        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "nope" in result.output

    def test_style_requires_stylesheet(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["render", "hi", "--style", "warn"])
        assert result.exit_code == 2
        assert "--stylesheet" in result.output

    def test_invalid_stylesheet(self, runner: CliRunner, write_stylesheet: StylesheetWriter) -> None:
        path = write_stylesheet("[styles.x]\ncolour = 'red'\n")
        result = runner.invoke(main, ["render", "hi", "--stylesheet", str(path)])
        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "colour" in result.output


class TestStyles:
    def test_lists_styles(self, runner: CliRunner, write_stylesheet: StylesheetWriter) -> None:
        path = write_stylesheet("[styles.warn]\nbold = true\n[styles.box]\nborder = 'rounded'\n")
        result = runner.invoke(main, ["styles", "--stylesheet", str(path)])
        assert result.exit_code == 0, result.output
        assert "warn" in result.output
        assert "box" in result.output
        assert "bold=true" in result.output

    def test_empty_stylesheet_warns(self, runner: CliRunner, write_stylesheet: StylesheetWriter) -> None:
        path = write_stylesheet("[terminal]\nbackground = 'dark'\n")
        result = runner.invoke(main, ["styles", "--stylesheet", str(path)])
        assert result.exit_code == 0
        assert "Warning:" in result.output

    def test_stylesheet_is_required(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["styles"])
        assert result.exit_code == 2


def test_borders_preview(runner: CliRunner) -> None:
    result = runner.invoke(main, ["borders"])
    assert result.exit_code == 0, result.output
    assert "rounded" in result.output
    assert "╭" in result.output
    assert "\x1b[" not in result.output


def test_borders_preview_with_color(runner: CliRunner) -> None:
    result = runner.invoke(main, ["borders", "--border-fg", "red"])
    assert "\x1b[31m" in result.output


class TestMeasure:
    def test_wide_characters(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["measure", "你好"])
        assert result.output == "width=4 height=1\n"

    def test_ignores_escape_sequences(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["measure", f"\x1b[1mbold{RESET}"])
        assert result.output == "width=4 height=1\n"

    def test_per_line(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["measure", "--lines"], input="a\nbcd\n")
        assert result.output == "width=3 height=2\n  line 1: 1\n  line 2: 3\n"


def test_verbose_flag(runner: CliRunner) -> None:
    result = runner.invoke(main, ["--verbose", "measure", "x"])
    assert result.exit_code == 0
    assert result.stdout == "width=1 height=1\n"


def test_debug_logs_stay_off_stdout(runner: CliRunner) -> None:
    result = runner.invoke(main, ["--verbose", "render", "--bold", "x"])
    assert result.exit_code == 0, result.output
    assert result.stdout == f"\x1b[1mx{RESET}\n"
    assert "Rendering with bold=true" in result.stderr


@pytest.mark.parametrize(
    ("style", "expected"),
    [
        (Style(), ""),
        (Style(bold=True, width=4), "bold=true, width=4"),
        (Style(foreground=("#000", "#fff")), "foreground={light=#000, dark=#fff}"),
        (Style(align="center").with_border(ROUNDED, True, False), None),
    ],
)
def test_describe_style(style: Style, expected: str) -> None:
    description = describe_style(style)
    if expected is not None:
        assert description == expected
    else:
        assert "align=center" in description
        assert "border=rounded" in description
        assert "border_right=false" in description
