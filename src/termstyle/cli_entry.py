"""Click CLI wiring and entry points for termstyle."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, NoReturn, Optional, Tuple

import click
from rich import print
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from .borders import BORDERS, Border
from .color import AdaptiveColor, Color, ColorError, HexColor, IndexedColor, NamedColor, parse_color
from .config_loader import ConfigError, load_stylesheet
from .datatypes import BackgroundMode, ProfileMode, Stylesheet
from .layout import join_horizontal
from .measure import size, width_per_line
from .position import TOP, Position
from .style import Style

logger = logging.getLogger(__name__)


def _fail(message: str) -> NoReturn:
    """Print a rich-formatted error line and exit with status 1."""

    print(f"[red]Error:[/red] {escape(message)}")
    raise click.exceptions.Exit(1)


def _parse_box_values(
    ctx: click.Context, param: click.Parameter, value: Optional[str]
) -> Optional[Tuple[int, ...]]:
    """Parse ``"1"``, ``"1,2"``, ``"1,2,3"`` or ``"1,2,3,4"`` into a tuple of ints."""

    if value is None:
        return None
    parts = [part.strip() for part in value.replace(" ", ",").split(",") if part.strip()]
    if not 1 <= len(parts) <= 4:
        raise click.BadParameter("expected 1 to 4 comma-separated integers", ctx=ctx, param=param)
    try:
        return tuple(int(part) for part in parts)
    except ValueError as exc:
        raise click.BadParameter(f"not an integer list: {value!r}", ctx=ctx, param=param) from exc


def _parse_color_option(
    ctx: click.Context, param: click.Parameter, value: Optional[str]
) -> Optional[Color]:
    if value is None:
        return None
    try:
        return parse_color(value)
    except ColorError as exc:
        raise click.BadParameter(str(exc), ctx=ctx, param=param) from exc


def _read_text(text: Optional[str]) -> str:
    """Return ``text``, or standard input with one trailing newline removed."""

    if text is not None and text != "-":
        return text
    data = click.get_text_stream("stdin").read()
    if data.endswith("\n"):
        data = data[:-1]
    return data


def _load_stylesheet(path: Optional[Path]) -> Stylesheet:
    if path is None:
        return Stylesheet()
    try:
        return load_stylesheet(path)
    except ConfigError as exc:
        _fail(str(exc))


def _describe_color(color: Color) -> str:
    if isinstance(color, AdaptiveColor):
        return f"{{light={_describe_color(color.light)}, dark={_describe_color(color.dark)}}}"
    if isinstance(color, HexColor):
        return color.value
    if isinstance(color, NamedColor):
        return color.name
    if isinstance(color, IndexedColor):
        return str(color.value)
    return str(color)


def _describe_border(border: Border) -> str:
    for name, preset in BORDERS.items():
        if preset == border:
            return name
    return "custom"


def describe_style(style: Style) -> str:
    """Summarize the fields a style sets, e.g. ``bold=true, padding_left=1``."""

    parts = []
    for name, value in style.set_fields().items():
        if isinstance(value, bool):
            text = "true" if value else "false"
        elif isinstance(value, Border):
            text = _describe_border(value)
        elif isinstance(value, Position):
            text = value.value
        elif isinstance(value, (HexColor, NamedColor, IndexedColor, AdaptiveColor)):
            text = _describe_color(value)
        else:
            text = str(value)
        parts.append(f"{name}={text}")
    return ", ".join(parts)


@click.group()
@click.option("--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """Preview terminal styles, borders and layouts."""

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False, show_time=False)],
        force=True,
    )
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


@main.command("render")
@click.argument("text", required=False)
@click.option(
    "--stylesheet",
    "stylesheet_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="TOML stylesheet to take named styles and terminal settings from.",
)
@click.option("--style", "style_name", default=None, help="Named style from the stylesheet.")
@click.option("--bold", is_flag=True, help="Bold text.")
@click.option("--italic", is_flag=True, help="Italic text.")
@click.option("--underline", is_flag=True, help="Underlined text.")
@click.option("--strikethrough", is_flag=True, help="Struck-through text.")
@click.option("--faint", is_flag=True, help="Faint (dim) text.")
@click.option("--fg", "foreground", callback=_parse_color_option, help="Foreground color (#RGB, #RRGGBB, name or 0-255).")
@click.option("--bg", "background_color", callback=_parse_color_option, help="Background color.")
@click.option("--border-fg", "border_foreground", callback=_parse_color_option, help="Border foreground color.")
@click.option("--border-bg", "border_background", callback=_parse_color_option, help="Border background color.")
@click.option("--width", type=click.IntRange(min=0), default=None, help="Exact content width in cells.")
@click.option("--height", type=click.IntRange(min=0), default=None, help="Minimum content height in lines.")
@click.option("--max-width", type=click.IntRange(min=0), default=None, help="Maximum content width in cells.")
@click.option("--max-height", type=click.IntRange(min=0), default=None, help="Maximum content height in lines.")
@click.option("--align", type=click.Choice(["left", "center", "right"], case_sensitive=False), default=None)
@click.option(
    "--valign",
    type=click.Choice(["top", "center", "middle", "bottom"], case_sensitive=False),
    default=None,
)
@click.option("--padding", callback=_parse_box_values, default=None, help="Padding shorthand, e.g. 1 or 0,2.")
@click.option("--margin", callback=_parse_box_values, default=None, help="Margin shorthand, e.g. 1 or 1,2,1,2.")
@click.option("--border", "border_name", type=click.Choice(sorted(BORDERS), case_sensitive=False), default=None)
@click.option(
    "--background",
    type=click.Choice([mode.value for mode in BackgroundMode], case_sensitive=False),
    default=BackgroundMode.AUTO.value,
    show_default=True,
    help="Terminal background used for adaptive colors.",
)
@click.option(
    "--color-profile",
    type=click.Choice([mode.value for mode in ProfileMode], case_sensitive=False),
    default=ProfileMode.AUTO.value,
    show_default=True,
)
@click.option("--no-color", is_flag=True, help="Disable ANSI colour output.")
def render_command(
    text: Optional[str],
    stylesheet_path: Optional[Path],
    style_name: Optional[str],
    *,
    bold: bool,
    italic: bool,
    underline: bool,
    strikethrough: bool,
    faint: bool,
    foreground: Optional[Color],
    background_color: Optional[Color],
    border_foreground: Optional[Color],
    border_background: Optional[Color],
    width: Optional[int],
    height: Optional[int],
    max_width: Optional[int],
    max_height: Optional[int],
    align: Optional[str],
    valign: Optional[str],
    padding: Optional[Tuple[int, ...]],
    margin: Optional[Tuple[int, ...]],
    border_name: Optional[str],
    background: str,
    color_profile: str,
    no_color: bool,
) -> None:
    """Render TEXT (or standard input) with a style."""

    if style_name is not None and stylesheet_path is None:
        raise click.UsageError("--style requires --stylesheet")
    stylesheet = _load_stylesheet(stylesheet_path)
    style = Style()
    if style_name is not None:
        try:
            style = stylesheet.get(style_name)
        except KeyError as exc:
            _fail(str(exc.args[0]))

    inline: Dict[str, Any] = {
        "bold": bold or None,
        "italic": italic or None,
        "underline": underline or None,
        "strikethrough": strikethrough or None,
        "faint": faint or None,
        "foreground": foreground,
        "background": background_color,
        "border_foreground": border_foreground,
        "border_background": border_background,
        "width": width,
        "height": height,
        "max_width": max_width,
        "max_height": max_height,
        "align": align,
        "align_vertical": valign,
    }
    overrides = Style(**{key: value for key, value in inline.items() if value is not None})
    if padding is not None:
        overrides = overrides.with_padding(*padding)
    if margin is not None:
        overrides = overrides.with_margin(*margin)
    if border_name is not None:
        overrides = overrides.with_border(BORDERS[border_name.lower()])
    style = style.merge(overrides)

    context = stylesheet.terminal_context(
        background=BackgroundMode(background.lower()),
        color_profile=ProfileMode(color_profile.lower()),
        no_color=no_color,
    )
    logger.debug("Rendering with %s", describe_style(style) or "an empty style")
    click.echo(style.render(_read_text(text), context), color=True)


@main.command("styles")
@click.option(
    "--stylesheet",
    "stylesheet_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="TOML stylesheet to list.",
)
def styles_command(stylesheet_path: Path) -> None:
    """List the styles a stylesheet defines."""

    stylesheet = _load_stylesheet(stylesheet_path)
    if not stylesheet.styles:
        print(f"[yellow]Warning:[/yellow] {escape(str(stylesheet_path))} defines no styles")
        return
    context = stylesheet.terminal_context()
    table = Table(title=str(stylesheet_path), show_header=True)
    table.add_column("Style", style="bold")
    table.add_column("Properties")
    table.add_column("Preview")
    for name, style in sorted(stylesheet.styles.items()):
        table.add_row(name, describe_style(style) or "-", Text.from_ansi(style.render(name, context)))
    Console().print(table)


@main.command("borders")
@click.option("--border-fg", "border_foreground", callback=_parse_color_option, help="Border foreground color.")
@click.option("--no-color", is_flag=True, help="Disable ANSI colour output.")
def borders_command(border_foreground: Optional[Color], no_color: bool) -> None:
    """Preview every border preset side by side."""

    context = Stylesheet().terminal_context(no_color=no_color)
    blocks = []
    for name, border in BORDERS.items():
        style = Style(border_foreground=border_foreground).with_border(border).with_padding(0, 1)
        if blocks:
            blocks.append(" ")
        blocks.append(style.render(name, context))
    click.echo(join_horizontal(TOP, *blocks), color=True)


@main.command("measure")
@click.argument("text", required=False)
@click.option("--lines", "per_line", is_flag=True, help="Also print the width of every line.")
def measure_command(text: Optional[str], per_line: bool) -> None:
    """Print the display width and height of TEXT (or standard input)."""

    payload = _read_text(text)
    block_width, block_height = size(payload)
    click.echo(f"width={block_width} height={block_height}")
    if per_line:
        for index, line_width in enumerate(width_per_line(payload), start=1):
            click.echo(f"  line {index}: {line_width}")


if __name__ == "__main__":  # pragma: no cover
    main()
