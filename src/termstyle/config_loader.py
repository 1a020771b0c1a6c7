"""Stylesheet loader that parses and validates user-provided TOML."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import fields
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .borders import BORDERS, border_by_name
from .color import ColorError, parse_color
from .datatypes import BackgroundMode, ProfileMode, Stylesheet, TerminalConfig
from .position import Position
from .style import Style

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when a stylesheet is malformed or fails validation."""


_BOOL_KEYS = frozenset(
    {
        "bold",
        "italic",
        "underline",
        "strikethrough",
        "faint",
        "blink",
        "reverse",
        "border_top",
        "border_right",
        "border_bottom",
        "border_left",
    }
)
_INT_KEYS = frozenset(
    {
        "width",
        "height",
        "max_width",
        "max_height",
        "padding_top",
        "padding_right",
        "padding_bottom",
        "padding_left",
        "margin_top",
        "margin_right",
        "margin_bottom",
        "margin_left",
    }
)
_COLOR_KEYS = frozenset({"foreground", "background", "border_foreground", "border_background"})
_POSITION_KEYS = frozenset({"align", "align_vertical"})
_SHORTHAND_KEYS = frozenset({"padding", "margin"})
_SPECIAL_KEYS = frozenset({"border", "border_sides", "extends"})
_KNOWN_KEYS = _BOOL_KEYS | _INT_KEYS | _COLOR_KEYS | _POSITION_KEYS | _SHORTHAND_KEYS | _SPECIAL_KEYS


def _coerce_bool(value: Any, dotted_key: str) -> bool:
    """Return a bool, coercing simple 0/1 representations when necessary."""

    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"0", "1"}:
            return normalized == "1"
        if normalized in {"true", "false"}:
            return normalized == "true"
    raise ConfigError(f"{dotted_key} must be a boolean (use true/false).")


def _coerce_enum(value: Any, dotted_key: str, enum_type: type[Enum]) -> Enum:
    """Return an enum member, coercing string values case-insensitively."""

    if isinstance(value, enum_type):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        for member in enum_type:
            if normalized == str(member.value).lower():
                return member
    raise ConfigError(
        f"{dotted_key} must be one of: {', '.join(str(member.value) for member in enum_type)}"
    )


def _coerce_size(value: Any, dotted_key: str) -> int:
    """Return a non-negative integer dimension."""

    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{dotted_key} must be an integer")
    if value < 0:
        raise ConfigError(f"{dotted_key} must be >= 0")
    return value


def _coerce_list(value: Any, dotted_key: str) -> List[Any]:
    """Accept a scalar or a list of 1 to 4 entries (CSS shorthand)."""

    items = value if isinstance(value, list) else [value]
    if not 1 <= len(items) <= 4:
        raise ConfigError(f"{dotted_key} must have between 1 and 4 values")
    return items


def _sanitize_terminal(raw: Any) -> TerminalConfig:
    """
    Coerce the ``[terminal]`` table into a :class:`TerminalConfig`.

    Raises:
        ConfigError: If the section is not a table or contains invalid keys or values.
    """
    if not isinstance(raw, dict):
        raise ConfigError("[terminal] must be a table")
    cleaned: Dict[str, Any] = {}
    enum_fields = {"background": BackgroundMode, "color_profile": ProfileMode}
    bool_fields = {item.name for item in fields(TerminalConfig) if item.type is bool}
    for key, value in raw.items():
        if key in bool_fields:
            cleaned[key] = _coerce_bool(value, f"terminal.{key}")
        elif key in enum_fields:
            cleaned[key] = _coerce_enum(value, f"terminal.{key}", enum_fields[key])
        else:
            cleaned[key] = value
    try:
        return TerminalConfig(**cleaned)
    except TypeError as exc:
        raise ConfigError(f"Invalid keys in [terminal]: {exc}") from exc


def _sanitize_style(raw: Any, name: str) -> Tuple[Dict[str, Any], Optional[str]]:
    """
    Validate one ``[styles.NAME]`` table.

    Parameters:
        raw (Any): Raw TOML table.
        name (str): Style name, used when reporting validation errors.

    Returns:
        tuple[dict[str, Any], str | None]: Keyword arguments for :class:`Style` holding only
        the keys the table sets, and the name of the parent style when ``extends`` is given.

    Raises:
        ConfigError: If the table contains unknown keys or invalid values.
    """
    section = f"styles.{name}"
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    unknown = sorted(set(raw) - _KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"Invalid keys in [{section}]: {', '.join(unknown)}")

    cleaned: Dict[str, Any] = {}
    # Shorthands first so per-side keys in the same table override them.
    for prefix in ("padding", "margin"):
        if prefix in raw:
            dotted = f"{section}.{prefix}"
            values = [_coerce_size(item, dotted) for item in _coerce_list(raw[prefix], dotted)]
            shorthand = getattr(Style(), f"with_{prefix}")(*values)
            for side in ("top", "right", "bottom", "left"):
                cleaned[f"{prefix}_{side}"] = getattr(shorthand, f"{prefix}_{side}")

    if "border" in raw:
        border = border_by_name(raw["border"]) if isinstance(raw["border"], str) else None
        if border is None:
            raise ConfigError(
                f"{section}.border must be one of: {', '.join(BORDERS)}"
            )
        cleaned["border"] = border
    if "border_sides" in raw:
        if "border" not in raw:
            raise ConfigError(f"{section}.border_sides requires {section}.border")
        dotted = f"{section}.border_sides"
        sides = [_coerce_bool(item, dotted) for item in _coerce_list(raw["border_sides"], dotted)]
        sided = Style().with_border(cleaned["border"], *sides)
        for side in ("top", "right", "bottom", "left"):
            cleaned[f"border_{side}"] = getattr(sided, f"border_{side}")

    for key, value in raw.items():
        dotted = f"{section}.{key}"
        if key in _BOOL_KEYS:
            cleaned[key] = _coerce_bool(value, dotted)
        elif key in _INT_KEYS:
            cleaned[key] = _coerce_size(value, dotted)
        elif key in _COLOR_KEYS:
            try:
                cleaned[key] = parse_color(value)
            except ColorError as exc:
                raise ConfigError(f"{dotted}: {exc}") from exc
        elif key in _POSITION_KEYS:
            try:
                cleaned[key] = Position.coerce(value)
            except ValueError as exc:
                raise ConfigError(f"{dotted}: {exc}") from exc

    parent = raw.get("extends")
    if parent is not None and not isinstance(parent, str):
        raise ConfigError(f"{section}.extends must be a style name")
    return cleaned, parent


def _resolve_styles(raw_styles: Dict[str, Tuple[Dict[str, Any], Optional[str]]]) -> Dict[str, Style]:
    """Flatten ``extends`` chains, parent first, rejecting unknown parents and cycles."""

    resolved: Dict[str, Style] = {}

    def resolve(name: str, chain: List[str]) -> Style:
        if name in resolved:
            return resolved[name]
        if name in chain:
            cycle = " -> ".join(chain[chain.index(name):] + [name])
            raise ConfigError(f"Style inheritance cycle: {cycle}")
        values, parent = raw_styles[name]
        base = Style()
        if parent is not None:
            if parent not in raw_styles:
                raise ConfigError(f"styles.{name}.extends refers to unknown style {parent!r}")
            base = resolve(parent, chain + [name])
        style = base.merge(Style(**values))
        resolved[name] = style
        return style

    for style_name in raw_styles:
        resolve(style_name, [])
    return resolved


def parse_stylesheet(raw: Dict[str, Any], source: Optional[Path] = None) -> Stylesheet:
    """Validate an already-decoded TOML document and build a :class:`Stylesheet`."""

    terminal = _sanitize_terminal(raw.get("terminal", {}))
    styles_section = raw.get("styles", {})
    if not isinstance(styles_section, dict):
        raise ConfigError("[styles] must be a table")
    raw_styles = {
        str(name): _sanitize_style(table, str(name)) for name, table in styles_section.items()
    }
    styles = _resolve_styles(raw_styles)
    logger.debug("Loaded %d style(s) from %s", len(styles), source or "<memory>")
    return Stylesheet(terminal=terminal, styles=styles, source=source)


def loads_stylesheet(text: str, source: Optional[Path] = None) -> Stylesheet:
    """Parse stylesheet TOML from a string."""

    try:
        raw = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Failed to parse TOML: {exc}") from exc
    return parse_stylesheet(raw, source)


def load_stylesheet(path: str | Path) -> Stylesheet:
    """
    Load and validate a stylesheet from a TOML file.

    Reads the file at ``path`` as UTF-8 TOML (a BOM is accepted), validates the
    ``[terminal]`` table and every ``[styles.NAME]`` table, resolves ``extends`` chains and
    returns ready-to-render styles.

    Returns:
        Stylesheet: The validated stylesheet.

    Raises:
        ConfigError: If the file is not UTF-8, TOML parsing fails, or any validation rule is
        violated (unknown keys, bad colors, unknown border or position names, inheritance
        cycles).
    """
    stylesheet_path = Path(path)
    with open(stylesheet_path, "rb") as handle:
        raw_bytes = handle.read()
    if raw_bytes.startswith(b"\xef\xbb\xbf"):
        raw_bytes = raw_bytes[3:]
    try:
        text = raw_bytes.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ConfigError("Stylesheet must be UTF-8 encoded") from exc
    return loads_stylesheet(text, stylesheet_path)


__all__ = ["ConfigError", "load_stylesheet", "loads_stylesheet", "parse_stylesheet"]
