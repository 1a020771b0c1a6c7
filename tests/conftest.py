from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner

from termstyle.terminal import TerminalContext

_TERMINAL_ENV_VARS = (
    "TERM_BACKGROUND",
    "COLORFGBG",
    "NO_COLOR",
    "COLORTERM",
    "TERM",
    "WT_SESSION",
    "TERMSTYLE_FORCE_TRUECOLOR",
)


@pytest.fixture(autouse=True)
def scrub_terminal_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove terminal signals so every test starts from the dark, no-hint default."""

    for name in _TERMINAL_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def dark() -> TerminalContext:
    """Explicit dark-background truecolor context."""

    return TerminalContext.dark()


@pytest.fixture
def light() -> TerminalContext:
    """Explicit light-background truecolor context."""

    return TerminalContext.light()


@pytest.fixture
def runner() -> CliRunner:
    """Provide a Click runner configured for CLI smoke tests."""

    return CliRunner()


@pytest.fixture
def write_stylesheet(tmp_path: Path) -> Callable[[str], Path]:
    """Return a helper that writes TOML text to a stylesheet file and returns its path."""

    def _write(text: str, name: str = "styles.toml") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
