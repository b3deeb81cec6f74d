"""Rich Console factory and theme for tzctl output.

Consoles render into a StringIO buffer so renderers keep a
``render_result() -> str`` contract. In non-TTY environments (tests,
pipes) Rich disables color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

TZ_THEME = Theme(
    {
        "tz.ok": "bold green",
        "tz.error": "bold red",
        "tz.warning": "bold yellow",
        "tz.op": "bold cyan",
        "tz.key": "dim",
        "tz.when": "bold",
        "tz.offset": "magenta",
        "tz.state.standard": "blue",
        "tz.state.daylight": "yellow",
        "tz.state.unknown": "dim",
    }
)

_STATE_STYLES: dict[str, str] = {
    "standard": "tz.state.standard",
    "daylight": "tz.state.daylight",
    "unknown": "tz.state.unknown",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=TZ_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_state(state: str) -> str:
    """Return the Rich style name for an observance state."""
    return _STATE_STYLES.get(state, "")
