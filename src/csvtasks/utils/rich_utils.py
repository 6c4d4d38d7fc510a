"""Rich console helpers for the command line."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme
from rich.traceback import install as rich_traceback_install

_console: Console | None = None

CSVTASKS_THEME = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "green",
        "muted": "grey62",
    }
)


def get_console() -> Console:
    """Return the shared console, creating it on first use."""
    global _console
    if _console is None:
        _console = Console(theme=CSVTASKS_THEME, highlight=False, soft_wrap=False)
    return _console


def make_table(title: str, *columns: str) -> Table:
    """Create a result table with the given column headings."""
    table = Table(title=title, title_justify="left", show_lines=False)
    for column in columns:
        table.add_column(column, overflow="fold")
    return table


def format_row(cells: list[str], width: int = 60) -> str:
    """Render CSV cells compactly for display, with markup escaped."""
    text = ", ".join(cells)
    if len(text) > width:
        text = text[: width - 1] + "…"
    return escape(text)


def plain(value: object) -> str:
    """Escape a value taken from input or the API for use in console markup."""
    return escape(str(value))


def install_rich_tracebacks() -> None:
    """Enable rich tracebacks globally for nicer error output."""
    rich_traceback_install(show_locals=False, word_wrap=True, suppress=["click"])
