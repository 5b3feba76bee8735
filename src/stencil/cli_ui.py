"""
Rich UI components for the stencil CLI.

Status lines, the end-of-run summary, and the interactive console that asks
before template files replace existing ones.
"""

from __future__ import annotations

from rich.console import Console
from rich.style import Style
from rich.table import Table
from rich.text import Text

from stencil.core.init_impl import InitResult

console = Console()

STYLES = {
    "success": Style(color="green", bold=True),
    "error": Style(color="red", bold=True),
    "warning": Style(color="yellow"),
    "info": Style(color="cyan"),
    "muted": Style(color="bright_black"),
}

_SYMBOLS = {
    "success": "✓",
    "error": "✗",
    "warning": "⚠",
    "info": "ℹ",
}


def _status(kind: str, message: str) -> None:
    console.print(Text(f"{_SYMBOLS[kind]} {message}", style=STYLES[kind]))


def print_success(message: str) -> None:
    _status("success", message)


def print_error(message: str) -> None:
    _status("error", message)


def print_warning(message: str) -> None:
    _status("warning", message)


def print_info(message: str) -> None:
    _status("info", message)


def print_summary(result: InitResult) -> None:
    """Print what an initialization run changed, one row per step."""
    table = Table(show_header=False, box=None, padding=(0, 2, 0, 0))
    table.add_column(style=STYLES["muted"])
    table.add_column()

    if result.copied_files:
        table.add_row("copied", f"{len(result.copied_files)} file(s)")
    if result.duplicates:
        table.add_row("overwritten", Text(", ".join(result.duplicates), style=STYLES["warning"]))
    if result.executable_files:
        table.add_row("executable", ", ".join(result.executable_files))
    table.add_row("stencil.toml", "created" if result.manifest_created else "kept")
    table.add_row(".gitignore", "updated" if result.ignore_file_updated else "unchanged")
    if result.repository_created:
        table.add_row("git", "repository initialized")

    console.print(table)


def confirm(message: str, default: bool = False) -> bool:
    """Ask a yes/no question; EOF or Ctrl-C counts as no."""
    suffix = " [Y/n] " if default else " [y/N] "
    try:
        response = console.input(Text(message + suffix, style=STYLES["info"])).strip().lower()
    except (KeyboardInterrupt, EOFError):
        console.print()
        return False

    if not response:
        return default
    return response in ("y", "yes")


class RichConsole:
    """Console used by ProjectInitializer in the terminal."""

    def message(self, text: str) -> None:
        console.print(Text(text, style=STYLES["warning"]))

    def confirm(self, message: str, default: bool = False) -> bool:
        return confirm(message, default=default)
