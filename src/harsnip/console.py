"""Centralized terminal output for harsnip.

Key principle: stderr for status/progress, stdout for data.
"""

from __future__ import annotations

from rich.console import Console

# stderr console for status messages
err_console = Console(stderr=True)

# stdout console for snippets; no markup/highlighting so code is printed verbatim
out_console = Console(highlight=False, soft_wrap=True)


def success(message: str, *, console: Console | None = None) -> None:
    """Print a success message (green checkmark) to stderr."""
    c = console or err_console
    c.print(f"[green]  ✓ {message}[/green]")


def error(message: str, *, console: Console | None = None) -> None:
    """Print an error message (red X) to stderr."""
    c = console or err_console
    c.print(f"[red]  ✗ {message}[/red]")


def warn(message: str, *, console: Console | None = None) -> None:
    """Print a warning message (yellow) to stderr."""
    c = console or err_console
    c.print(f"[yellow]  ⚠ {message}[/yellow]")


def snippet(code: str, *, console: Console | None = None) -> None:
    """Print a generated snippet to stdout exactly as rendered."""
    c = console or out_console
    c.print(code, markup=False, highlight=False)
