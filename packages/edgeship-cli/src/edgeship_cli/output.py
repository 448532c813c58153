"""Rich console output utilities for edgeship-cli.

Colored success/error/warning messages, JSON output and key/value
summaries. Honors the NO_COLOR environment variable and --no-color.
"""

from __future__ import annotations

import json
import os
from collections.abc import Iterable
from typing import Any

from rich.console import Console
from rich.table import Table

# Rich respects NO_COLOR on its own; --no-color is applied via set_no_color()
_force_no_color = os.environ.get("NO_COLOR") is not None


def create_console(no_color: bool = False) -> Console:
    """Create a Rich Console with the requested color settings.

    Args:
        no_color: If True, disable colored output. NO_COLOR also disables it.

    Returns:
        Configured Console instance.
    """
    disabled = no_color or _force_no_color
    return Console(force_terminal=False if disabled else None, no_color=disabled)


console = create_console()


def success(message: str, **kwargs: Any) -> None:
    """Print a success message with a green checkmark.

    Example:
        >>> success("Published chat")
        ✓ Published chat
    """
    console.print(f"[green]✓[/green] {message}", **kwargs)


def error(message: str, **kwargs: Any) -> None:
    """Print an error message with a red X.

    Example:
        >>> error("127.0.0.1:8787 is unavailable")
        ✗ 127.0.0.1:8787 is unavailable
    """
    console.print(f"[red]✗[/red] {message}", **kwargs)


def warning(message: str, **kwargs: Any) -> None:
    """Print a warning message with a yellow triangle.

    Example:
        >>> warning("--release is deprecated")
        ⚠ --release is deprecated
    """
    console.print(f"[yellow]⚠[/yellow] {message}", **kwargs)


def info(message: str, **kwargs: Any) -> None:
    """Print an informational message."""
    console.print(message, **kwargs)


def print_json(data: Any, **kwargs: Any) -> None:
    """Print JSON-serializable data with syntax highlighting.

    Args:
        data: Value to encode as JSON.
        **kwargs: Additional arguments passed to console.print_json().
    """
    console.print_json(json.dumps(data), **kwargs)


def print_summary(title: str, rows: Iterable[tuple[str, str]]) -> None:
    """Print a two-column key/value table.

    Args:
        title: Table title.
        rows: (label, value) pairs, printed in order.

    Example:
        >>> print_summary("Dev server", [("Listening on", "127.0.0.1:8787")])
    """
    table = Table(title=title, show_header=False, title_justify="left")
    table.add_column("field", style="bold")
    table.add_column("value", overflow="fold")
    for label, value in rows:
        table.add_row(label, value)
    console.print(table)


def set_no_color(no_color: bool) -> None:
    """Replace the module console, enabling or disabling colors.

    Args:
        no_color: If True, disable colored output.
    """
    global console
    console = create_console(no_color=no_color)
