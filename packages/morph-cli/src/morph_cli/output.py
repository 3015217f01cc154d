"""Rich console output helpers for morph-cli.

Colored success/error/warning lines, tables and JSON, honoring both the
NO_COLOR environment variable and the global ``--no-color`` flag.
"""

from __future__ import annotations

import json
import os
from typing import Any

from rich.console import Console
from rich.table import Table

_env_no_color = os.environ.get("NO_COLOR") is not None


def create_console(no_color: bool = False) -> Console:
    """Create a Console with the requested color settings.

    Args:
        no_color: Disable colored output. NO_COLOR in the environment also
            disables it.
    """
    disabled = no_color or _env_no_color
    return Console(force_terminal=False if disabled else None, no_color=disabled)


console = create_console()


def success(message: str, **kwargs: Any) -> None:
    """Print a success line with a green checkmark.

    Example:
        >>> success("Built 3 targets")
        ✓ Built 3 targets
    """
    console.print(f"[green]✓[/green] {message}", **kwargs)


def error(message: str, **kwargs: Any) -> None:
    """Print an error line with a red cross.

    Example:
        >>> error("Unsupported target: 'flutter'")
        ✗ Unsupported target: 'flutter'
    """
    console.print(f"[red]✗[/red] {message}", **kwargs)


def warning(message: str, **kwargs: Any) -> None:
    """Print a warning line with a yellow triangle."""
    console.print(f"[yellow]⚠[/yellow] {message}", **kwargs)


def info(message: str, **kwargs: Any) -> None:
    """Print a plain informational line."""
    console.print(message, **kwargs)


def print_table(table: Table, **kwargs: Any) -> None:
    """Print a rich Table."""
    console.print(table, **kwargs)


def print_json(data: Any, **kwargs: Any) -> None:
    """Print JSON data with syntax highlighting.

    Example:
        >>> print_json({"targets": ["react"]})
        {
          "targets": [
            "react"
          ]
        }
    """
    console.print_json(json.dumps(data), **kwargs)


def set_no_color(no_color: bool) -> None:
    """Replace the module console so later output respects ``no_color``."""
    global console
    console = create_console(no_color=no_color)
