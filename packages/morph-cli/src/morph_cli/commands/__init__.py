"""CLI command modules.

Each module defines one subcommand; main.LAZY_COMMANDS imports them on demand.
"""

from __future__ import annotations

__all__: list[str] = []
