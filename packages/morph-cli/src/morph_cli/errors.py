"""CLI error handling for morph-cli.

Wraps morph-core exceptions into CLIError instances carrying the exit code
the command should terminate with.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import click
from rich.markup import escape

from morph_cli.output import error

if TYPE_CHECKING:
    from morph_core.errors import BuildError, MorphError


# Exit codes following sysexits.h convention
EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1  # Build failure, invalid configuration, unknown target
EXIT_SYSTEM_ERROR = 2  # Missing config file, permissions


class CLIError(click.ClickException):
    """CLI-specific exception with exit code support.

    Attributes:
        message: User-facing error message.
        exit_code: Exit code for the CLI (default: 1).
    """

    def __init__(self, message: str, exit_code: int = EXIT_USER_ERROR) -> None:
        super().__init__(message)
        self.exit_code = exit_code

    def show(self, file: object = None) -> None:
        """Display the error message using Rich formatting.

        Args:
            file: Output file (unused, for Click compatibility).
        """
        error(escape(self.format_message()))


def format_build_error(err: BuildError) -> str:
    """Format an aggregated build failure, one line per failed unit.

    Example:
        >>> format_build_error(err)
        "Build failed: 2 errors\\n  - Failed to generate button.lite.tsx ..."
    """
    count = len(err.failures)
    lines = [f"Build failed: {count} error{'s' if count != 1 else ''}"]
    lines.extend(f"  - {failure}" for failure in err.failures)
    return "\n".join(lines)


def handle_morph_error(err: MorphError) -> NoReturn:
    """Convert a morph-core exception into a CLIError.

    Missing config files and filesystem failures map to EXIT_SYSTEM_ERROR,
    every other morph error maps to EXIT_USER_ERROR.

    Raises:
        CLIError: Always.
    """
    from morph_core.config_loader import ConfigNotFoundError
    from morph_core.errors import BuildError, FilesystemError

    if isinstance(err, ConfigNotFoundError):
        handle_config_not_found(str(err))
    if isinstance(err, FilesystemError):
        raise CLIError(str(err), exit_code=EXIT_SYSTEM_ERROR) from err
    if isinstance(err, BuildError):
        raise CLIError(format_build_error(err)) from err
    raise CLIError(str(err)) from err


def handle_config_not_found(message: str) -> NoReturn:
    """Handle a missing config file with a hint.

    Raises:
        CLIError: Always, with EXIT_SYSTEM_ERROR.
    """
    raise CLIError(
        f"{message}\n\n"
        "Run 'morph init' to create a config file, or use --config to specify a path.",
        exit_code=EXIT_SYSTEM_ERROR,
    )


def handle_permission_error(path: str, operation: str = "access") -> NoReturn:
    """Handle permission errors.

    Raises:
        CLIError: Always, with EXIT_SYSTEM_ERROR.
    """
    raise CLIError(
        f"Permission denied: Cannot {operation} {path}",
        exit_code=EXIT_SYSTEM_ERROR,
    )
