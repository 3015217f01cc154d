"""Custom exception hierarchy for morph-core.

This module defines the exception classes raised by the build pipeline:
- MorphError: Base exception for all morph-related errors
- ConfigurationError: Invalid build configuration or toolchain
- UnsupportedTargetError: Unknown target identifier
- ParseError: A component source file could not be parsed
- GenerationError / PostProcessError: One file's content could not be produced
- FilesystemError: Reading, writing or removing a file failed
- BuildError: Aggregate of every unit failure in a build

User-facing messages name the failing path and target so the offending
source file can be located. The original exception is always chained
(``raise ... from err``) and technical details are logged via structlog.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

logger = structlog.get_logger(__name__)


class MorphError(Exception):
    """Base exception for morph.

    All morph exceptions inherit from this class. User-facing messages
    are safe to display; technical details are logged internally.

    Args:
        user_message: Message to display to the user.
        internal_details: Optional technical details for logging. This is
            logged internally but never part of ``str(error)``.

    Example:
        >>> raise MorphError(
        ...     "Build failed",
        ...     internal_details="generator raised KeyError('props')",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        super().__init__(user_message)
        self.user_message = user_message

        if internal_details:
            logger.error(
                "morph_error",
                error_type=self.__class__.__name__,
                user_message=user_message,
                internal_details=internal_details,
            )


class ConfigurationError(MorphError):
    """Raised when build configuration or toolchain setup is invalid.

    Use this exception when:
    - morph.config.yaml cannot be parsed or fails validation
    - A toolchain or parser import path cannot be loaded
    - No generator is registered for a configured target
    - A generator factory rejects the target's options

    Attributes:
        file_path: Path to the configuration file (if known).
        field_path: Dot-separated path to the invalid field (e.g., "options.react").

    Example:
        >>> raise ConfigurationError(
        ...     "Invalid generator options",
        ...     field_path="options.vue2",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        file_path: str | None = None,
        field_path: str | None = None,
        internal_details: str | None = None,
    ) -> None:
        context_parts: list[str] = []
        if file_path:
            context_parts.append(f"in {file_path}")
        if field_path:
            context_parts.append(f"field '{field_path}'")

        if context_parts:
            full_message = f"{user_message} ({', '.join(context_parts)})"
        else:
            full_message = user_message

        super().__init__(full_message, internal_details=internal_details)

        self.file_path = file_path
        self.field_path = field_path


class UnsupportedTargetError(MorphError):
    """Raised when a target identifier is not one of the supported targets.

    Attributes:
        target: The identifier that was requested.
        supported: Identifiers that would have been accepted.

    Example:
        >>> raise UnsupportedTargetError("flutter", supported=["react", "vue3"])
        # User sees: "Unsupported target: 'flutter'. Supported: react, vue3"
    """

    def __init__(self, target: str, *, supported: Sequence[str] = ()) -> None:
        message = f"Unsupported target: '{target}'"
        if supported:
            message = f"{message}. Supported: {', '.join(supported)}"
        super().__init__(message)
        self.target = target
        self.supported = list(supported)


class ParseError(MorphError):
    """Raised when a component source file cannot be parsed.

    Fatal: the build aborts before any output is written.

    Attributes:
        path: Source path (relative to the source root) that failed.
    """

    def __init__(self, path: str, *, internal_details: str | None = None) -> None:
        super().__init__(f"Could not parse file: {path}", internal_details=internal_details)
        self.path = path


class UnitError(MorphError):
    """Base class for failures tied to one (target, file) unit of work.

    Attributes:
        path: Source path of the unit.
        target: Target identifier of the unit.
    """

    action = "process"

    def __init__(
        self,
        path: str,
        target: str,
        *,
        cause: BaseException | None = None,
        internal_details: str | None = None,
    ) -> None:
        message = f"Failed to {self.action} {path} for target '{target}'"
        if cause is not None:
            message = f"{message}: {type(cause).__name__}: {cause}"
        super().__init__(message, internal_details=internal_details)
        self.path = path
        self.target = target


class GenerationError(UnitError):
    """Raised when a generator or context regeneration fails for one file."""

    action = "generate"


class PostProcessError(UnitError):
    """Raised when post-processing (transpile, import rewrite) fails."""

    action = "post-process"


class FilesystemError(MorphError):
    """Raised when a filesystem operation fails.

    Attributes:
        path: Path the operation was applied to.
        operation: Operation that failed (read, write, remove).
    """

    def __init__(
        self,
        path: str,
        operation: str,
        *,
        cause: BaseException | None = None,
    ) -> None:
        message = f"Cannot {operation} {path}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.path = path
        self.operation = operation


class BuildError(MorphError):
    """Raised when one or more units of a build failed.

    Every dispatched unit is allowed to settle before this is raised, so
    ``failures`` lists all of them. The message leads with the first one.

    Attributes:
        failures: Exceptions raised by the failing units, in dispatch order.
    """

    def __init__(self, failures: Sequence[BaseException]) -> None:
        if not failures:
            raise ValueError("BuildError requires at least one failure")

        first = failures[0]
        message = f"Build failed: {first}"
        if len(failures) > 1:
            message = f"{message} (and {len(failures) - 1} more)"

        super().__init__(message)
        self.failures = list(failures)

    @property
    def first(self) -> BaseException:
        """Return the first failure."""
        return self.failures[0]
