"""Build configuration resolver for morph.

This module handles locating and loading morph.config.yaml:
- ConfigResolver: Load the config from an explicit path or discovery
- Environment variable override (MORPH_CONFIG)
- Config file discovery in standard locations
- Conversion of YAML and schema failures into ConfigurationError
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from morph_core.errors import ConfigurationError
from morph_core.schemas import BuildConfig

logger = logging.getLogger(__name__)

# Environment variable pointing at an explicit config file
CONFIG_ENV_VAR = "MORPH_CONFIG"

# Config file names, in lookup order
CONFIG_FILE_NAMES = ("morph.config.yaml", "morph.config.yml")

# Standard locations to search for the config file
CONFIG_SEARCH_PATHS = (
    Path("."),
    Path(".morph"),
)


class ConfigNotFoundError(ConfigurationError):
    """Raised when no config file can be found in any search path."""

    pass


class ConfigResolver:
    """Resolve the build configuration from the environment and files.

    Attributes:
        search_paths: Ordered directories searched for the config file.

    Example:
        >>> resolver = ConfigResolver()
        >>> config = resolver.load()

        >>> # Load from explicit path, overriding some fields
        >>> config = resolver.load(path=Path("web/morph.config.yaml"), targets=["react"])
    """

    def __init__(self, search_paths: tuple[Path, ...] | None = None) -> None:
        self.search_paths = search_paths or CONFIG_SEARCH_PATHS

    def find_config_file(self) -> Path:
        """Find the config file.

        Searches ``$MORPH_CONFIG`` first, then every name in
        CONFIG_FILE_NAMES in every search path.

        Raises:
            ConfigNotFoundError: If no config file is found.
        """
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            path = Path(env_path)
            if path.is_file():
                logger.debug("Using config from %s=%s", CONFIG_ENV_VAR, path)
                return path
            raise ConfigNotFoundError(
                f"Config file not found: {env_path}",
                field_path=CONFIG_ENV_VAR,
            )

        for base_path in self.search_paths:
            for name in CONFIG_FILE_NAMES:
                candidate = base_path / name
                if candidate.is_file():
                    logger.debug("Found config at %s", candidate)
                    return candidate

        searched = [str(p / n) for p in self.search_paths for n in CONFIG_FILE_NAMES]
        raise ConfigNotFoundError(f"Config file not found. Searched: {', '.join(searched)}")

    def load(self, path: Path | None = None, **overrides: Any) -> BuildConfig:
        """Load and validate the build configuration.

        Args:
            path: Explicit config path. If None, discovers it.
            **overrides: Field values replacing those from the file. ``None``
                values are ignored.

        Returns:
            Validated BuildConfig.

        Raises:
            ConfigNotFoundError: If the file cannot be found.
            ConfigurationError: If the YAML or the schema is invalid.
        """
        resolved = path if path is not None else self.find_config_file()
        if not resolved.is_file():
            raise ConfigNotFoundError(f"Config file not found: {resolved}")

        overrides = {k: v for k, v in overrides.items() if v is not None}
        logger.info("Loading build configuration from %s", resolved)

        try:
            return BuildConfig.from_yaml(resolved, **overrides)
        except yaml.YAMLError as err:
            raise ConfigurationError(
                "Invalid YAML",
                file_path=str(resolved),
                internal_details=str(err),
            ) from err
        except PydanticValidationError as err:
            first = err.errors()[0]
            field_path = ".".join(str(x) for x in first["loc"])
            raise ConfigurationError(
                f"Invalid configuration: {first['msg']}",
                file_path=str(resolved),
                field_path=field_path,
                internal_details=str(err),
            ) from err


def load_config(path: Path | str | None = None, **overrides: Any) -> BuildConfig:
    """Load the build configuration using default settings."""
    return ConfigResolver().load(Path(path) if path is not None else None, **overrides)
