"""morph-core: Multi-target source generation builds.

This package provides:
- BuildConfig: Pydantic schema for morph.config.yaml
- Builder / build: Fan component sources out to every configured target
- Toolchain: Parser, generators and post-processing collaborators
- Target table: Output paths, extensions and aliases of every target
- JSON Schema export for morph.config.yaml
"""

from __future__ import annotations

__version__ = "0.1.0"

# Configuration loading
from morph_core.config_loader import (
    CONFIG_ENV_VAR,
    CONFIG_FILE_NAMES,
    ConfigNotFoundError,
    ConfigResolver,
    load_config,
)

# Error types
from morph_core.errors import (
    BuildError,
    ConfigurationError,
    FilesystemError,
    GenerationError,
    MorphError,
    ParseError,
    PostProcessError,
    UnsupportedTargetError,
)

# JSON Schema export
from morph_core.export import export_build_config_schema

# Build pipeline
from morph_core.pipeline import (
    Builder,
    BuildReport,
    TargetContext,
    TargetRegistry,
    build,
    build_sync,
)

# Schema models
from morph_core.schemas import (
    BuildConfig,
    Target,
    TargetOptions,
    output_path_segment,
)

# Collaborators
from morph_core.toolchain import Toolchain, load_toolchain

__all__ = [
    "__version__",
    # Build
    "build",
    "build_sync",
    "Builder",
    "BuildReport",
    "TargetRegistry",
    "TargetContext",
    # Configuration
    "BuildConfig",
    "TargetOptions",
    "Target",
    "output_path_segment",
    "ConfigResolver",
    "ConfigNotFoundError",
    "load_config",
    "CONFIG_ENV_VAR",
    "CONFIG_FILE_NAMES",
    # Toolchain
    "Toolchain",
    "load_toolchain",
    # Errors
    "MorphError",
    "ConfigurationError",
    "UnsupportedTargetError",
    "ParseError",
    "GenerationError",
    "PostProcessError",
    "FilesystemError",
    "BuildError",
    # JSON Schema export
    "export_build_config_schema",
]
