"""Schema definitions for morph.

This module exports the core Pydantic models and target table:
- Target: Closed set of supported output targets
- TargetDefinition / TARGET_DEFINITIONS: Static properties of every target
- TargetOptions: Per-target options (typed output flag + generator knobs)
- BuildConfig: Root schema for morph.config.yaml
"""

from __future__ import annotations

from morph_core.schemas.build_config import (
    DEFAULT_DEST,
    DEFAULT_EXTENSION,
    DEFAULT_FILES,
    DEFAULT_OVERRIDES_DIR,
    BuildConfig,
    TargetOptions,
)
from morph_core.schemas.targets import (
    TARGET_DEFINITIONS,
    PostProcessing,
    Target,
    TargetDefinition,
    canonical_target,
    native_extension,
    output_path_segment,
    parse_target,
)

__all__ = [
    # Configuration
    "BuildConfig",
    "TargetOptions",
    "DEFAULT_DEST",
    "DEFAULT_FILES",
    "DEFAULT_OVERRIDES_DIR",
    "DEFAULT_EXTENSION",
    # Targets
    "Target",
    "TargetDefinition",
    "PostProcessing",
    "TARGET_DEFINITIONS",
    "parse_target",
    "canonical_target",
    "output_path_segment",
    "native_extension",
]
