"""Build pipeline module for morph.

This module exports the Builder and the pieces it is assembled from:
- Builder / build / build_sync: Run a multi-target build
- TargetRegistry / TargetContext: Resolve targets to generators and paths
- OverrideResolver: Hand-authored replacements for output files
- discover_components / discover_ancillary: Source discovery
- ComponentBuildPipeline / AncillaryBuildPipeline: Per-target pipelines
- OutputWriter / clean: Writing and cleaning the destination tree
- BuildReport / ComponentFile: Build data models
"""

from __future__ import annotations

from morph_core.pipeline.ancillary import AncillaryBuildPipeline
from morph_core.pipeline.builder import Builder, build, build_sync
from morph_core.pipeline.components import ComponentBuildPipeline
from morph_core.pipeline.discovery import (
    discover_ancillary,
    discover_components,
    glob_sources,
)
from morph_core.pipeline.models import BuildReport, ComponentFile
from morph_core.pipeline.output import OutputWriter, clean, stale_files
from morph_core.pipeline.overrides import OverrideResolver
from morph_core.pipeline.paths import (
    CONTEXT_FILE_SUFFIX,
    ancillary_output_name,
    component_output_name,
    strip_context_marker,
    typed_output_name,
)
from morph_core.pipeline.registry import TargetContext, TargetRegistry

__all__: list[str] = [
    # Entry points
    "Builder",
    "build",
    "build_sync",
    # Targets
    "TargetRegistry",
    "TargetContext",
    # Steps
    "OverrideResolver",
    "discover_components",
    "discover_ancillary",
    "glob_sources",
    "ComponentBuildPipeline",
    "AncillaryBuildPipeline",
    "OutputWriter",
    "clean",
    "stale_files",
    # Path rules
    "CONTEXT_FILE_SUFFIX",
    "component_output_name",
    "typed_output_name",
    "strip_context_marker",
    "ancillary_output_name",
    # Models
    "BuildReport",
    "ComponentFile",
]
