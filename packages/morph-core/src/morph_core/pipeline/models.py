"""Build data models for morph.

- ComponentFile: One parsed component (source path + description)
- BuildReport: Summary of a successful build
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from morph_core.toolchain.protocols import ComponentDescription


@dataclass
class ComponentFile:
    """One discovered component.

    Attributes:
        path: POSIX path relative to the source root (``button.lite.tsx``).
        description: Parsed component description. Owned by one target once
            cloned; never shared between targets.
    """

    path: str
    description: ComponentDescription


class BuildReport(BaseModel):
    """Summary of a successful build.

    Attributes:
        targets: Target identifiers that were built.
        components: Number of component files discovered.
        ancillary: Number of ancillary files discovered.
        written: Files written, relative to the destination root, sorted.
        diagnostics: Non-fatal messages emitted during the build.
        started_at: When the build started (UTC).
        duration_ms: Wall-clock duration of the build.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    targets: list[str] = Field(default_factory=list)
    components: int = Field(default=0, ge=0)
    ancillary: int = Field(default=0, ge=0)
    written: list[str] = Field(default_factory=list)
    diagnostics: list[str] = Field(default_factory=list)
    started_at: datetime
    duration_ms: int = Field(default=0, ge=0)
