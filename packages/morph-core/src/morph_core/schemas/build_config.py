"""BuildConfig root model for morph.

This module defines the configuration models for a build:
- TargetOptions: Per-target options (typed output flag + generator knobs)
- BuildConfig: Root schema for morph.config.yaml

The working directory is an explicit field (``cwd``) rather than process
state, so every path the pipeline touches is derived from the config alone.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Glob metacharacters recognised when splitting the ``files`` pattern
GLOB_CHARS = frozenset("*?[")

DEFAULT_DEST = "output"
DEFAULT_FILES = "src/*"
DEFAULT_OVERRIDES_DIR = "overrides"
DEFAULT_EXTENSION = "lite.tsx"


class TargetOptions(BaseModel):
    """Options for one target.

    Only ``typescript`` is interpreted by the pipeline. Any other key is a
    generator knob and is passed through to the target's generator factory.

    Attributes:
        typescript: Write the pre-post-processing source next to the compiled
            artifact and emit ancillary files as ``.ts`` instead of ``.js``.

    Example:
        >>> options = TargetOptions(typescript=True, stateType="useState")
        >>> options.generator_options()
        {'typescript': True, 'stateType': 'useState'}
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    typescript: bool = Field(
        default=False,
        description="Emit typed (TypeScript) output alongside compiled output",
    )

    def generator_options(self) -> dict[str, Any]:
        """Return every option, including extra generator knobs, as a dict."""
        return self.model_dump()


class BuildConfig(BaseModel):
    """Root configuration model for morph.config.yaml.

    Attributes:
        targets: Target identifiers to build. Empty means a no-op build.
        dest: Destination root, relative to ``cwd``.
        files: Glob selecting source files, relative to ``cwd``.
        overrides_dir: Override root, relative to ``cwd`` (``overridesDir``).
        extension: Component file suffix without a leading dot.
        parser: Optional dotted import path of a custom parse function.
        toolchain: Optional dotted import path of a Toolchain.
        options: Per-target options keyed by target identifier.
        cwd: Directory every relative path is resolved against.

    Example:
        >>> config = BuildConfig(targets=["react", "vue3"], cwd=Path("/project"))
        >>> config.source_root
        'src'
        >>> config.dest_path
        PosixPath('/project/output')
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    targets: list[str] = Field(
        default_factory=list,
        description="Target identifiers to build",
    )
    dest: str = Field(
        default=DEFAULT_DEST,
        min_length=1,
        description="Destination root directory",
    )
    files: str = Field(
        default=DEFAULT_FILES,
        min_length=1,
        description="Glob pattern selecting source files",
    )
    overrides_dir: str = Field(
        default=DEFAULT_OVERRIDES_DIR,
        alias="overridesDir",
        min_length=1,
        description="Directory holding hand-authored override files",
    )
    extension: str = Field(
        default=DEFAULT_EXTENSION,
        min_length=1,
        description="Component file suffix (without leading dot)",
    )
    parser: str | None = Field(
        default=None,
        description="Dotted import path of a custom component parser",
    )
    toolchain: str | None = Field(
        default=None,
        description="Dotted import path of the toolchain providing generators",
    )
    options: dict[str, TargetOptions] = Field(
        default_factory=dict,
        description="Per-target options",
    )
    cwd: Path = Field(
        default_factory=Path.cwd,
        description="Working directory for all relative paths",
    )

    @field_validator("extension")
    @classmethod
    def _strip_leading_dot(cls, value: str) -> str:
        return value.lstrip(".")

    @classmethod
    def from_yaml(cls, path: str | Path, **overrides: Any) -> BuildConfig:
        """Load and validate BuildConfig from a YAML file.

        ``cwd`` defaults to the directory containing the file.

        Args:
            path: Path to morph.config.yaml.
            **overrides: Field values that replace those from the file.

        Returns:
            Validated BuildConfig instance.

        Raises:
            FileNotFoundError: If file doesn't exist.
            yaml.YAMLError: If YAML syntax is invalid.
            pydantic.ValidationError: If schema validation fails.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        with path.open("r") as f:
            data: Any = yaml.safe_load(f)

        if data is None:
            data = {}
        # Non-mapping documents are left for model_validate to reject
        if isinstance(data, dict):
            data = {"cwd": str(path.resolve().parent), **data, **overrides}
        return cls.model_validate(data)

    def options_for(self, target: str) -> TargetOptions:
        """Return the options of ``target``, or defaults when it has none."""
        return self.options.get(target, TargetOptions())

    @property
    def component_suffix(self) -> str:
        """Component file suffix including the leading dot (``.lite.tsx``)."""
        return f".{self.extension}"

    @property
    def source_root(self) -> str:
        """Static directory prefix of ``files`` (``src`` for ``src/*``)."""
        return self._split_files_pattern()[0]

    @property
    def relative_pattern(self) -> str:
        """Part of ``files`` below the source root (``*`` for ``src/*``)."""
        return self._split_files_pattern()[1]

    @property
    def source_path(self) -> Path:
        return self.cwd / self.source_root

    @property
    def dest_path(self) -> Path:
        return self.cwd / self.dest

    @property
    def overrides_path(self) -> Path:
        return self.cwd / self.overrides_dir

    def _split_files_pattern(self) -> tuple[str, str]:
        parts = PurePosixPath(self.files).parts
        static: list[str] = []
        for part in parts[:-1]:
            if GLOB_CHARS.intersection(part):
                break
            static.append(part)
        root = str(PurePosixPath(*static)) if static else ""
        rest = "/".join(parts[len(static) :])
        return root, rest
