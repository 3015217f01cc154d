"""Override lookup for morph.

A hand-authored file at ``{overridesDir}/{output path segment}/{name}``
replaces the build output for that one file. Its content is used verbatim;
nothing checks that it matches what the generator would have produced.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import structlog

from morph_core.errors import FilesystemError

logger = structlog.get_logger(__name__)


def _read_if_exists(path: Path) -> str | None:
    if not path.is_file():
        return None
    return path.read_text(encoding="utf-8")


class OverrideResolver:
    """Find override files below an override root.

    Example:
        >>> resolver = OverrideResolver(Path("overrides"))
        >>> await resolver.resolve("react", "button.jsx")
        None
    """

    def __init__(self, root: Path) -> None:
        self.root = root

    def path_for(self, output_path: str, name: str) -> Path:
        return self.root / output_path / name

    async def resolve(self, output_path: str, name: str) -> str | None:
        """Return the override text for ``name`` under ``output_path``, if any.

        Raises:
            FilesystemError: If the override exists but cannot be read.
        """
        path = self.path_for(output_path, name)
        try:
            content = await asyncio.to_thread(_read_if_exists, path)
        except (OSError, UnicodeDecodeError) as err:
            raise FilesystemError(str(path), "read", cause=err) from err

        if content is not None:
            logger.debug("override_found", path=str(path))
        return content
