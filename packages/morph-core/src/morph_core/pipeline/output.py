"""Output writing and cleaning for morph.

- OutputWriter: Write artifacts below the destination root
- clean: Remove stale artifacts before a build starts
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from morph_core.errors import FilesystemError

if TYPE_CHECKING:
    from morph_core.schemas import BuildConfig

logger = structlog.get_logger(__name__)


def _write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


class OutputWriter:
    """Write files below a destination root.

    Parent directories are created as needed. Writing the same path twice
    keeps the last content; files are written in place (no atomic rename).

    Example:
        >>> writer = OutputWriter(Path("output"))
        >>> await writer.write("react/button.jsx", "export default ...")
        'react/button.jsx'
    """

    def __init__(self, root: Path) -> None:
        self.root = root

    async def write(self, relative_path: str, content: str) -> str:
        """Write ``content`` to ``root/relative_path``.

        Returns:
            The POSIX path written, relative to the root.

        Raises:
            FilesystemError: If the directory or file cannot be written.
        """
        path = self.root / relative_path
        try:
            await asyncio.to_thread(_write_text, path, content)
        except OSError as err:
            raise FilesystemError(str(path), "write", cause=err) from err
        return Path(relative_path).as_posix()


def stale_files(config: BuildConfig) -> list[Path]:
    """Return files below the destination root that match the source glob.

    Only files inside a target directory are considered
    (``{dest}/*/**/{pattern}``), never files directly in ``dest``.
    """
    dest = config.dest_path
    if not dest.is_dir():
        return []
    pattern = f"*/**/{config.relative_pattern}"
    return sorted(p for p in dest.glob(pattern) if p.is_file())


async def clean(config: BuildConfig) -> list[Path]:
    """Delete stale artifacts from the destination root.

    Must complete before any output is written.

    Returns:
        Paths that were removed.

    Raises:
        FilesystemError: If the destination cannot be listed or a file cannot be
            removed.
    """
    try:
        files = await asyncio.to_thread(stale_files, config)
    except OSError as err:
        raise FilesystemError(str(config.dest_path), "list", cause=err) from err

    async def _remove(path: Path) -> None:
        try:
            await asyncio.to_thread(path.unlink, missing_ok=True)
        except OSError as err:
            raise FilesystemError(str(path), "remove", cause=err) from err

    await asyncio.gather(*(_remove(path) for path in files))
    logger.info("output_cleaned", dest=str(config.dest_path), removed=len(files))
    return files
