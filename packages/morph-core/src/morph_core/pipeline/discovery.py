"""Source discovery for morph.

Globs the configured ``files`` pattern and splits the result into
component files (parsed once, up front) and ancillary ``.ts``/``.js``
files (handled file-for-file by each target).
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import structlog

from morph_core.errors import ConfigurationError, FilesystemError, ParseError
from morph_core.pipeline.concurrency import resolve
from morph_core.pipeline.models import ComponentFile

if TYPE_CHECKING:
    from morph_core.schemas import BuildConfig
    from morph_core.toolchain.protocols import Parser

logger = structlog.get_logger(__name__)

# Source-code extensions of ancillary files
ANCILLARY_EXTENSIONS = (".ts", ".js")


def glob_sources(config: BuildConfig) -> list[str]:
    """Return files matching ``config.files``, relative to the source root.

    Returns:
        Sorted POSIX paths relative to ``config.source_path``.
    """
    source_path = config.source_path
    matches = [p for p in config.cwd.glob(config.files) if p.is_file()]
    return sorted(p.relative_to(source_path).as_posix() for p in matches)


def is_component(path: str, config: BuildConfig) -> bool:
    return path.endswith(config.component_suffix)


async def discover_components(config: BuildConfig, parser: Parser | None) -> list[ComponentFile]:
    """Read and parse every component file.

    Args:
        config: Build configuration.
        parser: Component parser.

    Returns:
        Parsed components in path order.

    Raises:
        ConfigurationError: If component files exist but no parser is configured.
        ParseError: If any component cannot be read or parsed.
        FilesystemError: If the source tree cannot be listed.
    """
    try:
        sources = await asyncio.to_thread(glob_sources, config)
    except OSError as err:
        raise FilesystemError(config.files, "list", cause=err) from err

    paths = [p for p in sources if is_component(p, config)]
    logger.debug("components_discovered", count=len(paths), files=config.files)

    if paths and parser is None:
        raise ConfigurationError(
            "No component parser configured",
            field_path="parser",
            internal_details=f"{len(paths)} component file(s) match '{config.files}'",
        )

    async def _parse(path: str) -> ComponentFile:
        try:
            raw = await asyncio.to_thread(
                (config.source_path / path).read_text, encoding="utf-8"
            )
            description = await resolve(parser(raw))  # type: ignore[misc]
        except ParseError:
            raise
        except Exception as err:
            logger.error("component_parse_failed", path=path, error=str(err))
            raise ParseError(path, internal_details=repr(err)) from err
        return ComponentFile(path=path, description=description)

    return list(await asyncio.gather(*(_parse(path) for path in paths)))


async def discover_ancillary(config: BuildConfig) -> list[str]:
    """Return ancillary (non-component ``.ts``/``.js``) source paths.

    Raises:
        FilesystemError: If the source tree cannot be listed.
    """
    try:
        paths = await asyncio.to_thread(glob_sources, config)
    except OSError as err:
        raise FilesystemError(config.files, "list", cause=err) from err

    ancillary = [
        p for p in paths if p.endswith(ANCILLARY_EXTENSIONS) and not is_component(p, config)
    ]
    logger.debug("ancillary_discovered", count=len(ancillary), files=config.files)
    return ancillary
