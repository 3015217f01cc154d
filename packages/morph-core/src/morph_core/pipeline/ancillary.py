"""Non-component build pipeline for morph.

For one target, carries every ancillary ``.ts``/``.js`` source file into
the output tree: overrides first, then context regeneration, then the
plain source. Typed output only rewrites imports; untyped output goes
through the transpile step and gets a ``.js`` extension.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import structlog

from morph_core.errors import FilesystemError, GenerationError, PostProcessError
from morph_core.pipeline.concurrency import gather_settled, resolve
from morph_core.pipeline.paths import (
    ancillary_output_name,
    is_context_file,
    strip_context_marker,
)

if TYPE_CHECKING:
    from morph_core.pipeline.output import OutputWriter
    from morph_core.pipeline.overrides import OverrideResolver
    from morph_core.pipeline.registry import TargetContext
    from morph_core.schemas import BuildConfig
    from morph_core.toolchain import Toolchain

logger = structlog.get_logger(__name__)


class AncillaryBuildPipeline:
    """Transform and write the ancillary files of one target.

    Example:
        >>> pipeline = AncillaryBuildPipeline(context, config, toolchain, overrides, writer)
        >>> await pipeline.run(["helpers.ts", "theme.context.lite.ts"])
        ['react/helpers.js', 'react/theme.js']
    """

    def __init__(
        self,
        context: TargetContext,
        config: BuildConfig,
        toolchain: Toolchain,
        overrides: OverrideResolver,
        writer: OutputWriter,
    ) -> None:
        self.context = context
        self.config = config
        self.toolchain = toolchain
        self.overrides = overrides
        self.writer = writer
        self._log = logger.bind(target=context.target.value, pipeline="ancillary")

    async def run(self, paths: list[str]) -> list[str]:
        """Build every ancillary file concurrently.

        Returns:
            Written paths relative to the destination root.

        Raises:
            BuildError: If any file failed, after all of them settled.
        """
        return await gather_settled(self.build_file(path) for path in paths)

    async def build_file(self, path: str) -> str:
        """Build and write one ancillary file."""
        typescript = self.context.typescript

        override = await self.overrides.resolve(self.context.output_path, path)
        if override is not None:
            self._log.debug("override_applied", path=path)
            output = await self._finish(path, override)
        elif is_context_file(path):
            output = await self._generate_context(path)
            if not typescript:
                output = await self._transpile(path, output)
        else:
            content = await self._read_source(path)
            output = await self._finish(path, content)

        name = ancillary_output_name(strip_context_marker(path), typescript)
        return await self.writer.write(f"{self.context.output_path}/{name}", output)

    async def _finish(self, path: str, content: str) -> str:
        if not self.context.typescript:
            return await self._transpile(path, content)
        try:
            return self.toolchain.import_rewriter(self.context.target)(content)
        except Exception as err:
            raise PostProcessError(path, self.context.target.value, cause=err) from err

    async def _transpile(self, path: str, content: str) -> str:
        try:
            return await resolve(
                self.toolchain.transpile(path, self.context.target, content, self.config)
            )
        except Exception as err:
            raise PostProcessError(path, self.context.target.value, cause=err) from err

    async def _generate_context(self, path: str) -> str:
        self._log.debug("context_regenerating", path=path)
        try:
            return await resolve(
                self.toolchain.context_generator(path, self.config, self.context.target)
            )
        except Exception as err:
            raise GenerationError(path, self.context.target.value, cause=err) from err

    async def _read_source(self, path: str) -> str:
        source = self.config.source_path / path
        try:
            return await asyncio.to_thread(source.read_text, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as err:
            raise FilesystemError(str(source), "read", cause=err) from err
