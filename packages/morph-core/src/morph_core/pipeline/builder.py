"""Builder class for morph.

This module implements the build entry point that fans a set of component
sources out to every configured target:

1. Resolve every target (unsupported targets and bad options fail here)
2. Clean stale artifacts from the destination root
3. Discover and parse components once; list ancillary files
4. Give every target its own deep copy of the component descriptions
5. Run all targets concurrently; per target, the component and ancillary
   pipelines run concurrently; per pipeline, every file runs concurrently

Steps 1-4 are barriers. Within step 5 nothing is ordered.
"""

from __future__ import annotations

import asyncio
import copy
import time
from datetime import UTC, datetime

import structlog

from morph_core.config_loader import load_config
from morph_core.pipeline.ancillary import AncillaryBuildPipeline
from morph_core.pipeline.components import ComponentBuildPipeline
from morph_core.pipeline.concurrency import gather_settled
from morph_core.pipeline.discovery import discover_ancillary, discover_components
from morph_core.pipeline.models import BuildReport, ComponentFile
from morph_core.pipeline.output import OutputWriter, clean
from morph_core.pipeline.overrides import OverrideResolver
from morph_core.pipeline.registry import TargetContext, TargetRegistry
from morph_core.schemas import BuildConfig
from morph_core.toolchain import Toolchain, load_parser, load_toolchain

logger = structlog.get_logger(__name__)


class Builder:
    """Build every configured target from one set of component sources.

    Attributes:
        config: Immutable build configuration.
        toolchain: Collaborators used by the build.

    Example:
        >>> builder = Builder(config, toolchain=my_toolchain)
        >>> report = await builder.build()
        >>> report.written
        ['react/button.jsx', 'vue/vue3/button.tsx', 'vue/vue3/button.vue']
    """

    def __init__(self, config: BuildConfig, toolchain: Toolchain | None = None) -> None:
        """Initialize the Builder.

        Args:
            config: Build configuration.
            toolchain: Toolchain to use. If not given, loaded from
                ``config.toolchain`` or the reference toolchain.
                ``config.parser``, when set, replaces the toolchain's parser.
        """
        self.config = config
        self.toolchain = self._resolve_toolchain(config, toolchain)
        self._log = logger.bind(component="builder")

    @staticmethod
    def _resolve_toolchain(config: BuildConfig, toolchain: Toolchain | None) -> Toolchain:
        if toolchain is None:
            toolchain = load_toolchain(config.toolchain) if config.toolchain else Toolchain()
        if config.parser:
            toolchain = toolchain.with_parser(load_parser(config.parser))
        return toolchain

    async def build(self) -> BuildReport:
        """Run the build.

        Returns:
            BuildReport listing every written file.

        Raises:
            UnsupportedTargetError: If a target identifier is unknown.
            ConfigurationError: If the toolchain cannot serve a target.
            ParseError: If a component cannot be parsed. Nothing is written.
            BuildError: If any unit failed. Other units ran to completion,
                so the destination tree may be partially written.
        """
        start_time = time.monotonic()
        started_at = datetime.now(UTC)
        config = self.config

        if not config.targets:
            self._log.info("build_skipped", reason="no targets configured")
            return BuildReport(started_at=started_at)

        self._log.info("build_started", targets=config.targets, files=config.files)

        contexts = TargetRegistry(self.toolchain).resolve_all(config)

        await clean(config)

        components, ancillary = await asyncio.gather(
            discover_components(config, self.toolchain.parser),
            discover_ancillary(config),
        )

        # Every target owns its copy before any target starts
        owned = [copy.deepcopy(components) for _ in contexts]

        results = await gather_settled(
            self._build_target(context, files, ancillary)
            for context, files in zip(contexts, owned, strict=True)
        )

        written = sorted({path for paths in results for path in paths})
        duration_ms = int((time.monotonic() - start_time) * 1000)
        self._log.info(
            "build_completed",
            targets=len(contexts),
            components=len(components),
            ancillary=len(ancillary),
            written=len(written),
            duration_ms=duration_ms,
        )

        return BuildReport(
            targets=[context.target.value for context in contexts],
            components=len(components),
            ancillary=len(ancillary),
            written=written,
            diagnostics=[d for context in contexts for d in context.diagnostics],
            started_at=started_at,
            duration_ms=duration_ms,
        )

    async def _build_target(
        self,
        context: TargetContext,
        components: list[ComponentFile],
        ancillary: list[str],
    ) -> list[str]:
        overrides = OverrideResolver(self.config.overrides_path)
        writer = OutputWriter(self.config.dest_path)
        args = (context, self.config, self.toolchain, overrides, writer)

        self._log.debug("target_started", target=context.target.value, output=context.output_path)
        results = await gather_settled(
            [
                AncillaryBuildPipeline(*args).run(ancillary),
                ComponentBuildPipeline(*args).run(components),
            ]
        )
        return [path for paths in results for path in paths]


async def build(
    config: BuildConfig | None = None,
    *,
    toolchain: Toolchain | None = None,
) -> BuildReport:
    """Run a build.

    Args:
        config: Build configuration. If None, morph.config.yaml is discovered
            and loaded.
        toolchain: Optional toolchain overriding ``config.toolchain``.

    Example:
        >>> report = await build(BuildConfig(targets=["react"]), toolchain=toolchain)
    """
    if config is None:
        config = load_config()
    return await Builder(config, toolchain=toolchain).build()


def build_sync(
    config: BuildConfig | None = None,
    *,
    toolchain: Toolchain | None = None,
) -> BuildReport:
    """Run a build from synchronous code."""
    return asyncio.run(build(config, toolchain=toolchain))
