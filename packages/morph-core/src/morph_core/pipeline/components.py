"""Component build pipeline for morph.

For one target, turns every component description into its generated
artifact (and, with typed output, the untouched generated source next to
it). Every component is an independent unit; all units run concurrently.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from morph_core.errors import GenerationError, PostProcessError
from morph_core.pipeline.concurrency import gather_settled, resolve
from morph_core.pipeline.paths import component_output_name, typed_output_name
from morph_core.schemas.targets import PostProcessing

if TYPE_CHECKING:
    from morph_core.pipeline.models import ComponentFile
    from morph_core.pipeline.output import OutputWriter
    from morph_core.pipeline.overrides import OverrideResolver
    from morph_core.pipeline.registry import TargetContext
    from morph_core.schemas import BuildConfig
    from morph_core.toolchain import Toolchain
    from morph_core.toolchain.protocols import ComponentDescription

logger = structlog.get_logger(__name__)


class ComponentBuildPipeline:
    """Generate, post-process and write the components of one target.

    Per component:
    1. ``button.lite.tsx`` → ``button{native extension}``
    2. an override at ``{overridesDir}/{segment}/{output name}`` wins
    3. otherwise the target's generator produces the text
    4. the text before post-processing is kept as the original
    5. post-processing by kind (rewrite, transpile or none)
    6. write the result; with typed output also write the original

    Example:
        >>> pipeline = ComponentBuildPipeline(context, config, toolchain, overrides, writer)
        >>> await pipeline.run(components)
        ['react/button.jsx']
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
        self._log = logger.bind(target=context.target.value, pipeline="components")

    async def run(self, components: list[ComponentFile]) -> list[str]:
        """Build every component concurrently.

        Args:
            components: This target's own copy of the component descriptions.

        Returns:
            Written paths relative to the destination root.

        Raises:
            BuildError: If any component failed, after all of them settled.
        """
        results = await gather_settled(self.build_component(c) for c in components)
        return [path for written in results for path in written]

    async def build_component(self, component: ComponentFile) -> list[str]:
        """Build and write one component."""
        path = component.path
        description = component.description
        suffix = self.config.component_suffix
        output_name = component_output_name(path, suffix, self.context.extension)

        override = await self.overrides.resolve(self.context.output_path, output_name)

        self._log.debug("transpiling", path=path)
        if override is not None:
            self._log.debug("override_applied", path=path, output=output_name)
            transpiled = override
        else:
            transpiled = await self._generate(path, description)
        self._log.debug("component_transpiled", path=path, output_length=len(transpiled))

        original = transpiled
        transpiled = await self._post_process(transpiled, path, description)

        output_dir = self.context.output_path
        writes = [self.writer.write(f"{output_dir}/{output_name}", transpiled)]
        if self.context.typescript:
            typed_name = typed_output_name(path, suffix)
            writes.append(self.writer.write(f"{output_dir}/{typed_name}", original))

        return await gather_settled(writes)

    async def _generate(self, path: str, description: ComponentDescription) -> str:
        try:
            result = await resolve(self.context.generator(path, description))
            if not isinstance(result, str):
                raise TypeError(f"generator returned {type(result).__name__}, expected str")
        except Exception as err:
            self._log.debug("component_transpile_failed", path=path, error=repr(err))
            raise GenerationError(path, self.context.target.value, cause=err) from err
        return result

    async def _post_process(
        self, contents: str, path: str, description: ComponentDescription
    ) -> str:
        kind = self.context.post_processing
        if kind is PostProcessing.none:
            return contents

        try:
            if kind is PostProcessing.rewrite:
                result = self.toolchain.post_processor(contents, path, description)
            else:
                result = self.toolchain.transpile(
                    path, self.context.target, contents, self.config
                )
            return await resolve(result)
        except Exception as err:
            raise PostProcessError(path, self.context.target.value, cause=err) from err
