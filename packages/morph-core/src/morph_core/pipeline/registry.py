"""Target registry for morph.

Resolves a configured target identifier into a TargetContext: the static
properties from ``TARGET_DEFINITIONS`` plus a generator built from the
toolchain with that target's options.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from morph_core.errors import ConfigurationError
from morph_core.schemas import BuildConfig, TargetOptions
from morph_core.schemas.targets import (
    TARGET_DEFINITIONS,
    PostProcessing,
    Target,
    output_path_segment,
    parse_target,
)

if TYPE_CHECKING:
    from morph_core.toolchain import Toolchain
    from morph_core.toolchain.protocols import Generator

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class TargetContext:
    """Everything a target's pipelines need, resolved once per build.

    Attributes:
        target: Configured target identifier.
        canonical: Target whose generator and generator options are used.
        generator: Generator capability built for this target.
        output_path: Output path segment below the destination root.
        extension: Native component extension.
        post_processing: Post-processing kind for generated components.
        options: Resolved options of this target.
        diagnostics: Non-fatal messages emitted while resolving.
    """

    target: Target
    canonical: Target
    generator: Generator
    output_path: str
    extension: str
    post_processing: PostProcessing
    options: TargetOptions
    diagnostics: tuple[str, ...] = ()

    @property
    def typescript(self) -> bool:
        return self.options.typescript


class TargetRegistry:
    """Resolve target identifiers into TargetContexts.

    Example:
        >>> registry = TargetRegistry(toolchain)
        >>> context = registry.resolve("vue", config)
        >>> context.output_path
        'vue/vue3'
    """

    def __init__(self, toolchain: Toolchain) -> None:
        self.toolchain = toolchain

    def resolve(self, target_id: str | Target, config: BuildConfig) -> TargetContext:
        """Resolve one target.

        Args:
            target_id: Target identifier from the configuration.
            config: Build configuration holding the target's options.

        Returns:
            TargetContext with a constructed generator.

        Raises:
            UnsupportedTargetError: If the identifier is unknown.
            ConfigurationError: If no generator is registered for the target
                or the generator factory rejects the target's options.
        """
        target = parse_target(target_id)
        definition = TARGET_DEFINITIONS[target]
        canonical = definition.alias_of or target

        diagnostics: tuple[str, ...] = ()
        if definition.alias_of is not None:
            message = definition.diagnostic or f"Targeting {target.value}: using {canonical.value}"
            logger.warning(
                "target_alias_resolved",
                target=target.value,
                canonical=canonical.value,
                message=message,
            )
            diagnostics = (message,)

        # Typed flag of the identifier as configured: vue reads options.vue only
        options = config.options_for(target.value)
        generator = self._build_generator(canonical, config)

        return TargetContext(
            target=target,
            canonical=canonical,
            generator=generator,
            output_path=output_path_segment(target),
            extension=definition.extension,
            post_processing=definition.post_processing,
            options=options,
            diagnostics=diagnostics,
        )

    def resolve_all(self, config: BuildConfig) -> list[TargetContext]:
        """Resolve every configured target, in configuration order."""
        return [self.resolve(target, config) for target in config.targets]

    def _build_generator(self, canonical: Target, config: BuildConfig) -> Generator:
        factory = self.toolchain.generator_factory(canonical)
        if factory is None:
            raise ConfigurationError(
                f"No generator registered for target '{canonical.value}'",
                field_path="toolchain",
            )

        # The alias has no generator options of its own
        definition = TARGET_DEFINITIONS[canonical]
        generator_options = {
            **definition.default_options,
            **config.options_for(canonical.value).generator_options(),
        }

        try:
            return factory(generator_options)
        except Exception as err:
            raise ConfigurationError(
                f"Invalid options for target '{canonical.value}': {err}",
                field_path=f"options.{canonical.value}",
                internal_details=repr(err),
            ) from err
