"""Toolchain: the bundle of collaborators a build runs with.

A Toolchain names the parser, the per-target generator factories and the
post-processing collaborators. Toolchains are plain Python objects and can
be referenced from configuration by dotted import path
(``my_package.toolchain.TOOLCHAIN`` or ``my_package.toolchain:make_toolchain``).
"""

from __future__ import annotations

import dataclasses
import importlib
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import structlog

from morph_core.errors import ConfigurationError
from morph_core.schemas.targets import Target
from morph_core.toolchain.defaults import (
    generate_context_file,
    identity_post_processor,
    rewrite_imports,
    transpile,
)
from morph_core.toolchain.protocols import (
    ContextGenerator,
    GeneratorFactory,
    ImportRewriter,
    Parser,
    PostProcessor,
    Transpiler,
)

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Toolchain:
    """Collaborators used by a build.

    Attributes:
        generators: Generator factory per target. Aliases use their canonical
            target's factory, so ``vue`` needs no entry of its own.
        parser: Component parser. Required as soon as component files exist.
        transpile: Transpile step for the transpile family and ancillary files.
        import_rewriter: Import-path rewriter used for typed ancillary output.
        context_generator: Regenerates context files.
        post_processor: Rewrite applied by targets with ``rewrite`` post-processing.

    Example:
        >>> toolchain = Toolchain(
        ...     parser=parse_jsx,
        ...     generators={Target.react: component_to_react},
        ... )
    """

    generators: Mapping[Target | str, GeneratorFactory] = field(default_factory=dict)
    parser: Parser | None = None
    transpile: Transpiler = transpile
    import_rewriter: ImportRewriter = rewrite_imports
    context_generator: ContextGenerator = generate_context_file
    post_processor: PostProcessor = identity_post_processor

    def generator_factory(self, target: Target) -> GeneratorFactory | None:
        """Return the generator factory registered for ``target``, if any."""
        return self.generators.get(target)

    def with_parser(self, parser: Parser) -> Toolchain:
        """Return a copy of this toolchain using ``parser``."""
        return dataclasses.replace(self, parser=parser)


def import_object(path: str) -> Any:
    """Import an object from a dotted path.

    Accepts ``package.module.attr`` and ``package.module:attr``.

    Raises:
        ConfigurationError: If the module or attribute cannot be found.
    """
    if ":" in path:
        module_name, attr_name = path.split(":", 1)
    else:
        module_name, _, attr_name = path.rpartition(".")

    if not module_name or not attr_name:
        raise ConfigurationError(f"Invalid import path: '{path}'")

    try:
        module = importlib.import_module(module_name)
    except ImportError as err:
        raise ConfigurationError(
            f"Cannot import module '{module_name}'",
            internal_details=repr(err),
        ) from err

    try:
        return getattr(module, attr_name)
    except AttributeError:
        raise ConfigurationError(
            f"Module '{module_name}' has no attribute '{attr_name}'"
        ) from None


def load_toolchain(path: str) -> Toolchain:
    """Load a Toolchain (or a zero-argument factory returning one) by import path.

    Raises:
        ConfigurationError: If the object is not a Toolchain.
    """
    obj = import_object(path)
    if not isinstance(obj, Toolchain) and callable(obj):
        obj = obj()

    if not isinstance(obj, Toolchain):
        raise ConfigurationError(
            f"'{path}' is not a Toolchain",
            field_path="toolchain",
            internal_details=f"got {type(obj).__name__}",
        )

    logger.debug("toolchain_loaded", path=path, targets=sorted(str(t) for t in obj.generators))
    return obj


def load_parser(path: str) -> Parser:
    """Load a parse function by import path.

    Raises:
        ConfigurationError: If the object is not callable.
    """
    obj = import_object(path)
    if not callable(obj):
        raise ConfigurationError(f"'{path}' is not callable", field_path="parser")
    return obj  # type: ignore[no-any-return]
