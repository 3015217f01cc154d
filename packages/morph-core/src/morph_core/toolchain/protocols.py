"""Collaborator contracts consumed by the build pipeline.

The pipeline never looks inside a component description or generated text;
it only moves them between these collaborators. Every collaborator except
the import rewriter may return either a value or an awaitable of it.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Protocol, TypeAlias, TypeVar

if TYPE_CHECKING:
    from morph_core.schemas import BuildConfig, Target

T = TypeVar("T")

# Parsed component: opaque JSON-like document
ComponentDescription: TypeAlias = dict[str, Any]

MaybeAwaitable = T | Awaitable[T]


class Parser(Protocol):
    """Turn raw component source into a component description."""

    def __call__(self, raw: str) -> MaybeAwaitable[ComponentDescription]: ...


class Generator(Protocol):
    """Turn one component description into target-native source text."""

    def __call__(
        self, path: str, component: ComponentDescription
    ) -> MaybeAwaitable[str]: ...


class GeneratorFactory(Protocol):
    """Build a target's generator from that target's options."""

    def __call__(self, options: dict[str, Any]) -> Generator: ...


class ContextGenerator(Protocol):
    """Regenerate a context file's content for one target."""

    def __call__(
        self, path: str, config: BuildConfig, target: Target
    ) -> MaybeAwaitable[str]: ...


class Transpiler(Protocol):
    """Transpile/minify one file's content and rewrite its imports."""

    def __call__(
        self, path: str, target: Target, content: str, config: BuildConfig
    ) -> MaybeAwaitable[str]: ...


class PostProcessor(Protocol):
    """Target-specific source-to-source rewrite of generated component text."""

    def __call__(
        self, contents: str, path: str, component: ComponentDescription
    ) -> MaybeAwaitable[str]: ...


ImportRewriter: TypeAlias = Callable[["Target"], Callable[[str], str]]
