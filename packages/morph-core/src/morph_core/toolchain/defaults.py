"""Reference collaborators shipped with morph-core.

These cover the steps that need no framework knowledge:
- rewrite_imports: Point ``.lite`` module specifiers at generated files
- transpile: Import rewriting only (no minification)
- generate_context_file: Source of the context file with imports rewritten
- identity_post_processor: Leave generated text untouched

Toolchains replace any of them with real implementations.
"""

from __future__ import annotations

import asyncio
import re
from collections.abc import Callable
from typing import TYPE_CHECKING

import structlog

from morph_core.schemas.targets import Target, native_extension

if TYPE_CHECKING:
    from morph_core.schemas import BuildConfig
    from morph_core.toolchain.protocols import ComponentDescription

logger = structlog.get_logger(__name__)

LITE_MARKER = ".lite"
CONTEXT_MARKER = ".context"

# Extensions module resolution finds without an explicit suffix
IMPLICIT_EXTENSIONS = frozenset({".js", ".jsx", ".ts", ".tsx"})

# from '...', import '...', import('...'), require('...')
IMPORT_SPECIFIER_RE = re.compile(
    r"""(?P<prefix>\bfrom\s*|\bimport\s*\(?\s*|\brequire\s*\(\s*)"""
    r"""(?P<quote>['"])(?P<specifier>\.{1,2}/[^'"]*)(?P=quote)"""
)


def _rewrite_specifier(specifier: str, extension: str) -> str:
    if specifier.endswith(CONTEXT_MARKER + LITE_MARKER):
        return specifier[: -len(LITE_MARKER)]
    if specifier.endswith(LITE_MARKER):
        stem = specifier[: -len(LITE_MARKER)]
        return stem if extension in IMPLICIT_EXTENSIONS else stem + extension
    return specifier


def rewrite_imports(target: Target | str) -> Callable[[str], str]:
    """Return a function rewriting relative ``.lite`` imports for ``target``.

    Context modules lose their ``.lite`` marker (``./theme.context.lite`` →
    ``./theme.context``). Component modules point at the generated file,
    keeping the extension only when module resolution would not find it
    (``./button.lite`` → ``./button.vue`` for vue, ``./button`` for react).

    Example:
        >>> rewrite_imports("vue3")("import Button from './button.lite';")
        "import Button from './button.vue';"
    """
    extension = native_extension(target)

    def _rewrite(code: str) -> str:
        return IMPORT_SPECIFIER_RE.sub(
            lambda m: (
                f"{m.group('prefix')}{m.group('quote')}"
                f"{_rewrite_specifier(m.group('specifier'), extension)}"
                f"{m.group('quote')}"
            ),
            code,
        )

    return _rewrite


def transpile(path: str, target: Target, content: str, config: BuildConfig) -> str:
    """Rewrite imports of one file's content for ``target``."""
    logger.debug("transpile_imports_only", path=path, target=Target(target).value)
    return rewrite_imports(target)(content)


async def generate_context_file(path: str, config: BuildConfig, target: Target) -> str:
    """Return the context file's source with imports rewritten for ``target``."""
    source = await asyncio.to_thread((config.source_path / path).read_text, encoding="utf-8")
    return rewrite_imports(target)(source)


def identity_post_processor(contents: str, path: str, component: ComponentDescription) -> str:
    return contents
