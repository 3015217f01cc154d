"""Toolchain module for morph.

This module exports the collaborator bundle and its reference parts:
- Toolchain: Parser, generator factories and post-processing collaborators
- load_toolchain / load_parser: Resolve collaborators from import paths
- rewrite_imports / transpile / generate_context_file / identity_post_processor:
  Reference collaborators used when a toolchain does not provide its own
"""

from __future__ import annotations

from morph_core.toolchain.defaults import (
    generate_context_file,
    identity_post_processor,
    rewrite_imports,
    transpile,
)
from morph_core.toolchain.protocols import (
    ComponentDescription,
    ContextGenerator,
    Generator,
    GeneratorFactory,
    ImportRewriter,
    Parser,
    PostProcessor,
    Transpiler,
)
from morph_core.toolchain.toolchain import (
    Toolchain,
    import_object,
    load_parser,
    load_toolchain,
)

__all__: list[str] = [
    # Bundle
    "Toolchain",
    "load_toolchain",
    "load_parser",
    "import_object",
    # Contracts
    "ComponentDescription",
    "Parser",
    "Generator",
    "GeneratorFactory",
    "ContextGenerator",
    "Transpiler",
    "ImportRewriter",
    "PostProcessor",
    # Reference collaborators
    "rewrite_imports",
    "transpile",
    "generate_context_file",
    "identity_post_processor",
]
