"""Shared pytest fixtures for morph-core tests.

Provides a temporary project tree, config factories and a toolchain of
fake collaborators that record every call they receive.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest
import structlog

from morph_core.schemas import BuildConfig
from morph_core.schemas.targets import TARGET_DEFINITIONS, Target
from morph_core.toolchain import Toolchain
from morph_core.toolchain.protocols import ComponentDescription, Generator


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Configure structlog to output to stdout for test capture."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,  # Important for test isolation
    )


@pytest.fixture(autouse=True)
def clear_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a MORPH_CONFIG from the outer environment out of tests."""
    monkeypatch.delenv("MORPH_CONFIG", raising=False)


@dataclass
class GeneratorCalls:
    """Record of every generator factory and generator invocation.

    Generated text is ``// {target}\\n{description['name']}``. With ``mutate``
    set, each generator also appends its target to the description it
    receives, so tests can detect shared descriptions.
    """

    calls: list[tuple[str, str]] = field(default_factory=list)
    options: dict[str, dict[str, Any]] = field(default_factory=dict)
    failing_paths: set[str] = field(default_factory=set)
    mutate: bool = False

    def factory_for(self, target: str) -> Callable[[dict[str, Any]], Generator]:
        def factory(options: dict[str, Any]) -> Generator:
            self.options[target] = options

            def generate(path: str, description: ComponentDescription) -> str:
                self.calls.append((target, path))
                if path in self.failing_paths:
                    raise ValueError(f"cannot generate {path}")
                seen = list(description.get("seen_by", []))
                if self.mutate:
                    description.setdefault("seen_by", []).append(target)
                return f"// {target}\n{description['name']}{''.join(seen)}"

            return generate

        return factory

    def paths_for(self, target: str) -> list[str]:
        return sorted(path for called, path in self.calls if called == target)


@pytest.fixture
def generator_calls() -> GeneratorCalls:
    return GeneratorCalls()


@pytest.fixture
def toolchain(generator_calls: GeneratorCalls) -> Toolchain:
    """Toolchain parsing JSON component sources with recording generators."""
    generators = {
        target: generator_calls.factory_for(target.value)
        for target, definition in TARGET_DEFINITIONS.items()
        if definition.alias_of is None
    }
    return Toolchain(generators=generators, parser=json.loads)


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, str], Path]:
    """Factory fixture writing a file below tmp_path, creating parents."""

    def _write(relative_path: str, content: str) -> Path:
        path = tmp_path / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_config(tmp_path: Path) -> Callable[..., BuildConfig]:
    """Factory fixture creating a BuildConfig rooted at tmp_path."""

    def _make(**kwargs: Any) -> BuildConfig:
        return BuildConfig.model_validate({"cwd": tmp_path, **kwargs})

    return _make


@pytest.fixture
def component_source() -> Callable[[str], str]:
    """Return the JSON source of a component named ``name``."""

    def _source(name: str) -> str:
        return json.dumps({"name": name})

    return _source


@pytest.fixture
def sample_project(
    write_file: Callable[[str, str], Path],
    component_source: Callable[[str], str],
    tmp_path: Path,
) -> Path:
    """Project with two components, a helper module and a context file."""
    write_file("src/button.lite.tsx", component_source("Button"))
    write_file("src/card.lite.tsx", component_source("Card"))
    write_file("src/helpers.ts", "import Button from './button.lite';\nexport { Button };\n")
    write_file("src/theme.context.lite.ts", "export default { color: 'red' };\n")
    write_file("src/README.md", "not a source file\n")
    return tmp_path


def read_tree(root: Path) -> dict[str, str]:
    """Return every file below ``root`` keyed by POSIX relative path."""
    return {
        p.relative_to(root).as_posix(): p.read_text(encoding="utf-8")
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


@pytest.fixture
def tree() -> Callable[[Path], dict[str, str]]:
    return read_tree

