"""Shared test fixtures for morph-cli tests.

Provides CliRunner fixtures and a project directory with components and
an importable toolchain module.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
import structlog
from click.testing import CliRunner

CONFIG_FILENAME = "morph.config.yaml"
TOOLCHAIN_MODULE = "morph_cli_test_toolchain"

TOOLCHAIN_SOURCE = '''\
import json

from morph_core.toolchain import Toolchain


def _factory(target):
    def factory(options):
        if options.get("broken"):
            raise ValueError("broken option")

        def generate(path, component):
            if component.get("fail"):
                raise RuntimeError(f"cannot generate {component['name']}")
            return f"<{target}>{component['name']}</{target}>"

        return generate

    return factory


TOOLCHAIN = Toolchain(
    parser=json.loads,
    generators={name: _factory(name) for name in ("react", "vue3", "svelte")},
)
'''


@pytest.fixture(autouse=True)
def restore_logging() -> Iterator[None]:
    """Undo the logging configuration commands apply."""
    root = logging.getLogger()
    level, handlers = root.level, list(root.handlers)
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


@pytest.fixture(autouse=True)
def clear_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MORPH_CONFIG", raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture
def isolated_runner(cli_runner: CliRunner, tmp_path: Path) -> Iterator[CliRunner]:
    """Create a Click test runner working inside tmp_path."""
    with cli_runner.isolated_filesystem(temp_dir=tmp_path):
        yield cli_runner


@pytest.fixture
def toolchain_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[str]:
    """Write an importable toolchain module and return its import path."""
    module_dir = tmp_path / "toolchains"
    module_dir.mkdir()
    (module_dir / f"{TOOLCHAIN_MODULE}.py").write_text(TOOLCHAIN_SOURCE)
    monkeypatch.syspath_prepend(str(module_dir))
    yield f"{TOOLCHAIN_MODULE}:TOOLCHAIN"
    sys.modules.pop(TOOLCHAIN_MODULE, None)


@pytest.fixture
def create_project(tmp_path: Path) -> Callable[..., Path]:
    """Factory fixture creating a project with a config and two components.

    Returns:
        Function taking the config text and returning the config path.
    """

    def _create(config: str, *, fail: str | None = None) -> Path:
        project = tmp_path / "project"
        (project / "src").mkdir(parents=True, exist_ok=True)
        for name in ("Button", "Card"):
            body = f'{{"name": "{name}", "fail": {"true" if name == fail else "false"}}}'
            (project / "src" / f"{name.lower()}.lite.tsx").write_text(body)
        (project / "src" / "helpers.ts").write_text("export const x = 1;\n")
        config_path = project / CONFIG_FILENAME
        config_path.write_text(config)
        return config_path

    return _create
