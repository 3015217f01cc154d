"""Unit tests for source discovery."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from morph_core.errors import ConfigurationError, FilesystemError, ParseError
from morph_core.pipeline.discovery import (
    discover_ancillary,
    discover_components,
    glob_sources,
)
from morph_core.schemas import BuildConfig


class TestGlobSources:
    """Tests for glob_sources."""

    def test_paths_relative_to_source_root(
        self, sample_project: Path, make_config: Callable[..., BuildConfig]
    ) -> None:
        assert glob_sources(make_config()) == [
            "README.md",
            "button.lite.tsx",
            "card.lite.tsx",
            "helpers.ts",
            "theme.context.lite.ts",
        ]

    def test_recursive_glob_keeps_directories(
        self,
        make_config: Callable[..., BuildConfig],
        write_file: Callable[[str, str], Path],
    ) -> None:
        write_file("src/forms/input.lite.tsx", "{}")
        assert glob_sources(make_config(files="src/**/*")) == ["forms/input.lite.tsx"]


class TestDiscoverComponents:
    """Tests for discover_components."""

    @pytest.mark.asyncio
    async def test_parses_every_component(
        self, sample_project: Path, make_config: Callable[..., BuildConfig]
    ) -> None:
        """Only component files are parsed, in path order."""
        components = await discover_components(make_config(), json.loads)

        assert [c.path for c in components] == ["button.lite.tsx", "card.lite.tsx"]
        assert components[0].description == {"name": "Button"}

    @pytest.mark.asyncio
    async def test_async_parser(
        self, sample_project: Path, make_config: Callable[..., BuildConfig]
    ) -> None:
        async def parse(raw: str) -> dict[str, str]:
            return json.loads(raw)

        components = await discover_components(make_config(), parse)
        assert [c.description["name"] for c in components] == ["Button", "Card"]

    @pytest.mark.asyncio
    async def test_custom_extension(
        self,
        make_config: Callable[..., BuildConfig],
        write_file: Callable[[str, str], Path],
    ) -> None:
        write_file("src/a.lite.jsx", '{"name": "A"}')
        write_file("src/b.lite.tsx", '{"name": "B"}')

        components = await discover_components(make_config(extension="lite.jsx"), json.loads)

        assert [c.path for c in components] == ["a.lite.jsx"]

    @pytest.mark.asyncio
    async def test_parse_failure_names_path(
        self,
        make_config: Callable[..., BuildConfig],
        write_file: Callable[[str, str], Path],
        component_source: Callable[[str], str],
    ) -> None:
        """An unparseable component raises ParseError carrying its path."""
        write_file("src/good.lite.tsx", component_source("Good"))
        write_file("src/broken.lite.tsx", "export default function (")

        with pytest.raises(ParseError) as exc_info:
            await discover_components(make_config(), json.loads)

        assert exc_info.value.path == "broken.lite.tsx"
        assert isinstance(exc_info.value.__cause__, json.JSONDecodeError)

    @pytest.mark.asyncio
    async def test_components_without_parser(
        self, sample_project: Path, make_config: Callable[..., BuildConfig]
    ) -> None:
        with pytest.raises(ConfigurationError, match="No component parser") as exc_info:
            await discover_components(make_config(), None)
        assert exc_info.value.field_path == "parser"

    @pytest.mark.asyncio
    async def test_no_components_needs_no_parser(
        self, make_config: Callable[..., BuildConfig]
    ) -> None:
        assert await discover_components(make_config(), None) == []

    @pytest.mark.asyncio
    async def test_unlistable_sources(
        self,
        make_config: Callable[..., BuildConfig],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        def denied(config: BuildConfig) -> list[str]:
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr("morph_core.pipeline.discovery.glob_sources", denied)

        with pytest.raises(FilesystemError) as exc_info:
            await discover_components(make_config(), json.loads)

        assert exc_info.value.path == "src/*"
        assert exc_info.value.operation == "list"


class TestDiscoverAncillary:
    """Tests for discover_ancillary."""

    @pytest.mark.asyncio
    async def test_lists_ts_and_js_files(
        self,
        sample_project: Path,
        make_config: Callable[..., BuildConfig],
        write_file: Callable[[str, str], Path],
    ) -> None:
        """Non-component .ts/.js files are ancillary; other files are ignored."""
        write_file("src/legacy.js", "module.exports = {};")

        ancillary = await discover_ancillary(make_config())

        assert ancillary == ["helpers.ts", "legacy.js", "theme.context.lite.ts"]
