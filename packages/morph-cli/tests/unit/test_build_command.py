"""Tests for the morph build command."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

from click.testing import CliRunner

from morph_cli.commands.build import build


def config_text(toolchain: str | None, *lines: str) -> str:
    text = "\n".join(lines) + "\n"
    if toolchain is not None:
        text += f"toolchain: {toolchain}\n"
    return text


class TestBuildCommand:
    """Tests for successful builds."""

    def test_build_writes_every_target(
        self,
        cli_runner: CliRunner,
        create_project: Callable[..., Path],
        toolchain_path: str,
    ) -> None:
        """Test a build of two targets, one of them typed."""
        config = create_project(
            config_text(
                toolchain_path,
                "targets: [react, vue3]",
                "options:",
                "  vue3:",
                "    typescript: true",
            )
        )

        result = cli_runner.invoke(build, ["--config", str(config)])

        assert result.exit_code == 0, result.output
        output = config.parent / "output"
        assert (output / "react/button.jsx").read_text() == "<react>Button</react>"
        assert (output / "vue/vue3/card.vue").read_text() == "<vue3>Card</vue3>"
        assert (output / "vue/vue3/card.tsx").exists()
        assert (output / "react/helpers.js").exists()
        assert (output / "vue/vue3/helpers.ts").exists()
        assert "Built 2 target(s)" in result.output

    def test_target_option_replaces_configured_targets(
        self,
        cli_runner: CliRunner,
        create_project: Callable[..., Path],
        toolchain_path: str,
    ) -> None:
        """Test that --target replaces the targets from the config file."""
        config = create_project(config_text(toolchain_path, "targets: [react]"))

        result = cli_runner.invoke(build, ["-c", str(config), "-t", "svelte"])

        assert result.exit_code == 0, result.output
        output = config.parent / "output"
        assert (output / "svelte/button.svelte").exists()
        assert not (output / "react").exists()

    def test_dest_and_toolchain_options(
        self,
        cli_runner: CliRunner,
        create_project: Callable[..., Path],
        toolchain_path: str,
    ) -> None:
        """Test that --dest and --toolchain override the config file."""
        config = create_project(config_text(None, "targets: [react]"))

        result = cli_runner.invoke(
            build,
            ["-c", str(config), "--dest", "dist", "--toolchain", toolchain_path],
        )

        assert result.exit_code == 0, result.output
        assert (config.parent / "dist/react/button.jsx").exists()

    def test_json_report(
        self,
        cli_runner: CliRunner,
        create_project: Callable[..., Path],
        toolchain_path: str,
    ) -> None:
        """Test that --json prints the build report."""
        config = create_project(config_text(toolchain_path, "targets: [svelte]"))

        result = cli_runner.invoke(build, ["-c", str(config), "--json"])

        assert result.exit_code == 0, result.output
        assert '"written"' in result.output
        assert '"svelte/button.svelte"' in result.output

    def test_alias_diagnostic_is_shown(
        self,
        cli_runner: CliRunner,
        create_project: Callable[..., Path],
        toolchain_path: str,
    ) -> None:
        """Test that resolving the vue alias prints a warning."""
        config = create_project(config_text(toolchain_path, "targets: [vue]"))

        result = cli_runner.invoke(build, ["-c", str(config)])

        assert result.exit_code == 0, result.output
        assert "defaulting to vue v3" in result.output
        assert (config.parent / "output/vue/vue3/button.vue").exists()

    def test_no_targets(
        self,
        cli_runner: CliRunner,
        create_project: Callable[..., Path],
    ) -> None:
        """Test that an empty target list is not an error."""
        config = create_project("targets: []\n")

        result = cli_runner.invoke(build, ["-c", str(config)])

        assert result.exit_code == 0
        assert "nothing to build" in result.output.lower()
        assert not (config.parent / "output").exists()


class TestBuildErrors:
    """Tests for build failures and exit codes."""

    def test_missing_config(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        """Test that a missing config file exits with 2."""
        result = cli_runner.invoke(build, ["-c", str(tmp_path / "missing.yaml")])

        assert result.exit_code == 2
        assert "not found" in result.output.lower()

    def test_no_config_discovered(self, isolated_runner: CliRunner) -> None:
        result = isolated_runner.invoke(build)

        assert result.exit_code == 2
        assert "morph init" in result.output

    def test_unsupported_target(
        self,
        cli_runner: CliRunner,
        create_project: Callable[..., Path],
        toolchain_path: str,
    ) -> None:
        """Test that an unknown target exits with 1 before writing output."""
        config = create_project(config_text(toolchain_path, "targets: [react, flutter]"))

        result = cli_runner.invoke(build, ["-c", str(config)])

        assert result.exit_code == 1
        assert "Unsupported target" in result.output
        assert not (config.parent / "output").exists()

    def test_generation_failure(
        self,
        cli_runner: CliRunner,
        create_project: Callable[..., Path],
        toolchain_path: str,
    ) -> None:
        """Test that a failing component fails the build but not its siblings."""
        config = create_project(config_text(toolchain_path, "targets: [react]"), fail="Card")

        result = cli_runner.invoke(build, ["-c", str(config)])

        assert result.exit_code == 1
        assert "Build failed" in result.output
        assert "card.lite.tsx" in result.output
        assert (config.parent / "output/react/button.jsx").exists()

    def test_missing_toolchain(
        self,
        cli_runner: CliRunner,
        create_project: Callable[..., Path],
    ) -> None:
        """Test that building without generators is a configuration error."""
        config = create_project("targets: [react]\nparser: json.loads\n")

        result = cli_runner.invoke(build, ["-c", str(config)])

        assert result.exit_code == 1
        assert "No generator registered" in result.output

    def test_invalid_generator_options(
        self,
        cli_runner: CliRunner,
        create_project: Callable[..., Path],
        toolchain_path: str,
    ) -> None:
        config = create_project(
            config_text(
                toolchain_path,
                "targets: [svelte]",
                "options:",
                "  svelte:",
                "    broken: true",
            )
        )

        result = cli_runner.invoke(build, ["-c", str(config)])

        assert result.exit_code == 1
        assert "Invalid options" in result.output

    def test_invalid_config(
        self,
        cli_runner: CliRunner,
        create_project: Callable[..., Path],
    ) -> None:
        config = create_project("targets: react\n")

        result = cli_runner.invoke(build, ["-c", str(config)])

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output


def test_report_json_is_valid(
    cli_runner: CliRunner,
    create_project: Callable[..., Path],
    toolchain_path: str,
) -> None:
    """The JSON report block parses as JSON."""
    config = create_project(config_text(toolchain_path, "targets: [react]"))

    result = cli_runner.invoke(build, ["-c", str(config), "--json"])

    start = result.output.index("{")
    end = result.output.rindex("}") + 1
    report = json.loads(result.output[start:end])
    assert report["targets"] == ["react"]
    assert report["components"] == 2
