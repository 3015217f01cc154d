"""Tests for the morph targets command."""

from __future__ import annotations

import json

from click.testing import CliRunner

from morph_cli.commands.targets import targets


class TestTargetsCommand:
    """Tests for targets command."""

    def test_table_lists_targets(self, cli_runner: CliRunner) -> None:
        """Test that the table shows identifiers and output paths."""
        result = cli_runner.invoke(targets)

        assert result.exit_code == 0
        assert "reactNative" in result.output
        assert "react-native" in result.output
        assert "vue/vue2" in result.output

    def test_json_output(self, cli_runner: CliRunner) -> None:
        """Test that --json lists every target with its properties."""
        result = cli_runner.invoke(targets, ["--json"])

        assert result.exit_code == 0
        rows = {row["target"]: row for row in json.loads(result.output)}
        assert len(rows) == 16
        assert rows["vue"] == {
            "target": "vue",
            "output_path": "vue/vue3",
            "extension": ".vue",
            "post_processing": "none",
            "alias_of": "vue3",
        }
        assert rows["solid"]["post_processing"] == "rewrite"
        assert rows["react"]["alias_of"] is None
