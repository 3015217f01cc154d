"""morph schema command - Export JSON Schema."""

from __future__ import annotations

import click

from morph_cli.output import success


@click.group()
def schema() -> None:
    """Manage JSON Schema for IDE support.

    **Commands:**

    - `morph schema export` - Export the morph.config.yaml JSON Schema
    """
    pass


@schema.command("export")
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(dir_okay=False),
    default="./schemas/morph.config.schema.json",
    help="Output path [default: ./schemas/morph.config.schema.json]",
)
def export_schema(output_path: str) -> None:
    """Export the morph.config.yaml JSON Schema.

    Examples:

        morph schema export

        morph schema export --output .vscode/morph.schema.json
    """
    # Import here to avoid heavy imports at CLI startup
    from morph_core import export_build_config_schema

    from morph_cli.errors import handle_permission_error

    try:
        export_build_config_schema(output_path)
    except PermissionError:
        handle_permission_error(output_path, "write to")

    success(f"Schema exported to {output_path}")
