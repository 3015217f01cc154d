"""morph targets command - List supported targets."""

from __future__ import annotations

import click

from morph_cli.output import print_json, print_table


@click.command()
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Output as JSON",
)
def targets(as_json: bool) -> None:
    """List supported targets.

    Shows where each target's output lands below the destination root,
    the extension of generated components and the post-processing step
    applied to them.

    Examples:

        morph targets

        morph targets --json
    """
    from rich.table import Table

    from morph_core.schemas.targets import TARGET_DEFINITIONS, Target, output_path_segment

    rows: list[dict[str, str | None]] = []
    for target in Target:
        definition = TARGET_DEFINITIONS[target]
        rows.append(
            {
                "target": target.value,
                "output_path": output_path_segment(target),
                "extension": definition.extension,
                "post_processing": definition.post_processing.value,
                "alias_of": definition.alias_of.value if definition.alias_of else None,
            }
        )

    if as_json:
        print_json(rows)
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Target", style="cyan")
    table.add_column("Output path")
    table.add_column("Extension")
    table.add_column("Post-processing")
    table.add_column("Alias of")

    for row in rows:
        table.add_row(*(value or "" for value in row.values()))

    print_table(table)
