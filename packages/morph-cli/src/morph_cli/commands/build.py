"""morph build command - Generate every configured target."""

from __future__ import annotations

import asyncio
from pathlib import Path

import click

from morph_cli.output import info, print_json, success, warning


@click.command("build")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to morph.config.yaml [default: auto-discover]",
)
@click.option(
    "-t",
    "--target",
    "targets",
    multiple=True,
    help="Target to build, repeatable. Replaces the configured targets.",
)
@click.option(
    "--dest",
    type=str,
    default=None,
    help="Destination root, relative to the config file's directory",
)
@click.option(
    "--toolchain",
    type=str,
    default=None,
    help="Dotted import path of the toolchain (module.attr or module:attr)",
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Print the build report as JSON",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    default=False,
    help="Enable debug logging",
)
def build(
    config_path: str | None,
    targets: tuple[str, ...],
    dest: str | None,
    toolchain: str | None,
    as_json: bool,
    verbose: bool,
) -> None:
    """Build every target from the component sources.

    Cleans stale output, parses every component once and writes one source
    tree per target below the destination root.

    Examples:

        morph build

        morph build --target react --target vue3

        morph build --config web/morph.config.yaml --toolchain my_toolchain:toolchain
    """
    # Import here to avoid heavy imports at CLI startup
    from morph_core import build as run_build
    from morph_core import load_config
    from morph_core.errors import MorphError
    from morph_core.observability import configure_logging

    from morph_cli.errors import handle_morph_error, handle_permission_error

    configure_logging(log_level="DEBUG" if verbose else "WARNING")

    try:
        config = load_config(
            Path(config_path) if config_path else None,
            targets=list(targets) or None,
            dest=dest,
            toolchain=toolchain,
        )
        if not config.targets:
            warning("No targets configured; nothing to build")
            return

        info(f"Building {', '.join(config.targets)} from {config.files}")
        report = asyncio.run(run_build(config))

    except MorphError as e:
        handle_morph_error(e)

    except PermissionError as e:
        handle_permission_error(str(e.filename or config_path or "."), "write")

    for diagnostic in report.diagnostics:
        warning(diagnostic)

    if as_json:
        print_json(report.model_dump(mode="json"))

    success(
        f"Built {len(report.targets)} target(s): "
        f"{len(report.written)} file(s) written to {config.dest_path}"
    )
