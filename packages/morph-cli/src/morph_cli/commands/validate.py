"""morph validate command - Validate morph.config.yaml."""

from __future__ import annotations

from pathlib import Path

import click

from morph_cli.output import error, info, success


@click.command()
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to morph.config.yaml [default: auto-discover]",
)
def validate(config_path: str | None) -> None:
    """Validate morph.config.yaml.

    Validates the config file against the schema and checks that every
    target is supported. When a toolchain is configured, each target's
    generator is also constructed so malformed generator options are
    reported.

    Examples:

        morph validate

        morph validate --config web/morph.config.yaml
    """
    # Import here to avoid heavy imports at CLI startup
    from morph_core import Builder, TargetRegistry, load_config
    from morph_core.errors import MorphError, UnsupportedTargetError
    from morph_core.schemas.targets import output_path_segment, parse_target

    from morph_cli.errors import EXIT_USER_ERROR, CLIError, handle_morph_error

    try:
        config = load_config(Path(config_path) if config_path else None)

        unsupported: list[str] = []
        for target_id in config.targets:
            try:
                target = parse_target(target_id)
            except UnsupportedTargetError as e:
                error(str(e))
                unsupported.append(target_id)
            else:
                info(f"  {target_id} -> {config.dest}/{output_path_segment(target)}")

        if unsupported:
            raise CLIError(
                f"{len(unsupported)} unsupported target(s): {', '.join(unsupported)}",
                exit_code=EXIT_USER_ERROR,
            )

        if config.toolchain:
            contexts = TargetRegistry(Builder(config).toolchain).resolve_all(config)
            info(f"Resolved {len(contexts)} generator(s) from {config.toolchain}")
        else:
            info("No toolchain configured; generator options not checked")

    except MorphError as e:
        handle_morph_error(e)

    success("Configuration valid")
