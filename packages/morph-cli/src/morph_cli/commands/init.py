"""morph init command - Scaffold morph.config.yaml."""

from __future__ import annotations

from pathlib import Path

import click

from morph_cli.output import error, success, warning

CONFIG_TEMPLATE = """\
# morph build configuration
# yaml-language-server: $schema=./schemas/morph.config.schema.json

targets:
{% for target in targets %}
  - {{ target }}
{% endfor %}

# Destination root; each target writes below {{ dest }}/<target path>
dest: {{ dest }}

# Source files; components end with .{{ extension }}, other .ts/.js files
# are copied to every target with imports rewritten
files: "{{ files }}"
extension: {{ extension }}

# Hand-written files in {{ overrides_dir }}/<target path>/ replace generated ones
overridesDir: {{ overrides_dir }}

# Dotted import path of the toolchain providing the parser and generators
# toolchain: my_project.morph_toolchain:toolchain

options:
{% for target in targets %}
  {{ target }}:
    typescript: {{ "true" if typescript else "false" }}
{% endfor %}
"""

OVERRIDES_README_TEMPLATE = """\
# Overrides

Files here replace generated output verbatim. Place a file at the path it
would be written to below `{{ dest }}/`, for example:

{% for target, segment, extension in examples %}
- `{{ overrides_dir }}/{{ segment }}/button{{ extension }}` replaces `{{ dest }}/{{ segment }}/button{{ extension }}` ({{ target }})
{% endfor %}

Override contents are not validated.
"""


@click.command()
@click.option(
    "-t",
    "--target",
    "targets",
    multiple=True,
    default=("react", "vue3"),
    show_default=True,
    help="Target to configure, repeatable",
)
@click.option(
    "--typescript",
    is_flag=True,
    default=False,
    help="Emit typed output for every configured target",
)
@click.option(
    "--force",
    is_flag=True,
    default=False,
    help="Overwrite existing files",
)
def init(targets: tuple[str, ...], typescript: bool, force: bool) -> None:
    """Scaffold morph.config.yaml in the current directory.

    Creates the config file and an overrides/ directory with a README
    describing how overrides map onto output paths.

    Examples:

        morph init

        morph init --target react --target svelte --typescript

        morph init --force
    """
    from jinja2.sandbox import SandboxedEnvironment

    from morph_core.errors import UnsupportedTargetError
    from morph_core.schemas.build_config import (
        DEFAULT_DEST,
        DEFAULT_EXTENSION,
        DEFAULT_FILES,
        DEFAULT_OVERRIDES_DIR,
    )
    from morph_core.schemas.targets import native_extension, output_path_segment, parse_target

    from morph_cli.errors import CLIError, handle_permission_error

    config_path = Path("morph.config.yaml")
    existed = config_path.exists()
    if existed and not force:
        raise CLIError("morph.config.yaml already exists.\nUse --force to overwrite.")

    try:
        parsed = [parse_target(target) for target in targets]
    except UnsupportedTargetError as e:
        error(str(e))
        raise SystemExit(1) from None

    env = SandboxedEnvironment(trim_blocks=True, lstrip_blocks=True)
    context = {
        "targets": [target.value for target in parsed],
        "typescript": typescript,
        "dest": DEFAULT_DEST,
        "files": DEFAULT_FILES,
        "extension": DEFAULT_EXTENSION,
        "overrides_dir": DEFAULT_OVERRIDES_DIR,
        "examples": [
            (target.value, output_path_segment(target), native_extension(target))
            for target in parsed
        ],
    }

    try:
        config_path.write_text(env.from_string(CONFIG_TEMPLATE).render(**context))

        readme_path = Path(DEFAULT_OVERRIDES_DIR) / "README.md"
        if not readme_path.exists() or force:
            readme_path.parent.mkdir(parents=True, exist_ok=True)
            readme_path.write_text(env.from_string(OVERRIDES_README_TEMPLATE).render(**context))

    except PermissionError:
        handle_permission_error(str(Path.cwd()), "write to")

    if existed:
        warning("Overwrote existing morph.config.yaml")

    success(f"Created morph.config.yaml for {', '.join(context['targets'])}")
