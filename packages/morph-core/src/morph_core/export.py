"""JSON Schema export for morph.

Exports a JSON Schema Draft 2020-12 document for morph.config.yaml so
editors can autocomplete and validate it.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from morph_core.schemas import BuildConfig

SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"
SCHEMA_ID = "https://morph.dev/schemas/morph.config.schema.json"


def export_build_config_schema(
    output_path: Path | str | None = None,
) -> dict[str, Any]:
    """Export the BuildConfig JSON Schema.

    ``cwd`` is omitted: it is derived from the config file's location.

    Args:
        output_path: Optional path to write the schema file. Parent
            directories are created as needed.

    Returns:
        Dictionary containing the JSON Schema.

    Example:
        >>> schema = export_build_config_schema()
        >>> schema["$schema"]
        'https://json-schema.org/draft/2020-12/schema'
    """
    schema = BuildConfig.model_json_schema(by_alias=True)
    schema.get("properties", {}).pop("cwd", None)

    schema["$schema"] = SCHEMA_DIALECT
    schema["$id"] = SCHEMA_ID

    if "additionalProperties" not in schema:
        schema["additionalProperties"] = False

    if output_path is not None:
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(schema, indent=2))

    return schema
