"""Output path rules for morph.

Every output path is a pure function of the source path, the target's
native extension and the typed-output flag.
"""

from __future__ import annotations

import re

# Suffix identifying context files among ancillary files
CONTEXT_FILE_SUFFIX = ".context.lite.ts"

_TS_EXTENSION_RE = re.compile(r"\.tsx?$")


def component_output_name(path: str, component_suffix: str, extension: str) -> str:
    """Replace the component suffix with the target's native extension.

    Example:
        >>> component_output_name("button.lite.tsx", ".lite.tsx", ".vue")
        'button.vue'
    """
    if path.endswith(component_suffix):
        return path[: -len(component_suffix)] + extension
    return path


def typed_output_name(path: str, component_suffix: str) -> str:
    """Reduce the component suffix to its language extension.

    Example:
        >>> typed_output_name("button.lite.tsx", ".lite.tsx")
        'button.tsx'
    """
    language_extension = "." + component_suffix.rsplit(".", 1)[-1]
    if path.endswith(component_suffix):
        return path[: -len(component_suffix)] + language_extension
    return path


def is_context_file(path: str) -> bool:
    return path.endswith(CONTEXT_FILE_SUFFIX)


def strip_context_marker(path: str) -> str:
    """Drop the context marker from a context file path.

    Example:
        >>> strip_context_marker("theme.context.lite.ts")
        'theme.ts'
    """
    if is_context_file(path):
        return path[: -len(CONTEXT_FILE_SUFFIX)] + ".ts"
    return path


def ancillary_extension(typescript: bool) -> str:
    return ".ts" if typescript else ".js"


def ancillary_output_name(path: str, typescript: bool) -> str:
    """Give a ``.ts``/``.tsx`` ancillary path the output extension.

    ``.js`` sources keep their extension.

    Example:
        >>> ancillary_output_name("helpers/format.ts", typescript=False)
        'helpers/format.js'
    """
    return _TS_EXTENSION_RE.sub(ancillary_extension(typescript), path)
