"""Target identifiers and static target properties for morph.

This module defines the closed set of platform backends a build can emit
source for, and a lookup table mapping each of them to its output path
segment, native file extension, post-processing kind and alias.

The table is data, not control flow: aliases are explicit entries and the
table is checked for exhaustiveness when this module is imported.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from morph_core.errors import UnsupportedTargetError


class Target(str, Enum):
    """Supported output targets.

    Values match the identifiers used in ``morph.config.yaml``
    (``targets`` list and ``options`` keys).
    """

    react = "react"
    vue = "vue"
    vue2 = "vue2"
    vue3 = "vue3"
    svelte = "svelte"
    angular = "angular"
    solid = "solid"
    html = "html"
    customElement = "customElement"
    webcomponent = "webcomponent"
    qwik = "qwik"
    marko = "marko"
    preact = "preact"
    lit = "lit"
    reactNative = "reactNative"
    swift = "swift"


class PostProcessing(str, Enum):
    """Post-processing applied to generated component text."""

    none = "none"
    transpile = "transpile"
    rewrite = "rewrite"


@dataclass(frozen=True)
class TargetDefinition:
    """Static build properties of one target.

    Attributes:
        extension: Native file extension of generated components.
        post_processing: Step applied to generated component text.
        output_path: Output path segment; kebab-case of the identifier if None.
        alias_of: Canonical target this identifier stands in for.
        diagnostic: Message emitted when the alias is resolved.
        default_options: Generator options layered under the user's options.
    """

    extension: str
    post_processing: PostProcessing = PostProcessing.none
    output_path: str | None = None
    alias_of: Target | None = None
    diagnostic: str | None = None
    default_options: dict[str, Any] = field(default_factory=dict)


TARGET_DEFINITIONS: dict[Target, TargetDefinition] = {
    Target.react: TargetDefinition(".jsx", PostProcessing.transpile),
    Target.preact: TargetDefinition(".jsx", PostProcessing.transpile),
    Target.reactNative: TargetDefinition(
        ".jsx",
        PostProcessing.transpile,
        default_options={"stateType": "useState"},
    ),
    Target.solid: TargetDefinition(".jsx", PostProcessing.rewrite),
    Target.qwik: TargetDefinition(".jsx"),
    Target.vue2: TargetDefinition(".vue", output_path="vue/vue2"),
    Target.vue3: TargetDefinition(".vue", output_path="vue/vue3"),
    Target.vue: TargetDefinition(
        ".vue",
        output_path="vue/vue3",
        alias_of=Target.vue3,
        diagnostic="Targeting Vue: defaulting to vue v3",
    ),
    Target.svelte: TargetDefinition(".svelte"),
    Target.angular: TargetDefinition(".ts"),
    Target.lit: TargetDefinition(".ts"),
    Target.customElement: TargetDefinition(".ts"),
    Target.webcomponent: TargetDefinition(".ts"),
    Target.html: TargetDefinition(".html"),
    Target.marko: TargetDefinition(".marko"),
    Target.swift: TargetDefinition(".swift"),
}

_missing = set(Target) - set(TARGET_DEFINITIONS)
if _missing:
    raise RuntimeError(f"No target definition for: {sorted(t.value for t in _missing)}")
del _missing


def _kebab_case(value: str) -> str:
    return re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "-", value).lower()


def parse_target(target_id: str | Target) -> Target:
    """Convert an identifier into a Target.

    Raises:
        UnsupportedTargetError: If the identifier is not a known target.
    """
    try:
        return Target(target_id)
    except ValueError:
        raise UnsupportedTargetError(
            str(target_id), supported=[t.value for t in Target]
        ) from None


def get_definition(target: str | Target) -> TargetDefinition:
    return TARGET_DEFINITIONS[parse_target(target)]


def canonical_target(target: str | Target) -> Target:
    """Return the target an alias stands in for (or the target itself)."""
    parsed = parse_target(target)
    return TARGET_DEFINITIONS[parsed].alias_of or parsed


def output_path_segment(target: str | Target) -> str:
    """Return the output directory segment for a target.

    Example:
        >>> output_path_segment("vue2")
        'vue/vue2'
        >>> output_path_segment("reactNative")
        'react-native'
    """
    parsed = parse_target(target)
    definition = TARGET_DEFINITIONS[parsed]
    if definition.output_path is not None:
        return definition.output_path
    return _kebab_case(parsed.value)


def native_extension(target: str | Target) -> str:
    """Return the file extension generated components get for a target."""
    return get_definition(target).extension
