"""
Analysis of previously exported Figma variables documents.

Two flavors are recognized:

- Semantic (light/dark theme) documents: grounds, stark, black/white,
  intents, primitive hues and the ``on`` foreground subtree.
- Palette documents: flat ``--hue-shade`` keys, or the older nested
  ``hue/shade`` layout.

Analysis never raises. Unreadable input produces a result whose ``error``
field is set and whose other fields are empty.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterable
from typing import Any

from .errors import DocumentParseError
from .ir.analysis import AlphaRef, ColorGroupAnalysis, PaletteAnalysis, SemanticAnalysis, ShadeRef
from .ir.palettespec import DEFAULT_INTENTS
from .token_paths import LEGACY_SHADE_GROUP, classify_numeric_key, is_numeric_key

logger = logging.getLogger(__name__)

GROUND_KEYS = ("ground", "ground1", "ground2")
UTILITY_KEYS = ("stark", "black", "white")
NEUTRAL_KEY = "neutral"
ON_KEY = "on"

_FLAT_PALETTE_RE = re.compile(r"^--([a-zA-Z]+)-(\d+)$")


def parse_document(text: str) -> dict[str, Any]:
    """Parse a token document, requiring an object at the root.

    Raises:
        DocumentParseError: If the text is not JSON or the root is not an object.
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        raise DocumentParseError(f"Invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise DocumentParseError(f"Expected a JSON object at the root, got {type(data).__name__}")
    return data


def _visible_keys(node: dict[str, Any]) -> list[str]:
    return [key for key in node if not key.startswith("$")]


def _numeric_children(node: Any) -> list[int]:
    if not isinstance(node, dict):
        return []
    return sorted({int(key) for key in _visible_keys(node) if is_numeric_key(key)})


def _shade_sort_key(shade: str) -> tuple[int, float, str]:
    if is_numeric_key(shade):
        return (0, int(shade), shade)
    return (1, 0, shade)


def _sorted_shades(shades: Iterable[str]) -> list[str]:
    return sorted(set(shades), key=_shade_sort_key)


def _analyze_color_group(name: str, node: dict[str, Any], shade_group: str) -> ColorGroupAnalysis | None:
    """Classify one intent or hue group, or None if it holds no colors."""
    shades: list[str] = []
    shade_alphas: dict[str, list[int]] = {}
    intent_alphas: list[int] = []

    for key in _visible_keys(node):
        ref = classify_numeric_key(key, name, shade_group)
        if isinstance(ref, AlphaRef):
            intent_alphas.append(ref.value)
        elif is_numeric_key(key):
            # Flat layout: a shade directly under the name (primary/500)
            shades.append(key)

    for group_name in dict.fromkeys(g for g in (shade_group, LEGACY_SHADE_GROUP) if g):
        group = node.get(group_name)
        if not isinstance(group, dict):
            continue
        for key in _visible_keys(group):
            ref = classify_numeric_key(key, group_name, shade_group)
            if not isinstance(ref, ShadeRef):
                continue
            shades.append(ref.value)
            child = group[key]
            if isinstance(child, dict) and child.get("$type") != "color":
                shade_alphas[ref.value] = _numeric_children(child)

    if not shades and not intent_alphas:
        return None

    return ColorGroupAnalysis(
        name=name,
        shades=_sorted_shades(shades),
        alphas=shade_alphas,
        intent_alphas=sorted(set(intent_alphas)),
    )


def analyze_semantic_file(
    text: str,
    exclusion_pattern: str = "#",
    *,
    shade_group: str = "shade",
    intent_names: Iterable[str] | None = None,
) -> SemanticAnalysis:
    """Classify a light/dark theme document.

    Args:
        text: Raw JSON text of the document.
        exclusion_pattern: Top-level keys starting with this marker are
            reported as excluded and not analyzed further.
        shade_group: Name of the shade subgroup.
        intent_names: Group names treated as intents (defaults to primary,
            danger, warning, success and neutral).

    Returns:
        SemanticAnalysis; check ``error`` before using the other fields.
    """
    try:
        data = parse_document(text)
    except DocumentParseError as e:
        logger.debug(f"Semantic document not analyzable: {e.message}")
        return SemanticAnalysis(error=e.message)

    intents = set(DEFAULT_INTENTS if intent_names is None else intent_names)
    result = SemanticAnalysis(raw=data)

    for key, value in data.items():
        if key.startswith("$"):
            continue
        if exclusion_pattern and key.startswith(exclusion_pattern):
            result.excluded.append(key)
            continue
        if not isinstance(value, dict):
            continue

        if key in GROUND_KEYS:
            result.grounds.append(key)
            result.alphas[key] = _numeric_children(value)
            continue
        if key in UTILITY_KEYS:
            result.alphas[key] = _numeric_children(value)
            continue
        if key == ON_KEY:
            continue
        if key.startswith(f"{ON_KEY}-"):
            # Older exports: on-<name> at the top level
            result.alphas[key] = _numeric_children(value)
            continue
        if key == NEUTRAL_KEY:
            result.alphas[key] = _numeric_children(value)

        group = _analyze_color_group(key, value, shade_group)
        if group is None:
            continue
        if key in intents:
            result.intents.append(group)
        else:
            result.hues.append(group)

    on_tree = data.get(ON_KEY)
    if isinstance(on_tree, dict):
        for child in _visible_keys(on_tree):
            result.alphas[f"on-{child}"] = _numeric_children(on_tree[child])

    return result


def analyze_palette_file(text: str) -> PaletteAnalysis:
    """Find hues and shades in a palette document.

    Flat keys look like ``--blue-500``; the nested layout is ``{"blue": {"500": ...}}``.
    Shades are sorted numerically.
    """
    try:
        data = parse_document(text)
    except DocumentParseError as e:
        logger.debug(f"Palette document not analyzable: {e.message}")
        return PaletteAnalysis(error=e.message)

    hues: dict[str, None] = {}
    shades: set[str] = set()
    count = 0

    for key, value in data.items():
        if key.startswith("$"):
            continue
        if key.startswith("--"):
            match = _FLAT_PALETTE_RE.match(key)
            if match:
                hues[match.group(1)] = None
                shades.add(match.group(2))
                count += 1
            continue
        if isinstance(value, dict):
            hues[key] = None
            for shade in _visible_keys(value):
                shades.add(shade)
                count += 1

    return PaletteAnalysis(
        hues=list(hues),
        shades=_sorted_shades(shades),
        color_count=count,
        raw=data,
    )
