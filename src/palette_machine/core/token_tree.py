"""
Token document construction.

``TokenTree`` is an insert-or-get tree over ordered dicts keyed by path
segments. Leaves follow the Figma variables JSON shape::

    {"$type": "color", "$value": {...} | "{alias}", "$extensions": {...}}
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from .color_math import hex_to_components
from .token_paths import ROOT_KEY

logger = logging.getLogger(__name__)

SCOPES_KEY = "com.figma.scopes"
CODE_SYNTAX_KEY = "com.figma.codeSyntax"
VARIABLE_ID_KEY = "com.figma.variableId"
MODE_NAME_KEY = "com.figma.modeName"
TYPE_KEY = "com.figma.type"

ALL_SCOPES = ["ALL_SCOPES"]

Path = Sequence[str]


def make_extensions(
    variable_id: str | None,
    code_syntax: str | None = None,
    scopes: list[str] | None = None,
) -> dict[str, Any]:
    """Build a leaf's ``$extensions`` bag.

    The variable id is only present when one was carried over from a prior
    export.
    """
    ext: dict[str, Any] = {SCOPES_KEY: list(ALL_SCOPES if scopes is None else scopes)}
    if code_syntax is not None:
        ext[CODE_SYNTAX_KEY] = {"WEB": code_syntax}
    if variable_id:
        ext[VARIABLE_ID_KEY] = variable_id
    return ext


def color_literal(hex_str: str, alpha: float, extensions: dict[str, Any]) -> dict[str, Any]:
    """A literal color leaf; ``alpha`` is 0-1."""
    return {
        "$type": "color",
        "$value": {
            "colorSpace": "srgb",
            "components": hex_to_components(hex_str),
            "alpha": alpha,
            "hex": hex_str.upper(),
        },
        "$extensions": extensions,
    }


def color_alias(reference: str, extensions: dict[str, Any]) -> dict[str, Any]:
    """A color leaf whose value references another token, e.g. ``{--gray-500}``."""
    return {"$type": "color", "$value": reference, "$extensions": extensions}


def string_leaf(value: str, extensions: dict[str, Any]) -> dict[str, Any]:
    ext = {TYPE_KEY: "string", **extensions}
    return {"$type": "string", "$value": value, "$extensions": ext}


def is_leaf(node: Any) -> bool:
    return isinstance(node, dict) and "$type" in node


def alpha_fraction(alpha: int) -> float:
    """Percent to the 0-1 value stored in literals (integers stay integers)."""
    return 1 if alpha == 100 else alpha / 100


class TokenTree:
    """Ordered tree builder for token documents."""

    def __init__(self) -> None:
        self._root: dict[str, Any] = {}

    def group(self, path: Path) -> dict[str, Any]:
        """Return the group at ``path``, creating missing groups on the way.

        A leaf found on the way is folded into ``{"$root": leaf}`` so it can
        gain children.
        """
        node = self._root
        for segment in path:
            child = node.get(segment)
            if child is None:
                child = node[segment] = {}
            elif is_leaf(child):
                child = node[segment] = {ROOT_KEY: child}
            node = child
        return node

    def put(self, path: Path, leaf: dict[str, Any]) -> None:
        """Place a leaf at ``path``.

        When a group already occupies the slot the leaf becomes its ``$root``.
        An existing leaf is replaced, with a warning.
        """
        *parents, key = path
        parent = self.group(parents)
        existing = parent.get(key)
        if isinstance(existing, dict) and not is_leaf(existing):
            existing[ROOT_KEY] = leaf
            return
        if existing is not None:
            logger.warning(f"Variable {'/'.join(path)} is emitted twice; keeping the later value")
        parent[key] = leaf

    def put_alpha(self, shade_path: Path, alpha: int, leaf: dict[str, Any]) -> None:
        """Add an alpha child under a shade, folding the shade leaf into ``$root``."""
        self.group(shade_path)[str(alpha)] = leaf

    def set_extension(self, key: str, value: Any) -> None:
        self._root.setdefault("$extensions", {})[key] = value

    def to_dict(self) -> dict[str, Any]:
        return self._root


def count_tokens(document: dict[str, Any]) -> int:
    """Number of color and string variables in a document, ``$root`` leaves included."""
    count = 0
    for key, value in document.items():
        if key.startswith("$") and key != ROOT_KEY:
            continue
        if not isinstance(value, dict):
            continue
        if value.get("$type") in ("color", "string"):
            count += 1
        else:
            count += count_tokens(value)
    return count
