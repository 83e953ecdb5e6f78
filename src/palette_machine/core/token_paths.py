"""
Token path semantics.

A numeric path segment means different things depending on where it sits:
directly under a color name it is an alpha percentage (``primary/15``), under
the shade group it is a shade (``primary/shade/500``). ``classify_numeric_key``
is the single place that decides, and both the document analyzer and the
code-syntax translation consume its result.
"""

from __future__ import annotations

import re

from .ir.analysis import AlphaRef, NumericRef, ShadeRef
from .ir.palettespec import ForegroundPosition, NamingConfig

LEGACY_SHADE_GROUP = "step"
ROOT_KEY = "$root"

_NUMERIC_RE = re.compile(r"^\d+$")


def is_numeric_key(key: str) -> bool:
    return bool(_NUMERIC_RE.match(key))


def classify_numeric_key(key: str, parent: str | None, shade_group: str = "shade") -> NumericRef | None:
    """Classify a numeric key by structural position.

    Args:
        key: Path segment to classify.
        parent: The segment directly above ``key`` (None at the top level).
        shade_group: Configured shade group name.

    Returns:
        ShadeRef under the shade group or the legacy ``step`` group, AlphaRef
        for a number in 0-100 anywhere else, None for non-numeric keys and for
        bare numbers that cannot be alphas.
    """
    if not is_numeric_key(key):
        return None
    if parent is not None and parent in {shade_group, LEGACY_SHADE_GROUP} and parent:
        return ShadeRef(key)
    if int(key) <= 100:
        return AlphaRef(int(key))
    return None


def to_code_syntax(path: str, naming: NamingConfig) -> str:
    """Translate a Figma variable path into its code-syntax name.

    ``primary/shade/500`` -> ``primary-500``
    ``on/primary/shade/500/60`` -> ``on-primary-500/60``
    ``on/primary/15`` -> ``on-primary/15``

    The shade group segment is dropped and the shade joins with a dash; any
    alpha joins with a slash. In suffix position the foreground marker goes
    after the name and shade, before any alpha.
    """
    parts = [p for p in path.split("/") if p]
    shade_group = naming.shade_group_name
    fg_segment = naming.on_group_name
    fg_syntax = naming.foreground_syntax
    suffix_mode = naming.foreground_position == ForegroundPosition.SUFFIX

    name = ""
    alpha = ""
    foreground = False
    parent: str | None = None

    for part in parts:
        if part == fg_segment and not name and not foreground:
            foreground = True
            parent = part
            continue
        if part == shade_group and shade_group:
            parent = part
            continue

        ref = classify_numeric_key(part, parent, shade_group) if name else None
        if isinstance(ref, ShadeRef):
            name += f"-{part}"
            # The next number after a shade is always an alpha.
            parent = None
        elif isinstance(ref, AlphaRef):
            alpha = f"/{part}"
        else:
            name = f"{name}-{part}" if name else part
            parent = part

    if foreground:
        if suffix_mode:
            name = f"{name}{fg_syntax}"
        else:
            name = f"{fg_syntax}{name}"
    return f"{name}{alpha}"
