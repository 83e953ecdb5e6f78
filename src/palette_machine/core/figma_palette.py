"""
Palette flavor of the Figma variables export.

Every (hue, shade) cell becomes a flat literal ``--{hue}-{shade}``, with
optional alpha variants ``--{hue}-{shade}/{alpha}``. Variable identifiers are
carried over from the prior palette export at the migrated coordinate.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .alphas import parse_alpha_string
from .ir.palette import Palette
from .ir.palettespec import ColorProfile, FigmaExportSpec
from .migration import (
    PriorDocument,
    file_hue_for,
    palette_alpha_candidates,
    palette_candidates,
    resolve_source,
)
from .token_tree import MODE_NAME_KEY, TokenTree, alpha_fraction, color_literal, make_extensions

logger = logging.getLogger(__name__)

PALETTE_MODE_NAME = "palette"


def palette_token_name(hue: str, shade: str, alpha: int | None = None) -> str:
    name = f"--{hue}-{shade}"
    return f"{name}/{alpha}" if alpha is not None else name


def build_palette_document(
    palette: Palette,
    figma: FigmaExportSpec,
    prior: PriorDocument | None = None,
    shade_map: Mapping[str, str] | None = None,
    hue_mapping: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Build the palette document.

    Args:
        palette: Generated color grid.
        figma: Export configuration (profile, scopes, primitive alphas).
        prior: Previously exported palette document, if any.
        shade_map: Palette shade -> shade in the prior document, or ``"new"``.
        hue_mapping: Prior file hue -> palette hue.

    Returns:
        Token document as a plain dict.
    """
    prior = prior or PriorDocument()
    use_p3 = figma.color_profile == ColorProfile.P3
    tree = TokenTree()
    carried = 0

    for row in palette:
        file_hue = file_hue_for(hue_mapping, row.name)
        for cell in row.colors:
            hex_value = cell.hex_for(use_p3)
            source = resolve_source(shade_map, cell.stop)

            variable_id = None
            if source is not None and prior:
                variable_id = prior.variable_id(palette_candidates(file_hue, source))
            if variable_id:
                carried += 1

            tree.put(
                [palette_token_name(row.name, cell.stop)],
                color_literal(hex_value, 1, make_extensions(variable_id, scopes=figma.palette_scopes)),
            )

            for alpha in parse_alpha_string(figma.alphas.primitive_shades.get(cell.stop, "")):
                alpha_id = None
                if source is not None and prior:
                    alpha_id = prior.variable_id(palette_alpha_candidates(file_hue, source, alpha))
                tree.put(
                    [palette_token_name(row.name, cell.stop, alpha)],
                    color_literal(
                        hex_value,
                        alpha_fraction(alpha),
                        make_extensions(alpha_id, scopes=figma.palette_scopes),
                    ),
                )

    if prior:
        logger.debug(f"Palette export carried over {carried} variable ids")
    tree.set_extension(MODE_NAME_KEY, PALETTE_MODE_NAME)
    return tree.to_dict()
