"""
Semantic (light/dark) flavor of the Figma variables export.

Document layout, in emission order::

    mode_name                     string, the mode itself
    ground, ground1, ground2      alpha ramp + $root (alias or literal)
    on/ground                     on-ground alpha ramp
    stark/shade/N, stark/A        mode ramp + alphas + $root alias
    on/stark/shade/N, on/stark/A  opposite mode ramp + alphas
    black/A, white/A              literal alpha ramps + $root
    <intent>, <hue>               root alphas, shade aliases into the palette,
                                  per-shade alphas, on-colors, $root alias

The ``shade`` and ``on`` segments come from the naming configuration. With
``reverse_in_dark`` the dark document points each shade at its mirror in the
stop order while keeping the key, so ``primary/shade/100`` resolves to
``--blue-900``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from .alphas import parse_alpha_string
from .color_math import is_hex_color, oklch_to_hex, parse_oklch
from .contrast import BLACK, WHITE, best_on_color
from .ir.palette import HueColors, Palette
from .ir.palettespec import (
    ColorMode,
    ColorProfile,
    FigmaExportSpec,
    GroundRefType,
    GroundSpec,
    OnGroundRefType,
)
from .migration import (
    Candidate,
    PriorDocument,
    foreground_bases,
    resolve_source,
    root_candidates,
    shade_alpha_candidates,
    shade_candidates,
    under,
)
from .token_paths import ROOT_KEY, to_code_syntax
from .token_tree import (
    MODE_NAME_KEY,
    TokenTree,
    alpha_fraction,
    color_alias,
    color_literal,
    make_extensions,
    string_leaf,
)

logger = logging.getLogger(__name__)

MODE_NAME_TOKEN = "mode_name"
CUSTOM_GROUND_FALLBACK = "#000000"
STARK_FALLBACK = "#808080"
FALLBACK_STARK_SHADE = "1000"
# Stands in for an empty shade group when deriving code syntax
FLAT_CODE_SHADE_GROUP = "shade"

Path = tuple[str, ...]


def literal_hex(value: str | None, fallback: str | None) -> str | None:
    """Hex for a custom ``oklch()`` or hex literal, or ``fallback`` if it is neither."""
    if value:
        parsed = parse_oklch(value)
        if parsed is not None:
            return oklch_to_hex(*parsed)
        if is_hex_color(value):
            return value if value.startswith("#") else f"#{value}"
    return fallback


@dataclass(frozen=True)
class _ResolvedColor:
    """A color to emit: literal hex, plus an alias for the opaque case."""

    hex: str
    reference: str | None = None


class SemanticDocumentBuilder:
    """Builds one light or dark semantic document."""

    def __init__(
        self,
        mode: ColorMode | str,
        palette: Palette,
        figma: FigmaExportSpec,
        prior: PriorDocument | None = None,
        theme_shade_map: Mapping[str, str] | None = None,
    ):
        self.mode = ColorMode(mode)
        self.palette = palette
        self.figma = figma
        self.prior = prior or PriorDocument()
        self.theme_shade_map = theme_shade_map
        self.naming = figma.naming
        self.shade_group = figma.naming.shade_group_name
        self.code_naming = (
            self.naming
            if self.shade_group
            else self.naming.model_copy(update={"shade_group_name": FLAT_CODE_SHADE_GROUP})
        )
        self.use_p3 = figma.color_profile == ColorProfile.P3
        self.reverse = figma.reverse_in_dark and self.mode == ColorMode.DARK
        self.tree = TokenTree()

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _extensions(
        self,
        path: Sequence[str],
        candidates: Sequence[Candidate],
        code_path: Sequence[str] | None = None,
    ) -> dict[str, Any]:
        variable_id = self.prior.variable_id(candidates) if self.prior and candidates else None
        segments = path if code_path is None else code_path
        code = "/".join(segment for segment in segments if segment != ROOT_KEY)
        return make_extensions(variable_id, to_code_syntax(code, self.code_naming))

    def _literal(
        self,
        path: Sequence[str],
        hex_value: str,
        alpha: int,
        candidates: Sequence[Candidate],
        code_path: Sequence[str] | None = None,
    ) -> dict[str, Any]:
        extensions = self._extensions(path, candidates, code_path)
        return color_literal(hex_value, alpha_fraction(alpha), extensions)

    def _alias(
        self,
        path: Sequence[str],
        reference: str,
        candidates: Sequence[Candidate],
        code_path: Sequence[str] | None = None,
    ) -> dict[str, Any]:
        return color_alias(reference, self._extensions(path, candidates, code_path))

    def _shade_path(self, base: Sequence[str], shade: str) -> Path:
        if self.shade_group:
            return (*base, self.shade_group, shade)
        return (*base, shade)

    def _code_shade_path(self, base: Sequence[str], shade: str) -> Path:
        """Shade path for code syntax; flat shades still read as shades."""
        return (*base, self.code_naming.shade_group_name, shade)

    def _shade_container(self, base: Sequence[str]) -> Path:
        return (*base, self.shade_group) if self.shade_group else tuple(base)

    def _group_reference(self, name: str, shade: str) -> str:
        if self.shade_group:
            return f"{{{name}.{self.shade_group}.{shade}}}"
        return f"{{{name}.{shade}}}"

    def _foreground_base(self, name: str) -> Path:
        if self.naming.on_nested:
            return (self.naming.on_group_name, name)
        return (f"{self.naming.foreground_modifier}{name}",)

    def _palette_shade(self, shade: str) -> str:
        """Shade a key points at: itself, or its mirror when reversing."""
        return self.palette.mirror_stop(shade) if self.reverse else shade

    def _hex(self, hue: str, shade: str) -> str:
        cell = self.palette.cell(hue, shade)
        if cell is None:
            logger.debug(f"No palette cell {hue}/{shade}; using black")
            return BLACK
        return cell.hex_for(self.use_p3)

    def _source(self, shade: str) -> str | None:
        """Prior shade for a key. Under dark reversal this follows the emitted key, not its mirror."""
        return resolve_source(self.theme_shade_map, shade)

    # -------------------------------------------------------------------------
    # Sections
    # -------------------------------------------------------------------------

    def _mode_name(self) -> None:
        path = (MODE_NAME_TOKEN,)
        self.tree.put(path, string_leaf(self.mode.value, self._extensions(path, [path])))

    def _resolve_ground(self, key: str) -> _ResolvedColor:
        ground = self.figma.grounds.for_mode(self.mode).get(key, GroundSpec())

        if ground.ref_type == GroundRefType.CUSTOM:
            hex_value = literal_hex(ground.custom, None)
            if hex_value is None:
                logger.warning(f"Unreadable custom {key} color {ground.custom!r}; using {CUSTOM_GROUND_FALLBACK}")
                hex_value = CUSTOM_GROUND_FALLBACK
            return _ResolvedColor(hex_value)

        if ground.ref_type == GroundRefType.THEME:
            neutral_hue = self.figma.intents.get("neutral", "gray")
            # The alias lands on a neutral shade entry, which is itself reversed in dark
            return _ResolvedColor(
                self._hex(neutral_hue, self._palette_shade(ground.shade)),
                self._group_reference("neutral", ground.shade),
            )

        hue = self.figma.grounds.primitive_hue
        return _ResolvedColor(self._hex(hue, ground.shade), f"{{--{hue}-{ground.shade}}}")

    def _grounds(self) -> None:
        ground_alphas = parse_alpha_string(self.figma.alphas.ground)
        for key, name in self.naming.elevations.items():
            color = self._resolve_ground(key)
            for alpha in ground_alphas:
                path = (name, str(alpha))
                if color.reference and alpha == 100:
                    self.tree.put(path, self._alias(path, color.reference, [path]))
                else:
                    self.tree.put(path, self._literal(path, color.hex, alpha, [path]))

            root = (name, ROOT_KEY)
            candidates = root_candidates((name,))
            if color.reference:
                self.tree.put(root, self._alias(root, color.reference, candidates))
            else:
                self.tree.put(root, self._literal(root, color.hex, 100, candidates))

    def _resolve_on_ground(self) -> _ResolvedColor:
        spec = self.figma.on_ground.for_mode(self.mode)

        if spec.ref_type == OnGroundRefType.PRIMITIVE:
            shade = spec.shade or ("1000" if self.mode == ColorMode.LIGHT else "0")
            cell = self.palette.cell(spec.hue, shade)
            if cell is not None:
                return _ResolvedColor(cell.hex_for(self.use_p3), f"{{--{spec.hue}-{shade}}}")
            logger.warning(f"On-ground color {spec.hue}/{shade} is not in the palette; choosing automatically")
        elif spec.ref_type == OnGroundRefType.BLACK:
            return _ResolvedColor(BLACK)
        elif spec.ref_type == OnGroundRefType.WHITE:
            return _ResolvedColor(WHITE)
        elif spec.ref_type == OnGroundRefType.CUSTOM:
            hex_value = literal_hex(spec.custom, None)
            if hex_value is not None:
                return _ResolvedColor(hex_value)
            logger.warning(f"Unreadable custom on-ground color {spec.custom!r}; choosing automatically")

        return _ResolvedColor(best_on_color(self._resolve_ground("ground").hex))

    def _on_ground(self) -> None:
        name = self.naming.elevation0
        base = self._foreground_base(name)
        bases = foreground_bases(name, self.naming)
        color = self._resolve_on_ground()

        self.tree.group(base)
        for alpha in parse_alpha_string(self.figma.alphas.on_ground):
            path = (*base, str(alpha))
            candidates = [(*b, str(alpha)) for b in bases]
            if color.reference and alpha == 100:
                self.tree.put(path, self._alias(path, color.reference, candidates))
            else:
                self.tree.put(path, self._literal(path, color.hex, alpha, candidates))

    def _stark_ramp(
        self,
        base: Path,
        bases: Sequence[Candidate],
        shades: Mapping[str, str],
        alphas: str,
    ) -> None:
        self.tree.group(self._shade_container(base))
        for shade, value in shades.items():
            hex_value = literal_hex(value, STARK_FALLBACK)
            source = self._source(shade)
            candidates = under(bases, lambda b: shade_candidates(b, source, self.shade_group)) if source else []
            path = self._shade_path(base, shade)
            code_path = self._code_shade_path(base, shade)
            self.tree.put(path, self._literal(path, hex_value, 100, candidates, code_path))

        default_shade = self.figma.stark.default_shade(self.mode)
        default_value = shades.get(default_shade) or shades.get(FALLBACK_STARK_SHADE)
        default_hex = literal_hex(default_value, STARK_FALLBACK)
        for alpha in parse_alpha_string(alphas):
            path = (*base, str(alpha))
            candidates = [(*b, str(alpha)) for b in bases]
            self.tree.put(path, self._literal(path, default_hex, alpha, candidates))

    def _stark(self) -> None:
        stark = self.figma.stark
        self._stark_ramp(("stark",), [("stark",)], stark.shades(self.mode), self.figma.alphas.stark)
        self._stark_ramp(
            self._foreground_base("stark"),
            foreground_bases("stark", self.naming),
            stark.opposite_shades(self.mode),
            self.figma.alphas.on_stark,
        )

        root = ("stark", ROOT_KEY)
        reference = self._group_reference("stark", stark.default_shade(self.mode))
        self.tree.put(root, self._alias(root, reference, root_candidates(("stark",))))

    def _black_white(self) -> None:
        self.tree.group(("black",))
        self.tree.group(("white",))
        for alpha in parse_alpha_string(self.figma.alphas.black_white):
            for name, hex_value in (("black", BLACK), ("white", WHITE)):
                path = (name, str(alpha))
                self.tree.put(path, self._literal(path, hex_value, alpha, [path]))

        for name, hex_value in (("black", BLACK), ("white", WHITE)):
            root = (name, ROOT_KEY)
            self.tree.put(root, self._literal(root, hex_value, 100, root_candidates((name,))))

    def _color_group(
        self,
        name: str,
        row: HueColors,
        root_alphas: str,
        on_root_alphas: str,
        shade_alphas: Mapping[str, str],
        on_shade_alphas: Mapping[str, str],
    ) -> None:
        """Emit an intent or hue group and its on-color subtree."""
        default_shade = self.figma.default_shade
        on_base = self._foreground_base(name)
        on_bases = foreground_bases(name, self.naming)

        self.tree.group(self._shade_container((name,)))
        self.tree.group(self._shade_container(on_base))

        default_cell = row.cell(default_shade)
        if default_cell is not None:
            cell = row.cell(self._palette_shade(default_shade)) or default_cell
            default_hex = cell.hex_for(self.use_p3)
            on_hex = best_on_color(default_hex)

            for alpha in parse_alpha_string(on_root_alphas):
                path = (*on_base, str(alpha))
                candidates = [(*b, str(alpha)) for b in on_bases]
                self.tree.put(path, self._literal(path, on_hex, alpha, candidates))

            for alpha in parse_alpha_string(root_alphas):
                if alpha == 100:
                    continue
                path = (name, str(alpha))
                candidates = [path, *shade_alpha_candidates((name,), default_shade, alpha, self.shade_group)]
                self.tree.put(path, self._literal(path, default_hex, alpha, candidates))

        for cell in row.colors:
            shade = cell.stop
            palette_shade = self._palette_shade(shade)
            target = row.cell(palette_shade) or cell
            hex_value = target.hex_for(self.use_p3)
            source = self._source(shade)

            path = self._shade_path((name,), shade)
            code_path = self._code_shade_path((name,), shade)
            candidates = shade_candidates((name,), source, self.shade_group) if source else []
            reference = f"{{--{row.name}-{palette_shade}}}"
            self.tree.put(path, self._alias(path, reference, candidates, code_path))

            for alpha in parse_alpha_string(shade_alphas.get(shade, "")):
                alpha_path = (*path, str(alpha))
                alpha_candidates = (
                    shade_alpha_candidates((name,), source, alpha, self.shade_group) if source else []
                )
                literal = self._literal(alpha_path, hex_value, alpha, alpha_candidates, (*code_path, str(alpha)))
                self.tree.put_alpha(path, alpha, literal)

            on_hex = best_on_color(hex_value)
            on_path = self._shade_path(on_base, shade)
            on_code_path = self._code_shade_path(on_base, shade)
            on_candidates = (
                under(on_bases, lambda b: shade_candidates(b, source, self.shade_group)) if source else []
            )
            self.tree.put(on_path, self._literal(on_path, on_hex, 100, on_candidates, on_code_path))

            for alpha in parse_alpha_string(on_shade_alphas.get(shade, "")):
                alpha_path = (*on_path, str(alpha))
                alpha_candidates = (
                    under(on_bases, lambda b: shade_alpha_candidates(b, source, alpha, self.shade_group))
                    if source
                    else []
                )
                literal = self._literal(alpha_path, on_hex, alpha, alpha_candidates, (*on_code_path, str(alpha)))
                self.tree.put_alpha(on_path, alpha, literal)

        root = (name, ROOT_KEY)
        reference = self._group_reference(name, default_shade)
        self.tree.put(root, self._alias(root, reference, root_candidates((name,))))

    def _intents(self) -> None:
        alphas = self.figma.alphas
        for intent, hue_name in self.figma.intents.items():
            row = self.palette.hue(hue_name)
            if row is None:
                logger.warning(f"Intent '{intent}' maps to unknown hue '{hue_name}'; skipped")
                continue
            self._color_group(
                intent,
                row,
                alphas.semantic_default,
                alphas.on_semantic_default,
                alphas.semantic_shades,
                alphas.on_semantic_shades,
            )

    def _hues(self) -> None:
        alphas = self.figma.alphas
        for row in self.palette:
            self._color_group(
                row.name,
                row,
                alphas.primitive_default,
                alphas.on_primitive_default,
                alphas.primitive_shades,
                alphas.on_primitive_shades,
            )

    def build(self) -> dict[str, Any]:
        self._mode_name()
        self._grounds()
        self._on_ground()
        self._stark()
        self._black_white()
        self._intents()
        self._hues()
        self.tree.set_extension(MODE_NAME_KEY, self.mode.value)
        return self.tree.to_dict()


def build_semantic_document(
    mode: ColorMode | str,
    palette: Palette,
    figma: FigmaExportSpec,
    prior: PriorDocument | None = None,
    theme_shade_map: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Build a light or dark semantic document.

    Args:
        mode: ``light`` or ``dark``.
        palette: Generated color grid.
        figma: Export configuration.
        prior: Previously exported document for the same mode, if any.
        theme_shade_map: Palette shade -> shade in the prior document, or ``"new"``.

    Returns:
        Token document as a plain dict.
    """
    return SemanticDocumentBuilder(mode, palette, figma, prior, theme_shade_map).build()
