"""
Figma variables export.

Ties palette generation, prior-document analysis, migration maps and the two
document emitters together. Prior documents are optional; one that cannot be
read is treated as absent and only logged.

Outputs: palette.json, light.json, dark.json
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .content_analyzer import analyze_palette_file, analyze_semantic_file
from .figma_palette import build_palette_document
from .figma_semantic import build_semantic_document
from .ir.analysis import PaletteAnalysis, SemanticAnalysis
from .ir.palette import Palette
from .ir.palettespec import ColorMode, PaletteSpecYAML
from .migration import (
    PriorDocument,
    create_hue_mapping,
    create_shade_source_map,
    find_duplicate_sources,
    theme_shades,
)
from .palette import build_palette

logger = logging.getLogger(__name__)

PALETTE_FILE = "palette.json"
LIGHT_FILE = "light.json"
DARK_FILE = "dark.json"

EXPORT_FILES: dict[str, str] = {
    "palette": PALETTE_FILE,
    ColorMode.LIGHT.value: LIGHT_FILE,
    ColorMode.DARK.value: DARK_FILE,
}


@dataclass
class MigrationReport:
    """Migration maps in effect for one export, and any problems found."""

    hue_mapping: dict[str, str] | None = None
    shade_map: dict[str, str] | None = None
    theme_shade_map: dict[str, str] | None = None
    duplicate_sources: dict[str, list[str]] = field(default_factory=dict)
    duplicate_theme_sources: dict[str, list[str]] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)

    @property
    def has_duplicates(self) -> bool:
        return bool(self.duplicate_sources or self.duplicate_theme_sources)


# =============================================================================
# Analysis and maps
# =============================================================================


def _analyze_palette_prior(prior_text: str | None) -> PaletteAnalysis | None:
    if prior_text is None:
        return None
    analysis = analyze_palette_file(prior_text)
    if not analysis.ok:
        logger.warning(f"Ignoring unreadable prior palette document: {analysis.error}")
    return analysis


def _analyze_semantic_prior(spec: PaletteSpecYAML, prior_text: str | None) -> SemanticAnalysis | None:
    if prior_text is None:
        return None
    analysis = analyze_semantic_file(
        prior_text,
        spec.figma.exclusion_pattern,
        shade_group=spec.figma.naming.shade_group_name,
        intent_names=spec.figma.intents,
    )
    if not analysis.ok:
        logger.warning(f"Ignoring unreadable prior theme document: {analysis.error}")
    return analysis


def palette_migration_maps(
    spec: PaletteSpecYAML, analysis: PaletteAnalysis | None
) -> tuple[dict[str, str] | None, dict[str, str] | None]:
    """Hue mapping and shade source map for the palette document.

    Maps pinned in palettespec.yaml win; otherwise they are derived from the prior
    document. Without either, every name looks up itself.
    """
    derive = analysis is not None and analysis.ok
    hue_mapping = spec.figma.hue_mapping
    if hue_mapping is None and derive:
        hue_mapping = create_hue_mapping(analysis.hues, spec.hue_names())
    shade_map = spec.figma.shade_source_map
    if shade_map is None and derive:
        shade_map = create_shade_source_map(analysis.shades, spec.stop_names())
    return hue_mapping, shade_map


def theme_migration_map(spec: PaletteSpecYAML, analysis: SemanticAnalysis | None) -> dict[str, str] | None:
    """Shade source map shared by the light and dark documents."""
    if spec.figma.theme_shade_source_map is not None:
        return dict(spec.figma.theme_shade_source_map)
    if analysis is not None and analysis.ok:
        return create_shade_source_map(theme_shades(analysis), spec.stop_names())
    return None


def _warn_duplicates(kind: str, duplicates: Mapping[str, list[str]]) -> None:
    for source, targets in duplicates.items():
        logger.warning(f"{kind} shade '{source}' is the migration source for {', '.join(targets)}")


def migration_report(
    spec: PaletteSpecYAML,
    palette_prior_text: str | None = None,
    theme_prior_text: str | None = None,
) -> MigrationReport:
    """Work out the migration maps an export would use, without emitting anything."""
    report = MigrationReport()

    palette_analysis = _analyze_palette_prior(palette_prior_text)
    if palette_analysis is not None and not palette_analysis.ok:
        report.errors.append(f"palette: {palette_analysis.error}")
    report.hue_mapping, report.shade_map = palette_migration_maps(spec, palette_analysis)

    theme_analysis = _analyze_semantic_prior(spec, theme_prior_text)
    if theme_analysis is not None and not theme_analysis.ok:
        report.errors.append(f"theme: {theme_analysis.error}")
    report.theme_shade_map = theme_migration_map(spec, theme_analysis)

    report.duplicate_sources = find_duplicate_sources(report.shade_map or {})
    report.duplicate_theme_sources = find_duplicate_sources(report.theme_shade_map or {})
    return report


# =============================================================================
# Generation
# =============================================================================


def dump_document(document: dict[str, Any]) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False)


def generate_figma_palette(
    spec: PaletteSpecYAML,
    palette: Palette | None = None,
    prior_text: str | None = None,
) -> str:
    """Generate palette.json text.

    Args:
        spec: Palette configuration.
        palette: Pre-built palette; built from ``spec`` when omitted.
        prior_text: Previous palette.json content, for variable id migration.

    Returns:
        JSON text (2-space indent).
    """
    if palette is None:
        palette = build_palette(spec.hues, spec.stops)
    analysis = _analyze_palette_prior(prior_text)
    hue_mapping, shade_map = palette_migration_maps(spec, analysis)
    _warn_duplicates("Palette", find_duplicate_sources(shade_map or {}))

    document = build_palette_document(
        palette,
        spec.figma,
        PriorDocument.from_analysis(analysis),
        shade_map,
        hue_mapping,
    )
    return dump_document(document)


def generate_figma_semantic(
    mode: ColorMode | str,
    spec: PaletteSpecYAML,
    palette: Palette | None = None,
    prior_text: str | None = None,
) -> str:
    """Generate light.json or dark.json text.

    Args:
        mode: ``light`` or ``dark``.
        spec: Palette configuration.
        palette: Pre-built palette; built from ``spec`` when omitted.
        prior_text: Previous document for the same mode, for variable id migration.

    Returns:
        JSON text (2-space indent).
    """
    if palette is None:
        palette = build_palette(spec.hues, spec.stops)
    analysis = _analyze_semantic_prior(spec, prior_text)
    shade_map = theme_migration_map(spec, analysis)
    _warn_duplicates("Theme", find_duplicate_sources(shade_map or {}))

    document = build_semantic_document(
        mode,
        palette,
        spec.figma,
        PriorDocument.from_analysis(analysis),
        shade_map,
    )
    return dump_document(document)


def export_figma_files(
    spec: PaletteSpecYAML,
    output_dir: Path,
    priors: Mapping[str, str] | None = None,
) -> dict[str, Path]:
    """Write palette.json, light.json and dark.json.

    Args:
        spec: Palette configuration.
        output_dir: Directory to write into (created if missing).
        priors: Previous document text keyed by ``palette``, ``light`` and ``dark``.

    Returns:
        Written paths keyed like ``priors``.
    """
    priors = priors or {}
    palette = build_palette(spec.hues, spec.stops)
    output_dir.mkdir(parents=True, exist_ok=True)

    contents = {
        "palette": generate_figma_palette(spec, palette, priors.get("palette")),
        ColorMode.LIGHT.value: generate_figma_semantic(
            ColorMode.LIGHT, spec, palette, priors.get(ColorMode.LIGHT.value)
        ),
        ColorMode.DARK.value: generate_figma_semantic(
            ColorMode.DARK, spec, palette, priors.get(ColorMode.DARK.value)
        ),
    }

    written: dict[str, Path] = {}
    for key, text in contents.items():
        path = output_dir / EXPORT_FILES[key]
        path.write_text(text, encoding="utf-8")
        logger.info(f"Wrote {path}")
        written[key] = path
    return written
