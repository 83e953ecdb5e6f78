"""
PaletteSpec persistence layer for palette-machine.

Handles reading and writing palette configurations to palettespec.yaml in
the project root. The spec drives deterministic palette generation and the
Figma variables export from a small set of declarative parameters.

Default location: {project_root}/palettespec.yaml
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .alphas import parse_alpha_string
from .errors import ErrorContext, PaletteMachineError
from .ir.palettespec import (
    ColorMode,
    ContrastSettings,
    FigmaExportSpec,
    GroundRefType,
    Hue,
    PaletteSpecYAML,
    Stop,
    default_hues,
    default_stops,
)
from .migration import find_duplicate_sources

logger = logging.getLogger(__name__)

PALETTESPEC_FILE = "palettespec.yaml"


class PaletteSpecError(PaletteMachineError):
    """Error loading or validating a PaletteSpec."""

    pass


# =============================================================================
# Path helpers
# =============================================================================


def get_palettespec_path(project_root: Path) -> Path:
    """Get the palettespec.yaml file path."""
    return project_root / PALETTESPEC_FILE


def palettespec_exists(project_root: Path) -> bool:
    """Check if a palettespec.yaml exists in the project."""
    return get_palettespec_path(project_root).exists()


# =============================================================================
# Loading
# =============================================================================


def _parse_palettespec_data(data: dict[str, Any], source: Path) -> PaletteSpecYAML:
    """Parse PaletteSpecYAML from raw YAML data.

    Missing sections fall back to their defaults.
    """
    if not isinstance(data, dict):
        raise PaletteSpecError("Top-level YAML value must be a mapping", ErrorContext(source))

    try:
        stops_data = data.get("stops")
        stops = [Stop(**stop) for stop in stops_data] if stops_data else default_stops()

        hues_data = data.get("hues")
        hues = [Hue(**hue) for hue in hues_data] if hues_data else default_hues()

        contrast_data = data.get("contrast") or {}
        contrast = ContrastSettings(**contrast_data)

        figma_data = data.get("figma") or {}
        figma = FigmaExportSpec(**figma_data)

        return PaletteSpecYAML(stops=stops, hues=hues, contrast=contrast, figma=figma)
    except ValidationError as e:
        raise PaletteSpecError(f"Invalid PaletteSpec schema: {e}", ErrorContext(source)) from e
    except (KeyError, ValueError, TypeError) as e:
        raise PaletteSpecError(f"Failed to parse PaletteSpec: {e}", ErrorContext(source)) from e


def load_palettespec(project_root: Path, *, use_defaults: bool = True) -> PaletteSpecYAML:
    """Load PaletteSpec from palettespec.yaml.

    Args:
        project_root: Directory holding palettespec.yaml.
        use_defaults: If True, return the default spec when the file doesn't exist.

    Returns:
        PaletteSpecYAML instance.

    Raises:
        PaletteSpecError: If file doesn't exist (when use_defaults=False) or invalid.
    """
    palettespec_path = get_palettespec_path(project_root)

    if not palettespec_path.exists():
        if use_defaults:
            logger.debug("No palettespec.yaml found, using defaults")
            return create_default_palettespec()
        raise PaletteSpecError(f"PaletteSpec not found: {palettespec_path}")

    try:
        content = palettespec_path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise PaletteSpecError(f"Invalid YAML in {palettespec_path}: {e}") from e
    except OSError as e:
        raise PaletteSpecError(f"Cannot read {palettespec_path}: {e}") from e

    if not data:
        if use_defaults:
            logger.warning(f"Empty palettespec.yaml at {palettespec_path}, using defaults")
            return create_default_palettespec()
        raise PaletteSpecError(f"Empty or invalid YAML in {palettespec_path}")

    return _parse_palettespec_data(data, palettespec_path)


def save_palettespec(project_root: Path, palettespec: PaletteSpecYAML) -> Path:
    """Save PaletteSpec to palettespec.yaml.

    Args:
        project_root: Directory to write into.
        palettespec: PaletteSpecYAML to save.

    Returns:
        Path to the saved palettespec.yaml file.
    """
    palettespec_path = get_palettespec_path(project_root)

    data = palettespec.model_dump(mode="json", by_alias=True)

    palettespec_path.write_text(
        yaml.dump(
            data,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        ),
        encoding="utf-8",
    )

    logger.info(f"Saved PaletteSpec to {palettespec_path}")
    return palettespec_path


# =============================================================================
# Validation
# =============================================================================


class PaletteSpecValidationResult:
    """Result of PaletteSpec validation."""

    def __init__(self) -> None:
        self.errors: list[str] = []
        self.warnings: list[str] = []

    def add_error(self, message: str) -> None:
        self.errors.append(message)

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def __repr__(self) -> str:
        return (
            f"PaletteSpecValidationResult(errors={len(self.errors)}, warnings={len(self.warnings)})"
        )


def _duplicates(names: list[str]) -> list[str]:
    seen: set[str] = set()
    dupes: list[str] = []
    for name in names:
        if name in seen and name not in dupes:
            dupes.append(name)
        seen.add(name)
    return dupes


def _flat_shade_collisions(figma: FigmaExportSpec, stop_set: set[str]) -> list[tuple[str, list[str]]]:
    """Alpha ramps whose keys land on shade keys when shades are not grouped."""
    alphas = figma.alphas
    stark_shades = set(figma.stark.light) | set(figma.stark.dark)
    ramps = (
        ("semantic_default", alphas.semantic_default, stop_set),
        ("on_semantic_default", alphas.on_semantic_default, stop_set),
        ("primitive_default", alphas.primitive_default, stop_set),
        ("on_primitive_default", alphas.on_primitive_default, stop_set),
        ("stark", alphas.stark, stark_shades),
        ("on_stark", alphas.on_stark, stark_shades),
    )

    collisions = []
    for label, text, shades in ramps:
        values = parse_alpha_string(text)
        if label in ("semantic_default", "primitive_default"):
            # The opaque root alpha is never emitted
            values = [v for v in values if v != 100]
        clashing = [str(v) for v in values if str(v) in shades]
        if clashing:
            collisions.append((label, clashing))
    return collisions


def validate_palettespec(palettespec: PaletteSpecYAML) -> PaletteSpecValidationResult:
    """Validate a PaletteSpec for semantic correctness.

    Schema-level ranges are enforced by the models; this checks the
    cross-references between sections.

    Args:
        palettespec: PaletteSpecYAML to validate.

    Returns:
        PaletteSpecValidationResult with errors and warnings.
    """
    result = PaletteSpecValidationResult()
    stop_names = palettespec.stop_names()
    hue_names = palettespec.hue_names()
    stop_set = set(stop_names)
    figma = palettespec.figma

    if not stop_names:
        result.add_error("stops must not be empty")
    if not hue_names:
        result.add_error("hues must not be empty")
    for name in _duplicates(stop_names):
        result.add_error(f"stops: duplicate stop name '{name}'")
    for name in _duplicates(hue_names):
        result.add_error(f"hues: duplicate hue name '{name}'")

    for intent, hue in figma.intents.items():
        if hue not in hue_names:
            result.add_error(f"figma.intents.{intent}: unknown hue '{hue}'")

    if figma.default_shade not in stop_set:
        result.add_error(f"figma.default_shade: '{figma.default_shade}' is not a stop")

    for mode in ColorMode:
        for key, ground in figma.grounds.for_mode(mode).items():
            if ground.ref_type != GroundRefType.CUSTOM and ground.shade not in stop_set:
                result.add_error(f"figma.grounds.{mode}.{key}: shade '{ground.shade}' is not a stop")
            if ground.ref_type == GroundRefType.CUSTOM and not ground.custom:
                result.add_warning(f"figma.grounds.{mode}.{key}: custom ground has no color")

    if figma.grounds.primitive_hue not in hue_names:
        result.add_error(f"figma.grounds.primitive_hue: unknown hue '{figma.grounds.primitive_hue}'")

    for label, mapping in (
        ("figma.shade_source_map", figma.shade_source_map),
        ("figma.theme_shade_source_map", figma.theme_shade_source_map),
    ):
        for source, targets in find_duplicate_sources(mapping or {}).items():
            result.add_warning(f"{label}: shade '{source}' is the source for {', '.join(targets)}")

    if not figma.naming.shade_group_name:
        for label, clashing in _flat_shade_collisions(figma, stop_set):
            result.add_error(
                f"figma.alphas.{label}: alphas {', '.join(clashing)} collide with shade names "
                "while figma.naming.shade_group_name is empty"
            )

    if palettespec.stops and all(stop.chroma == 0.0 for stop in palettespec.stops):
        result.add_warning("all stops have chroma 0 - every hue will be gray")

    return result


# =============================================================================
# Scaffolding
# =============================================================================


def create_default_palettespec() -> PaletteSpecYAML:
    """Create a PaletteSpecYAML with the default 13 stops and 18 hues."""
    return PaletteSpecYAML(
        stops=default_stops(),
        hues=default_hues(),
        contrast=ContrastSettings(),
        figma=FigmaExportSpec(),
    )


def scaffold_palettespec(project_root: Path, *, overwrite: bool = False) -> Path | None:
    """Create a default palettespec.yaml file.

    Args:
        project_root: Directory to write into.
        overwrite: If True, overwrite existing file.

    Returns:
        Path to created file, or None if skipped.
    """
    palettespec_path = get_palettespec_path(project_root)

    if palettespec_path.exists() and not overwrite:
        logger.debug(f"Skipping existing palettespec: {palettespec_path}")
        return None

    return save_palettespec(project_root, create_default_palettespec())
