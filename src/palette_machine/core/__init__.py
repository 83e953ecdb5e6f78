"""Core palette-machine functionality: color math, palette generation, document analysis, Figma export."""

from . import ir
from .content_analyzer import analyze_palette_file, analyze_semantic_file
from .contrast import best_on_color, calculate_apca, calculate_wcag, get_contrast
from .errors import DocumentParseError, ErrorContext, PaletteMachineError
from .figma_export import (
    MigrationReport,
    export_figma_files,
    generate_figma_palette,
    generate_figma_semantic,
    migration_report,
)
from .palette import build_palette
from .palettespec_loader import (
    PaletteSpecError,
    load_palettespec,
    save_palettespec,
    scaffold_palettespec,
    validate_palettespec,
)

__all__ = [
    "ir",
    "PaletteMachineError",
    "DocumentParseError",
    "ErrorContext",
    "PaletteSpecError",
    "build_palette",
    "calculate_apca",
    "calculate_wcag",
    "get_contrast",
    "best_on_color",
    "analyze_palette_file",
    "analyze_semantic_file",
    "MigrationReport",
    "migration_report",
    "generate_figma_palette",
    "generate_figma_semantic",
    "export_figma_files",
    "load_palettespec",
    "save_palettespec",
    "scaffold_palettespec",
    "validate_palettespec",
]
