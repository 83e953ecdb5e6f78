"""
palette-machine Intermediate Representation (IR) types.

Configuration models (palettespec.yaml), generated palette types and
token-document analysis results. All types are re-exported from this package.
"""

from .analysis import (
    AlphaRef,
    ColorGroupAnalysis,
    NumericRef,
    PaletteAnalysis,
    SemanticAnalysis,
    ShadeRef,
)
from .palette import ColorCell, HueColors, Palette
from .palettespec import (
    DEFAULT_INTENTS,
    AlphaConfig,
    ColorMode,
    ColorProfile,
    ContrastSettings,
    FigmaExportSpec,
    ForegroundPosition,
    GroundRefType,
    GroundSpec,
    GroundsSpec,
    Hue,
    NamingConfig,
    OnGroundModes,
    OnGroundRefType,
    OnGroundSpec,
    PaletteSpecYAML,
    StarkSpec,
    Stop,
    default_hues,
    default_stops,
)

__all__ = [
    # Analysis
    "AlphaRef",
    "ColorGroupAnalysis",
    "NumericRef",
    "PaletteAnalysis",
    "SemanticAnalysis",
    "ShadeRef",
    # Palette
    "ColorCell",
    "HueColors",
    "Palette",
    # PaletteSpec
    "DEFAULT_INTENTS",
    "AlphaConfig",
    "ColorMode",
    "ColorProfile",
    "ContrastSettings",
    "FigmaExportSpec",
    "ForegroundPosition",
    "GroundRefType",
    "GroundSpec",
    "GroundsSpec",
    "Hue",
    "NamingConfig",
    "OnGroundModes",
    "OnGroundRefType",
    "OnGroundSpec",
    "PaletteSpecYAML",
    "StarkSpec",
    "Stop",
    "default_hues",
    "default_stops",
]
