"""
palette-machine - perceptual color palettes and Figma variables from a
compact OKLCH description.

Stops (lightness/chroma rungs) crossed with hue angles produce a color grid;
the grid is exported as Figma variables documents that keep their variable
ids across regenerations.
"""

from __future__ import annotations

from ._version import get_version

# Re-export commonly used types for convenience
from .core import ir
from .core.errors import DocumentParseError, PaletteMachineError
from .core.palettespec_loader import PaletteSpecError

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "PaletteMachineError",
    "PaletteSpecError",
    "DocumentParseError",
]
