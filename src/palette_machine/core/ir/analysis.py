"""
Analysis results for previously exported token documents.

Every analysis may carry an ``error`` instead of data; callers check it
before reading any other field.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ShadeRef:
    """A numeric key that names a shade (``primary/shade/500``)."""

    value: str


@dataclass(frozen=True)
class AlphaRef:
    """A numeric key that names an alpha percentage (``primary/15``)."""

    value: int


NumericRef = ShadeRef | AlphaRef


@dataclass
class ColorGroupAnalysis:
    """Shades and alphas found under one intent or hue."""

    name: str
    shades: list[str] = field(default_factory=list)
    alphas: dict[str, list[int]] = field(default_factory=dict)
    intent_alphas: list[int] = field(default_factory=list)


@dataclass
class SemanticAnalysis:
    """Classification of a light/dark theme document."""

    intents: list[ColorGroupAnalysis] = field(default_factory=list)
    grounds: list[str] = field(default_factory=list)
    alphas: dict[str, list[int]] = field(default_factory=dict)
    hues: list[ColorGroupAnalysis] = field(default_factory=list)
    excluded: list[str] = field(default_factory=list)
    raw: dict[str, Any] = field(default_factory=dict)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def all_shades(self) -> set[str]:
        """Union of shade names across intents and hues."""
        shades: set[str] = set()
        for group in (*self.intents, *self.hues):
            shades.update(group.shades)
        return shades

    def intent(self, name: str) -> ColorGroupAnalysis | None:
        return next((group for group in self.intents if group.name == name), None)

    def hue(self, name: str) -> ColorGroupAnalysis | None:
        return next((group for group in self.hues if group.name == name), None)


@dataclass
class PaletteAnalysis:
    """Hues and shades found in a palette document."""

    hues: list[str] = field(default_factory=list)
    shades: list[str] = field(default_factory=list)
    color_count: int = 0
    raw: dict[str, Any] = field(default_factory=dict)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
