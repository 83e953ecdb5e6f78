"""
Generated palette types.

A Palette is derived from stops and hues and is never persisted on its own;
it is rebuilt whenever either input changes.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ColorCell:
    """One (hue, stop) color in every representation the exporters need.

    Attributes:
        stop: Stop name (e.g. "500").
        lightness: OKLCH lightness in percent.
        chroma: Effective chroma (0 for full-gray hues).
        hue: Hue angle.
        oklch: CSS ``oklch()`` string.
        hex: sRGB hex, clamped.
        hex_p3: Display P3 hex, clamped.
        clipped: True when the color lies outside sRGB.
        clipped_p3: True when the color lies outside Display P3.
    """

    stop: str
    lightness: float
    chroma: float
    hue: float
    oklch: str
    hex: str
    hex_p3: str
    clipped: bool
    clipped_p3: bool

    def hex_for(self, use_p3: bool) -> str:
        return self.hex_p3 if use_p3 else self.hex


@dataclass(frozen=True)
class HueColors:
    """A hue and its cells, aligned with the stop order."""

    name: str
    hue: float
    full_gray: bool
    colors: tuple[ColorCell, ...]

    def cell(self, stop: str) -> ColorCell | None:
        for color in self.colors:
            if color.stop == stop:
                return color
        return None


@dataclass(frozen=True)
class Palette:
    """The full color grid plus the stop order it was built from."""

    hues: tuple[HueColors, ...]
    stop_names: tuple[str, ...] = field(default=())

    def __iter__(self):
        return iter(self.hues)

    def __len__(self) -> int:
        return len(self.hues)

    def hue(self, name: str) -> HueColors | None:
        for hue_colors in self.hues:
            if hue_colors.name == name:
                return hue_colors
        return None

    def cell(self, hue: str, stop: str) -> ColorCell | None:
        hue_colors = self.hue(hue)
        return hue_colors.cell(stop) if hue_colors else None

    def mirror_stop(self, stop: str) -> str:
        """Stop at the mirrored position (``i -> n-1-i``); unknown stops map to themselves."""
        if stop not in self.stop_names:
            return stop
        idx = self.stop_names.index(stop)
        return self.stop_names[len(self.stop_names) - 1 - idx]
