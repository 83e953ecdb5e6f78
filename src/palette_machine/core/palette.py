"""
Palette generation from stops × hues.

Every hue is rendered at every stop in sRGB and Display P3, with gamut flags
recorded per space. The build is a pure function of its inputs and cheap
enough to rerun on every edit.
"""

from __future__ import annotations

from collections.abc import Iterable

from .color_math import (
    clamp,
    format_oklch,
    gamma_encode,
    is_in_gamut,
    oklch_to_linear_p3,
    oklch_to_linear_srgb,
    rgb_to_hex,
)
from .ir.palette import ColorCell, HueColors, Palette
from .ir.palettespec import Hue, Stop


def build_cell(stop: Stop, hue: Hue) -> ColorCell:
    """Render one hue at one stop."""
    chroma = 0.0 if hue.full_gray else stop.chroma

    r_lin, g_lin, b_lin = oklch_to_linear_srgb(stop.lightness, chroma, hue.angle)
    hex_srgb = rgb_to_hex(gamma_encode(r_lin), gamma_encode(g_lin), gamma_encode(b_lin))

    r_p3, g_p3, b_p3 = oklch_to_linear_p3(stop.lightness, chroma, hue.angle)
    hex_p3 = rgb_to_hex(
        gamma_encode(clamp(r_p3)),
        gamma_encode(clamp(g_p3)),
        gamma_encode(clamp(b_p3)),
    )

    return ColorCell(
        stop=stop.name,
        lightness=stop.lightness,
        chroma=chroma,
        hue=hue.angle,
        oklch=format_oklch(stop.lightness, chroma, hue.angle),
        hex=hex_srgb,
        hex_p3=hex_p3,
        clipped=not is_in_gamut(r_lin, g_lin, b_lin),
        clipped_p3=not is_in_gamut(r_p3, g_p3, b_p3),
    )


def build_palette(hues: Iterable[Hue], stops: Iterable[Stop]) -> Palette:
    """Generate the color grid.

    Args:
        hues: Hues in display order.
        stops: Stops in lightness order; the order drives dark-mode mirroring.

    Returns:
        Palette with exactly one cell per (hue, stop).
    """
    stop_list = list(stops)
    rows = tuple(
        HueColors(
            name=hue.name,
            hue=hue.angle,
            full_gray=hue.full_gray,
            colors=tuple(build_cell(stop, hue) for stop in stop_list),
        )
        for hue in hues
    )
    return Palette(hues=rows, stop_names=tuple(stop.name for stop in stop_list))


def clipped_cells(palette: Palette, *, p3: bool = False) -> list[tuple[str, str]]:
    """(hue, stop) pairs that fall outside the chosen gamut."""
    return [
        (row.name, cell.stop)
        for row in palette
        for cell in row.colors
        if (cell.clipped_p3 if p3 else cell.clipped)
    ]
