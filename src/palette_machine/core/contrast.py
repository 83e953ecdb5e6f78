"""Contrast utilities for palette colors.

Implements two metrics over ``#rrggbb`` pairs:

- APCA, a polarity-aware perceptual contrast (roughly -108..106). The sign
  encodes polarity: negative when the text is lighter than the background.
- WCAG 2 contrast ratio (1..21), which is symmetric.

The two metrics deliberately use slightly different luminance coefficients.
"""

from __future__ import annotations

import math
from enum import StrEnum

from .color_math import hex_to_rgb

BLACK = "#000000"
WHITE = "#FFFFFF"

# APCA constants
_APCA_COEFFS = (0.2126729, 0.7151522, 0.072175)
_BLK_THRS = 0.022
_BLK_CLMP = 1.414
_DELTA_Y_MIN = 0.0005
_LO_CLIP = 0.1
_SCALE = 1.14
# (background exponent, text exponent)
_NORMAL_POLARITY = (0.56, 0.57)
_REVERSE_POLARITY = (0.65, 0.62)

_WCAG_COEFFS = (0.2126, 0.7152, 0.0722)


class ContrastAlgorithm(StrEnum):
    """Supported contrast metrics."""

    APCA = "APCA"
    WCAG = "WCAG"


class ContrastDirection(StrEnum):
    """Which argument of :func:`get_contrast` is the text color."""

    TEXT_ON_BG = "text-on-bg"
    BG_ON_TEXT = "bg-on-text"


def _algorithm(value: ContrastAlgorithm | str) -> ContrastAlgorithm:
    return ContrastAlgorithm(str(value).upper())


def _round_half_up(value: float, places: int) -> float:
    factor = 10**places
    return math.floor(value * factor + 0.5) / factor


def _linearize(c: float) -> float:
    if c <= 0.04045:
        return c / 12.92
    return ((c + 0.055) / 1.055) ** 2.4


def _luminance(hex_str: str, coeffs: tuple[float, float, float]) -> float:
    r, g, b = hex_to_rgb(hex_str)
    return coeffs[0] * _linearize(r) + coeffs[1] * _linearize(g) + coeffs[2] * _linearize(b)


def _soft_clamp(y: float, exponent: float) -> float:
    if y >= _BLK_THRS:
        return y**exponent
    return y + (_BLK_THRS - y) ** _BLK_CLMP


def calculate_apca(text_hex: str, bg_hex: str) -> float:
    """APCA lightness contrast of ``text_hex`` on ``bg_hex``.

    Not symmetric: swapping the arguments changes both the sign and the
    magnitude.
    """
    y_txt = _luminance(text_hex, _APCA_COEFFS)
    y_bg = _luminance(bg_hex, _APCA_COEFFS)

    if abs(y_bg - y_txt) < _DELTA_Y_MIN:
        return 0.0

    bg_exp, txt_exp = _NORMAL_POLARITY if y_bg > y_txt else _REVERSE_POLARITY
    sapc = (_soft_clamp(y_bg, bg_exp) - _soft_clamp(y_txt, txt_exp)) * _SCALE

    if abs(sapc) < _LO_CLIP:
        return 0.0
    return sapc * 100


def calculate_wcag(fg_hex: str, bg_hex: str) -> float:
    """WCAG 2 contrast ratio; argument order does not matter."""
    l_fg = _luminance(fg_hex, _WCAG_COEFFS)
    l_bg = _luminance(bg_hex, _WCAG_COEFFS)
    return (max(l_fg, l_bg) + 0.05) / (min(l_fg, l_bg) + 0.05)


def get_contrast(
    color_hex: str | None,
    compare_hex: str | None,
    algorithm: ContrastAlgorithm | str = ContrastAlgorithm.APCA,
    direction: ContrastDirection | str = ContrastDirection.TEXT_ON_BG,
) -> float:
    """Contrast between a palette color and a comparison color.

    For APCA, ``text-on-bg`` treats ``color_hex`` as the text; any other
    direction treats it as the background. WCAG ignores direction.
    Algorithm names are case-insensitive; unknown names raise ValueError.
    """
    if not color_hex or not compare_hex:
        return 0.0

    if _algorithm(algorithm) == ContrastAlgorithm.APCA:
        if str(direction).lower() == ContrastDirection.TEXT_ON_BG:
            return calculate_apca(color_hex, compare_hex)
        return calculate_apca(compare_hex, color_hex)

    return calculate_wcag(color_hex, compare_hex)


def format_contrast(value: float, algorithm: ContrastAlgorithm | str) -> str:
    """APCA as an absolute integer, WCAG ratio with one decimal.

    Ties round up, so 62.5 formats as ``63``.
    """
    if _algorithm(algorithm) == ContrastAlgorithm.APCA:
        return f"{_round_half_up(abs(value), 0):.0f}"
    return f"{_round_half_up(value, 1):.1f}"


def passes_threshold(value: float, threshold: float) -> bool:
    return abs(value) >= threshold


def best_on_color(bg_hex: str) -> str:
    """Pick black or white text for a background, whichever has the larger APCA magnitude.

    Ties go to black.
    """
    with_black = abs(calculate_apca(BLACK, bg_hex))
    with_white = abs(calculate_apca(WHITE, bg_hex))
    return BLACK if with_black >= with_white else WHITE
