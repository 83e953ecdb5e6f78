"""
Pure-Python OKLCH color math.

Converts OKLCH coordinates to linear sRGB and linear Display P3, applies the
sRGB transfer curve, tests gamut membership and encodes/decodes hex strings.
No external color libraries required.

Lightness is expressed in percent (0-100) throughout this module, matching
the way stops are authored.
"""

from __future__ import annotations

import math
import re

# OKLab -> LMS' (cube-root space)
_LAB_TO_LMS: tuple[tuple[float, float], ...] = (
    (0.3963377774, 0.2158037573),
    (-0.1055613458, -0.0638541728),
    (-0.0894841775, -1.291485548),
)

# LMS -> linear sRGB
_LMS_TO_SRGB: tuple[tuple[float, float, float], ...] = (
    (4.0767416621, -3.3077115913, 0.2309699292),
    (-1.2684380046, 2.6097574011, -0.3413193965),
    (-0.0041960863, -0.7034186147, 1.707614701),
)

# linear sRGB -> linear Display P3 (fixed approximation, not a profile transform)
_SRGB_TO_P3: tuple[tuple[float, float, float], ...] = (
    (0.8224621, 0.177538, 0.0),
    (0.0331942, 0.9668058, 0.0),
    (0.0170826, 0.0723974, 0.91052),
)

GAMUT_EPSILON = 0.0001

_HEX_RE = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)
_OKLCH_RE = re.compile(r"oklch\(\s*([\d.]+)(%?)\s+([\d.]+)\s+([\d.]+)\s*\)", re.IGNORECASE)

Triple = tuple[float, float, float]


def _apply(matrix: tuple[tuple[float, float, float], ...], vec: Triple) -> Triple:
    r, g, b = (row[0] * vec[0] + row[1] * vec[1] + row[2] * vec[2] for row in matrix)
    return r, g, b


def oklch_to_linear_srgb(L: float, C: float, H: float) -> Triple:
    """Convert OKLCH to linear sRGB.

    Args:
        L: Lightness in percent (0-100).
        C: Chroma (0-0.4).
        H: Hue angle in degrees.

    Returns:
        Unclamped linear (r, g, b). Out-of-gamut colors produce components
        below 0 or above 1.
    """
    lightness = L / 100
    a = C * math.cos(math.radians(H))
    b = C * math.sin(math.radians(H))

    lms = tuple((lightness + ka * a + kb * b) ** 3 for ka, kb in _LAB_TO_LMS)
    return _apply(_LMS_TO_SRGB, lms)  # type: ignore[arg-type]


def oklch_to_linear_p3(L: float, C: float, H: float) -> Triple:
    """Convert OKLCH to linear Display P3 (unclamped)."""
    return _apply(_SRGB_TO_P3, oklch_to_linear_srgb(L, C, H))


def gamma_encode(c: float) -> float:
    """Apply the sRGB transfer function to one linear component."""
    if c <= 0.0031308:
        return 12.92 * c
    return 1.055 * c ** (1 / 2.4) - 0.055


def is_in_gamut(r: float, g: float, b: float) -> bool:
    """True when every linear component lies within [0, 1] (with a small tolerance)."""
    lo, hi = -GAMUT_EPSILON, 1 + GAMUT_EPSILON
    return lo <= r <= hi and lo <= g <= hi and lo <= b <= hi


def clamp(v: float) -> float:
    return max(0.0, min(1.0, v))


def _to_byte(v: float) -> int:
    # Round half up; Python's round() would round half to even.
    return int(math.floor(clamp(v) * 255 + 0.5))


def rgb_to_hex(r: float, g: float, b: float) -> str:
    """Encode gamma-encoded components as lowercase ``#rrggbb``.

    Components are clamped first, so the result is lossy for out-of-gamut
    input. Gamut decisions must be made on the unclamped linear triple.
    """
    return "#" + "".join(f"{_to_byte(v):02x}" for v in (r, g, b))


def is_hex_color(value: str | None) -> bool:
    return bool(value) and _HEX_RE.match(value) is not None


def hex_to_rgb(hex_str: str) -> Triple:
    """Decode ``#rrggbb`` (``#`` optional) into 0-1 components.

    Unparseable input decodes to white.
    """
    match = _HEX_RE.match(hex_str or "")
    if not match:
        return (1.0, 1.0, 1.0)
    r, g, b = (int(group, 16) / 255 for group in match.groups())
    return r, g, b


def hex_to_components(hex_str: str) -> list[float]:
    """Components list used by token literals."""
    return list(hex_to_rgb(hex_str))


def oklch_to_hex(L: float, C: float, H: float) -> str:
    """OKLCH (L in percent) to a clamped sRGB hex string."""
    r, g, b = oklch_to_linear_srgb(L, C, H)
    return rgb_to_hex(gamma_encode(r), gamma_encode(g), gamma_encode(b))


def parse_oklch(color: str) -> Triple | None:
    """Parse ``oklch(L[%] C H)``.

    A unitless lightness of 1 or less is read as a 0-1 fraction and scaled
    to percent.

    Returns:
        (L in percent, C, H) or None when the string does not match.
    """
    match = _OKLCH_RE.search(color or "")
    if not match:
        return None
    try:
        L = float(match.group(1))
        C = float(match.group(3))
        H = float(match.group(4))
    except ValueError:
        return None
    if match.group(2) != "%" and L <= 1:
        L *= 100
    return L, C, H


def css_color_to_hex(color: str | None) -> str:
    """Convert a CSS color string to hex.

    Hex strings pass through untouched, ``oklch()`` is converted, and any
    other syntax degrades to opaque black.
    """
    if not color:
        return "#000000"
    if color.startswith("#"):
        return color
    parsed = parse_oklch(color)
    if parsed is None:
        return "#000000"
    return oklch_to_hex(*parsed)


def _format_number(value: float) -> str:
    return f"{value:g}"


def format_oklch(L: float, C: float, H: float) -> str:
    """Format an OKLCH color as a CSS string.

    Args:
        L: Lightness in percent (0-100).
        C: Chroma.
        H: Hue angle.

    Returns:
        CSS string such as ``oklch(0.550 0.180 250)``.
    """
    return f"oklch({L / 100:.3f} {C:.3f} {_format_number(H)})"


def hex_to_grayscale(hex_str: str) -> str:
    """Luminance-weighted grayscale of a hex color, for previews."""
    r, g, b = hex_to_rgb(hex_str)
    gray = 0.2126 * r + 0.7152 * g + 0.0722 * b
    return rgb_to_hex(gray, gray, gray)
