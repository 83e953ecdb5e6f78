"""
PaletteSpec YAML IR types for declarative palette configuration.

Defines the structure of palettespec.yaml: the stop and hue grid that drives
palette generation, contrast preferences, and the Figma variables export
configuration (intents, grounds, on-colors, stark ramps, alphas, naming and
migration maps).

Four sections: stops, hues, contrast, figma.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Enums
# =============================================================================


class ColorMode(StrEnum):
    """Semantic document mode."""

    LIGHT = "light"
    DARK = "dark"


class ColorProfile(StrEnum):
    """Which hex column of the palette feeds exported literals."""

    SRGB = "srgb"
    P3 = "p3"


class GroundRefType(StrEnum):
    """How a ground color is resolved."""

    PRIMITIVE = "primitive"
    THEME = "theme"
    CUSTOM = "custom"


class OnGroundRefType(StrEnum):
    """How the on-ground color is resolved."""

    PRIMITIVE = "primitive"
    AUTO = "auto"
    BLACK = "black"
    WHITE = "white"
    CUSTOM = "custom"


class ForegroundPosition(StrEnum):
    """Where the foreground marker goes in code syntax."""

    PREFIX = "prefix"
    SUFFIX = "suffix"


# =============================================================================
# Section 1: Stops and hues
# =============================================================================


class Stop(BaseModel):
    """A named lightness/chroma rung shared across all hues."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True, populate_by_name=True)

    name: str = Field(description="Shade identifier, e.g. '500'")
    lightness: float = Field(alias="L", ge=0.0, le=100.0, description="OKLCH lightness (0-100)")
    chroma: float = Field(alias="C", ge=0.0, le=0.4, description="OKLCH chroma (0-0.4)")


class Hue(BaseModel):
    """A named hue angle; ``full_gray`` forces chroma to zero."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True, populate_by_name=True)

    name: str = Field(description="Hue name, e.g. 'blue'")
    angle: float = Field(alias="H", ge=0.0, lt=360.0, description="OKLCH hue angle (0-360)")
    full_gray: bool = Field(default=False, description="Render this hue achromatic")


# Curated 13-step scale; chroma peaks around 500 and tapers at both ends.
_DEFAULT_STOP_VALUES: tuple[tuple[str, float, float], ...] = (
    ("0", 100, 0.02),
    ("50", 95, 0.05),
    ("100", 89, 0.11),
    ("200", 82, 0.16),
    ("300", 76, 0.18),
    ("400", 69, 0.19),
    ("500", 63, 0.21),
    ("600", 56, 0.19),
    ("700", 50, 0.17),
    ("800", 43, 0.14),
    ("900", 35, 0.1),
    ("950", 29, 0.05),
    ("1000", 25, 0.02),
)

_DEFAULT_HUE_VALUES: tuple[tuple[str, float], ...] = (
    ("gray", 0),
    ("red", 23),
    ("orange", 45),
    ("amber", 70),
    ("yellow", 95),
    ("lime", 125),
    ("green", 145),
    ("emerald", 165),
    ("teal", 180),
    ("cyan", 200),
    ("sky", 220),
    ("blue", 255),
    ("indigo", 275),
    ("violet", 290),
    ("purple", 305),
    ("fuchsia", 325),
    ("pink", 350),
    ("rose", 10),
)


def default_stops() -> list[Stop]:
    return [Stop(name=name, L=L, C=C) for name, L, C in _DEFAULT_STOP_VALUES]


def default_hues() -> list[Hue]:
    return [Hue(name=name, H=H, full_gray=name == "gray") for name, H in _DEFAULT_HUE_VALUES]


# =============================================================================
# Section 2: Contrast
# =============================================================================


class ContrastSettings(BaseModel):
    """Contrast preferences used when reporting palette accessibility."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    algorithm: str = Field(default="APCA", description="APCA or WCAG")
    direction: str = Field(default="text-on-bg", description="text-on-bg or bg-on-text")
    threshold: float = Field(default=75.0, ge=0.0, description="Minimum passing contrast")


# =============================================================================
# Section 3: Figma export
# =============================================================================

DEFAULT_INTENTS: dict[str, str] = {
    "primary": "blue",
    "danger": "red",
    "warning": "amber",
    "success": "green",
    "neutral": "gray",
}

_SHADE_NAMES: tuple[str, ...] = (
    "0",
    "50",
    "100",
    "200",
    "300",
    "400",
    "500",
    "600",
    "700",
    "800",
    "900",
    "950",
    "1000",
)

_DENSE_ALPHAS = "0-30,35,40,45,50,55,60,65,70-99"
_ON_ALPHAS = "5,10,15,20,25,30,40,50,60,70,80,90"


def _empty_shades() -> dict[str, str]:
    return {name: "" for name in _SHADE_NAMES}


def _default_semantic_shades() -> dict[str, str]:
    shades = _empty_shades()
    shades.update(
        {
            "300": "60",
            "400": "10",
            "600": "60",
            "800": "5,10,15,20,30,40,50,60,70,80,85,90,95",
        }
    )
    return shades


class NamingConfig(BaseModel):
    """Token naming conventions."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    elevation0: str = Field(default="ground", description="Base background name")
    elevation1: str = Field(default="ground1", description="Raised surface name")
    elevation2: str = Field(default="ground2", description="Highest elevation name")
    foreground_position: ForegroundPosition = Field(default=ForegroundPosition.PREFIX)
    foreground_modifier: str = Field(
        default="on/",
        description="Path marker for on-colors; a trailing '/' nests them in a group",
    )
    foreground_syntax: str = Field(default="on-", description="Code-syntax marker for on-colors")
    shade_group_name: str = Field(
        default="shade", description="Subgroup holding numbered shades; empty for flat shades"
    )

    @property
    def elevations(self) -> dict[str, str]:
        """Ground key -> configured elevation name."""
        return {
            "ground": self.elevation0,
            "ground1": self.elevation1,
            "ground2": self.elevation2,
        }

    @property
    def on_nested(self) -> bool:
        return self.foreground_modifier.endswith("/")

    @property
    def on_group_name(self) -> str:
        """Foreground path segment without its trailing slash."""
        return self.foreground_modifier.rstrip("/")


class AlphaConfig(BaseModel):
    """Alpha ramps (range-compressed strings) per token family."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    ground: str = _DENSE_ALPHAS
    on_ground: str = _ON_ALPHAS
    stark: str = _DENSE_ALPHAS
    on_stark: str = _ON_ALPHAS
    black_white: str = "5,10,15,20,25,30,35,40,45,50,55,60,65,70,75,80,85,90,95"

    semantic_default: str = _DENSE_ALPHAS
    on_semantic_default: str = _ON_ALPHAS
    semantic_shades: dict[str, str] = Field(default_factory=_default_semantic_shades)
    on_semantic_shades: dict[str, str] = Field(default_factory=_empty_shades)

    primitive_default: str = ""
    on_primitive_default: str = ""
    primitive_shades: dict[str, str] = Field(default_factory=_empty_shades)
    on_primitive_shades: dict[str, str] = Field(default_factory=_empty_shades)


class GroundSpec(BaseModel):
    """One elevation's ground color."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    ref_type: GroundRefType = GroundRefType.PRIMITIVE
    shade: str = "0"
    custom: str | None = Field(default=None, description="OKLCH or hex literal for custom grounds")


def _light_grounds() -> dict[str, GroundSpec]:
    return {
        "ground": GroundSpec(shade="0"),
        "ground1": GroundSpec(shade="0"),
        "ground2": GroundSpec(shade="0"),
    }


def _dark_grounds() -> dict[str, GroundSpec]:
    return {
        "ground": GroundSpec(shade="1000"),
        "ground1": GroundSpec(shade="950"),
        "ground2": GroundSpec(shade="900"),
    }


class GroundsSpec(BaseModel):
    """Ground colors per mode, keyed by ground/ground1/ground2."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    primitive_hue: str = Field(default="gray", description="Palette hue for primitive grounds")
    light: dict[str, GroundSpec] = Field(default_factory=_light_grounds)
    dark: dict[str, GroundSpec] = Field(default_factory=_dark_grounds)

    def for_mode(self, mode: ColorMode | str) -> dict[str, GroundSpec]:
        return self.light if mode == ColorMode.LIGHT else self.dark


class OnGroundSpec(BaseModel):
    """Foreground color placed on grounds."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    ref_type: OnGroundRefType = OnGroundRefType.PRIMITIVE
    hue: str = "gray"
    shade: str | None = Field(default=None, description="Defaults to 1000 (light) / 0 (dark)")
    custom: str | None = None


class OnGroundModes(BaseModel):
    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    light: OnGroundSpec = Field(default_factory=lambda: OnGroundSpec(shade="1000"))
    dark: OnGroundSpec = Field(default_factory=lambda: OnGroundSpec(shade="0"))

    def for_mode(self, mode: ColorMode | str) -> OnGroundSpec:
        return self.light if mode == ColorMode.LIGHT else self.dark


def _light_stark() -> dict[str, str]:
    levels = (100, 97, 93, 85, 73, 55, 40, 30, 22, 15, 10, 5, 0)
    return {name: f"oklch({lvl}% 0 0)" for name, lvl in zip(_SHADE_NAMES, levels, strict=True)}


def _dark_stark() -> dict[str, str]:
    levels = (0, 5, 10, 18, 28, 45, 60, 72, 82, 90, 95, 98, 100)
    return {name: f"oklch({lvl}% 0 0)" for name, lvl in zip(_SHADE_NAMES, levels, strict=True)}


class StarkSpec(BaseModel):
    """Per-mode grayscale ramp of maximum-contrast colors."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    light: dict[str, str] = Field(default_factory=_light_stark)
    dark: dict[str, str] = Field(default_factory=_dark_stark)
    default_shade_light: str = "1000"
    default_shade_dark: str = "1000"

    def shades(self, mode: ColorMode | str) -> dict[str, str]:
        return self.light if mode == ColorMode.LIGHT else self.dark

    def opposite_shades(self, mode: ColorMode | str) -> dict[str, str]:
        return self.dark if mode == ColorMode.LIGHT else self.light

    def default_shade(self, mode: ColorMode | str) -> str:
        return self.default_shade_light if mode == ColorMode.LIGHT else self.default_shade_dark


class FigmaExportSpec(BaseModel):
    """Everything the Figma variables export needs beyond the palette grid."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    color_profile: ColorProfile = ColorProfile.P3
    default_shade: str = "500"
    reverse_in_dark: bool = False
    palette_scopes: list[str] = Field(default_factory=list)
    intents: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_INTENTS))
    naming: NamingConfig = Field(default_factory=NamingConfig)
    alphas: AlphaConfig = Field(default_factory=AlphaConfig)
    grounds: GroundsSpec = Field(default_factory=GroundsSpec)
    on_ground: OnGroundModes = Field(default_factory=OnGroundModes)
    stark: StarkSpec = Field(default_factory=StarkSpec)
    exclusion_pattern: str = "#"

    # Migration maps. None means "derive from the prior document".
    hue_mapping: dict[str, str] | None = Field(
        default=None, description="File hue name -> palette hue name"
    )
    shade_source_map: dict[str, str] | None = Field(
        default=None, description="Palette shade -> shade in the prior palette file, or 'new'"
    )
    theme_shade_source_map: dict[str, str] | None = Field(
        default=None, description="Palette shade -> shade in the prior theme files, or 'new'"
    )


# =============================================================================
# Root
# =============================================================================


class PaletteSpecYAML(BaseModel):
    """Root model of palettespec.yaml."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    stops: list[Stop] = Field(default_factory=default_stops)
    hues: list[Hue] = Field(default_factory=default_hues)
    contrast: ContrastSettings = Field(default_factory=ContrastSettings)
    figma: FigmaExportSpec = Field(default_factory=FigmaExportSpec)

    def stop_names(self) -> list[str]:
        return [stop.name for stop in self.stops]

    def hue_names(self) -> list[str]:
        return [hue.name for hue in self.hues]
