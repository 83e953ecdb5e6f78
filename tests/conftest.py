"""Shared pytest fixtures for palette-machine tests."""

from pathlib import Path

import pytest

from palette_machine.core.ir import (
    AlphaConfig,
    FigmaExportSpec,
    GroundsSpec,
    GroundSpec,
    Hue,
    PaletteSpecYAML,
    StarkSpec,
    Stop,
)
from palette_machine.core.palette import build_palette


@pytest.fixture
def small_stops() -> list[Stop]:
    """Three stops: white, a mid tone and black."""
    return [
        Stop(name="0", L=100, C=0.0),
        Stop(name="500", L=55, C=0.15),
        Stop(name="1000", L=0, C=0.0),
    ]


@pytest.fixture
def small_hues() -> list[Hue]:
    return [
        Hue(name="gray", H=0, full_gray=True),
        Hue(name="blue", H=250),
    ]


@pytest.fixture
def small_figma() -> FigmaExportSpec:
    """Export settings with short alpha ramps so documents stay readable."""
    return FigmaExportSpec(
        intents={"primary": "blue", "neutral": "gray"},
        default_shade="500",
        alphas=AlphaConfig(
            ground="50,100",
            on_ground="50",
            stark="50",
            on_stark="",
            black_white="50",
            semantic_default="10,100",
            on_semantic_default="",
            semantic_shades={"500": "60"},
            on_semantic_shades={},
            primitive_default="",
            on_primitive_default="",
            primitive_shades={},
            on_primitive_shades={},
        ),
        grounds=GroundsSpec(
            light={
                "ground": GroundSpec(shade="0"),
                "ground1": GroundSpec(shade="0"),
                "ground2": GroundSpec(shade="0"),
            },
            dark={
                "ground": GroundSpec(shade="1000"),
                "ground1": GroundSpec(shade="1000"),
                "ground2": GroundSpec(shade="500"),
            },
        ),
        stark=StarkSpec(
            light={"0": "oklch(100% 0 0)", "500": "oklch(50% 0 0)", "1000": "oklch(0% 0 0)"},
            dark={"0": "oklch(0% 0 0)", "500": "oklch(50% 0 0)", "1000": "oklch(100% 0 0)"},
        ),
    )


@pytest.fixture
def small_spec(small_stops, small_hues, small_figma) -> PaletteSpecYAML:
    return PaletteSpecYAML(stops=small_stops, hues=small_hues, figma=small_figma)


@pytest.fixture
def small_palette(small_spec):
    return build_palette(small_spec.hues, small_spec.stops)


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return Path(__file__).parent / "fixtures"
