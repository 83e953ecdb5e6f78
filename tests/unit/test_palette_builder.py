"""Tests for palette grid generation."""

from __future__ import annotations

import pytest

# =============================================================================
# Grid shape
# =============================================================================


class TestBuildPalette:
    def test_one_cell_per_hue_and_stop(self, small_palette):
        assert len(small_palette) == 2
        assert small_palette.stop_names == ("0", "500", "1000")
        for row in small_palette:
            assert [cell.stop for cell in row.colors] == ["0", "500", "1000"]

    def test_hue_order_is_preserved(self, small_palette):
        assert [row.name for row in small_palette] == ["gray", "blue"]

    def test_full_gray_forces_zero_chroma(self, small_palette):
        cell = small_palette.cell("gray", "500")
        assert cell is not None
        assert cell.chroma == 0.0
        assert not cell.clipped

    def test_endpoints_are_white_and_black(self, small_palette):
        assert small_palette.cell("gray", "0").hex == "#ffffff"
        assert small_palette.cell("gray", "1000").hex == "#000000"
        assert small_palette.cell("gray", "0").hex_p3 == "#ffffff"

    def test_oklch_string(self, small_palette):
        assert small_palette.cell("blue", "500").oklch == "oklch(0.550 0.150 250)"

    def test_lookup_misses(self, small_palette):
        assert small_palette.hue("teal") is None
        assert small_palette.cell("blue", "750") is None

    def test_deterministic(self, small_spec):
        from palette_machine.core.palette import build_palette

        assert build_palette(small_spec.hues, small_spec.stops) == build_palette(small_spec.hues, small_spec.stops)

    def test_empty_inputs(self):
        from palette_machine.core.palette import build_palette

        palette = build_palette([], [])
        assert len(palette) == 0
        assert palette.stop_names == ()


# =============================================================================
# Gamut
# =============================================================================


class TestGamut:
    def test_extreme_chroma_is_clipped(self):
        from palette_machine.core.ir import Hue, Stop
        from palette_machine.core.palette import build_palette, clipped_cells

        palette = build_palette([Hue(name="blue", H=250)], [Stop(name="x", L=50, C=0.4)])
        cell = palette.cell("blue", "x")
        assert cell.clipped
        assert clipped_cells(palette) == [("blue", "x")]

    def test_achromatic_never_clips(self, small_palette):
        from palette_machine.core.palette import clipped_cells

        assert all(name != "gray" for name, _ in clipped_cells(small_palette))
        assert all(name != "gray" for name, _ in clipped_cells(small_palette, p3=True))

    def test_hex_for(self, small_palette):
        cell = small_palette.cell("blue", "500")
        assert cell.hex_for(False) == cell.hex
        assert cell.hex_for(True) == cell.hex_p3


# =============================================================================
# Mirroring
# =============================================================================


class TestMirrorStop:
    @pytest.mark.parametrize(
        ("stop", "mirrored"),
        [("0", "1000"), ("500", "500"), ("1000", "0"), ("750", "750")],
    )
    def test_mirror(self, small_palette, stop, mirrored):
        assert small_palette.mirror_stop(stop) == mirrored
