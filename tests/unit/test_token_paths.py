"""Tests for numeric key classification and code-syntax translation."""

from __future__ import annotations

import pytest

from palette_machine.core.ir import AlphaRef, ForegroundPosition, NamingConfig, ShadeRef
from palette_machine.core.token_paths import classify_numeric_key, is_numeric_key, to_code_syntax

# =============================================================================
# Classification
# =============================================================================


class TestClassifyNumericKey:
    def test_under_shade_group_is_shade(self):
        assert classify_numeric_key("500", "shade") == ShadeRef("500")

    def test_under_legacy_step_is_shade(self):
        assert classify_numeric_key("500", "step") == ShadeRef("500")

    def test_custom_shade_group(self):
        assert classify_numeric_key("50", "tone", shade_group="tone") == ShadeRef("50")
        assert classify_numeric_key("50", "shade", shade_group="tone") == AlphaRef(50)

    def test_under_name_is_alpha(self):
        assert classify_numeric_key("15", "primary") == AlphaRef(15)
        assert classify_numeric_key("100", "primary") == AlphaRef(100)

    def test_top_level_number_is_alpha(self):
        assert classify_numeric_key("40", None) == AlphaRef(40)

    def test_large_bare_number_is_neither(self):
        assert classify_numeric_key("500", "primary") is None

    def test_non_numeric(self):
        assert classify_numeric_key("shade", "primary") is None
        assert classify_numeric_key("$root", "shade") is None
        assert not is_numeric_key("5a")

    def test_empty_shade_group_never_matches_empty_parent(self):
        assert classify_numeric_key("50", "", shade_group="") == AlphaRef(50)


# =============================================================================
# Code syntax
# =============================================================================


class TestToCodeSyntax:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("primary/shade/500", "primary-500"),
            ("primary/shade/500/60", "primary-500/60"),
            ("primary/10", "primary/10"),
            ("on/primary/shade/500", "on-primary-500"),
            ("on/primary/shade/500/60", "on-primary-500/60"),
            ("on/primary/15", "on-primary/15"),
            ("on/ground/50", "on-ground/50"),
            ("ground/50", "ground/50"),
            ("ground", "ground"),
            ("stark/shade/500", "stark-500"),
            ("mode_name", "mode_name"),
        ],
    )
    def test_default_naming(self, path, expected):
        assert to_code_syntax(path, NamingConfig()) == expected

    def test_suffix_position(self):
        naming = NamingConfig(foreground_position=ForegroundPosition.SUFFIX, foreground_syntax="-on")
        assert to_code_syntax("on/primary/shade/500", naming) == "primary-500-on"
        assert to_code_syntax("on/primary/shade/500/60", naming) == "primary-500-on/60"

    def test_flat_shades(self):
        naming = NamingConfig(shade_group_name="")
        assert to_code_syntax("primary/500", naming) == "primary-500"
        assert to_code_syntax("primary/500/60", naming) == "primary-500/60"

    def test_on_only_recognized_at_start(self):
        assert to_code_syntax("primary/on", NamingConfig()) == "primary-on"
