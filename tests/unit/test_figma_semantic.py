"""Tests for the light/dark semantic documents."""

from __future__ import annotations

import json
import logging

import pytest

from palette_machine.core.figma_semantic import build_semantic_document, literal_hex
from palette_machine.core.ir import GroundSpec, GroundsSpec, NamingConfig, OnGroundModes, OnGroundSpec
from palette_machine.core.migration import PriorDocument
from palette_machine.core.token_tree import CODE_SYNTAX_KEY, VARIABLE_ID_KEY


def _syntax(leaf):
    return leaf["$extensions"][CODE_SYNTAX_KEY]["WEB"]


def _id(leaf):
    return leaf["$extensions"].get(VARIABLE_ID_KEY)


def _update(figma, **changes):
    return figma.model_copy(update=changes)


def _light_grounds(figma, ground: GroundSpec):
    grounds = GroundsSpec(
        light={"ground": ground, "ground1": GroundSpec(shade="0"), "ground2": GroundSpec(shade="0")},
        dark=figma.grounds.dark,
    )
    return _update(figma, grounds=grounds)


@pytest.fixture
def light(small_palette, small_figma):
    return build_semantic_document("light", small_palette, small_figma)


@pytest.fixture
def dark(small_palette, small_figma):
    return build_semantic_document("dark", small_palette, small_figma)


# =============================================================================
# Literal helpers
# =============================================================================


class TestLiteralHex:
    def test_oklch(self):
        assert literal_hex("oklch(50% 0 0)", None) == "#636363"

    def test_hex_gains_hash(self):
        assert literal_hex("#abcdef", None) == "#abcdef"
        assert literal_hex("abcdef", None) == "#abcdef"

    def test_fallback(self):
        assert literal_hex("hsl(0 0% 0%)", "#808080") == "#808080"
        assert literal_hex(None, "#808080") == "#808080"
        assert literal_hex("", None) is None


# =============================================================================
# Document layout
# =============================================================================


class TestLayout:
    def test_top_level_order(self, light):
        assert list(light) == [
            "mode_name",
            "ground",
            "ground1",
            "ground2",
            "on",
            "stark",
            "black",
            "white",
            "primary",
            "neutral",
            "gray",
            "blue",
            "$extensions",
        ]
        assert light["$extensions"] == {"com.figma.modeName": "light"}

    def test_mode_name(self, light, dark):
        assert light["mode_name"]["$type"] == "string"
        assert light["mode_name"]["$value"] == "light"
        assert dark["mode_name"]["$value"] == "dark"
        assert _syntax(light["mode_name"]) == "mode_name"

    def test_on_subtree(self, light):
        assert list(light["on"]) == ["ground", "stark", "primary", "neutral", "gray", "blue"]

    def test_deterministic(self, small_palette, small_figma):
        first = build_semantic_document("light", small_palette, small_figma)
        second = build_semantic_document("light", small_palette, small_figma)
        assert json.dumps(first) == json.dumps(second)


# =============================================================================
# Grounds
# =============================================================================


class TestGrounds:
    def test_primitive_ground(self, light):
        ground = light["ground"]
        assert list(ground) == ["50", "100", "$root"]
        assert ground["50"]["$value"]["hex"] == "#FFFFFF"
        assert ground["50"]["$value"]["alpha"] == 0.5
        assert ground["100"]["$value"] == "{--gray-0}"
        assert ground["$root"]["$value"] == "{--gray-0}"

    def test_code_syntax(self, light):
        assert _syntax(light["ground"]["50"]) == "ground/50"
        assert _syntax(light["ground"]["$root"]) == "ground"

    def test_dark_grounds(self, dark):
        assert dark["ground"]["$root"]["$value"] == "{--gray-1000}"
        assert dark["ground2"]["$root"]["$value"] == "{--gray-500}"

    def test_custom_ground(self, small_palette, small_figma):
        figma = _light_grounds(small_figma, GroundSpec(ref_type="custom", custom="oklch(50% 0 0)"))
        doc = build_semantic_document("light", small_palette, figma)
        assert doc["ground"]["$root"]["$value"]["hex"] == "#636363"
        assert doc["ground"]["$root"]["$value"]["alpha"] == 1
        assert doc["ground"]["100"]["$value"]["hex"] == "#636363"

    def test_unreadable_custom_ground(self, small_palette, small_figma, caplog):
        figma = _light_grounds(small_figma, GroundSpec(ref_type="custom", custom="hsl(1 2 3)"))
        with caplog.at_level(logging.WARNING):
            doc = build_semantic_document("light", small_palette, figma)
        assert doc["ground"]["$root"]["$value"]["hex"] == "#000000"
        assert "Unreadable custom ground" in caplog.text

    def test_theme_ground(self, small_palette, small_figma):
        figma = _light_grounds(small_figma, GroundSpec(ref_type="theme", shade="500"))
        doc = build_semantic_document("light", small_palette, figma)
        assert doc["ground"]["$root"]["$value"] == "{neutral.shade.500}"
        assert doc["ground"]["50"]["$value"]["hex"] == small_palette.cell("gray", "500").hex_p3.upper()

    def test_renamed_elevation(self, small_palette, small_figma):
        figma = _update(small_figma, naming=NamingConfig(elevation0="surface"))
        doc = build_semantic_document("light", small_palette, figma)
        assert "surface" in doc
        assert "ground" not in doc
        assert "surface" in doc["on"]


# =============================================================================
# On-ground
# =============================================================================


class TestOnGround:
    def test_primitive_default(self, light, dark):
        assert light["on"]["ground"]["50"]["$value"]["hex"] == "#000000"
        assert dark["on"]["ground"]["50"]["$value"]["hex"] == "#FFFFFF"
        assert _syntax(light["on"]["ground"]["50"]) == "on-ground/50"

    def test_opaque_primitive_is_alias(self, small_palette, small_figma):
        alphas = small_figma.alphas.model_copy(update={"on_ground": "50,100"})
        doc = build_semantic_document("light", small_palette, _update(small_figma, alphas=alphas))
        assert doc["on"]["ground"]["100"]["$value"] == "{--gray-1000}"

    def test_white(self, small_palette, small_figma):
        on_ground = OnGroundModes(light=OnGroundSpec(ref_type="white"), dark=OnGroundSpec(shade="0"))
        doc = build_semantic_document("light", small_palette, _update(small_figma, on_ground=on_ground))
        assert doc["on"]["ground"]["50"]["$value"]["hex"] == "#FFFFFF"

    def test_auto_contrasts_with_ground(self, small_palette, small_figma):
        on_ground = OnGroundModes(light=OnGroundSpec(ref_type="auto"), dark=OnGroundSpec(ref_type="auto"))
        figma = _update(small_figma, on_ground=on_ground)
        light = build_semantic_document("light", small_palette, figma)
        dark = build_semantic_document("dark", small_palette, figma)
        assert light["on"]["ground"]["50"]["$value"]["hex"] == "#000000"
        assert dark["on"]["ground"]["50"]["$value"]["hex"] == "#FFFFFF"

    def test_missing_primitive_falls_back(self, small_palette, small_figma, caplog):
        on_ground = OnGroundModes(light=OnGroundSpec(hue="teal", shade="1000"), dark=OnGroundSpec(shade="0"))
        with caplog.at_level(logging.WARNING):
            doc = build_semantic_document("light", small_palette, _update(small_figma, on_ground=on_ground))
        assert doc["on"]["ground"]["50"]["$value"]["hex"] == "#000000"
        assert "choosing automatically" in caplog.text


# =============================================================================
# Stark, black and white
# =============================================================================


class TestStark:
    def test_mode_ramp(self, light):
        shades = light["stark"]["shade"]
        assert list(shades) == ["0", "500", "1000"]
        assert shades["0"]["$value"]["hex"] == "#FFFFFF"
        assert shades["500"]["$value"]["hex"] == "#636363"
        assert _syntax(shades["500"]) == "stark-500"

    def test_alphas_use_default_shade(self, light, dark):
        assert light["stark"]["50"]["$value"]["hex"] == "#000000"
        assert dark["stark"]["50"]["$value"]["hex"] == "#FFFFFF"

    def test_root_alias(self, light):
        assert light["stark"]["$root"]["$value"] == "{stark.shade.1000}"

    def test_on_stark_uses_opposite_ramp(self, light):
        on_stark = light["on"]["stark"]["shade"]
        assert on_stark["0"]["$value"]["hex"] == "#000000"
        assert on_stark["1000"]["$value"]["hex"] == "#FFFFFF"

    def test_black_and_white(self, light):
        assert light["black"]["50"]["$value"]["hex"] == "#000000"
        assert light["white"]["50"]["$value"]["alpha"] == 0.5
        assert light["white"]["$root"]["$value"]["hex"] == "#FFFFFF"
        assert light["white"]["$root"]["$value"]["alpha"] == 1


# =============================================================================
# Intents and hues
# =============================================================================


class TestColorGroups:
    def test_intent_structure(self, light):
        primary = light["primary"]
        assert list(primary) == ["shade", "10", "$root"]
        assert primary["shade"]["0"]["$value"] == "{--blue-0}"
        assert primary["shade"]["500"]["$root"]["$value"] == "{--blue-500}"
        assert primary["shade"]["500"]["60"]["$value"]["alpha"] == 0.6
        assert primary["$root"]["$value"] == "{primary.shade.500}"

    def test_root_alpha_uses_default_shade(self, light, small_palette):
        assert light["primary"]["10"]["$value"]["hex"] == small_palette.cell("blue", "500").hex_p3.upper()
        assert "100" not in light["primary"]

    def test_code_syntax(self, light):
        primary = light["primary"]
        assert _syntax(primary["shade"]["500"]["$root"]) == "primary-500"
        assert _syntax(primary["shade"]["500"]["60"]) == "primary-500/60"
        assert _syntax(primary["10"]) == "primary/10"
        assert _syntax(primary["$root"]) == "primary"
        assert _syntax(light["on"]["primary"]["shade"]["0"]) == "on-primary-0"

    def test_on_colors(self, light):
        on_primary = light["on"]["primary"]["shade"]
        assert on_primary["0"]["$value"]["hex"] == "#000000"
        assert on_primary["1000"]["$value"]["hex"] == "#FFFFFF"

    def test_hue_groups_skip_semantic_alphas(self, light):
        assert list(light["blue"]) == ["shade", "$root"]
        assert light["blue"]["shade"]["500"]["$value"] == "{--blue-500}"
        assert light["blue"]["$root"]["$value"] == "{blue.shade.500}"

    def test_unknown_intent_hue_is_skipped(self, small_palette, small_figma, caplog):
        figma = _update(small_figma, intents={"primary": "blue", "brand": "teal"})
        with caplog.at_level(logging.WARNING):
            doc = build_semantic_document("light", small_palette, figma)
        assert "brand" not in doc
        assert "brand" in caplog.text

    def test_flat_shades(self, small_palette, small_figma):
        figma = _update(small_figma, naming=NamingConfig(shade_group_name=""))
        doc = build_semantic_document("light", small_palette, figma)
        assert doc["primary"]["0"]["$value"] == "{--blue-0}"
        assert doc["primary"]["500"]["60"]["$value"]["alpha"] == 0.6
        assert doc["primary"]["$root"]["$value"] == "{primary.500}"
        assert doc["stark"]["$root"]["$value"] == "{stark.1000}"

    def test_flat_shades_keep_shade_code_syntax(self, small_palette, small_figma):
        figma = _update(small_figma, naming=NamingConfig(shade_group_name=""))
        doc = build_semantic_document("light", small_palette, figma)
        assert _syntax(doc["primary"]["0"]) == "primary-0"
        assert _syntax(doc["primary"]["500"]["$root"]) == "primary-500"
        assert _syntax(doc["primary"]["500"]["60"]) == "primary-500/60"
        assert _syntax(doc["on"]["primary"]["0"]) == "on-primary-0"
        assert _syntax(doc["stark"]["0"]) == "stark-0"
        assert _syntax(doc["primary"]["10"]) == "primary/10"

    def test_flat_shade_colliding_with_root_alpha_warns(self, small_palette, small_figma, caplog):
        alphas = small_figma.alphas.model_copy(update={"semantic_default": "0,10"})
        figma = _update(small_figma, naming=NamingConfig(shade_group_name=""), alphas=alphas)
        with caplog.at_level(logging.WARNING):
            doc = build_semantic_document("light", small_palette, figma)
        assert doc["primary"]["0"]["$value"] == "{--blue-0}"
        assert _syntax(doc["primary"]["0"]) == "primary-0"
        assert "primary/0 is emitted twice" in caplog.text

    def test_flat_foreground_modifier(self, small_palette, small_figma):
        figma = _update(small_figma, naming=NamingConfig(foreground_modifier="on-"))
        doc = build_semantic_document("light", small_palette, figma)
        assert "on" not in doc
        assert _syntax(doc["on-primary"]["shade"]["0"]) == "on-primary-0"
        assert "50" in doc["on-ground"]


# =============================================================================
# Dark-mode reversal
# =============================================================================


class TestReverseInDark:
    def test_dark_points_at_mirror(self, small_palette, small_figma):
        figma = _update(small_figma, reverse_in_dark=True)
        doc = build_semantic_document("dark", small_palette, figma)
        assert doc["primary"]["shade"]["0"]["$value"] == "{--blue-1000}"
        assert doc["primary"]["shade"]["1000"]["$value"] == "{--blue-0}"
        assert doc["primary"]["shade"]["500"]["$root"]["$value"] == "{--blue-500}"
        assert doc["on"]["primary"]["shade"]["0"]["$value"]["hex"] == "#FFFFFF"

    def test_theme_ground_matches_its_alias(self, small_palette, small_figma):
        grounds = GroundsSpec(
            light=small_figma.grounds.light,
            dark={
                "ground": GroundSpec(ref_type="theme", shade="1000"),
                "ground1": GroundSpec(shade="1000"),
                "ground2": GroundSpec(shade="500"),
            },
        )
        on_ground = OnGroundModes(light=OnGroundSpec(ref_type="auto"), dark=OnGroundSpec(ref_type="auto"))
        figma = _update(small_figma, reverse_in_dark=True, grounds=grounds, on_ground=on_ground)
        doc = build_semantic_document("dark", small_palette, figma)

        # neutral.shade.1000 is reversed to gray-0, so the literals are white too
        assert doc["ground"]["$root"]["$value"] == "{neutral.shade.1000}"
        assert doc["neutral"]["shade"]["1000"]["$value"] == "{--gray-0}"
        assert doc["ground"]["50"]["$value"]["hex"] == "#FFFFFF"
        assert doc["on"]["ground"]["50"]["$value"]["hex"] == "#000000"

    def test_light_is_unchanged(self, small_palette, small_figma):
        figma = _update(small_figma, reverse_in_dark=True)
        assert build_semantic_document("light", small_palette, figma) == build_semantic_document(
            "light", small_palette, small_figma
        )

    def test_ids_follow_the_key(self, small_palette, small_figma):
        figma = _update(small_figma, reverse_in_dark=True)
        prior = PriorDocument(
            {"primary": {"shade": {"0": {"$type": "color", "$extensions": {VARIABLE_ID_KEY: "V:p0"}}}}}
        )
        doc = build_semantic_document("dark", small_palette, figma, prior)
        assert _id(doc["primary"]["shade"]["0"]) == "V:p0"
        assert _id(doc["primary"]["shade"]["1000"]) is None


# =============================================================================
# Variable id migration
# =============================================================================


@pytest.fixture
def legacy_prior(fixtures_dir):
    return PriorDocument(json.loads((fixtures_dir / "figma" / "legacy_light.json").read_text(encoding="utf-8")))


class TestMigration:
    def test_ground_ids(self, small_palette, small_figma, legacy_prior):
        doc = build_semantic_document("light", small_palette, small_figma, legacy_prior)
        assert _id(doc["ground"]["50"]) == "VariableID:10:1"
        assert _id(doc["ground"]["$root"]) == "VariableID:10:2"
        assert _id(doc["on"]["ground"]["50"]) == "VariableID:12:1"

    def test_legacy_step_lands_on_root(self, small_palette, small_figma, legacy_prior):
        doc = build_semantic_document("light", small_palette, small_figma, legacy_prior)
        assert _id(doc["primary"]["shade"]["0"]) == "VariableID:13:2"
        assert _id(doc["primary"]["shade"]["500"]["$root"]) == "VariableID:13:3"
        assert _id(doc["primary"]["10"]) == "VariableID:13:1"

    def test_flat_on_key(self, small_palette, small_figma, legacy_prior):
        doc = build_semantic_document("light", small_palette, small_figma, legacy_prior)
        assert _id(doc["on"]["primary"]["shade"]["500"]) == "VariableID:14:1"

    def test_root_shade_and_hue(self, small_palette, small_figma, legacy_prior):
        doc = build_semantic_document("light", small_palette, small_figma, legacy_prior)
        assert _id(doc["neutral"]["shade"]["500"]["$root"]) == "VariableID:15:2"
        assert _id(doc["blue"]["shade"]["1000"]) == "VariableID:16:1"
        assert _id(doc["stark"]["50"]) is None

    def test_new_shade_skips_lookup(self, small_palette, small_figma, legacy_prior):
        doc = build_semantic_document(
            "light", small_palette, small_figma, legacy_prior, theme_shade_map={"500": "new"}
        )
        assert _id(doc["primary"]["shade"]["500"]["$root"]) is None
        assert _id(doc["primary"]["shade"]["0"]) == "VariableID:13:2"

    def test_remapped_shade(self, small_palette, small_figma, legacy_prior):
        doc = build_semantic_document(
            "light", small_palette, small_figma, legacy_prior, theme_shade_map={"1000": "500"}
        )
        assert _id(doc["primary"]["shade"]["1000"]) == "VariableID:13:3"
