"""Tests for huehunt.core.colors – base/variant color generation."""

from __future__ import annotations

import random

import pytest

from huehunt.core.colors import Color, ColorPairGenerator
from tests.fakes import ScriptedRandom


# ---------------------------------------------------------------------------
# Color dataclass
# ---------------------------------------------------------------------------

class TestColor:
    def test_frozen(self):
        c = Color(10, 60, 50)
        with pytest.raises(AttributeError):
            c.hue = 20  # type: ignore[misc]

    def test_to_css(self):
        assert Color(200, 75, 45).to_css() == "hsl(200, 75%, 45%)"

    def test_to_hex_red(self):
        assert Color(0, 100, 50).to_hex() == "#FF0000"

    def test_to_hex_white_and_black(self):
        assert Color(0, 0, 100).to_hex() == "#FFFFFF"
        assert Color(0, 0, 0).to_hex() == "#000000"

    def test_lightness_changes_hex(self):
        assert Color(200, 70, 50).to_hex() != Color(200, 70, 55).to_hex()


# ---------------------------------------------------------------------------
# generate_base
# ---------------------------------------------------------------------------

class TestGenerateBase:
    @pytest.mark.parametrize("seed", range(50))
    def test_within_ranges(self, seed: int):
        base = ColorPairGenerator(random.Random(seed)).generate_base()
        assert 0 <= base.hue < 360
        assert 50 <= base.saturation < 100
        assert 40 <= base.lightness < 80

    def test_uses_injected_random(self):
        gen = ColorPairGenerator(ScriptedRandom(ranges=[123, 77, 61]))
        assert gen.generate_base() == Color(123, 77, 61)


# ---------------------------------------------------------------------------
# generate_variant
# ---------------------------------------------------------------------------

class TestGenerateVariant:
    @pytest.mark.parametrize("seed", range(50))
    def test_keeps_hue_and_saturation(self, seed: int):
        gen = ColorPairGenerator(random.Random(seed))
        base = gen.generate_base()
        variant = gen.generate_variant(base)
        assert variant.hue == base.hue
        assert variant.saturation == base.saturation
        assert 20 <= variant.lightness <= 90

    @pytest.mark.parametrize("seed", range(50))
    def test_gap_in_delta_range_away_from_bounds(self, seed: int):
        gen = ColorPairGenerator(random.Random(seed))
        variant = gen.generate_variant(Color(100, 60, 50))
        assert 5 <= abs(variant.lightness - 50) < 15

    def test_lighter_when_sign_positive(self):
        gen = ColorPairGenerator(ScriptedRandom(ranges=[7], floats=[0.9]))
        assert gen.generate_variant(Color(10, 60, 50)).lightness == 57

    def test_darker_when_sign_negative(self):
        gen = ColorPairGenerator(ScriptedRandom(ranges=[7], floats=[0.1]))
        assert gen.generate_variant(Color(10, 60, 50)).lightness == 43

    def test_clamps_at_upper_bound(self):
        # 79 + 14 would be 93; the gap shrinks to 11 instead of retrying
        gen = ColorPairGenerator(ScriptedRandom(ranges=[14], floats=[0.9]))
        assert gen.generate_variant(Color(10, 60, 79)).lightness == 90

    def test_clamps_at_lower_bound(self):
        gen = ColorPairGenerator(ScriptedRandom(ranges=[14], floats=[0.1]))
        assert gen.generate_variant(Color(10, 60, 25)).lightness == 20

    @pytest.mark.parametrize("seed", range(50))
    def test_variant_always_differs_from_valid_base(self, seed: int):
        gen = ColorPairGenerator(random.Random(seed))
        base = gen.generate_base()
        assert gen.generate_variant(base) != base
