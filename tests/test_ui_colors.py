"""Tests for huehunt.ui.colors – color blending, rank badges and timer colors."""

from __future__ import annotations

from huehunt.ui.colors import ThemeColors, blend_hex, rank_badge, timer_color


# ===========================================================================
# ThemeColors – constants exist
# ===========================================================================

class TestThemeColors:
    def test_primary_is_hex(self):
        assert ThemeColors.PRIMARY.startswith("#")
        assert len(ThemeColors.PRIMARY) == 7

    def test_result_colors_differ(self):
        assert ThemeColors.CORRECT != ThemeColors.WRONG

    def test_card_bg_is_rgba(self):
        assert ThemeColors.CARD_BG.startswith("rgba(")


# ===========================================================================
# blend_hex
# ===========================================================================

class TestBlendHex:
    def test_t_zero_returns_a(self):
        assert blend_hex("#FF0000", "#0000FF", 0.0) == "#FF0000"

    def test_t_one_returns_b(self):
        assert blend_hex("#FF0000", "#0000FF", 1.0) == "#0000FF"

    def test_midpoint(self):
        result = blend_hex("#000000", "#FFFFFF", 0.5)
        assert 126 <= int(result[1:3], 16) <= 128

    def test_clamps_t(self):
        assert blend_hex("#FF0000", "#0000FF", -1.0) == "#FF0000"
        assert blend_hex("#FF0000", "#0000FF", 2.0) == "#0000FF"

    def test_invalid_inputs_return_a(self):
        assert blend_hex("FF0000", "#0000FF", 0.5) == "FF0000"
        assert blend_hex("#FFF", "#000000", 0.5) == "#FFF"
        assert blend_hex("#GGHHII", "#000000", 0.5) == "#GGHHII"

    def test_whitespace_padding(self):
        assert blend_hex("  #FF0000  ", "  #0000FF  ", 0.0) == "#FF0000"


# ===========================================================================
# rank_badge / timer_color
# ===========================================================================

class TestRankBadge:
    def test_podium_medals(self):
        assert rank_badge(1) == "🥇"
        assert rank_badge(2) == "🥈"
        assert rank_badge(3) == "🥉"

    def test_others_numbered(self):
        assert rank_badge(4) == "#4"
        assert rank_badge(10) == "#10"


class TestTimerColor:
    def test_full_time_is_full_color(self):
        assert timer_color(10, 10) == ThemeColors.TIMER_FULL.upper()

    def test_no_time_is_empty_color(self):
        assert timer_color(0, 10) == ThemeColors.TIMER_EMPTY.upper()

    def test_zero_budget(self):
        assert timer_color(0, 0) == ThemeColors.TIMER_EMPTY
