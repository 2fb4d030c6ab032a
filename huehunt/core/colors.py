from __future__ import annotations

import colorsys
import random
from dataclasses import dataclass
from typing import Optional

BASE_HUE_RANGE = (0, 360)
BASE_SATURATION_RANGE = (50, 100)
BASE_LIGHTNESS_RANGE = (40, 80)
TONE_DELTA_RANGE = (5, 15)
VARIANT_LIGHTNESS_BOUNDS = (20, 90)


@dataclass(frozen=True)
class Color:
    """HSL color: hue in degrees, saturation and lightness in percent."""

    hue: int
    saturation: int
    lightness: int

    def to_css(self) -> str:
        return f"hsl({self.hue}, {self.saturation}%, {self.lightness}%)"

    def to_hex(self) -> str:
        """Return the color as ``#RRGGBB`` for painting."""
        r, g, b = colorsys.hls_to_rgb(
            (self.hue % 360) / 360.0,
            self.lightness / 100.0,
            self.saturation / 100.0,
        )
        return f"#{round(r * 255):02X}{round(g * 255):02X}{round(b * 255):02X}"


class ColorPairGenerator:
    """Draws a base color and a slightly lighter or darker variant of it.

    The variant keeps hue and saturation and moves lightness by a tone delta
    in [5, 15). The result is clamped to [20, 90], so near those bounds the
    visible gap can end up smaller than the sampled delta.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()

    def generate_base(self) -> Color:
        return Color(
            hue=self._rng.randrange(*BASE_HUE_RANGE),
            saturation=self._rng.randrange(*BASE_SATURATION_RANGE),
            lightness=self._rng.randrange(*BASE_LIGHTNESS_RANGE),
        )

    def generate_variant(self, base: Color) -> Color:
        delta = self._rng.randrange(*TONE_DELTA_RANGE)
        if self._rng.random() < 0.5:
            delta = -delta
        low, high = VARIANT_LIGHTNESS_BOUNDS
        lightness = max(low, min(high, base.lightness + delta))
        return Color(hue=base.hue, saturation=base.saturation, lightness=lightness)
