"""Theme colors and color utilities for the UI."""


class ThemeColors:
    """Light theme palette."""

    BG_TOP = "#f3f0ff"
    BG_MIDDLE = "#e6e0ff"
    BG_BOTTOM = "#d4ccff"

    PRIMARY = "#5b4bdb"
    PRIMARY_LIGHT = "#8c7ef0"
    PRIMARY_DARK = "#3a2ca8"

    CORAL = "#ff8a65"
    AMBER = "#ffb74d"
    MINT = "#4cc38a"

    CARD_BG = "rgba(255, 255, 255, 0.88)"
    CARD_BORDER = "rgba(255, 255, 255, 0.6)"

    TEXT_PRIMARY = "#1f1a3a"
    TEXT_SECONDARY = "#4a4572"
    TEXT_MUTED = "#7c78a0"

    # Result highlights drawn around grid cells
    CORRECT = "#2e9e5b"
    WRONG = "#d64545"

    TIMER_TRACK = "#e8e4ff"
    TIMER_FULL = "#4cc38a"
    TIMER_EMPTY = "#d64545"

    MEDALS = {1: "🥇", 2: "🥈", 3: "🥉"}


def blend_hex(a: str, b: str, t: float) -> str:
    """Blend two #RRGGBB colors. t=0 -> a, t=1 -> b."""
    try:
        a = a.strip()
        b = b.strip()
        if not (a.startswith("#") and b.startswith("#") and len(a) == 7 and len(b) == 7):
            return a
        t = max(0.0, min(1.0, float(t)))
        ar, ag, ab = int(a[1:3], 16), int(a[3:5], 16), int(a[5:7], 16)
        br, bg, bb = int(b[1:3], 16), int(b[3:5], 16), int(b[5:7], 16)
        r = int(ar + (br - ar) * t)
        g = int(ag + (bg - ag) * t)
        bl = int(ab + (bb - ab) * t)
        return f"#{r:02X}{g:02X}{bl:02X}"
    except ValueError:
        return a


def rank_badge(rank: int) -> str:
    """Medal for the podium, ``#N`` for everyone else."""
    return ThemeColors.MEDALS.get(rank, f"#{rank}")


def timer_color(time_left: int, budget: int) -> str:
    """Countdown bar color fading from green to red as time runs out."""
    if budget <= 0:
        return ThemeColors.TIMER_EMPTY
    return blend_hex(ThemeColors.TIMER_EMPTY, ThemeColors.TIMER_FULL, time_left / budget)
