"""Theme color helpers.

Only `#rrggbb` and `#rgb` input is understood; CSS color names are not
resolved and raise ValueError.
"""
from __future__ import annotations

SHADE_OFFSET = 20

PRIMARY = "--color-primary"
PRIMARY_DARK = "--color-primary-dark"
PRIMARY_LIGHT = "--color-primary-light"


def _hex_to_rgb(hex_code: str) -> tuple[int, int, int]:
    h = hex_code.strip().lstrip("#")
    if len(h) == 3:
        h = "".join(c * 2 for c in h)
    if len(h) != 6:
        raise ValueError(f"not a hex color: {hex_code!r}")
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def _clamp(x: int) -> int:
    return max(0, min(255, x))


def adjust_color(hex_code: str, amount: int) -> str:
    """Shift every channel by `amount`, clamped to [0, 255]."""
    r, g, b = _hex_to_rgb(hex_code)
    return "#" + "".join(f"{_clamp(c + amount):02x}" for c in (r, g, b))


def theme_properties(color: str) -> dict[str, str]:
    """CSS custom properties for a primary color and its hover/light shades."""
    return {
        PRIMARY: color,
        PRIMARY_DARK: adjust_color(color, -SHADE_OFFSET),
        PRIMARY_LIGHT: adjust_color(color, SHADE_OFFSET),
    }
