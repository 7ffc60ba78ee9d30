from __future__ import annotations

from dataclasses import dataclass
import math
import re

from .surface import Color

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}([0-9a-fA-F]{2})?$")


@dataclass(frozen=True)
class ThemePalette:
    """Colour tokens for one theme mode.

    ``start`` and ``end`` bound the chronological gradient across lived cells;
    ``future`` is the neutral outline colour for cells not yet reached.
    """

    start: str = "#22C55E"
    end: str = "#EF4444"
    future: str = "#D1D5DB"
    background: str = "#F8FAFC"


LIGHT_PALETTE = ThemePalette()
DARK_PALETTE = ThemePalette(start="#14B8A6", end="#F59E0B", future="#374151", background="#0F172A")

_PALETTES: dict[str, ThemePalette] = {"light": LIGHT_PALETTE, "dark": DARK_PALETTE}


def palette_for(theme: str) -> ThemePalette:
    try:
        return _PALETTES[theme]
    except KeyError:
        raise ValueError(f"unknown theme mode: {theme}") from None


def parse_hex_color(value: str) -> Color:
    if not _HEX_COLOR.match(value):
        raise ValueError(f"color must be #RRGGBB or #RRGGBBAA, got `{value}`")
    raw = value[1:]
    r = int(raw[0:2], 16)
    g = int(raw[2:4], 16)
    b = int(raw[4:6], 16)
    a = int(raw[6:8], 16) if len(raw) == 8 else 255
    return (r, g, b, a)


def lerp_color(start: Color, end: Color, t: float) -> Color:
    """Per-channel linear blend, rounded; ``t`` is clamped to ``[0, 1]``."""

    t = max(0.0, min(1.0, t))
    return tuple(int(math.floor(s + (e - s) * t + 0.5)) for s, e in zip(start, end))  # type: ignore[return-value]


def cell_color(index: int, total_units: int, full_units_lived: int, theme: str) -> Color:
    """Gradient colour for lived and current cells, neutral for later ones."""

    palette = palette_for(theme)
    if index > full_units_lived:
        return parse_hex_color(palette.future)
    t = index / total_units if total_units > 0 else 0.0
    return lerp_color(parse_hex_color(palette.start), parse_hex_color(palette.end), t)


def neutral_color(theme: str) -> Color:
    return parse_hex_color(palette_for(theme).future)


def background_color(theme: str) -> Color:
    return parse_hex_color(palette_for(theme).background)
