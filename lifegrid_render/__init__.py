"""Raster drawing of a life grid: surface, palettes, cell painters and the repaint loop."""

from .cell_painter import (
    CELL_PAINTERS,
    GAP_FRACTION,
    draw_cell,
    draw_circle_cell,
    draw_heart_cell,
    draw_square_cell,
    heart_path,
    padded_box,
    painter_for,
    progress_clip,
)
from .export import derive_render_config, overlay_message, render_frame, render_image, render_surface, save_png
from .palette import (
    DARK_PALETTE,
    LIGHT_PALETTE,
    ThemePalette,
    background_color,
    cell_color,
    lerp_color,
    neutral_color,
    palette_for,
    parse_hex_color,
)
from .path import Path2D
from .render_loop import render_life_grid
from .surface import Color, DrawingSurface, TensorSurface

__all__ = [
    "CELL_PAINTERS",
    "Color",
    "DARK_PALETTE",
    "DrawingSurface",
    "GAP_FRACTION",
    "LIGHT_PALETTE",
    "Path2D",
    "TensorSurface",
    "ThemePalette",
    "background_color",
    "cell_color",
    "derive_render_config",
    "draw_cell",
    "draw_circle_cell",
    "draw_heart_cell",
    "draw_square_cell",
    "heart_path",
    "lerp_color",
    "neutral_color",
    "overlay_message",
    "padded_box",
    "painter_for",
    "palette_for",
    "parse_hex_color",
    "progress_clip",
    "render_frame",
    "render_image",
    "render_life_grid",
    "render_surface",
    "save_png",
]
