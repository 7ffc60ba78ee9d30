from __future__ import annotations

from contextlib import contextmanager
import math
from typing import Callable, Iterator

from lifegrid_core.cells import CellState
from lifegrid_core.position import CellPosition

from .palette import cell_color, neutral_color
from .path import Path2D
from .surface import DrawingSurface

GAP_FRACTION = 0.08
OUTLINE_WIDTH = 1.0

CellPainter = Callable[..., None]


def padded_box(position: CellPosition, cell_size: float) -> tuple[float, float, float]:
    """Drawable square ``(x, y, size)`` centred in the cell, leaving an 8% gap."""

    gap = cell_size * GAP_FRACTION
    return position.x + gap / 2, position.y + gap / 2, cell_size - gap


@contextmanager
def progress_clip(
    surface: DrawingSurface, x: float, y: float, size: float, progress: float
) -> Iterator[None]:
    """Clip to the left ``progress`` fraction of the box for the enclosed fill."""

    if not math.isfinite(progress):
        progress = 0.0
    fill_width = max(min(size * progress, size), 0.0)
    surface.save()
    try:
        surface.clip_rect(x, y, fill_width, size)
        yield
    finally:
        surface.restore()


def heart_path(x: float, y: float, size: float) -> Path2D:
    """Two mirrored cubic lobes from the top notch down to the bottom point."""

    half = size / 2
    return (
        Path2D()
        .move_to(x + half, y)
        .bezier_curve_to(x, y, x, y + half, x + half, y + size)
        .bezier_curve_to(x + size, y + half, x + size, y, x + half, y)
        .close_path()
    )


def draw_square_cell(
    surface: DrawingSurface,
    position: CellPosition,
    cell_size: float,
    state: CellState,
    progress: float,
    index: int,
    total_units: int,
    full_units_lived: int,
    theme: str,
) -> None:
    if cell_size <= 0:
        return
    x, y, size = padded_box(position, cell_size)
    if state == "past":
        surface.fill_rect(x, y, size, size, cell_color(index, total_units, full_units_lived, theme))
    elif state == "present":
        with progress_clip(surface, x, y, size, progress):
            surface.fill_rect(x, y, size, size, cell_color(index, total_units, full_units_lived, theme))
        surface.stroke_rect(x, y, size, size, neutral_color(theme), line_width=OUTLINE_WIDTH)
    else:
        surface.stroke_rect(x, y, size, size, neutral_color(theme), line_width=OUTLINE_WIDTH)


def draw_circle_cell(
    surface: DrawingSurface,
    position: CellPosition,
    cell_size: float,
    state: CellState,
    progress: float,
    index: int,
    total_units: int,
    full_units_lived: int,
    theme: str,
) -> None:
    if cell_size <= 0:
        return
    x, y, size = padded_box(position, cell_size)
    radius = size / 2
    cx = x + radius
    cy = y + radius
    if state == "past":
        surface.fill_circle(cx, cy, radius, cell_color(index, total_units, full_units_lived, theme))
    elif state == "present":
        with progress_clip(surface, x, y, size, progress):
            surface.fill_circle(cx, cy, radius, cell_color(index, total_units, full_units_lived, theme))
        surface.stroke_circle(cx, cy, radius, neutral_color(theme), line_width=OUTLINE_WIDTH)
    else:
        surface.stroke_circle(cx, cy, radius, neutral_color(theme), line_width=OUTLINE_WIDTH)


def draw_heart_cell(
    surface: DrawingSurface,
    position: CellPosition,
    cell_size: float,
    state: CellState,
    progress: float,
    index: int,
    total_units: int,
    full_units_lived: int,
    theme: str,
) -> None:
    if cell_size <= 0:
        return
    x, y, size = padded_box(position, cell_size)
    path = heart_path(x, y, size)
    if state == "past":
        surface.fill_path(path, cell_color(index, total_units, full_units_lived, theme))
    elif state == "present":
        with progress_clip(surface, x, y, size, progress):
            surface.fill_path(path, cell_color(index, total_units, full_units_lived, theme))
        surface.stroke_path(path, neutral_color(theme), line_width=OUTLINE_WIDTH)
    else:
        surface.stroke_path(path, neutral_color(theme), line_width=OUTLINE_WIDTH)


CELL_PAINTERS: dict[str, CellPainter] = {
    "square": draw_square_cell,
    "circle": draw_circle_cell,
    "heart": draw_heart_cell,
}


def painter_for(shape: str) -> CellPainter:
    try:
        return CELL_PAINTERS[shape]
    except KeyError:
        raise ValueError(f"unknown cell shape: {shape}") from None


def draw_cell(
    surface: DrawingSurface,
    shape: str,
    position: CellPosition,
    cell_size: float,
    state: CellState,
    progress: float,
    index: int,
    total_units: int,
    full_units_lived: int,
    theme: str,
) -> None:
    painter_for(shape)(
        surface,
        position,
        cell_size,
        state,
        progress,
        index,
        total_units,
        full_units_lived,
        theme,
    )
