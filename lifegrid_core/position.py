from __future__ import annotations

from dataclasses import dataclass
import math

from .layout import LayoutConfig

# distance beyond one full cell kept between an offscreen cell and the origin
OFFSCREEN_MARGIN = 1.0


@dataclass(frozen=True)
class CellPosition:
    x: float
    y: float


def cell_position(index: int, layout: LayoutConfig) -> CellPosition:
    """Top-left pixel of cell ``index``, filled row by row from the top-left.

    Indices outside the grid land above and to the left of the origin, far
    enough that the whole cell is clipped away.
    """

    if index < 0 or index >= layout.capacity:
        off = -(layout.cell_size + OFFSCREEN_MARGIN)
        return CellPosition(x=off, y=off)
    row, column = divmod(index, layout.columns)
    return CellPosition(
        x=layout.offset_x + column * layout.cell_size,
        y=layout.offset_y + row * layout.cell_size,
    )


def cell_index_at(x: float, y: float, layout: LayoutConfig) -> int | None:
    """Index of the cell under pixel ``(x, y)``, or None outside the grid."""

    if layout.capacity <= 0 or layout.cell_size <= 0:
        return None
    column = math.floor((x - layout.offset_x) / layout.cell_size)
    row = math.floor((y - layout.offset_y) / layout.cell_size)
    if column < 0 or column >= layout.columns or row < 0 or row >= layout.rows:
        return None
    return row * layout.columns + column
