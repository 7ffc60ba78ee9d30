from __future__ import annotations

from dataclasses import dataclass
import logging
import math

LOGGER = logging.getLogger(__name__)

PADDING_FRACTION = 0.1


@dataclass(frozen=True)
class LayoutConfig:
    rows: int
    columns: int
    cell_size: float
    offset_x: float
    offset_y: float

    @property
    def capacity(self) -> int:
        return self.rows * self.columns


EMPTY_LAYOUT = LayoutConfig(rows=0, columns=0, cell_size=0.0, offset_x=0.0, offset_y=0.0)


def compute_grid_layout(total_units: int, width: float, height: float) -> LayoutConfig:
    """Solve rows, columns and square cell size for ``total_units`` in a viewport.

    The row count follows the viewport's aspect ratio, so wide screens get wide
    grids. The grid is centred inside the full viewport with 10% padding on
    every side.
    """

    if total_units <= 0 or not _positive_finite(width) or not _positive_finite(height):
        LOGGER.debug("degenerate layout input units=%s width=%s height=%s", total_units, width, height)
        return EMPTY_LAYOUT

    usable_width = width - 2 * PADDING_FRACTION * width
    usable_height = height - 2 * PADDING_FRACTION * height

    rows = max(int(math.floor(math.sqrt(total_units * usable_height / usable_width))), 1)
    columns = int(math.ceil(total_units / rows))
    cell_size = min(usable_width / columns, usable_height / rows)

    return LayoutConfig(
        rows=rows,
        columns=columns,
        cell_size=cell_size,
        offset_x=(width - columns * cell_size) / 2,
        offset_y=(height - rows * cell_size) / 2,
    )


def _positive_finite(value: float) -> bool:
    return math.isfinite(value) and value > 0
