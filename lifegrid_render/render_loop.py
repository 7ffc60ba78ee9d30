from __future__ import annotations

from lifegrid_core.cells import classify_cell
from lifegrid_core.layout import LayoutConfig, compute_grid_layout
from lifegrid_core.position import cell_position
from lifegrid_core.render_config import RenderConfig

from .cell_painter import painter_for
from .surface import DrawingSurface


def render_life_grid(surface: DrawingSurface, config: RenderConfig, width: float, height: float) -> LayoutConfig:
    """Repaint every unit of ``config`` into ``surface``.

    Everything is recomputed from the inputs, so the call is safe to repeat on
    every resize or configuration change. Must not run concurrently on the same
    surface. Returns the layout that was used.
    """

    surface.clear_rect(0, 0, width, height)
    layout = compute_grid_layout(config.total_units, width, height)
    if layout.capacity <= 0:
        return layout

    paint = painter_for(config.shape)
    for index in range(config.total_units):
        state = classify_cell(index, config)
        progress = config.current_unit_progress if state == "present" else 1.0
        paint(
            surface,
            cell_position(index, layout),
            layout.cell_size,
            state,
            progress,
            index,
            config.total_units,
            config.full_units_lived,
            config.theme_mode,
        )
    return layout
