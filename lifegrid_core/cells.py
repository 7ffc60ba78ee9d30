from __future__ import annotations

from typing import Literal

from .render_config import RenderConfig

CellState = Literal["past", "present", "future", "empty"]

CELL_STATES: tuple[str, ...] = ("past", "present", "future", "empty")


def classify_cell(index: int, config: RenderConfig) -> CellState:
    if index < 0 or index >= config.total_units:
        return "empty"
    if index < config.full_units_lived:
        return "past"
    if index == config.full_units_lived:
        return "present"
    return "future"
