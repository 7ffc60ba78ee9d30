"""Pure life-grid pipeline: time derivation, configuration, layout, classification."""

from .cells import CELL_STATES, CellState, classify_cell
from .layout import EMPTY_LAYOUT, LayoutConfig, compute_grid_layout
from .position import CellPosition, cell_index_at, cell_position
from .render_config import (
    DEFAULT_USER_CONFIG,
    SHAPES,
    THEME_MODES,
    THEME_PREFERENCES,
    RenderConfig,
    Shape,
    ThemeMode,
    ThemePreference,
    UserConfig,
    build_render_config,
    load_user_config,
    resolve_theme,
    validate_user_config,
)
from .theme_signal import SystemThemeSignal, env_prefers_dark
from .timeline import add_units, current_unit_progress, full_units_lived, parse_birth_date, unit_bounds

__all__ = [
    "CELL_STATES",
    "CellPosition",
    "CellState",
    "DEFAULT_USER_CONFIG",
    "EMPTY_LAYOUT",
    "LayoutConfig",
    "RenderConfig",
    "SHAPES",
    "Shape",
    "SystemThemeSignal",
    "THEME_MODES",
    "THEME_PREFERENCES",
    "ThemeMode",
    "ThemePreference",
    "UserConfig",
    "add_units",
    "build_render_config",
    "cell_index_at",
    "cell_position",
    "classify_cell",
    "compute_grid_layout",
    "current_unit_progress",
    "env_prefers_dark",
    "full_units_lived",
    "load_user_config",
    "parse_birth_date",
    "resolve_theme",
    "unit_bounds",
    "validate_user_config",
]
