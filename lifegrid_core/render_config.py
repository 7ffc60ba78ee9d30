from __future__ import annotations

from dataclasses import asdict, dataclass
import datetime as dt
from pathlib import Path
import tomllib
from typing import Any, Literal, Mapping

from .timeline import MONTHS_PER_YEAR, current_unit_progress, full_units_lived

Shape = Literal["square", "circle", "heart"]
ThemePreference = Literal["light", "dark", "system"]
ThemeMode = Literal["light", "dark"]

SHAPES: tuple[str, ...] = ("square", "circle", "heart")
THEME_PREFERENCES: tuple[str, ...] = ("light", "dark", "system")
THEME_MODES: tuple[str, ...] = ("light", "dark")


@dataclass(frozen=True)
class UserConfig:
    """User-facing inputs; owned by the settings layer, read-only here."""

    dob: str = "1995-01-01"
    expectancy: int = 80
    message: str = "Your time, your story."
    theme: ThemePreference = "light"
    shape: Shape = "square"


DEFAULT_USER_CONFIG = UserConfig()


@dataclass(frozen=True)
class RenderConfig:
    total_units: int
    full_units_lived: int
    current_unit_progress: float
    theme_mode: ThemeMode
    message: str
    shape: Shape


def validate_user_config(overrides: Mapping[str, Any] | None = None) -> UserConfig:
    """Merge ``overrides`` over the defaults and check every field."""

    raw: dict[str, Any] = asdict(DEFAULT_USER_CONFIG)
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise ValueError(f"Unknown config field: {key}")
            raw[key] = value

    if not isinstance(raw["dob"], str):
        raise ValueError("Field `dob` must be an ISO date string")
    expectancy = raw["expectancy"]
    if isinstance(expectancy, bool) or not isinstance(expectancy, int) or expectancy <= 0:
        raise ValueError("Field `expectancy` must be a positive integer")
    if not isinstance(raw["message"], str):
        raise ValueError("Field `message` must be a string")
    if raw["theme"] not in THEME_PREFERENCES:
        raise ValueError(f"Field `theme` must be one of {list(THEME_PREFERENCES)}")
    if raw["shape"] not in SHAPES:
        raise ValueError(f"Field `shape` must be one of {list(SHAPES)}")

    return UserConfig(
        dob=raw["dob"],
        expectancy=int(expectancy),
        message=raw["message"],
        theme=raw["theme"],
        shape=raw["shape"],
    )


def load_user_config(path: Path) -> UserConfig:
    with path.open("rb") as f:
        raw = tomllib.load(f)
    section = raw.get("lifegrid", raw)
    if not isinstance(section, dict):
        raise ValueError(f"{path}: `lifegrid` must be a table")
    return validate_user_config(section)


def resolve_theme(preference: str, prefers_dark: bool) -> ThemeMode:
    if preference == "light":
        return "light"
    if preference == "dark":
        return "dark"
    if preference == "system":
        return "dark" if prefers_dark else "light"
    raise ValueError(f"unknown theme preference: {preference}")


def build_render_config(
    user_config: UserConfig,
    *,
    prefers_dark: bool = False,
    now: dt.datetime | None = None,
) -> RenderConfig:
    """Derive the immutable render inputs for one repaint.

    ``prefers_dark`` is the host's colour-scheme signal sampled by the caller;
    callers rebuild the config when that signal changes.
    """

    now = now or dt.datetime.now()
    return RenderConfig(
        total_units=user_config.expectancy * MONTHS_PER_YEAR,
        full_units_lived=full_units_lived(user_config.dob, now=now),
        current_unit_progress=current_unit_progress(user_config.dob, now=now),
        theme_mode=resolve_theme(user_config.theme, prefers_dark),
        message=user_config.message,
        shape=user_config.shape,
    )
