from __future__ import annotations

import datetime as dt
import logging
from pathlib import Path

import torch
from PIL import Image, ImageDraw, ImageFont

from lifegrid_core.render_config import RenderConfig, UserConfig, build_render_config
from lifegrid_core.theme_signal import SystemThemeSignal

from .palette import background_color, parse_hex_color
from .render_loop import render_life_grid
from .surface import Color, TensorSurface

LOGGER = logging.getLogger(__name__)

MESSAGE_COLORS: dict[str, str] = {"light": "#334155", "dark": "#FFFFFFB3"}
MESSAGE_TOP_PX = 40
MESSAGE_SIZE_FRACTION = 0.04


def render_surface(
    config: RenderConfig,
    width: int,
    height: int,
    *,
    background: Color | None = None,
) -> TensorSurface:
    surface = TensorSurface(width, height, background=background or background_color(config.theme_mode))
    layout = render_life_grid(surface, config, width, height)
    LOGGER.debug(
        "rendered %d units into %dx%d grid (cell %.2fpx)",
        config.total_units,
        layout.rows,
        layout.columns,
        layout.cell_size,
    )
    return surface


def derive_render_config(
    user_config: UserConfig,
    *,
    theme_signal: SystemThemeSignal | None = None,
    now: dt.datetime | None = None,
) -> RenderConfig:
    prefers_dark = theme_signal.prefers_dark if theme_signal is not None else False
    return build_render_config(user_config, prefers_dark=prefers_dark, now=now)


def render_frame(
    user_config: UserConfig,
    width: int,
    height: int,
    *,
    theme_signal: SystemThemeSignal | None = None,
    now: dt.datetime | None = None,
    background: Color | None = None,
) -> torch.Tensor:
    """One headless repaint: derive the config, draw it, return the RGBA frame."""

    config = derive_render_config(user_config, theme_signal=theme_signal, now=now)
    return render_surface(config, width, height, background=background).snapshot()


def render_image(
    user_config: UserConfig,
    width: int,
    height: int,
    *,
    theme_signal: SystemThemeSignal | None = None,
    now: dt.datetime | None = None,
    background: Color | None = None,
    with_message: bool = True,
) -> Image.Image:
    config = derive_render_config(user_config, theme_signal=theme_signal, now=now)
    image = render_surface(config, width, height, background=background).to_image()
    if with_message:
        overlay_message(image, config.message, config.theme_mode)
    return image


def overlay_message(image: Image.Image, message: str, theme: str) -> None:
    """Draw ``message`` centred near the top edge; blank messages are skipped."""

    text = message.strip()
    if not text:
        return
    size = max(10, int(round(min(image.width, image.height) * MESSAGE_SIZE_FRACTION)))
    font = ImageFont.load_default(size=size)
    layer = Image.new("RGBA", image.size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(layer)
    left, top, right, _bottom = draw.textbbox((0, 0), text, font=font)
    x = (image.width - (right - left)) / 2 - left
    y = min(MESSAGE_TOP_PX, image.height // 10) - top
    draw.text((x, y), text, fill=parse_hex_color(MESSAGE_COLORS[theme]), font=font)
    image.alpha_composite(layer)


def save_png(image: Image.Image, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    image.save(path, format="PNG")
    LOGGER.info("wrote %s (%dx%d)", path, image.width, image.height)
    return path
