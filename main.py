from __future__ import annotations

import argparse
from dataclasses import asdict
import datetime as dt
import json
import logging
from pathlib import Path
from typing import Any

from lifegrid_core import (
    SHAPES,
    THEME_PREFERENCES,
    SystemThemeSignal,
    UserConfig,
    compute_grid_layout,
    load_user_config,
    validate_user_config,
)
from lifegrid_render import derive_render_config, render_image, save_png

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="lifegrid")
    parser.add_argument("--log-level", choices=LOG_LEVELS, default="WARNING")
    # Accepted after the subcommand too; only overrides the top-level value when given.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--log-level", choices=LOG_LEVELS, default=argparse.SUPPRESS)
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", parents=[common], help="Render the life grid to a PNG file.")
    _add_config_arguments(render)
    render.add_argument("--out", type=Path, default=Path("lifegrid.png"))
    render.add_argument("--no-message", action="store_true", help="Skip the personal message overlay.")

    describe = sub.add_parser("describe", parents=[common], help="Print the derived render and layout configuration as JSON.")
    _add_config_arguments(describe)

    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(asctime)s %(name)s %(levelname)s %(message)s")

    try:
        user_config = _resolve_user_config(args)
    except (OSError, ValueError) as exc:
        parser.error(str(exc))
    now = _resolve_now(parser, args.now)
    theme_signal = SystemThemeSignal()

    if args.command == "render":
        image = render_image(
            user_config,
            args.width,
            args.height,
            theme_signal=theme_signal,
            now=now,
            with_message=not args.no_message,
        )
        save_png(image, args.out)
        print(f"wrote {args.out} ({args.width}x{args.height})")
        return

    if args.command == "describe":
        config = derive_render_config(user_config, theme_signal=theme_signal, now=now)
        layout = compute_grid_layout(config.total_units, args.width, args.height)
        print(json.dumps({"render": asdict(config), "layout": asdict(layout)}, indent=2, sort_keys=True))
        return

    raise RuntimeError(f"unsupported command: {args.command}")


def _add_config_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", type=Path, default=None, help="TOML file with a [lifegrid] table.")
    parser.add_argument("--dob", default=None, help="Birth date, YYYY-MM-DD.")
    parser.add_argument("--expectancy", type=int, default=None, help="Life expectancy in years.")
    parser.add_argument("--message", default=None)
    parser.add_argument("--theme", choices=list(THEME_PREFERENCES), default=None)
    parser.add_argument("--shape", choices=list(SHAPES), default=None)
    parser.add_argument("--width", type=_positive_int, default=1280)
    parser.add_argument("--height", type=_positive_int, default=720)
    parser.add_argument("--now", default=None, help="Pin the clock (ISO datetime); defaults to the current time.")


def _resolve_user_config(args: argparse.Namespace) -> UserConfig:
    base = load_user_config(args.config) if args.config is not None else validate_user_config()
    overrides: dict[str, Any] = asdict(base)
    for key in ("dob", "expectancy", "message", "theme", "shape"):
        value = getattr(args, key)
        if value is not None:
            overrides[key] = value
    return validate_user_config(overrides)


def _resolve_now(parser: argparse.ArgumentParser, value: str | None) -> dt.datetime | None:
    if value is None:
        return None
    try:
        return dt.datetime.fromisoformat(value)
    except ValueError:
        parser.error(f"--now must be an ISO datetime, got `{value}`")
    return None


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError("must be > 0")
    return number


if __name__ == "__main__":
    main()
