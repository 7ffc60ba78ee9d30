from __future__ import annotations

import unittest

import torch

from lifegrid_core.layout import EMPTY_LAYOUT
from lifegrid_core.render_config import RenderConfig
from lifegrid_render.path import Path2D
from lifegrid_render.render_loop import render_life_grid
from lifegrid_render.surface import TensorSurface


class _RecordingSurface:
    """DrawingSurface double that records every call."""

    def __init__(self, width: int = 120, height: int = 120) -> None:
        self.width = width
        self.height = height
        self.calls: list[tuple[str, tuple]] = []

    def save(self) -> None:
        self.calls.append(("save", ()))

    def restore(self) -> None:
        self.calls.append(("restore", ()))

    def clip_rect(self, x: float, y: float, w: float, h: float) -> None:
        self.calls.append(("clip_rect", (x, y, w, h)))

    def clear_rect(self, x: float, y: float, w: float, h: float) -> None:
        self.calls.append(("clear_rect", (x, y, w, h)))

    def fill_rect(self, x, y, w, h, color) -> None:
        self.calls.append(("fill_rect", (x, y, w, h, color)))

    def stroke_rect(self, x, y, w, h, color, line_width: float = 1.0) -> None:
        self.calls.append(("stroke_rect", (x, y, w, h, color)))

    def fill_circle(self, cx, cy, radius, color) -> None:
        self.calls.append(("fill_circle", (cx, cy, radius, color)))

    def stroke_circle(self, cx, cy, radius, color, line_width: float = 1.0) -> None:
        self.calls.append(("stroke_circle", (cx, cy, radius, color)))

    def fill_path(self, path: Path2D, color) -> None:
        self.calls.append(("fill_path", (color,)))

    def stroke_path(self, path: Path2D, color, line_width: float = 1.0) -> None:
        self.calls.append(("stroke_path", (color,)))

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]


def _config(total: int = 12, lived: int = 5, shape: str = "square", progress: float = 0.25) -> RenderConfig:
    return RenderConfig(
        total_units=total,
        full_units_lived=lived,
        current_unit_progress=progress,
        theme_mode="light",
        message="",
        shape=shape,  # type: ignore[arg-type]
    )


class RenderLoopCallTests(unittest.TestCase):
    def test_clears_then_draws_every_unit(self) -> None:
        surface = _RecordingSurface()
        layout = render_life_grid(surface, _config(), 120, 120)  # type: ignore[arg-type]
        names = surface.names()
        self.assertEqual(surface.calls[0], ("clear_rect", (0, 0, 120, 120)))
        self.assertEqual(names.count("fill_rect"), 6)
        self.assertEqual(names.count("stroke_rect"), 7)
        self.assertEqual(names.count("save"), 1)
        self.assertEqual(names.count("restore"), 1)
        self.assertEqual((layout.rows, layout.columns), (3, 4))

    def test_present_clip_uses_current_progress(self) -> None:
        surface = _RecordingSurface()
        render_life_grid(surface, _config(progress=0.25), 120, 120)  # type: ignore[arg-type]
        (clip,) = [args for name, args in surface.calls if name == "clip_rect"]
        _x, _y, w, h = clip
        self.assertAlmostEqual(w, h * 0.25)

    def test_shape_selects_painter(self) -> None:
        circles = _RecordingSurface()
        render_life_grid(circles, _config(shape="circle"), 120, 120)  # type: ignore[arg-type]
        self.assertEqual(circles.names().count("fill_circle"), 6)
        hearts = _RecordingSurface()
        render_life_grid(hearts, _config(shape="heart"), 120, 120)  # type: ignore[arg-type]
        self.assertEqual(hearts.names().count("stroke_path"), 7)

    def test_degenerate_inputs_only_clear(self) -> None:
        for config, width, height in ((_config(total=0, lived=0), 120, 120), (_config(), 0, 120)):
            surface = _RecordingSurface()
            layout = render_life_grid(surface, config, width, height)  # type: ignore[arg-type]
            self.assertEqual(surface.names(), ["clear_rect"])
            self.assertEqual(layout, EMPTY_LAYOUT)

    def test_outlived_expectancy_draws_all_past(self) -> None:
        surface = _RecordingSurface()
        render_life_grid(surface, _config(total=12, lived=40), 120, 120)  # type: ignore[arg-type]
        self.assertEqual(surface.names().count("fill_rect"), 12)
        self.assertNotIn("clip_rect", surface.names())


class RenderLoopRasterTests(unittest.TestCase):
    def test_first_cell_gets_gradient_start(self) -> None:
        surface = TensorSurface(120, 120, background=(0, 0, 0, 255))
        render_life_grid(surface, _config(), 120, 120)
        frame = surface.snapshot()
        # 12 units in 120x120: 3x4 grid, 24px cells, origin (12, 24)
        self.assertTrue(torch.equal(frame[36, 24], torch.tensor([34, 197, 94, 255], dtype=torch.uint8)))
        self.assertTrue(torch.equal(frame[5, 5], torch.tensor([0, 0, 0, 255], dtype=torch.uint8)))
        self.assertEqual(surface.save_depth, 0)

    def test_repeat_renders_are_identical(self) -> None:
        surface = TensorSurface(160, 90, background=(0, 0, 0, 255))
        config = _config(total=960, lived=400, shape="heart", progress=0.6)
        render_life_grid(surface, config, 160, 90)
        first = surface.snapshot()
        render_life_grid(surface, config, 160, 90)
        self.assertTrue(torch.equal(first, surface.snapshot()))


if __name__ == "__main__":
    unittest.main()
