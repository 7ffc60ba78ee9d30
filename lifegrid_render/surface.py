from __future__ import annotations

import math
from typing import Protocol

import numpy as np
import torch
from PIL import Image

from .path import Path2D

Color = tuple[int, int, int, int]

# (x0, y0, x1, y1) in surface pixels
_Rect = tuple[float, float, float, float]


class DrawingSurface(Protocol):
    """Minimal 2D immediate-mode context the cell painters draw into."""

    width: int
    height: int

    def save(self) -> None: ...

    def restore(self) -> None: ...

    def clip_rect(self, x: float, y: float, w: float, h: float) -> None: ...

    def clear_rect(self, x: float, y: float, w: float, h: float) -> None: ...

    def fill_rect(self, x: float, y: float, w: float, h: float, color: Color) -> None: ...

    def stroke_rect(self, x: float, y: float, w: float, h: float, color: Color, line_width: float = 1.0) -> None: ...

    def fill_circle(self, cx: float, cy: float, radius: float, color: Color) -> None: ...

    def stroke_circle(self, cx: float, cy: float, radius: float, color: Color, line_width: float = 1.0) -> None: ...

    def fill_path(self, path: Path2D, color: Color) -> None: ...

    def stroke_path(self, path: Path2D, color: Color, line_width: float = 1.0) -> None: ...


class TensorSurface:
    """Torch-backed RGBA raster implementing ``DrawingSurface``.

    A pixel is covered by a shape when its centre lies inside the shape. The clip
    region is always a rectangle; ``clip_rect`` intersects it and ``save`` /
    ``restore`` push and pop it.
    """

    def __init__(self, width: int, height: int, background: Color = (0, 0, 0, 0)) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("surface dimensions must be > 0")
        self.width = int(width)
        self.height = int(height)
        self.background = background
        self._frame = torch.zeros((self.height, self.width, 4), dtype=torch.uint8)
        self._grid_x = (torch.arange(self.width, dtype=torch.float32) + 0.5).unsqueeze(0).expand(self.height, self.width)
        self._grid_y = (torch.arange(self.height, dtype=torch.float32) + 0.5).unsqueeze(1).expand(self.height, self.width)
        self._clip: _Rect = (0.0, 0.0, float(self.width), float(self.height))
        self._clip_stack: list[_Rect] = []
        self._fill_region(0, 0, self.width, self.height, background)

    @property
    def save_depth(self) -> int:
        return len(self._clip_stack)

    def save(self) -> None:
        self._clip_stack.append(self._clip)

    def restore(self) -> None:
        if not self._clip_stack:
            raise RuntimeError("restore called without matching save")
        self._clip = self._clip_stack.pop()

    def clip_rect(self, x: float, y: float, w: float, h: float) -> None:
        if not _finite(x, y, w, h):
            self._clip = (0.0, 0.0, 0.0, 0.0)
            return
        rx0, ry0, rx1, ry1 = _normalize_rect(x, y, w, h)
        cx0, cy0, cx1, cy1 = self._clip
        self._clip = (max(cx0, rx0), max(cy0, ry0), min(cx1, rx1), min(cy1, ry1))

    def clear_rect(self, x: float, y: float, w: float, h: float) -> None:
        region = self._pixel_region(x, y, w, h)
        if region is None:
            return
        x0, y0, x1, y1 = region
        self._fill_region(x0, y0, x1, y1, self.background)

    def fill_rect(self, x: float, y: float, w: float, h: float, color: Color) -> None:
        region = self._pixel_region(x, y, w, h)
        if region is None:
            return
        x0, y0, x1, y1 = region
        mask = torch.ones((y1 - y0, x1 - x0), dtype=torch.bool)
        self._blend_mask(mask, x=x0, y=y0, color=color)

    def stroke_rect(self, x: float, y: float, w: float, h: float, color: Color, line_width: float = 1.0) -> None:
        if not _finite(x, y, w, h, line_width) or line_width <= 0:
            return
        rx0, ry0, rx1, ry1 = _normalize_rect(x, y, w, h)
        half = line_width / 2.0
        region = self._pixel_region(rx0 - half, ry0 - half, (rx1 - rx0) + line_width, (ry1 - ry0) + line_width)
        if region is None:
            return
        x0, y0, x1, y1 = region
        gx = self._grid_x[y0:y1, x0:x1]
        gy = self._grid_y[y0:y1, x0:x1]
        inner = (gx > rx0 + half) & (gx < rx1 - half) & (gy > ry0 + half) & (gy < ry1 - half)
        self._blend_mask(~inner, x=x0, y=y0, color=color)

    def fill_circle(self, cx: float, cy: float, radius: float, color: Color) -> None:
        if not _finite(cx, cy, radius) or radius <= 0:
            return
        region = self._pixel_region(cx - radius, cy - radius, 2 * radius, 2 * radius)
        if region is None:
            return
        x0, y0, x1, y1 = region
        dist_sq = (self._grid_x[y0:y1, x0:x1] - cx) ** 2 + (self._grid_y[y0:y1, x0:x1] - cy) ** 2
        self._blend_mask(dist_sq <= radius * radius, x=x0, y=y0, color=color)

    def stroke_circle(self, cx: float, cy: float, radius: float, color: Color, line_width: float = 1.0) -> None:
        if not _finite(cx, cy, radius, line_width) or radius <= 0 or line_width <= 0:
            return
        half = line_width / 2.0
        outer = radius + half
        region = self._pixel_region(cx - outer, cy - outer, 2 * outer, 2 * outer)
        if region is None:
            return
        x0, y0, x1, y1 = region
        dist = torch.sqrt((self._grid_x[y0:y1, x0:x1] - cx) ** 2 + (self._grid_y[y0:y1, x0:x1] - cy) ** 2)
        self._blend_mask(torch.abs(dist - radius) <= half, x=x0, y=y0, color=color)

    def fill_path(self, path: Path2D, color: Color) -> None:
        bounds = path.bounds()
        if bounds is None or not _finite(*bounds):
            return
        bx0, by0, bx1, by1 = bounds
        region = self._pixel_region(bx0, by0, bx1 - bx0, by1 - by0)
        if region is None:
            return
        x0, y0, x1, y1 = region
        gx = self._grid_x[y0:y1, x0:x1]
        gy = self._grid_y[y0:y1, x0:x1]
        inside = torch.zeros(gx.shape, dtype=torch.bool)
        for polygon in path.polygons():
            inside ^= _even_odd_mask(polygon, gx, gy)
        self._blend_mask(inside, x=x0, y=y0, color=color)

    def stroke_path(self, path: Path2D, color: Color, line_width: float = 1.0) -> None:
        bounds = path.bounds()
        if bounds is None or not _finite(*bounds, line_width) or line_width <= 0:
            return
        half = line_width / 2.0
        bx0, by0, bx1, by1 = bounds
        region = self._pixel_region(bx0 - half, by0 - half, bx1 - bx0 + line_width, by1 - by0 + line_width)
        if region is None:
            return
        x0, y0, x1, y1 = region
        gx = self._grid_x[y0:y1, x0:x1]
        gy = self._grid_y[y0:y1, x0:x1]
        covered = torch.zeros(gx.shape, dtype=torch.bool)
        for sx0, sy0, sx1, sy1 in path.segments().tolist():
            covered |= _segment_distance_sq(gx, gy, sx0, sy0, sx1, sy1) <= half * half
        self._blend_mask(covered, x=x0, y=y0, color=color)

    def snapshot(self) -> torch.Tensor:
        return self._frame.clone()

    def to_image(self) -> Image.Image:
        return Image.fromarray(np.ascontiguousarray(self._frame.cpu().numpy()))

    def _pixel_region(self, x: float, y: float, w: float, h: float) -> tuple[int, int, int, int] | None:
        """Pixel index box whose centres fall inside the rect and the clip."""

        if not _finite(x, y, w, h):
            return None
        rx0, ry0, rx1, ry1 = _normalize_rect(x, y, w, h)
        cx0, cy0, cx1, cy1 = self._clip
        fx0, fy0 = max(rx0, cx0), max(ry0, cy0)
        fx1, fy1 = min(rx1, cx1), min(ry1, cy1)
        if fx1 <= fx0 or fy1 <= fy0:
            return None
        x0 = max(0, math.ceil(fx0 - 0.5))
        y0 = max(0, math.ceil(fy0 - 0.5))
        x1 = min(self.width, math.ceil(fx1 - 0.5))
        y1 = min(self.height, math.ceil(fy1 - 0.5))
        if x1 <= x0 or y1 <= y0:
            return None
        return x0, y0, x1, y1

    def _fill_region(self, x0: int, y0: int, x1: int, y1: int, color: Color) -> None:
        self._frame[y0:y1, x0:x1] = torch.tensor(color, dtype=torch.uint8).view(1, 1, 4)

    def _blend_mask(self, mask: torch.Tensor, *, x: int, y: int, color: Color) -> None:
        h, w = mask.shape
        if h <= 0 or w <= 0 or not bool(mask.any()):
            return
        alpha = color[3] / 255.0
        if alpha <= 0:
            return
        patch = self._frame[y : y + h, x : x + w]
        dst = patch[:, :, :3].to(torch.float32)
        src = torch.tensor(color[:3], dtype=torch.float32).view(1, 1, 3)
        blended = torch.clamp(src * alpha + dst * (1.0 - alpha), 0, 255).to(torch.uint8)
        patch[:, :, :3] = torch.where(mask.unsqueeze(-1), blended, patch[:, :, :3])
        patch[:, :, 3] = torch.where(mask, torch.full_like(patch[:, :, 3], 255), patch[:, :, 3])


def _finite(*values: float) -> bool:
    return all(math.isfinite(v) for v in values)


def _normalize_rect(x: float, y: float, w: float, h: float) -> _Rect:
    x0, x1 = (x, x + w) if w >= 0 else (x + w, x)
    y0, y1 = (y, y + h) if h >= 0 else (y + h, y)
    return (float(x0), float(y0), float(x1), float(y1))


def _even_odd_mask(polygon: np.ndarray, gx: torch.Tensor, gy: torch.Tensor) -> torch.Tensor:
    inside = torch.zeros(gx.shape, dtype=torch.bool)
    if len(polygon) < 3:
        return inside
    closed = np.vstack([polygon, polygon[:1]])
    for (ax, ay), (bx, by) in zip(closed[:-1].tolist(), closed[1:].tolist()):
        if ay == by:
            continue
        crosses = (gy < ay) != (gy < by)
        x_at = ax + (gy - ay) * (bx - ax) / (by - ay)
        inside ^= crosses & (gx < x_at)
    return inside


def _segment_distance_sq(
    gx: torch.Tensor, gy: torch.Tensor, ax: float, ay: float, bx: float, by: float
) -> torch.Tensor:
    dx = bx - ax
    dy = by - ay
    length_sq = dx * dx + dy * dy
    if length_sq <= 0:
        return (gx - ax) ** 2 + (gy - ay) ** 2
    t = torch.clamp(((gx - ax) * dx + (gy - ay) * dy) / length_sq, 0.0, 1.0)
    return (gx - (ax + t * dx)) ** 2 + (gy - (ay + t * dy)) ** 2
