from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

BEZIER_SEGMENTS = 24


@dataclass
class _SubPath:
    points: list[tuple[float, float]]
    closed: bool = False


@dataclass
class Path2D:
    """Immediate-mode path builder; curves are flattened to polylines on insert."""

    _subpaths: list[_SubPath] = field(default_factory=list)

    def move_to(self, x: float, y: float) -> "Path2D":
        self._subpaths.append(_SubPath(points=[(float(x), float(y))]))
        return self

    def line_to(self, x: float, y: float) -> "Path2D":
        self._current().points.append((float(x), float(y)))
        return self

    def bezier_curve_to(
        self,
        c1x: float,
        c1y: float,
        c2x: float,
        c2y: float,
        x: float,
        y: float,
        *,
        segments: int = BEZIER_SEGMENTS,
    ) -> "Path2D":
        sub = self._current()
        p0 = np.asarray(sub.points[-1], dtype=np.float64)
        control = np.asarray([(c1x, c1y), (c2x, c2y), (x, y)], dtype=np.float64)
        sub.points.extend(_flatten_cubic(p0, control[0], control[1], control[2], max(1, segments)))
        return self

    def close_path(self) -> "Path2D":
        if self._subpaths:
            self._subpaths[-1].closed = True
        return self

    def polygons(self) -> list[np.ndarray]:
        return [np.asarray(sub.points, dtype=np.float64) for sub in self._subpaths if len(sub.points) >= 2]

    def segments(self) -> np.ndarray:
        """All drawable segments as an ``(N, 4)`` array of ``x0, y0, x1, y1``."""

        out: list[np.ndarray] = []
        for sub in self._subpaths:
            pts = np.asarray(sub.points, dtype=np.float64)
            if len(pts) < 2:
                continue
            if sub.closed:
                pts = np.vstack([pts, pts[:1]])
            out.append(np.hstack([pts[:-1], pts[1:]]))
        if not out:
            return np.zeros((0, 4), dtype=np.float64)
        return np.vstack(out)

    def bounds(self) -> tuple[float, float, float, float] | None:
        polys = self.polygons()
        if not polys:
            return None
        pts = np.vstack(polys)
        return (float(pts[:, 0].min()), float(pts[:, 1].min()), float(pts[:, 0].max()), float(pts[:, 1].max()))

    def _current(self) -> _SubPath:
        if not self._subpaths:
            raise RuntimeError("move_to must be called before adding path segments")
        return self._subpaths[-1]


def _flatten_cubic(
    p0: np.ndarray, p1: np.ndarray, p2: np.ndarray, p3: np.ndarray, segments: int
) -> list[tuple[float, float]]:
    t = np.linspace(0.0, 1.0, segments + 1)[1:, None]
    mt = 1.0 - t
    pts = (mt**3) * p0 + 3.0 * (mt**2) * t * p1 + 3.0 * mt * (t**2) * p2 + (t**3) * p3
    return [(float(px), float(py)) for px, py in pts]
