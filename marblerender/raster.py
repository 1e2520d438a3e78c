"""A small anti-aliased RGBA raster with premultiplied-alpha source-over blending."""

from __future__ import annotations

import math
from typing import Iterable, Sequence

import numpy as np

RGBA = tuple[float, float, float, float]

_SUPERSAMPLE = 4


def _check_color(color: Sequence[float]) -> np.ndarray:
    if len(color) != 4:
        raise ValueError(f"color must have 4 components, got {len(color)}")
    values = np.asarray(color, dtype=np.float64)
    if not np.all(np.isfinite(values)) or np.any(values < 0.0) or np.any(values > 1.0):
        raise ValueError(f"color components must lie in 0..1, got {tuple(color)}")
    return values


def _premultiply(color: np.ndarray) -> np.ndarray:
    alpha = color[3]
    return np.array([color[0] * alpha, color[1] * alpha, color[2] * alpha, alpha])


class Pixmap:
    """Premultiplied RGBA pixel grid; colors passed in are straight-alpha floats in 0..1.

    Pixel (0, 0) is the top-left corner; x grows right and y grows down.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"pixmap dimensions must be positive, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self._data = np.zeros((self.height, self.width, 4), dtype=np.float64)

    # ── whole-image operations ───────────────────────────────────────────────

    def fill(self, color: Sequence[float]) -> None:
        """Replace every pixel with `color`."""
        self._data[:, :] = _premultiply(_check_color(color))

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        """Premultiplied 8-bit RGBA at `(x, y)`."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height}")
        values = self._quantize(self._data[y, x])
        return tuple(int(v) for v in values)  # type: ignore[return-value]

    def tobytes(self) -> bytes:
        """Row-major premultiplied RGBA bytes, `width * height * 4` long."""
        return self._quantize(self._data).tobytes()

    def load_bytes(self, data: bytes) -> None:
        """Replace the contents with row-major premultiplied RGBA bytes."""
        expected = self.width * self.height * 4
        if len(data) != expected:
            raise ValueError(f"expected {expected} bytes, got {len(data)}")
        raw = np.frombuffer(bytes(data), dtype=np.uint8)
        self._data = raw.reshape(self.height, self.width, 4).astype(np.float64) / 255.0

    # ── shapes ───────────────────────────────────────────────────────────────

    def fill_circle(self, cx: float, cy: float, radius: float, color: Sequence[float]) -> None:
        """Fill an anti-aliased disk."""
        paint = _check_color(color)
        if not _finite(cx, cy, radius) or radius <= 0.0:
            return
        r2 = radius * radius
        self._draw(
            (cx - radius, cy - radius, cx + radius, cy + radius),
            lambda xs, ys: (xs - cx) ** 2 + (ys - cy) ** 2 <= r2,
            paint,
        )

    def stroke_circle(
        self, cx: float, cy: float, radius: float, color: Sequence[float], width: float
    ) -> None:
        """Draw an anti-aliased ring of the given line width along the circle."""
        paint = _check_color(color)
        if not _finite(cx, cy, radius, width) or radius <= 0.0 or width <= 0.0:
            return
        half = width / 2.0
        outer = radius + half

        def inside(xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
            dist = np.hypot(xs - cx, ys - cy)
            return np.abs(dist - radius) <= half

        self._draw((cx - outer, cy - outer, cx + outer, cy + outer), inside, paint)

    def fill_polygon(self, points: Iterable[tuple[float, float]], color: Sequence[float]) -> None:
        """Fill a closed polygon using the non-zero winding rule."""
        paint = _check_color(color)
        pts = [(float(x), float(y)) for x, y in points]
        if len(pts) < 3 or not _finite(*(c for p in pts for c in p)):
            return
        xs_all = [p[0] for p in pts]
        ys_all = [p[1] for p in pts]
        edges = list(zip(pts, pts[1:] + pts[:1]))

        def inside(xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
            winding = np.zeros(xs.shape, dtype=np.int32)
            for (x0, y0), (x1, y1) in edges:
                cross = (x1 - x0) * (ys - y0) - (xs - x0) * (y1 - y0)
                upward = (y0 <= ys) & (y1 > ys) & (cross > 0)
                downward = (y0 > ys) & (y1 <= ys) & (cross < 0)
                winding += upward.astype(np.int32) - downward.astype(np.int32)
            return winding != 0

        self._draw((min(xs_all), min(ys_all), max(xs_all), max(ys_all)), inside, paint)

    def stroke_polygon(
        self, points: Iterable[tuple[float, float]], color: Sequence[float], width: float
    ) -> None:
        """Draw the closed outline of a polygon with the given line width."""
        paint = _check_color(color)
        pts = [(float(x), float(y)) for x, y in points]
        if len(pts) < 2 or width <= 0.0 or not _finite(width, *(c for p in pts for c in p)):
            return
        half = width / 2.0
        edges = list(zip(pts, pts[1:] + pts[:1]))

        def inside(xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
            hit = np.zeros(xs.shape, dtype=bool)
            for (x0, y0), (x1, y1) in edges:
                dx, dy = x1 - x0, y1 - y0
                length2 = dx * dx + dy * dy
                if length2 == 0.0:
                    t = np.zeros(xs.shape)
                else:
                    t = np.clip(((xs - x0) * dx + (ys - y0) * dy) / length2, 0.0, 1.0)
                dist = np.hypot(xs - (x0 + t * dx), ys - (y0 + t * dy))
                hit |= dist <= half
            return hit

        xs_all = [p[0] for p in pts]
        ys_all = [p[1] for p in pts]
        self._draw(
            (min(xs_all) - half, min(ys_all) - half, max(xs_all) + half, max(ys_all) + half),
            inside,
            paint,
        )

    # ── internals ────────────────────────────────────────────────────────────

    @staticmethod
    def _quantize(values: np.ndarray) -> np.ndarray:
        return np.floor(np.clip(values, 0.0, 1.0) * 255.0 + 0.5).astype(np.uint8)

    def _draw(self, bbox, inside, paint: np.ndarray) -> None:
        min_x, min_y, max_x, max_y = bbox
        x0 = max(0, math.floor(min_x))
        y0 = max(0, math.floor(min_y))
        x1 = min(self.width, math.ceil(max_x))
        y1 = min(self.height, math.ceil(max_y))
        if x0 >= x1 or y0 >= y1:
            return
        w, h = x1 - x0, y1 - y0
        n = _SUPERSAMPLE
        sx = x0 + (np.arange(w * n) + 0.5) / n
        sy = y0 + (np.arange(h * n) + 0.5) / n
        xs, ys = np.meshgrid(sx, sy)
        mask = inside(xs, ys)
        coverage = mask.reshape(h, n, w, n).mean(axis=(1, 3))
        self._blend(x0, y0, coverage, paint)

    def _blend(self, x0: int, y0: int, coverage: np.ndarray, paint: np.ndarray) -> None:
        h, w = coverage.shape
        src = _premultiply(paint)
        cov = coverage[:, :, None]
        region = self._data[y0:y0 + h, x0:x0 + w]
        region[:] = src * cov + region * (1.0 - src[3] * cov)


def _finite(*values: float) -> bool:
    return all(math.isfinite(v) for v in values)