"""Software rendering of physics snapshots into RGBA frames."""

from __future__ import annotations

import abc
import math
from dataclasses import dataclass, field

from .raster import RGBA, Pixmap
from .types import BodyState, BodyType, Circle, Color, PhysicsState, Polygon, Rectangle, Vec2

_STROKE_WIDTH = 1.0
_STATIC_ALPHA = 0.8
_DARKEN = 0.7
_FALLBACK: RGBA = (0.0, 0.0, 0.0, 1.0)


@dataclass
class Frame:
    """Row-major RGBA pixel buffer, top-left to bottom-right, 4 bytes per pixel."""

    width: int
    height: int
    pixels: bytearray = field(repr=False)

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"frame dimensions must not be negative, got {self.width}x{self.height}")
        self.pixels = bytearray(self.pixels)
        expected = self.width * self.height * 4
        if len(self.pixels) != expected:
            raise ValueError(f"expected {expected} pixel bytes, got {len(self.pixels)}")

    @classmethod
    def blank(cls, width: int, height: int) -> "Frame":
        """A frame with every byte set to zero."""
        if width < 0 or height < 0:
            raise ValueError(f"frame dimensions must not be negative, got {width}x{height}")
        return cls(width, height, bytearray(width * height * 4))

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        """RGBA components of the pixel at `(x, y)`; `(0, 0)` is the top-left corner."""
        if not 0 <= x < self.width:
            raise IndexError("x out of bounds")
        if not 0 <= y < self.height:
            raise IndexError("y out of bounds")
        idx = (y * self.width + x) * 4
        r, g, b, a = self.pixels[idx:idx + 4]
        return (r, g, b, a)


@dataclass
class RenderContext:
    """How the physics world maps into pixel space."""

    width: int
    height: int
    camera_origin: Vec2
    scale: float
    background_color: Color


class Renderer(abc.ABC):
    """A strategy for turning a physics snapshot into a frame."""

    @abc.abstractmethod
    def render(self, state: PhysicsState, ctx: RenderContext) -> Frame:
        """Render `state` into a frame using `ctx`."""


class SoftwareRenderer(Renderer):
    """CPU renderer for circles, rectangles and convex polygons.

    Static bodies are drawn at 80% of their alpha; dead bodies are skipped.
    """

    def render(self, state: PhysicsState, ctx: RenderContext) -> Frame:
        if ctx.width <= 0 or ctx.height <= 0:
            return Frame.blank(max(ctx.width, 0), max(ctx.height, 0))

        pixmap = Pixmap(ctx.width, ctx.height)
        pixmap.fill(to_paint_color(ctx.background_color, 1.0))

        for body in state.bodies:
            if body.is_alive:
                _render_body(pixmap, body, ctx)

        return Frame(ctx.width, ctx.height, bytearray(pixmap.tobytes()))


def _render_body(pixmap: Pixmap, body: BodyState, ctx: RenderContext) -> None:
    alpha_factor = _STATIC_ALPHA if body.body_type is BodyType.STATIC else 1.0
    fill = to_paint_color(body.color, alpha_factor)
    stroke = darken_color(body.color, alpha_factor)
    cx, cy = world_to_pixel(body.position, ctx)
    shape = body.shape

    if isinstance(shape, Circle):
        radius_px = shape.radius * ctx.scale
        pixmap.fill_circle(cx, cy, radius_px, fill)
        pixmap.stroke_circle(cx, cy, radius_px, stroke, _STROKE_WIDTH)
    elif isinstance(shape, Rectangle):
        points = _rect_points(cx, cy, shape.width * ctx.scale, shape.height * ctx.scale, body.rotation)
        pixmap.fill_polygon(points, fill)
        pixmap.stroke_polygon(points, stroke, _STROKE_WIDTH)
    elif isinstance(shape, Polygon):
        if len(shape.vertices) < 3:
            return
        points = _polygon_points(body.position, body.rotation, shape.vertices, ctx)
        pixmap.fill_polygon(points, fill)
        pixmap.stroke_polygon(points, stroke, _STROKE_WIDTH)
    else:
        raise TypeError(f"unsupported shape: {shape!r}")


def _rect_points(cx: float, cy: float, w: float, h: float, rotation: float) -> list[tuple[float, float]]:
    # Y is flipped on screen, so a CCW physics rotation becomes a CW screen rotation.
    angle = -rotation
    cos, sin = math.cos(angle), math.sin(angle)
    hw, hh = w / 2.0, h / 2.0
    corners = ((-hw, -hh), (hw, -hh), (hw, hh), (-hw, hh))
    return [(cx + cos * lx - sin * ly, cy + sin * lx + cos * ly) for lx, ly in corners]


def _polygon_points(position: Vec2, rotation: float, vertices, ctx: RenderContext) -> list[tuple[float, float]]:
    cos, sin = math.cos(rotation), math.sin(rotation)
    return [
        world_to_pixel(
            Vec2(position.x + cos * v.x - sin * v.y, position.y + sin * v.x + cos * v.y),
            ctx,
        )
        for v in vertices
    ]


def world_to_pixel(world: Vec2, ctx: RenderContext) -> tuple[float, float]:
    """Map a world position to pixel coordinates, applying camera offset, scale and Y flip."""
    px = (world.x - ctx.camera_origin.x) * ctx.scale
    py = ctx.height - (world.y - ctx.camera_origin.y) * ctx.scale
    return (px, py)


def _valid(components: RGBA) -> bool:
    return all(math.isfinite(c) and 0.0 <= c <= 1.0 for c in components)


def to_paint_color(color: Color, alpha_factor: float) -> RGBA:
    """Straight-alpha float color with the alpha scaled; opaque black if out of range."""
    result = (color.r / 255.0, color.g / 255.0, color.b / 255.0, color.a / 255.0 * alpha_factor)
    return result if _valid(result) else _FALLBACK


def darken_color(color: Color, alpha_factor: float) -> RGBA:
    """A 30% darker variant used for outlines; opaque black if out of range."""
    result = (
        color.r / 255.0 * _DARKEN,
        color.g / 255.0 * _DARKEN,
        color.b / 255.0 * _DARKEN,
        color.a / 255.0 * alpha_factor,
    )
    return result if _valid(result) else _FALLBACK