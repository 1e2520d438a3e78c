"""Scene value types: vectors, colors, shapes, body snapshots and physics events."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from typing import ClassVar, Optional, Union


@dataclass(frozen=True)
class Vec2:
    """A 2-D vector in world space (metres, Y-up)."""

    x: float = 0.0
    y: float = 0.0

    ZERO: ClassVar["Vec2"]

    def __add__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> "Vec2":
        return Vec2(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __neg__(self) -> "Vec2":
        return Vec2(-self.x, -self.y)

    def __abs__(self) -> float:
        return math.hypot(self.x, self.y)


Vec2.ZERO = Vec2(0.0, 0.0)


@dataclass(frozen=True)
class Color:
    """An 8-bit-per-channel RGBA color with straight (non-premultiplied) alpha."""

    r: int
    g: int
    b: int
    a: int = 255

    WHITE: ClassVar["Color"]
    BLACK: ClassVar["Color"]

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(f"color channel {name} must be an int, got {value!r}")
            if not 0 <= value <= 255:
                raise ValueError(f"color channel {name} out of range 0..255: {value}")

    @classmethod
    def rgb(cls, r: int, g: int, b: int) -> "Color":
        """An opaque color."""
        return cls(r, g, b, 255)

    @classmethod
    def rgba(cls, r: int, g: int, b: int, a: int) -> "Color":
        """A color with an explicit alpha channel."""
        return cls(r, g, b, a)


Color.WHITE = Color(255, 255, 255, 255)
Color.BLACK = Color(0, 0, 0, 255)


@dataclass(frozen=True)
class Circle:
    """A circle of the given radius (metres), centred on the body position."""

    radius: float


@dataclass(frozen=True)
class Rectangle:
    """An axis-aligned (before rotation) rectangle centred on the body position."""

    width: float
    height: float


@dataclass(frozen=True)
class Polygon:
    """A convex polygon given by local-space vertex offsets from the body position."""

    vertices: tuple[Vec2, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "vertices", tuple(self.vertices))


Shape = Union[Circle, Rectangle, Polygon]


class BodyType(enum.Enum):
    """How a body takes part in the simulation."""

    STATIC = "static"
    DYNAMIC = "dynamic"
    KINEMATIC = "kinematic"


@dataclass
class BodyState:
    """Snapshot of one body at a point in simulated time."""

    id: int
    position: Vec2
    shape: Shape
    color: Color
    body_type: BodyType = BodyType.DYNAMIC
    rotation: float = 0.0
    name: Optional[str] = None
    tags: list[str] = field(default_factory=list)
    is_alive: bool = True


@dataclass(frozen=True)
class WorldBounds:
    """Size of the simulated world in metres."""

    width: float
    height: float


@dataclass(frozen=True)
class WallConfig:
    """Appearance and layout of the world's boundary walls."""

    visible: bool
    color: Color
    thickness: float
    open_bottom: bool


@dataclass
class PhysicsState:
    """Snapshot of the whole world: every body plus world settings."""

    bodies: list[BodyState]
    world_bounds: WorldBounds
    wall_config: WallConfig
    time: float = 0.0


@dataclass(frozen=True)
class CollisionInfo:
    """Two bodies that struck each other, with the impulse exchanged."""

    body_a: int
    body_b: int
    impulse: float


@dataclass(frozen=True)
class CollisionEvent:
    """A body-to-body collision reported by the physics step."""

    info: CollisionInfo


@dataclass(frozen=True)
class WallBounceEvent:
    """A body bouncing off a boundary wall."""

    body: int


PhysicsEvent = Union[CollisionEvent, WallBounceEvent]