"""Camera controllers that choose a render context for each frame."""

from __future__ import annotations

import abc
import dataclasses
import math
from dataclasses import dataclass

from .render import RenderContext
from .types import Color, PhysicsState, Vec2


class CameraController(abc.ABC):
    """Produces the render context for each frame and keeps its own state."""

    @abc.abstractmethod
    def update(self, state: PhysicsState, dt: float) -> RenderContext:
        """Return the context to render this frame with, given the latest snapshot."""

    @abc.abstractmethod
    def reset(self) -> None:
        """Return the camera to its initial position."""


class StaticCamera(CameraController):
    """A fixed camera that returns the same context every frame."""

    def __init__(self, ctx: RenderContext) -> None:
        self.ctx = dataclasses.replace(ctx)
        self._initial_ctx = dataclasses.replace(ctx)

    @classmethod
    def from_world(
        cls,
        width: int,
        height: int,
        world_width: float,
        world_height: float,
        background_color: Color,
    ) -> "StaticCamera":
        """A camera whose uniform scale fits the whole world inside the frame.

        The world origin maps to the bottom-left corner of the frame.
        """
        scale = min(width / world_width, height / world_height)
        return cls(
            RenderContext(
                width=width,
                height=height,
                camera_origin=Vec2.ZERO,
                scale=scale,
                background_color=background_color,
            )
        )

    def update(self, state: PhysicsState, dt: float) -> RenderContext:
        return dataclasses.replace(self.ctx)

    def reset(self) -> None:
        self.ctx = dataclasses.replace(self._initial_ctx)


@dataclass
class RaceCameraConfig:
    """Settings for `RaceCamera`.

    `leader_screen_fraction` is where the leader sits, measured from the top
    of the frame (0 = top edge, 1 = bottom edge). `damping` is the fraction of
    the remaining distance covered each frame. The target origin is clamped to
    `min_origin_y`..`max_origin_y`.
    """

    racer_tag: str = "racer"
    leader_screen_fraction: float = 0.35
    damping: float = 0.15
    max_origin_y: float = math.inf
    min_origin_y: float = 0.0


class RaceCamera(CameraController):
    """Vertically follows the live racer with the lowest Y position.

    Horizontal origin, scale, size and background come from the initial
    context. With no live racers the camera holds its position.
    """

    def __init__(self, config: RaceCameraConfig, initial_ctx: RenderContext) -> None:
        self.config = config
        self.current_origin_y = initial_ctx.camera_origin.y
        self._initial_origin_y = initial_ctx.camera_origin.y
        self._width = initial_ctx.width
        self._height = initial_ctx.height
        self._scale = initial_ctx.scale
        self._background_color = initial_ctx.background_color

    def update(self, state: PhysicsState, dt: float) -> RenderContext:
        tag = self.config.racer_tag
        leader_y = min(
            (b.position.y for b in state.bodies if b.is_alive and tag in b.tags),
            default=None,
        )

        if leader_y is not None:
            viewport_height = self._height / self._scale
            target = leader_y - (1.0 - self.config.leader_screen_fraction) * viewport_height
            target = min(max(target, self.config.min_origin_y), self.config.max_origin_y)
            self.current_origin_y += (target - self.current_origin_y) * self.config.damping

        return RenderContext(
            width=self._width,
            height=self._height,
            camera_origin=Vec2(0.0, self.current_origin_y),
            scale=self._scale,
            background_color=self._background_color,
        )

    def reset(self) -> None:
        self.current_origin_y = self._initial_origin_y