"""A camera that follows the race leader, with impact shake and a finish zoom."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import Iterable, Optional

from .cameras import CameraController
from .render import RenderContext
from .rng import Lcg
from .types import CollisionEvent, PhysicsState, Vec2, WallBounceEvent

_SHAKE_SEED = 0x5851_F42D_4C95_7F2D


class CameraMode(enum.Enum):
    """How the scene camera behaves."""

    STATIC = "static"
    FOLLOW_LEADER = "follow_leader"


@dataclass
class CameraConfig:
    """Settings for the scene camera.

    `follow_lerp` is the fraction of the remaining distance covered each
    frame. `look_ahead` shifts the target below the leader, in metres.
    Shake impulses of up to `shake_intensity` metres decay by `shake_decay`
    each frame. Once the race is complete and `finish_zoom` is set, the zoom
    moves toward `zoom * finish_zoom_factor` at `finish_zoom_lerp` per frame.
    With `lock_horizontal` the camera never moves sideways.
    """

    mode: CameraMode = CameraMode.STATIC
    zoom: float = 1.0
    follow_lerp: float = 0.08
    look_ahead: float = 2.0
    shake_on_impact: bool = True
    shake_intensity: float = 0.15
    shake_decay: float = 0.85
    finish_zoom: bool = True
    finish_zoom_factor: float = 1.5
    finish_zoom_lerp: float = 0.05
    lock_horizontal: bool = True


class FollowCamera(CameraController):
    """Smoothly follows a leader position, shaking on impacts and zooming at the finish.

    Call `follow` each frame with the leader position, that frame's physics
    events and whether the race is over, then read `render_context`.
    """

    def __init__(
        self,
        config: CameraConfig,
        base_scale: float,
        initial_ctx: RenderContext,
        world_center: Vec2,
    ) -> None:
        self.config = config
        self.base_scale = base_scale
        self.current_pos = world_center
        self.shake_offset = Vec2.ZERO
        self.current_zoom = config.zoom
        self.target_zoom = config.zoom
        self.world_center = world_center
        self._initial_pos = world_center
        self._width = initial_ctx.width
        self._height = initial_ctx.height
        self._background_color = initial_ctx.background_color
        self._rng = Lcg(_SHAKE_SEED)

    def follow(
        self,
        leader_pos: Optional[Vec2],
        events: Iterable[object],
        race_complete: bool,
    ) -> None:
        """Advance the camera by one frame.

        Without a leader the camera freezes once the race is complete and
        otherwise drifts toward the world centre.
        """
        cfg = self.config
        if leader_pos is not None:
            self._move_toward(Vec2(leader_pos.x, leader_pos.y - cfg.look_ahead))
        elif not race_complete:
            self._move_toward(self.world_center)

        if cfg.shake_on_impact and any(
            isinstance(e, (CollisionEvent, WallBounceEvent)) for e in events
        ):
            angle = self._rng.next_float() * math.tau
            magnitude = self._rng.next_float() * cfg.shake_intensity
            self.shake_offset = Vec2(
                self.shake_offset.x + magnitude * math.cos(angle),
                self.shake_offset.y + magnitude * math.sin(angle),
            )
        self.shake_offset = self.shake_offset * cfg.shake_decay

        if race_complete and cfg.finish_zoom:
            self.target_zoom = cfg.zoom * cfg.finish_zoom_factor
        self.current_zoom += (self.target_zoom - self.current_zoom) * cfg.finish_zoom_lerp

    def render_context(self) -> RenderContext:
        """The context for the current camera state, shake included."""
        scale = self.base_scale * self.current_zoom
        viewport_w = self._width / scale
        viewport_h = self._height / scale
        origin = Vec2(
            self.current_pos.x - viewport_w / 2.0 + self.shake_offset.x,
            self.current_pos.y - viewport_h / 2.0 + self.shake_offset.y,
        )
        return RenderContext(
            width=self._width,
            height=self._height,
            camera_origin=origin,
            scale=scale,
            background_color=self._background_color,
        )

    def update(self, state: PhysicsState, dt: float) -> RenderContext:
        """Follow the live body with the lowest Y; no events, so no shake."""
        leader = min(
            (b for b in state.bodies if b.is_alive),
            key=lambda b: b.position.y,
            default=None,
        )
        self.follow(leader.position if leader is not None else None, (), False)
        return self.render_context()

    def reset(self) -> None:
        self.current_pos = self._initial_pos
        self.shake_offset = Vec2.ZERO
        self.current_zoom = self.config.zoom
        self.target_zoom = self.config.zoom
        self._rng = Lcg(_SHAKE_SEED)

    def _move_toward(self, target: Vec2) -> None:
        lerp = self.config.follow_lerp
        x = self.current_pos.x
        if not self.config.lock_horizontal:
            x += (target.x - x) * lerp
        y = self.current_pos.y + (target.y - self.current_pos.y) * lerp
        self.current_pos = Vec2(x, y)