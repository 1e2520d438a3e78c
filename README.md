# marblerender

A small CPU software renderer for 2D physics snapshots, built for marble-race
videos. It turns a physics state made of circles, rectangles and convex
polygons into an RGBA frame. It also has camera controllers that choose, for
each frame, which part of the world is shown.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

- `marblerender.types`: value types. These are `Vec2`, `Color` (with
  `Color.rgb`, `Color.rgba`, `Color.WHITE` and `Color.BLACK`), the shapes
  `Circle`, `Rectangle` and `Polygon`, and `BodyType`, `BodyState`,
  `WorldBounds`, `WallConfig` and `PhysicsState`. The physics events are
  `CollisionInfo`, `CollisionEvent` and `WallBounceEvent`.
- `marblerender.raster`: `Pixmap`, an anti-aliased RGBA raster. It stores
  premultiplied alpha and blends source-over. It can fill and stroke circles
  and polygons, the polygon fill using the non-zero winding rule.
- `marblerender.render`: `Frame`, `RenderContext`, the abstract `Renderer`,
  `SoftwareRenderer` and the helpers `world_to_pixel`, `to_paint_color` and
  `darken_color`.
- `marblerender.cameras`: `CameraController`, `StaticCamera`,
  `RaceCameraConfig` and `RaceCamera`.
- `marblerender.follow`: `CameraMode`, `CameraConfig` and `FollowCamera`.
- `marblerender.rng`: `Lcg`, a deterministic 64-bit linear congruential
  generator. The same seed always gives the same sequence.

## Coordinate system

Physics space is Y-up, with the origin at the bottom-left. Pixel space is
Y-down, with the origin at the top-left:

```
pixel_x = (world_x - camera_origin.x) * scale
pixel_y = frame_height - (world_y - camera_origin.y) * scale
```

`SoftwareRenderer` applies these rules:

- Dead bodies are skipped.
- Dynamic and kinematic bodies are drawn at full opacity.
- Static bodies are drawn at 80% of their alpha.
- Each shape is filled, then outlined with a 1-px stroke in a colour 30% darker
  than the fill.

## Rendering a frame

```python
from marblerender.types import (
    Vec2, Color, Circle, BodyType, BodyState, PhysicsState, WorldBounds, WallConfig,
)
from marblerender.render import RenderContext, SoftwareRenderer

ball = BodyState(
    id=0, name="ball", tags=["racer"], position=Vec2(2.0, 2.0), rotation=0.0,
    shape=Circle(radius=1.0), color=Color.rgb(233, 69, 96),
    is_alive=True, body_type=BodyType.DYNAMIC,
)
state = PhysicsState(
    bodies=[ball], time=0.0,
    world_bounds=WorldBounds(width=10.0, height=10.0),
    wall_config=WallConfig(visible=False, color=Color.WHITE,
                           thickness=0.1, open_bottom=False),
)
ctx = RenderContext(width=200, height=200, camera_origin=Vec2(0.0, 0.0),
                    scale=50.0, background_color=Color.rgb(26, 26, 46))

frame = SoftwareRenderer().render(state, ctx)
print(frame.pixel(100, 100))   # RGBA of the ball's centre
```

`Frame.pixels` is a `bytearray` of premultiplied RGBA bytes in row-major order,
`width * height * 4` bytes long. `Frame.blank(width, height)` gives an all-zero
frame. `Frame.pixel(x, y)` raises `IndexError` outside the frame.

## Cameras

Every camera has `update(state, dt)`, which returns the `RenderContext` for this
frame, and `reset()`.

- `StaticCamera` always returns the same context.
  `StaticCamera.from_world(width, height, world_width, world_height, background_color)`
  picks the smaller of the two scale factors, so the whole world fits in the
  frame without distortion.
- `RaceCamera` follows the living body with the lowest Y among those carrying
  `RaceCameraConfig.racer_tag`. It places that body at
  `leader_screen_fraction` from the top of the frame and clamps the target to
  `min_origin_y`..`max_origin_y`. Each frame it moves the fraction `damping` of
  the remaining distance. With no such body it holds its position.
- `FollowCamera` follows a leader position, offset downward by `look_ahead`.
  - Call `follow(leader_pos, events, race_complete)` once per frame, then read
    `render_context()`.
  - A `CollisionEvent` or `WallBounceEvent` adds a shake impulse when
    `shake_on_impact` is set. The shake decays by `shake_decay` every frame.
  - Once the race is complete and `finish_zoom` is set, the zoom moves toward
    `zoom * finish_zoom_factor`.
  - With no leader, the camera drifts toward the world centre before the race
    is complete and freezes after it.
  - `lock_horizontal` keeps the camera from moving sideways.
  - `update(state, dt)` follows the lowest living body and passes no events.

## What this package does not do

- It does not simulate physics. It only draws snapshots that are given to it.
- It does not encode images or video. A frame is raw RGBA bytes, and writing
  them to a file is left to the caller.
- It has no command-line tool.
- It draws no motion trails or particle effects.