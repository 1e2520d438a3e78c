import dataclasses
import math

import pytest

from marblerender.follow import CameraConfig, CameraMode, FollowCamera
from marblerender.render import RenderContext
from marblerender.types import (
    BodyState,
    BodyType,
    Circle,
    CollisionEvent,
    CollisionInfo,
    Color,
    PhysicsState,
    Vec2,
    WallBounceEvent,
    WallConfig,
    WorldBounds,
)

WORLD_CENTER = Vec2(7.2, 12.8)


def base_ctx():
    return RenderContext(
        width=720,
        height=1280,
        camera_origin=Vec2.ZERO,
        scale=50.0,
        background_color=Color.rgb(20, 20, 20),
    )


def make_cam(world_center=WORLD_CENTER, **overrides):
    config = dataclasses.replace(CameraConfig(), mode=CameraMode.FOLLOW_LEADER, **overrides)
    ctx = base_ctx()
    return FollowCamera(config, ctx.width / 14.4, ctx, world_center)


def collision_event():
    return CollisionEvent(CollisionInfo(body_a=0, body_b=1, impulse=10.0))


def state_with(bodies):
    return PhysicsState(
        bodies=bodies,
        world_bounds=WorldBounds(14.4, 25.6),
        wall_config=WallConfig(visible=False, color=Color.WHITE, thickness=0.1, open_bottom=False),
    )


def body(id_, x, y, alive=True):
    return BodyState(
        id=id_,
        position=Vec2(x, y),
        shape=Circle(0.5),
        color=Color.rgb(255, 0, 0),
        body_type=BodyType.DYNAMIC,
        is_alive=alive,
    )


def test_lerp_one_snaps_instantly():
    cam = make_cam(
        follow_lerp=1.0, look_ahead=0.0, shake_on_impact=False, finish_zoom=False, lock_horizontal=False
    )
    cam.follow(Vec2(5.0, 20.0), [], False)
    assert cam.current_pos.x == pytest.approx(5.0, abs=1e-5)
    assert cam.current_pos.y == pytest.approx(20.0, abs=1e-5)


def test_lerp_zero_never_moves():
    cam = make_cam(follow_lerp=0.0, shake_on_impact=False, finish_zoom=False)
    initial = cam.current_pos
    for _ in range(50):
        cam.follow(Vec2(100.0, 100.0), [], False)
    assert cam.current_pos.x == pytest.approx(initial.x, abs=1e-5)
    assert cam.current_pos.y == pytest.approx(initial.y, abs=1e-5)


def test_shake_on_collision():
    cam = make_cam(
        shake_on_impact=True, shake_intensity=0.5, shake_decay=1.0, follow_lerp=0.0, finish_zoom=False
    )
    cam.follow(None, [collision_event()], False)
    magnitude = math.hypot(cam.shake_offset.x, cam.shake_offset.y)
    assert 0.0 < magnitude <= 0.5


def test_shake_on_wall_bounce():
    cam = make_cam(
        shake_on_impact=True, shake_intensity=0.5, shake_decay=1.0, follow_lerp=0.0, finish_zoom=False
    )
    cam.follow(None, [WallBounceEvent(body=3)], False)
    assert math.hypot(cam.shake_offset.x, cam.shake_offset.y) > 0.0


def test_shake_disabled():
    cam = make_cam(shake_on_impact=False, follow_lerp=0.0, finish_zoom=False)
    cam.follow(None, [collision_event()], False)
    assert abs(cam.shake_offset.x) < 1e-9
    assert abs(cam.shake_offset.y) < 1e-9


def test_shake_is_deterministic_and_reset_restores_sequence():
    cam_a = make_cam(shake_on_impact=True, shake_intensity=0.5, shake_decay=1.0, follow_lerp=0.0)
    cam_b = make_cam(shake_on_impact=True, shake_intensity=0.5, shake_decay=1.0, follow_lerp=0.0)
    cam_a.follow(None, [collision_event()], False)
    cam_b.follow(None, [collision_event()], False)
    assert cam_a.shake_offset == cam_b.shake_offset
    first = cam_a.shake_offset
    cam_a.reset()
    assert cam_a.shake_offset == Vec2.ZERO
    cam_a.follow(None, [collision_event()], False)
    assert cam_a.shake_offset == first


def test_shake_decays():
    cam = make_cam(shake_on_impact=True, shake_intensity=0.5, shake_decay=0.5, follow_lerp=0.0)
    cam.follow(None, [collision_event()], False)
    before = math.hypot(cam.shake_offset.x, cam.shake_offset.y)
    cam.follow(None, [], False)
    after = math.hypot(cam.shake_offset.x, cam.shake_offset.y)
    assert after == pytest.approx(before * 0.5)


def test_finish_zoom_lerps():
    cam = make_cam(
        zoom=1.0,
        finish_zoom=True,
        finish_zoom_factor=2.0,
        finish_zoom_lerp=0.5,
        follow_lerp=0.0,
        shake_on_impact=False,
    )
    for _ in range(10):
        cam.follow(None, [], False)
    assert cam.current_zoom == pytest.approx(1.0, abs=1e-5)

    for _ in range(20):
        cam.follow(None, [], True)
    assert 1.0 < cam.current_zoom <= 2.0

    for _ in range(200):
        cam.follow(None, [], True)
    assert abs(cam.current_zoom - 2.0) < 0.05


def test_finish_zoom_disabled():
    cam = make_cam(zoom=1.0, finish_zoom=False, finish_zoom_factor=2.0, follow_lerp=0.0, shake_on_impact=False)
    for _ in range(50):
        cam.follow(None, [], True)
    assert cam.current_zoom == pytest.approx(1.0, abs=1e-5)


def test_freezes_when_race_complete_without_leader():
    cam = make_cam(follow_lerp=0.5, shake_on_impact=False, finish_zoom=False, lock_horizontal=False)
    for _ in range(100):
        cam.follow(Vec2(3.0, 8.0), [], False)
    pos = cam.current_pos
    for _ in range(100):
        cam.follow(None, [], True)
    assert cam.current_pos.x == pytest.approx(pos.x, abs=1e-5)
    assert cam.current_pos.y == pytest.approx(pos.y, abs=1e-5)


def test_startup_fallback_to_world_center():
    cam = make_cam(follow_lerp=0.5, shake_on_impact=False, finish_zoom=False, lock_horizontal=False)
    cam.current_pos = Vec2(0.0, 0.0)
    for _ in range(100):
        cam.follow(None, [], False)
    assert abs(cam.current_pos.x - WORLD_CENTER.x) < 0.1
    assert abs(cam.current_pos.y - WORLD_CENTER.y) < 0.1


def test_lock_horizontal_keeps_x():
    cam = make_cam(follow_lerp=1.0, look_ahead=0.0, shake_on_impact=False, lock_horizontal=True)
    cam.follow(Vec2(1.0, 3.0), [], False)
    assert cam.current_pos.x == pytest.approx(WORLD_CENTER.x)
    assert cam.current_pos.y == pytest.approx(3.0)


def test_look_ahead_offsets_target_below_leader():
    cam = make_cam(follow_lerp=1.0, look_ahead=2.0, shake_on_impact=False)
    cam.follow(Vec2(7.2, 10.0), [], False)
    assert cam.current_pos.y == pytest.approx(8.0)


def test_render_context_centres_viewport():
    cam = make_cam(shake_on_impact=False, zoom=1.0)
    ctx = cam.render_context()
    assert ctx.scale == pytest.approx(50.0)
    assert ctx.camera_origin.x == pytest.approx(0.0, abs=1e-9)
    assert ctx.camera_origin.y == pytest.approx(0.0, abs=1e-9)
    assert (ctx.width, ctx.height) == (720, 1280)
    assert ctx.background_color == Color.rgb(20, 20, 20)


def test_render_context_scale_follows_zoom():
    cam = make_cam(zoom=2.0)
    assert cam.render_context().scale == pytest.approx(100.0)


def test_controller_update_follows_lowest_live_body():
    cam = make_cam(follow_lerp=1.0, look_ahead=0.0, lock_horizontal=False, shake_on_impact=False)
    state = state_with([body(0, 2.0, 10.0), body(1, 4.0, 6.0), body(2, 9.0, 1.0, alive=False)])
    ctx = cam.update(state, 0.016)
    assert cam.current_pos.x == pytest.approx(4.0)
    assert cam.current_pos.y == pytest.approx(6.0)
    assert ctx.camera_origin.x == pytest.approx(4.0 - 7.2)
    assert ctx.camera_origin.y == pytest.approx(6.0 - 12.8)


def test_reset_restores_initial_state():
    cam = make_cam(follow_lerp=0.5, lock_horizontal=False, finish_zoom=True, finish_zoom_lerp=0.5)
    for _ in range(10):
        cam.follow(Vec2(1.0, 1.0), [collision_event()], True)
    cam.reset()
    assert cam.current_pos == WORLD_CENTER
    assert cam.shake_offset == Vec2.ZERO
    assert cam.current_zoom == pytest.approx(1.0)
    assert cam.target_zoom == pytest.approx(1.0)