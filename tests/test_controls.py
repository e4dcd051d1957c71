import pytest

from minirt.controls import (
    Action,
    Controller,
    Key,
    action_for,
    controls_help,
    handle_camera_movement,
    handle_camera_rotation,
    is_redraw_key,
)
from minirt.scene import Camera, Plane, Scene, Sphere
from minirt.vector import Vec3


def make_scene(objects=()):
    scene = Scene(camera=Camera(Vec3(0, 0, 0), Vec3(0, 0, 1), 70.0))
    for obj in objects:
        scene.add_object(obj)
    return scene


def approx_vec(vec):
    return pytest.approx(tuple(vec))


def test_action_for_both_layouts():
    assert action_for(Key.W) is Action.MOVE_FORWARD
    assert action_for(Key.W_MAC) is Action.MOVE_FORWARD
    assert action_for(Key.ESC_MAC) is Action.QUIT
    assert action_for(9999) is None


def test_move_forward_and_back():
    scene = make_scene()
    handle_camera_movement(Key.W, scene)
    assert tuple(scene.camera.position) == approx_vec(Vec3(0, 0, 0.5))
    handle_camera_movement(Key.S_MAC, scene)
    assert tuple(scene.camera.position) == approx_vec(Vec3(0, 0, 0))


def test_move_down_and_up():
    scene = make_scene()
    handle_camera_movement(Key.Q, scene)
    assert tuple(scene.camera.position) == approx_vec(Vec3(0, -0.5, 0))
    handle_camera_movement(Key.E, scene)
    assert tuple(scene.camera.position) == approx_vec(Vec3(0, 0, 0))


def test_move_sideways_is_horizontal_and_reversible():
    scene = make_scene()
    handle_camera_movement(Key.D, scene)
    moved = scene.camera.position
    assert abs(moved.x) == pytest.approx(0.5)
    assert moved.y == pytest.approx(0.0)
    handle_camera_movement(Key.A, scene)
    assert tuple(scene.camera.position) == approx_vec(Vec3(0, 0, 0))


def test_movement_ignores_other_keys():
    scene = make_scene()
    handle_camera_movement(Key.P, scene)
    assert scene.camera.position == Vec3(0, 0, 0)


def test_look_up_and_down():
    scene = make_scene()
    handle_camera_rotation(Key.I, scene)
    assert scene.camera.orientation.y > 0
    assert scene.camera.orientation.length() == pytest.approx(1.0)
    handle_camera_rotation(Key.K, scene)
    assert tuple(scene.camera.orientation) == approx_vec(Vec3(0, 0, 1))


def test_look_left_and_right_are_opposite():
    left = make_scene()
    right = make_scene()
    handle_camera_rotation(Key.J, left)
    handle_camera_rotation(Key.L_MAC, right)
    assert left.camera.orientation.x == pytest.approx(-right.camera.orientation.x)
    assert left.camera.orientation.x != pytest.approx(0.0)
    handle_camera_rotation(Key.L, left)
    assert tuple(left.camera.orientation) == approx_vec(Vec3(0, 0, 1))


def test_rotation_ignores_other_keys():
    scene = make_scene()
    handle_camera_rotation(Key.W, scene)
    assert scene.camera.orientation == Vec3(0, 0, 1)


def test_is_redraw_key():
    assert is_redraw_key(Key.W)
    assert is_redraw_key(Key.W_MAC)
    assert is_redraw_key(Key.P)
    assert not is_redraw_key(Key.ESC)
    assert not is_redraw_key(Key.SPACE)
    assert not is_redraw_key(9999)


def test_selection_stays_in_range():
    scene = make_scene([Sphere(Vec3(), 1.0, Vec3()), Sphere(Vec3(), 1.0, Vec3())])
    controller = Controller(scene)
    controller.handle_object_transforms(Key.P)
    controller.handle_object_transforms(Key.P)
    assert controller.selected == 1
    controller.handle_object_transforms(Key.O)
    controller.handle_object_transforms(Key.O_MAC)
    assert controller.selected == 0


def test_arrow_moves_selected_object():
    sphere = Sphere(Vec3(1, 2, 3), 2.0, Vec3())
    controller = Controller(make_scene([sphere]))
    controller.handle_object_transforms(Key.LEFT)
    assert tuple(sphere.center) == approx_vec(Vec3(0.7, 2, 3))
    controller.handle_object_transforms(Key.UP_MAC)
    assert tuple(sphere.center) == approx_vec(Vec3(0.7, 2.3, 3))


def test_plus_and_minus_scale_object():
    sphere = Sphere(Vec3(), 2.0, Vec3())
    controller = Controller(make_scene([sphere]))
    controller.handle_object_transforms(Key.PLUS)
    assert sphere.diameter == pytest.approx(2.0 * 1.1)
    controller.handle_object_transforms(Key.MINUS)
    assert sphere.diameter == pytest.approx(2.0 * 1.1 * 0.9)


def test_rotate_keys_turn_plane_normal():
    plane = Plane(Vec3(), Vec3(0, 1, 0), Vec3())
    controller = Controller(make_scene([plane]))
    controller.handle_object_transforms(Key.R)
    assert plane.normal.length() == pytest.approx(1.0)
    assert plane.normal.y < 1.0
    controller.handle_object_transforms(Key.F)
    assert tuple(plane.normal) == approx_vec(Vec3(0, 1, 0))


def test_handle_key_escape_requests_quit():
    controller = Controller(make_scene())
    assert controller.handle_key(Key.ESC) is False
    assert controller.quit_requested is True


def test_handle_key_space_shows_help():
    shown = []
    controller = Controller(make_scene(), output=shown.append)
    assert controller.handle_key(Key.SPACE) is False
    assert shown == [controls_help()]


def test_handle_key_movement_redraws():
    controller = Controller(make_scene())
    assert controller.handle_key(Key.W) is True
    assert tuple(controller.scene.camera.position) == approx_vec(Vec3(0, 0, 0.5))
    assert controller.quit_requested is False


def test_controls_help_lists_keys():
    text = controls_help()
    assert "ESC - Exit" in text
    assert "W/S - Move forward/backward" in text
    assert text.startswith("=== MiniRT Transform Controls ===")