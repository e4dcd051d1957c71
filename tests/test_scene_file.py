import pytest

from minirt.scene import Cylinder, Plane, SceneError, Sphere
from minirt.scene_file import is_empty_line, parse_scene_file, parse_scene_lines

SCENE_TEXT = """\
# a small scene
A 0.2 255,255,255

C -50,0,20 0,0,1 70
L -40,0,30 0.7 255,255,255
pl 0,0,0 0,1.0,0 255,0,225
sp 0,0,20 20 255,0,0
cy 50.0,0.0,20.6 0,0,1.0 14.2 21.42 10,0,255
"""


def test_is_empty_line():
    assert is_empty_line("  \t\r\n")
    assert is_empty_line("")
    assert not is_empty_line("  A")


def test_parse_scene_lines_builds_scene():
    scene = parse_scene_lines(SCENE_TEXT.splitlines(keepends=True))
    kinds = [type(obj) for obj in scene.objects]
    assert kinds == [Plane, Sphere, Cylinder]
    assert scene.camera.fov == 70.0
    assert scene.has_ambient and scene.has_light


def test_comment_and_blank_lines_are_skipped():
    lines = ["#sp 0,0,0 1 1,2,3\n", "\n"] + SCENE_TEXT.splitlines(keepends=True)
    scene = parse_scene_lines(lines)
    assert len(scene.objects) == 3


def test_empty_input_rejected():
    with pytest.raises(SceneError, match="Empty file"):
        parse_scene_lines([])


def test_missing_light_rejected():
    lines = [line for line in SCENE_TEXT.splitlines() if not line.startswith("L")]
    with pytest.raises(SceneError, match="Light source not defined"):
        parse_scene_lines(lines)


def test_blank_only_input_needs_camera():
    with pytest.raises(SceneError, match="Camera not defined"):
        parse_scene_lines(["\n", "  \n"])


def test_unknown_identifier_reports_line():
    lines = SCENE_TEXT.splitlines() + ["zz 1 2 3"]
    with pytest.raises(SceneError, match=r"Line \d+: Unknown identifier: zz"):
        parse_scene_lines(lines)


def test_parse_scene_file_roundtrip(tmp_path):
    path = tmp_path / "scene.rt"
    path.write_text(SCENE_TEXT)
    scene = parse_scene_file(path)
    assert len(scene.objects) == 3
    assert isinstance(scene.objects[1], Sphere)


def test_wrong_extension(tmp_path):
    path = tmp_path / "scene.txt"
    path.write_text(SCENE_TEXT)
    with pytest.raises(SceneError, match=".rt extension"):
        parse_scene_file(path)


def test_missing_file(tmp_path):
    with pytest.raises(SceneError, match="Could not open file"):
        parse_scene_file(tmp_path / "absent.rt")