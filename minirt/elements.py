"""Parsers for the individual element lines of a scene file."""

from __future__ import annotations

import math
from typing import Callable, Dict, Sequence

from minirt.scene import Ambient, Cone, Cylinder, Light, Plane, Scene, SceneError, Sphere
from minirt.validation import (
    validate_cone_dimensions,
    validate_cylinder,
    validate_plane_normal,
    validate_sphere,
)
from minirt.values import (
    parse_color,
    parse_double,
    parse_vector,
    validate_non_zero_vector,
    validate_normalized_vector,
)

AMBIENT_FORMAT_ERROR = "Invalid ambient lighting format"
CAMERA_FORMAT_ERROR = "Invalid camera format"
LIGHT_FORMAT_ERROR = "Invalid light format"
SPHERE_FORMAT_ERROR = "Invalid sphere format"
PLANE_FORMAT_ERROR = "Invalid plane format"
CYLINDER_FORMAT_ERROR = "Invalid cylinder format"
CONE_FORMAT_ERROR = "Invalid cone format"

AMBIENT_ALREADY_DEFINED = "Ambient lighting already defined"
AMBIENT_RATIO_RANGE = "Ambient ratio must be in [0.0, 1.0]"
AMBIENT_COLOR_INVALID = "Invalid color for ambient lighting"
AMBIENT_TOO_MANY_ARGS = "Too many arguments for ambient"
LIGHT_ALREADY_DEFINED = "Light source already defined"
LIGHT_BRIGHTNESS_RANGE = "Light brightness in [0.0, 1.0]"
LIGHT_COLOR_INVALID = "Invalid color for light source"
LIGHT_TOO_MANY_ARGS = "Too many arguments for light source"
SPHERE_COLOR_INVALID = "Invalid color for sphere"
SPHERE_TOO_MANY_ARGS = "Too many arguments for sphere"
PLANE_COLOR_INVALID = "Invalid color for plane"
PLANE_TOO_MANY_ARGS = "Too many arguments for plane"
CYLINDER_COLOR_INVALID = "Invalid cylinder color"
CYLINDER_TOO_MANY_ARGS = "Too many arguments for cylinder"
CONE_COLOR_INVALID = "Invalid color for cone"
CONE_TOO_MANY_ARGS = "Too many arguments for cone"
CAMERA_FOV_RANGE = "Camera FOV must be in [0, 180] degrees"
UNKNOWN_IDENTIFIER = "Unknown identifier"

AMBIENT_EXPECTED = "Expected format: A ratio r,g,b"
LIGHT_EXPECTED = "Expected format: L x,y,z brightness r,g,b"
SPHERE_EXPECTED = "Expected format: sp x,y,z diameter r,g,b"
PLANE_EXPECTED = "Expected format: pl x,y,z nx,ny,nz r,g,b"
CYLINDER_EXPECTED = "Expected: cy x,y,z nx,ny,nz diameter height r,g,b"
CONE_EXPECTED = "Expected format: cn x,y,z axis_x,y,z angle height r,g,b"
CAMERA_EXPECTED = "Expected format: C x,y,z nx,ny,nz fov"

Tokens = Sequence[str]


def _color(text: str, message: str):
    try:
        return parse_color(text)
    except SceneError as exc:
        raise SceneError(message) from exc


def _require(tokens: Tokens, count: int, format_error: str, expected: str) -> None:
    if len(tokens) < count:
        raise SceneError(f"{format_error}: {expected}")


def _no_extra(tokens: Tokens, count: int, format_error: str, message: str) -> None:
    if len(tokens) > count:
        raise SceneError(f"{format_error}: {message}")


def parse_ambient(tokens: Tokens, scene: Scene) -> None:
    """Handle ``A ratio r,g,b``."""
    _require(tokens, 3, AMBIENT_FORMAT_ERROR, AMBIENT_EXPECTED)
    if scene.has_ambient:
        raise SceneError(AMBIENT_ALREADY_DEFINED)
    ratio = parse_double(tokens[1])
    if not 0.0 <= ratio <= 1.0:
        raise SceneError(AMBIENT_RATIO_RANGE)
    color = _color(tokens[2], AMBIENT_COLOR_INVALID)
    _no_extra(tokens, 3, AMBIENT_FORMAT_ERROR, AMBIENT_TOO_MANY_ARGS)
    scene.ambient = Ambient(ratio, color)


def parse_light(tokens: Tokens, scene: Scene) -> None:
    """Handle ``L x,y,z brightness r,g,b``."""
    _require(tokens, 4, LIGHT_FORMAT_ERROR, LIGHT_EXPECTED)
    if scene.has_light:
        raise SceneError(LIGHT_ALREADY_DEFINED)
    position = parse_vector(tokens[1])
    brightness = parse_double(tokens[2])
    if not 0.0 <= brightness <= 1.0:
        raise SceneError(LIGHT_BRIGHTNESS_RANGE)
    color = _color(tokens[3], LIGHT_COLOR_INVALID)
    _no_extra(tokens, 4, LIGHT_FORMAT_ERROR, LIGHT_TOO_MANY_ARGS)
    scene.light = Light(position, brightness, color)


def parse_camera(tokens: Tokens, scene: Scene) -> None:
    """Handle ``C x,y,z nx,ny,nz fov``; a later camera line replaces an earlier one."""
    if len(tokens) != 4:
        raise SceneError(f"{CAMERA_FORMAT_ERROR}: {CAMERA_EXPECTED}")
    position = parse_vector(tokens[1])
    orientation = parse_vector(tokens[2])
    fov = parse_double(tokens[3])
    try:
        validate_non_zero_vector(orientation)
        orientation = validate_normalized_vector(orientation.normalized())
    except SceneError as exc:
        raise SceneError(CAMERA_FORMAT_ERROR) from exc
    if not 0.0 <= fov <= 180.0:
        raise SceneError(f"{CAMERA_FORMAT_ERROR}: {CAMERA_FOV_RANGE}")
    scene.camera.position = position
    scene.camera.orientation = orientation
    scene.camera.fov = fov


def parse_sphere(tokens: Tokens, scene: Scene) -> None:
    """Handle ``sp x,y,z diameter r,g,b``."""
    _require(tokens, 4, SPHERE_FORMAT_ERROR, SPHERE_EXPECTED)
    center = parse_vector(tokens[1])
    diameter = parse_double(tokens[2])
    color = _color(tokens[3], SPHERE_COLOR_INVALID)
    _no_extra(tokens, 4, SPHERE_FORMAT_ERROR, SPHERE_TOO_MANY_ARGS)
    scene.add_object(validate_sphere(Sphere(center, diameter, color)))


def parse_plane(tokens: Tokens, scene: Scene) -> None:
    """Handle ``pl x,y,z nx,ny,nz r,g,b``; the normal is normalised."""
    _require(tokens, 4, PLANE_FORMAT_ERROR, PLANE_EXPECTED)
    point = parse_vector(tokens[1])
    normal = validate_plane_normal(parse_vector(tokens[2]))
    color = _color(tokens[3], PLANE_COLOR_INVALID)
    _no_extra(tokens, 4, PLANE_FORMAT_ERROR, PLANE_TOO_MANY_ARGS)
    scene.add_object(Plane(point, normal, color))


def parse_cylinder(tokens: Tokens, scene: Scene) -> None:
    """Handle ``cy x,y,z nx,ny,nz diameter [height] r,g,b``.

    Without a height the cylinder is as tall as it is wide.
    """
    _require(tokens, 5, CYLINDER_FORMAT_ERROR, CYLINDER_EXPECTED)
    center = parse_vector(tokens[1])
    axis = parse_vector(tokens[2])
    diameter = parse_double(tokens[3])
    if len(tokens) > 5 and "," not in tokens[4]:
        height = parse_double(tokens[4])
        color = _color(tokens[5], CYLINDER_COLOR_INVALID)
        _no_extra(tokens, 6, CYLINDER_FORMAT_ERROR, CYLINDER_TOO_MANY_ARGS)
    else:
        height = diameter
        color = _color(tokens[4], CYLINDER_COLOR_INVALID)
        _no_extra(tokens, 5, CYLINDER_FORMAT_ERROR, CYLINDER_TOO_MANY_ARGS)
    cylinder = Cylinder(center, axis.normalized(), diameter, height, color)
    scene.add_object(validate_cylinder(cylinder))


def parse_cone(tokens: Tokens, scene: Scene) -> None:
    """Handle ``cn x,y,z ax,ay,az angle height r,g,b``; angles in (0, 180] are degrees."""
    _require(tokens, 6, CONE_FORMAT_ERROR, CONE_EXPECTED)
    vertex = parse_vector(tokens[1])
    axis = parse_vector(tokens[2])
    try:
        validate_non_zero_vector(axis)
    except SceneError as exc:
        raise SceneError(CONE_FORMAT_ERROR) from exc
    angle = parse_double(tokens[3])
    height = parse_double(tokens[4])
    if 0 < angle <= 180:
        angle = angle * math.pi / 180.0
    validate_cone_dimensions(angle, height)
    color = _color(tokens[5], CONE_COLOR_INVALID)
    _no_extra(tokens, 6, CONE_FORMAT_ERROR, CONE_TOO_MANY_ARGS)
    scene.add_object(Cone(vertex, axis.normalized(), angle, height, color))


_PARSERS: Dict[str, Callable[[Tokens, Scene], None]] = {
    "A": parse_ambient,
    "C": parse_camera,
    "L": parse_light,
    "sp": parse_sphere,
    "pl": parse_plane,
    "cy": parse_cylinder,
    "cn": parse_cone,
}


def dispatch(tokens: Tokens, scene: Scene) -> None:
    """Parse one tokenised line into ``scene`` according to its identifier."""
    if not tokens:
        raise SceneError("Invalid line format")
    parser = _PARSERS.get(tokens[0])
    if parser is None:
        raise SceneError(f"{UNKNOWN_IDENTIFIER}: {tokens[0]}")
    parser(tokens, scene)