"""Checks applied to scene elements and to whole scenes before rendering."""

from __future__ import annotations

import logging
import math

from minirt.scene import Cylinder, Plane, Scene, SceneError, Sphere
from minirt.values import validate_non_zero_vector, validate_normalized_vector
from minirt.vector import Vec3

logger = logging.getLogger(__name__)

PLANE_FORMAT_ERROR = "Invalid plane format"
CONE_FORMAT_ERROR = "Invalid cone format"
SPHERE_FORMAT_ERROR = "Invalid sphere format"
CYLINDER_FORMAT_ERROR = "Invalid cylinder format"
CONE_DIMS_POSITIVE = "Cone angle and height must be positive"
CONE_ANGLE_TOO_LARGE = "Cone angle must be <= 180 deg"
SPHERE_DIAMETER_POSITIVE = "Sphere diameter must be positive"
CYLINDER_AXIS_ZERO = "Cylinder axis cannot be zero"
CYLINDER_AXIS_NOT_NORMALIZED = "Cylinder axis not normalized"
CYLINDER_DIMS_POSITIVE = "Cylinder dims must be positive"
PLANE_NORMAL_ZERO = "Plane normal vector cannot be (0,0,0)"
PLANE_NORMAL_NOT_NORMALIZED = "Plane normal not normalized"
SCENE_NO_CAMERA = "Camera not defined"
SCENE_NO_AMBIENT = "Ambient lighting not defined"
SCENE_NO_LIGHT = "Light source not defined"
CAMERA_ORIENTATION_ZERO = "Camera orientation zero"
SPHERE_INVALID = "Invalid sphere"
CYLINDER_INVALID = "Invalid cylinder"
PLANE_INVALID = "Invalid plane"
SCENE_NO_CAMERA_RENDER = "No camera in scene"

FAR_DISTANCE = 1000.0


def validate_plane_normal(normal: Vec3) -> Vec3:
    """Return the normalised plane normal, or raise if it is zero."""
    try:
        validate_non_zero_vector(normal)
        unit = normal.normalized()
        validate_normalized_vector(unit)
    except SceneError as exc:
        raise SceneError(PLANE_FORMAT_ERROR) from exc
    return unit


def validate_cone_dimensions(angle: float, height: float) -> None:
    """Require a positive angle (radians, at most pi) and a positive height."""
    if angle <= 0.0 or height <= 0.0:
        raise SceneError(f"{CONE_FORMAT_ERROR}: {CONE_DIMS_POSITIVE}")
    if angle > math.pi:
        raise SceneError(f"{CONE_FORMAT_ERROR}: {CONE_ANGLE_TOO_LARGE}")
    if angle < 0.01:
        logger.warning("Small cone angle (%.6f rad)", angle)
    if height < 0.001:
        logger.warning("Small cone height (%.6f)", height)


def validate_position(position: Vec3, kind: str) -> None:
    """Warn when ``position`` lies far from the origin; never fails."""
    if position.length() > FAR_DISTANCE:
        logger.warning(
            "%s far from origin (%.2f, %.2f, %.2f)",
            kind,
            position.x,
            position.y,
            position.z,
        )


def validate_sphere(sphere: Sphere) -> Sphere:
    validate_position(sphere.center, "Sphere")
    if sphere.diameter <= 0.0:
        raise SceneError(f"{SPHERE_FORMAT_ERROR}: {SPHERE_DIAMETER_POSITIVE}")
    if sphere.diameter < 0.001:
        logger.warning("Very small sphere diameter")
    elif sphere.diameter < 0.1:
        logger.warning("Sphere diameter is very small")
    return sphere


def validate_cylinder(cylinder: Cylinder) -> Cylinder:
    validate_position(cylinder.center, "Cylinder")
    if cylinder.axis.is_zero():
        raise SceneError(CYLINDER_AXIS_ZERO)
    try:
        validate_normalized_vector(cylinder.axis)
    except SceneError as exc:
        raise SceneError(CYLINDER_AXIS_NOT_NORMALIZED) from exc
    if cylinder.diameter <= 0.0 or cylinder.height <= 0.0:
        raise SceneError(f"{CYLINDER_FORMAT_ERROR}: {CYLINDER_DIMS_POSITIVE}")
    if cylinder.diameter < 0.001:
        logger.warning("Very small cylinder diameter")
    if cylinder.height < 0.001:
        logger.warning("Very small cylinder height")
    if cylinder.diameter < 0.1 or cylinder.height < 0.1:
        logger.warning("Cylinder dimensions are very small")
    return cylinder


def validate_plane(plane: Plane) -> Plane:
    validate_position(plane.point, "Plane")
    if plane.normal.is_zero():
        raise SceneError(PLANE_NORMAL_ZERO)
    try:
        validate_normalized_vector(plane.normal)
    except SceneError as exc:
        raise SceneError(PLANE_NORMAL_NOT_NORMALIZED) from exc
    return plane


def _validate_object(obj: object) -> None:
    if isinstance(obj, Sphere):
        validate_sphere(obj)
    elif isinstance(obj, Cylinder):
        validate_cylinder(obj)
    elif isinstance(obj, Plane):
        validate_plane(obj)


_INVALID_MESSAGES = ((Sphere, SPHERE_INVALID), (Cylinder, CYLINDER_INVALID), (Plane, PLANE_INVALID))


def validate_scene(scene: Scene) -> Scene:
    """Check that camera, ambient light and light exist and objects are sound."""
    if scene.camera.fov == 0.0:
        raise SceneError(SCENE_NO_CAMERA)
    if not scene.has_ambient:
        raise SceneError(SCENE_NO_AMBIENT)
    if not scene.has_light:
        raise SceneError(SCENE_NO_LIGHT)
    if scene.camera.orientation.is_zero():
        raise SceneError(CAMERA_ORIENTATION_ZERO)
    for obj in scene.objects:
        try:
            _validate_object(obj)
        except SceneError as exc:
            message = next(msg for kind, msg in _INVALID_MESSAGES if isinstance(obj, kind))
            raise SceneError(message) from exc
    return scene


def validate_scene_rendering(scene: Scene) -> Scene:
    """Check that the scene has a camera and that its objects are sound."""
    if scene.camera.fov == 0.0:
        raise SceneError(SCENE_NO_CAMERA_RENDER)
    for obj in scene.objects:
        _validate_object(obj)
    return scene