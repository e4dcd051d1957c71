"""Ray intersection with spheres, planes, cylinders and cones."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import NamedTuple, Optional

from minirt.scene import (
    EARLY_TERMINATION_DISTANCE,
    EPSILON,
    MIN_T,
    Cone,
    Cylinder,
    Plane,
    Scene,
    SceneObject,
    Sphere,
)
from minirt.vector import Ray, Vec3, solve_quadratic

SIDE_NONE = -1
SIDE_BASE = 0
SIDE_TOP = 1
SIDE_BODY = 2


class Quadratic(NamedTuple):
    """Coefficients of a*t^2 + b*t + c = 0."""

    a: float
    b: float
    c: float


@dataclass(frozen=True)
class Hit:
    """Where a ray meets an object and what the surface looks like there.

    ``hit_side`` is -1 for spheres and planes; 0 for a cylinder's bottom cap or
    a cone's base; 1 for a cylinder's top cap or a cone's lateral surface; 2 for
    a cylinder's lateral surface.
    """

    t: float
    point: Vec3
    normal: Vec3
    color: Vec3
    obj: object
    hit_side: int = SIDE_NONE
    obj_index: int = -1


def _closer(t: float, best: Optional[Hit]) -> bool:
    return best is None or t < best.t


def sphere_quadratic_coeffs(sphere: Sphere, ray: Ray) -> Quadratic:
    oc = ray.origin - sphere.center
    radius = sphere.diameter / 2.0
    return Quadratic(
        ray.direction.dot(ray.direction),
        2.0 * oc.dot(ray.direction),
        oc.dot(oc) - radius * radius,
    )


def intersect_sphere(sphere: Sphere, ray: Ray, best: Optional[Hit]) -> Optional[Hit]:
    """Return a hit on ``sphere`` closer than ``best``, or None."""
    q = sphere_quadratic_coeffs(sphere, ray)
    if q.b * q.b < 4.0 * q.a * q.c:
        return None
    t = solve_quadratic(q.a, q.b, q.c, MIN_T)
    if t is None or not _closer(t, best):
        return None
    point = ray.at(t)
    normal = (point - sphere.center).normalized()
    if ray.direction.dot(normal) > 0.0:
        normal = -normal
    return Hit(t, point, normal, sphere.color, sphere, SIDE_NONE)


def intersect_plane(plane: Plane, ray: Ray, best: Optional[Hit]) -> Optional[Hit]:
    """Return a hit on ``plane`` closer than ``best``, or None."""
    denom = plane.normal.dot(ray.direction)
    if abs(denom) < EPSILON:
        return None
    t = (plane.point - ray.origin).dot(plane.normal) / denom
    if t <= MIN_T or not _closer(t, best):
        return None
    return Hit(t, ray.at(t), plane.normal, plane.color, plane, SIDE_NONE)


def cylinder_quadratic_coeffs(cylinder: Cylinder, ray: Ray) -> Quadratic:
    oc = ray.origin - cylinder.center
    radius = cylinder.diameter / 2.0
    ray_axis = ray.direction.cross(cylinder.axis)
    oc_axis = oc.cross(cylinder.axis)
    return Quadratic(
        ray_axis.dot(ray_axis),
        2.0 * ray_axis.dot(oc_axis),
        oc_axis.dot(oc_axis) - radius * radius,
    )


def cylinder_surface_normal(cylinder: Cylinder, point: Vec3) -> Vec3:
    """Outward normal of the lateral surface at ``point``."""
    m = (point - cylinder.center).dot(cylinder.axis)
    axis_point = cylinder.center + cylinder.axis * m
    return (point - axis_point).normalized()


def _cylinder_cap(
    cylinder: Cylinder, ray: Ray, best: Optional[Hit], height: float
) -> Optional[Hit]:
    denom = cylinder.axis.dot(ray.direction)
    if abs(denom) < EPSILON:
        return None
    cap_center = cylinder.center + cylinder.axis * height
    t = (cap_center - ray.origin).dot(cylinder.axis) / denom
    if t <= MIN_T or not _closer(t, best):
        return None
    point = ray.at(t)
    radial = point - cap_center
    radial = radial - cylinder.axis * radial.dot(cylinder.axis)
    if radial.length() > cylinder.diameter / 2.0:
        return None
    if height > 0:
        return Hit(t, point, cylinder.axis, cylinder.color, cylinder, SIDE_TOP)
    return Hit(t, point, -cylinder.axis, cylinder.color, cylinder, SIDE_BASE)


def intersect_cylinder(
    cylinder: Cylinder, ray: Ray, best: Optional[Hit]
) -> Optional[Hit]:
    """Return a hit on ``cylinder`` closer than ``best``, or None.

    The bottom cap is tried first, then the top cap; the first cap that is hit
    is returned without looking at the lateral surface.
    """
    cap = _cylinder_cap(cylinder, ray, best, 0.0) or _cylinder_cap(
        cylinder, ray, best, cylinder.height
    )
    if cap is not None:
        return cap
    q = cylinder_quadratic_coeffs(cylinder, ray)
    if abs(q.a) < EPSILON:
        return None
    t = solve_quadratic(q.a, q.b, q.c, MIN_T)
    if t is None or not _closer(t, best):
        return None
    point = ray.at(t)
    m = (point - cylinder.center).dot(cylinder.axis)
    if m < 0 or m > cylinder.height:
        return None
    normal = cylinder_surface_normal(cylinder, point)
    return Hit(t, point, normal, cylinder.color, cylinder, SIDE_BODY)


def cone_quadratic_coeffs(cone: Cone, ray: Ray) -> Quadratic:
    oc = ray.origin - cone.vertex
    cos_sq = math.cos(cone.angle / 2.0) ** 2
    dv = ray.direction.dot(cone.axis)
    ocv = oc.dot(cone.axis)
    return Quadratic(
        dv * dv - cos_sq,
        2.0 * (dv * ocv - ray.direction.dot(oc) * cos_sq),
        ocv * ocv - oc.dot(oc) * cos_sq,
    )


def cone_surface_normal(cone: Cone, point: Vec3) -> Vec3:
    """Normal of the lateral surface at ``point``."""
    half = cone.angle / 2.0
    to_point = point - cone.vertex
    radial = to_point - cone.axis * to_point.dot(cone.axis)
    return (radial.normalized() * math.cos(half) + cone.axis * -math.sin(half)).normalized()


def intersect_cone_cap(cone: Cone, ray: Ray, best: Optional[Hit]) -> Optional[Hit]:
    """Return a hit on the cone's circular base closer than ``best``, or None."""
    denom = cone.axis.dot(ray.direction)
    if abs(denom) < EPSILON:
        return None
    base_center = cone.vertex + cone.axis * cone.height
    t = (base_center - ray.origin).dot(cone.axis) / denom
    if t <= MIN_T or not _closer(t, best):
        return None
    point = ray.at(t)
    cap_radius_sq = (cone.height * math.tan(cone.angle / 2.0)) ** 2
    offset = point - base_center
    radial = offset - cone.axis * offset.dot(cone.axis)
    if radial.length_squared() > cap_radius_sq:
        return None
    return Hit(t, point, cone.axis, cone.color, cone, SIDE_BASE)


def _cone_surface(cone: Cone, ray: Ray, best: Optional[Hit]) -> Optional[Hit]:
    q = cone_quadratic_coeffs(cone, ray)
    if abs(q.a) < EPSILON:
        return None
    t = solve_quadratic(q.a, q.b, q.c, MIN_T)
    if t is None:
        return None
    point = ray.at(t)
    m = (point - cone.vertex).dot(cone.axis)
    if m < 0 or m > cone.height:
        return None
    if not _closer(t, best):
        return None
    return Hit(t, point, cone_surface_normal(cone, point), cone.color, cone, SIDE_TOP)


def intersect_cone(cone: Cone, ray: Ray, best: Optional[Hit]) -> Optional[Hit]:
    """Return the nearest hit on the cone's surface or base closer than ``best``."""
    surface = _cone_surface(cone, ray, best)
    cap = intersect_cone_cap(cone, ray, surface or best)
    return cap or surface


def intersect_object(
    obj: SceneObject, ray: Ray, best: Optional[Hit]
) -> Optional[Hit]:
    """Intersect any scene object; unknown kinds are never hit."""
    if isinstance(obj, Sphere):
        return intersect_sphere(obj, ray, best)
    if isinstance(obj, Plane):
        return intersect_plane(obj, ray, best)
    if isinstance(obj, Cylinder):
        return intersect_cylinder(obj, ray, best)
    if isinstance(obj, Cone):
        return intersect_cone(obj, ray, best)
    return None


def trace_objects(scene: Scene, ray: Ray) -> Optional[Hit]:
    """Return the closest hit among the scene's objects, or None.

    Stops early once a hit nearer than EARLY_TERMINATION_DISTANCE is found.
    """
    best: Optional[Hit] = None
    for index, obj in enumerate(scene.objects):
        if best is not None and best.t < EARLY_TERMINATION_DISTANCE:
            break
        hit = intersect_object(obj, ray, best)
        if hit is not None:
            best = replace(hit, obj_index=index)
    return best