"""Composite transforms and the scene edits driven by interactive controls."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from minirt import matrix
from minirt.matrix import Matrix4
from minirt.scene import Camera, Cone, Cylinder, Plane, Scene, Sphere
from minirt.vector import Vec3

Transformable = Union[Sphere, Plane, Cylinder, Cone, Camera]


@dataclass
class Transform:
    """Translation, rotation (Euler angles) and scale, with their combined matrix."""

    translation: Vec3 = field(default_factory=lambda: Vec3(0.0, 0.0, 0.0))
    rotation: Vec3 = field(default_factory=lambda: Vec3(0.0, 0.0, 0.0))
    scale: Vec3 = field(default_factory=lambda: Vec3(1.0, 1.0, 1.0))
    matrix: Matrix4 = field(default_factory=matrix.identity)

    def update_matrix(self) -> None:
        """Rebuild the matrix: scale, then rotate about X, Y, Z, then translate."""
        combined = matrix.scaling(self.scale)
        combined = matrix.rotation_x(self.rotation.x) @ combined
        combined = matrix.rotation_y(self.rotation.y) @ combined
        combined = matrix.rotation_z(self.rotation.z) @ combined
        self.matrix = matrix.translation(self.translation) @ combined

    def translate(self, offset: Vec3) -> None:
        self.translation = self.translation + offset
        self.update_matrix()

    def rotate(self, rotation: Vec3) -> None:
        self.rotation = self.rotation + rotation
        self.update_matrix()

    def scale_uniform(self, factor: float) -> None:
        self.scale = self.scale * factor
        self.update_matrix()

    def scale_by(self, factors: Vec3) -> None:
        self.scale = Vec3(
            self.scale.x * factors.x,
            self.scale.y * factors.y,
            self.scale.z * factors.z,
        )
        self.update_matrix()

    @property
    def is_uniform(self) -> bool:
        return self.scale.x == self.scale.y == self.scale.z

    def apply(self, target: Transformable) -> None:
        """Transform a scene object or camera in place."""
        m = self.matrix
        if isinstance(target, Sphere):
            target.center = m.transform_point(target.center)
            if self.is_uniform:
                target.diameter *= self.scale.x
        elif isinstance(target, Plane):
            target.point = m.transform_point(target.point)
            target.normal = m.transform_direction(target.normal)
        elif isinstance(target, Cylinder):
            target.center = m.transform_point(target.center)
            target.axis = m.transform_direction(target.axis)
            if self.is_uniform:
                target.diameter *= self.scale.x
                target.height *= self.scale.y
        elif isinstance(target, Cone):
            target.vertex = m.transform_point(target.vertex)
            target.axis = m.transform_direction(target.axis)
            if self.is_uniform:
                target.height *= self.scale.y
        elif isinstance(target, Camera):
            target.position = m.transform_point(target.position)
            target.orientation = m.transform_direction(target.orientation)
        else:
            raise TypeError(f"cannot transform {type(target).__name__}")


def _valid_index(scene: Scene, index: int) -> bool:
    return 0 <= index < len(scene.objects)


def scene_translate_object(scene: Scene, index: int, delta: Vec3) -> None:
    """Move object ``index`` by ``delta``; an out-of-range index does nothing."""
    if not _valid_index(scene, index):
        return
    transform = Transform()
    transform.translate(delta)
    transform.apply(scene.objects[index])


def scene_rotate_object(scene: Scene, index: int, rotation: Vec3) -> None:
    """Turn an object's axis or normal about ``rotation`` by its length in radians."""
    if not _valid_index(scene, index):
        return
    angle = rotation.length()
    if angle < 0.0001:
        return
    axis = rotation.normalized()
    obj = scene.objects[index]
    if isinstance(obj, Plane):
        obj.normal = obj.normal.rotate_around_axis(axis, angle).normalized()
    elif isinstance(obj, (Cylinder, Cone)):
        obj.axis = obj.axis.rotate_around_axis(axis, angle).normalized()


def scene_scale_object(scene: Scene, index: int, factor: float) -> None:
    """Scale object ``index`` uniformly; planes are left as they are."""
    if not _valid_index(scene, index):
        return
    obj = scene.objects[index]
    if isinstance(obj, Plane):
        return
    transform = Transform()
    transform.scale_uniform(factor)
    transform.apply(obj)


def scene_translate_camera(scene: Scene, delta: Vec3) -> None:
    transform = Transform()
    transform.translate(delta)
    transform.apply(scene.camera)


def scene_rotate_camera(scene: Scene, rotation: Vec3) -> None:
    transform = Transform()
    transform.rotate(rotation)
    transform.apply(scene.camera)