"""Scene description: camera, lights and the objects to render."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union

from minirt.vector import Vec3

EPSILON = 0.0001
MIN_T = 0.001
SHADOW_EPSILON = 1e-6
EARLY_TERMINATION_DISTANCE = 0.002

LIGHTENING_FACTOR = 0.4
ATTENUATION_LINEAR = 0.01
ATTENUATION_QUADRATIC = 0.001

DEFAULT_SKY_COLOR = (135, 206, 235)

MAX_OBJECTS = 100


class SceneError(Exception):
    """Raised when a scene or one of its elements is invalid."""


@dataclass
class Camera:
    position: Vec3 = field(default_factory=Vec3)
    orientation: Vec3 = field(default_factory=Vec3)
    fov: float = 0.0


@dataclass
class Ambient:
    ratio: float
    color: Vec3


@dataclass
class Light:
    position: Vec3
    brightness: float
    color: Vec3


@dataclass
class Sphere:
    center: Vec3
    diameter: float
    color: Vec3


@dataclass
class Plane:
    point: Vec3
    normal: Vec3
    color: Vec3


@dataclass
class Cylinder:
    center: Vec3
    axis: Vec3
    diameter: float
    height: float
    color: Vec3


@dataclass
class Cone:
    vertex: Vec3
    axis: Vec3
    angle: float
    height: float
    color: Vec3


SceneObject = Union[Sphere, Plane, Cylinder, Cone]
_OBJECT_TYPES = (Sphere, Plane, Cylinder, Cone)


@dataclass
class Scene:
    """Everything needed to render one image."""

    camera: Camera = field(default_factory=Camera)
    ambient: Optional[Ambient] = None
    light: Optional[Light] = None
    objects: List[SceneObject] = field(default_factory=list)

    @property
    def has_ambient(self) -> bool:
        return self.ambient is not None

    @property
    def has_light(self) -> bool:
        return self.light is not None

    def add_object(self, obj: SceneObject) -> None:
        """Append an object, refusing unknown kinds and more than MAX_OBJECTS."""
        if len(self.objects) >= MAX_OBJECTS:
            raise SceneError(f"Maximum number of objects reached ({MAX_OBJECTS})")
        if not isinstance(obj, _OBJECT_TYPES):
            raise SceneError(f"Unknown object type {type(obj).__name__}")
        self.objects.append(obj)