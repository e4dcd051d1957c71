"""Three-component vectors, rays and the quadratic solver used by the tracer."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Optional


@dataclass(frozen=True)
class Vec3:
    """An immutable 3D vector, also used for points and RGB colours in [0, 1]."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, t: float) -> Vec3:
        return Vec3(self.x * t, self.y * t, self.z * t)

    def __rmul__(self, t: float) -> Vec3:
        return self * t

    def __truediv__(self, t: float) -> Vec3:
        return Vec3(self.x / t, self.y / t, self.z / t)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length_squared(self) -> float:
        return self.dot(self)

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def normalized(self) -> Vec3:
        """Return the unit vector in this direction; the zero vector stays zero."""
        length = self.length()
        if length == 0:
            return Vec3(0.0, 0.0, 0.0)
        return self / length

    def reflect(self, normal: Vec3) -> Vec3:
        """Reflect this vector about ``normal``."""
        return self - normal * (2 * self.dot(normal))

    def rotate_around_axis(self, axis: Vec3, angle: float) -> Vec3:
        """Rotate by ``angle`` radians around ``axis`` (Rodrigues' formula)."""
        u = axis.normalized()
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        return self * cos_a + u.cross(self) * sin_a + u * (u.dot(self) * (1 - cos_a))

    def is_zero(self) -> bool:
        return self.x == 0.0 and self.y == 0.0 and self.z == 0.0


@dataclass(frozen=True)
class Ray:
    """A half-line starting at ``origin`` going along ``direction``."""

    origin: Vec3
    direction: Vec3

    def at(self, t: float) -> Vec3:
        return self.origin + self.direction * t


def solve_quadratic(a: float, b: float, c: float, min_t: float) -> Optional[float]:
    """Return the smallest root of ax^2 + bx + c greater than ``min_t``, or None."""
    if a == 0:
        return None
    discriminant = b * b - 4 * a * c
    if discriminant < 0:
        return None
    sqrt_d = math.sqrt(discriminant)
    t0 = (-b - sqrt_d) / (2.0 * a)
    t1 = (-b + sqrt_d) / (2.0 * a)
    if t0 > min_t and (t0 < t1 or t1 <= min_t):
        return t0
    if t1 > min_t:
        return t1
    return None