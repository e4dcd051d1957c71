"""4x4 affine matrices for moving, turning and scaling scene elements."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Tuple

from minirt.vector import Vec3

Row = Tuple[float, float, float, float]


@dataclass(frozen=True)
class Matrix4:
    """An immutable row-major 4x4 matrix."""

    rows: Tuple[Row, Row, Row, Row]

    def __getitem__(self, index: int) -> Row:
        return self.rows[index]

    def __matmul__(self, other: Matrix4) -> Matrix4:
        columns = list(zip(*other.rows))
        return Matrix4(
            tuple(
                tuple(sum(a * b for a, b in zip(row, col)) for col in columns)
                for row in self.rows
            )
        )

    def _apply(self, vec: Vec3, w: float) -> Vec3:
        x, y, z = (
            r[0] * vec.x + r[1] * vec.y + r[2] * vec.z + r[3] * w
            for r in self.rows[:3]
        )
        return Vec3(x, y, z)

    def transform_point(self, point: Vec3) -> Vec3:
        """Transform a point, translation included."""
        return self._apply(point, 1.0)

    def transform_direction(self, direction: Vec3) -> Vec3:
        """Transform a direction, ignoring translation, and normalise it."""
        return self._apply(direction, 0.0).normalized()


def _from_entries(entries: Dict[Tuple[int, int], float]) -> Matrix4:
    return Matrix4(
        tuple(
            tuple(entries.get((i, j), 1.0 if i == j else 0.0) for j in range(4))
            for i in range(4)
        )
    )


def identity() -> Matrix4:
    return _from_entries({})


def translation(offset: Vec3) -> Matrix4:
    return _from_entries({(0, 3): offset.x, (1, 3): offset.y, (2, 3): offset.z})


def rotation_x(angle: float) -> Matrix4:
    c, s = math.cos(angle), math.sin(angle)
    return _from_entries({(1, 1): c, (1, 2): -s, (2, 1): s, (2, 2): c})


def rotation_y(angle: float) -> Matrix4:
    c, s = math.cos(angle), math.sin(angle)
    return _from_entries({(0, 0): c, (0, 2): s, (2, 0): -s, (2, 2): c})


def rotation_z(angle: float) -> Matrix4:
    c, s = math.cos(angle), math.sin(angle)
    return _from_entries({(0, 0): c, (0, 1): -s, (1, 0): s, (1, 1): c})


def scaling(factors: Vec3) -> Matrix4:
    return _from_entries({(0, 0): factors.x, (1, 1): factors.y, (2, 2): factors.z})