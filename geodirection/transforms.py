"""Object-to-world transform helpers.

A transform is any callable mapping an object-space point to world space.
Scene systems usually supply their own; these cover the common cases and the
tests.
"""

from __future__ import annotations

from typing import Callable, Iterable, Sequence

from . import vec3 as v3
from .errors import EmptyInputError
from .vec3 import Point3, Vector3

__all__ = [
    "Transform",
    "Matrix3",
    "identity_transform",
    "translation_transform",
    "affine_transform",
    "world_bounds_center",
]

Transform = Callable[[Point3], Point3]
Matrix3 = Sequence[Sequence[float]]


def identity_transform(point: Point3) -> Point3:
    return point


def translation_transform(offset: Vector3) -> Transform:
    """Transform that shifts every point by *offset*."""

    def _apply(point: Point3) -> Point3:
        return Point3(v3.add(point, offset))

    return _apply


def affine_transform(matrix: Matrix3, translation: Vector3 = v3.ZERO) -> Transform:
    """Transform ``p -> M @ p + t`` with a row-major 3x3 *matrix*."""

    rows = [tuple(float(c) for c in row) for row in matrix]
    if len(rows) != 3 or any(len(row) != 3 for row in rows):
        raise ValueError("Affine matrix must be 3x3")
    r0, r1, r2 = rows

    def _apply(point: Point3) -> Point3:
        return Point3(
            (
                v3.dot(r0, point) + translation[0],
                v3.dot(r1, point) + translation[1],
                v3.dot(r2, point) + translation[2],
            )
        )

    return _apply


def world_bounds_center(vertices: Iterable[Point3], transform: Transform = identity_transform) -> Point3:
    """Center of the world-space axis-aligned box around *vertices*.

    This is what a renderer reports as the bounds center of a mesh instance.
    """
    lo: list[float] | None = None
    hi: list[float] | None = None
    for vertex in vertices:
        p = transform(vertex)
        if lo is None or hi is None:
            lo = list(p)
            hi = list(p)
            continue
        for axis in range(3):
            lo[axis] = min(lo[axis], p[axis])
            hi[axis] = max(hi[axis], p[axis])
    if lo is None or hi is None:
        raise EmptyInputError("Cannot compute bounds of a mesh without vertices")
    return Point3(
        (
            (lo[0] + hi[0]) * 0.5,
            (lo[1] + hi[1]) * 0.5,
            (lo[2] + hi[2]) * 0.5,
        )
    )
