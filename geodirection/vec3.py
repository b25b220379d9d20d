"""Shared 3-component vector algebra helpers.

All functions operate on ``Vector3 = Tuple[float, float, float]`` values.
``Point3`` and ``Direction3`` are distinct names for the same tuple so that a
type checker can tell a position from a unit direction; at runtime both are
plain tuples.
"""

from __future__ import annotations

import math
from typing import Iterable, List, NewType, Tuple

from .errors import DegenerateVectorError

__all__ = [
    "Vector3",
    "Point3",
    "Direction3",
    "ZERO",
    "EPSILON",
    "norm",
    "normalize",
    "normalize_strict",
    "dot",
    "cross",
    "sub",
    "add",
    "scale",
    "sign",
    "distance",
    "centroid",
    "vector_sum",
    "is_unit",
]

Vector3 = Tuple[float, float, float]
Point3 = NewType("Point3", Vector3)
Direction3 = NewType("Direction3", Vector3)

ZERO: Vector3 = (0.0, 0.0, 0.0)

# Lengths at or below this are treated as zero.
EPSILON = 1e-12


def norm(v: Vector3) -> float:
    """Euclidean length of *v*."""
    return math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])


def normalize(v: Vector3, eps: float = EPSILON) -> Vector3:
    """Unit vector in the direction of *v*, or (0,0,0) if degenerate."""
    n = norm(v)
    if n <= eps:
        return ZERO
    return (v[0] / n, v[1] / n, v[2] / n)


def normalize_strict(v: Vector3, eps: float = EPSILON) -> Direction3:
    """Unit vector in the direction of *v*.

    Raises :class:`DegenerateVectorError` when *v* has (near) zero length,
    since a zero vector carries no orientation.
    """
    n = norm(v)
    if not n > eps:
        raise DegenerateVectorError(f"Cannot normalize zero-length vector {v!r}")
    return Direction3((v[0] / n, v[1] / n, v[2] / n))


def dot(a: Vector3, b: Vector3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def cross(a: Vector3, b: Vector3) -> Vector3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def sub(a: Vector3, b: Vector3) -> Vector3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def add(a: Vector3, b: Vector3) -> Vector3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def scale(v: Vector3, s: float) -> Vector3:
    return (v[0] * s, v[1] * s, v[2] * s)


def _sign(x: float) -> float:
    if x > 0.0:
        return 1.0
    if x < 0.0:
        return -1.0
    return 0.0


def sign(v: Vector3) -> Vector3:
    """Per-axis sign of *v* (each component -1, 0 or +1)."""
    return (_sign(v[0]), _sign(v[1]), _sign(v[2]))


def distance(a: Vector3, b: Vector3) -> float:
    return norm(sub(a, b))


def centroid(a: Vector3, b: Vector3, c: Vector3) -> Vector3:
    """Centroid of the triangle *a*, *b*, *c*."""
    return (
        (a[0] + b[0] + c[0]) / 3.0,
        (a[1] + b[1] + c[1]) / 3.0,
        (a[2] + b[2] + c[2]) / 3.0,
    )


def vector_sum(vectors: Iterable[Vector3]) -> Vector3:
    """Component-wise sum of *vectors*.

    Uses ``math.fsum`` so the result does not depend on input order.
    """
    xs: List[float] = []
    ys: List[float] = []
    zs: List[float] = []
    for x, y, z in vectors:
        xs.append(x)
        ys.append(y)
        zs.append(z)
    return (math.fsum(xs), math.fsum(ys), math.fsum(zs))


def is_unit(v: Vector3, tol: float = 1e-9) -> bool:
    return abs(norm(v) - 1.0) <= tol
