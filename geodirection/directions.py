"""Blended facing directions toward a point.

The helpers here answer "which way should something at *start* face to look
at *end*", optionally bent toward a structural feature around *end*:

* :func:`cuboid_convergence` leans the straight line toward the octant corner
  implied by its sign pattern, which docks onto box-like targets.
* :func:`vertex_convergence` leans it toward a caller-supplied neighbourhood
  direction, e.g. the averaged normals near the target.

Usage::

    from geodirection.directions import cuboid_convergence

    facing = cuboid_convergence((0.0, 0.0, 0.0), (2.0, 3.0, -1.0))
"""

from __future__ import annotations

import logging
from typing import Iterable, List

from . import vec3 as v3
from .errors import EmptyInputError
from .vec3 import Direction3, Point3, Vector3

__all__ = [
    "direction_to_point",
    "average_direction",
    "convergence_marker",
    "cuboid_convergence",
    "vertex_convergence",
]

log = logging.getLogger(__name__)


def direction_to_point(start: Point3, end: Point3, eps: float = v3.EPSILON) -> Direction3:
    """Unit vector pointing from *start* toward *end*.

    Raises :class:`~geodirection.errors.DegenerateVectorError` when the two
    points coincide.
    """
    return v3.normalize_strict(v3.sub(end, start), eps)


def average_direction(directions: Iterable[Vector3], eps: float = v3.EPSILON) -> Direction3:
    """Mean of *directions*, renormalized to unit length.

    This is the chord mean, not a true spherical mean: inputs are summed
    without weighting, so it is only well behaved for unit (or similarly
    scaled) vectors. The result does not depend on input order.

    Raises :class:`EmptyInputError` for an empty input and
    :class:`DegenerateVectorError` when the vectors cancel out.
    """
    items: List[Vector3] = list(directions)
    if not items:
        raise EmptyInputError("Cannot average an empty set of directions")
    mean = v3.scale(v3.vector_sum(items), 1.0 / len(items))
    return v3.normalize_strict(mean, eps)


def convergence_marker(direction: Vector3) -> Vector3:
    """Axis-aligned corner marker for *direction*.

    Each component is the sign of the matching component (-1, 0 or +1). The
    marker is deliberately left unnormalized; an axis with a zero component
    drops out of the marker.
    """
    return v3.sign(direction)


def cuboid_convergence(start: Point3, end: Point3, eps: float = v3.EPSILON) -> Direction3:
    """Blend the straight direction to *end* with its cuboid corner marker."""

    primary = direction_to_point(start, end, eps)
    marker = convergence_marker(primary)
    log.debug("Cuboid convergence: primary=%s marker=%s", primary, marker)
    return average_direction([primary, marker], eps)


def vertex_convergence(
    start: Point3,
    end: Point3,
    surrounding_directions: Iterable[Vector3],
    eps: float = v3.EPSILON,
) -> Direction3:
    """Blend the straight direction to *end* with the mean of *surrounding_directions*.

    An empty *surrounding_directions* raises :class:`EmptyInputError`.
    """

    primary = direction_to_point(start, end, eps)
    surrounding = average_direction(surrounding_directions, eps)
    return average_direction([primary, surrounding], eps)
