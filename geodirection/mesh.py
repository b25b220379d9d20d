"""Surface normals around a target point on a triangle mesh.

The host scene hands over a read-only :class:`MeshSnapshot` (object-space
vertices, triangle index triples, per-vertex normals) together with an
object-to-world transform. :func:`mesh_surface_aggregate` then finds every
vertex and every triangle centroid lying within a world-space tolerance of the
target and averages their normals.

The search is brute force, O(V + T) per call with no spatial index. That is
fine for props and modest meshes; very large meshes pay for every vertex and
triangle on each query.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, NamedTuple, Protocol, Sequence, Tuple

from . import vec3 as v3
from .directions import average_direction, direction_to_point
from .errors import EmptyInputError, MeshValidationError
from .transforms import Transform, identity_transform, world_bounds_center
from .vec3 import Direction3, Point3, Vector3

__all__ = [
    "Triangle",
    "DEFAULT_PROXIMITY_TOLERANCE",
    "MeshSnapshot",
    "MeshProvider",
    "SnapshotProvider",
    "SurfaceAggregate",
    "face_normals",
    "surrounding_vertex_normals",
    "surrounding_face_normals",
    "mesh_surface_aggregate",
    "mesh_direction_to_point",
]

log = logging.getLogger(__name__)

Triangle = Tuple[int, int, int]

# World-space distance under which a vertex or triangle centroid "surrounds"
# the target point.
DEFAULT_PROXIMITY_TOLERANCE = 0.1


def _as_vector(value: Sequence[float], label: str) -> Vector3:
    if len(value) != 3:
        raise MeshValidationError(f"{label} must have 3 components, got {len(value)}")
    return (float(value[0]), float(value[1]), float(value[2]))


@dataclass(frozen=True, slots=True)
class MeshSnapshot:
    """Immutable copy of the mesh data needed for a query."""

    vertices: Tuple[Point3, ...]
    triangles: Tuple[Triangle, ...]
    normals: Tuple[Direction3, ...]

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "vertices",
            tuple(Point3(_as_vector(v, f"vertex {i}")) for i, v in enumerate(self.vertices)),
        )
        object.__setattr__(
            self,
            "normals",
            tuple(Direction3(_as_vector(n, f"normal {i}")) for i, n in enumerate(self.normals)),
        )
        triangles: List[Triangle] = []
        for i, tri in enumerate(self.triangles):
            if len(tri) != 3:
                raise MeshValidationError(f"Triangle {i} must have 3 indices, got {len(tri)}")
            triangles.append((int(tri[0]), int(tri[1]), int(tri[2])))
        object.__setattr__(self, "triangles", tuple(triangles))
        self.validate()

    def validate(self) -> None:
        if len(self.normals) != len(self.vertices):
            raise MeshValidationError(
                f"Vertex normals ({len(self.normals)}) do not match vertices ({len(self.vertices)})"
            )
        count = len(self.vertices)
        for i, tri in enumerate(self.triangles):
            for idx in tri:
                if not 0 <= idx < count:
                    raise MeshValidationError(
                        f"Triangle {i} references vertex {idx}; mesh has {count} vertices"
                    )

    @classmethod
    def from_flat_indices(
        cls,
        vertices: Sequence[Sequence[float]],
        indices: Sequence[int],
        normals: Sequence[Sequence[float]],
    ) -> "MeshSnapshot":
        """Build a snapshot from a flat index buffer (three indices per triangle)."""

        if len(indices) % 3:
            raise MeshValidationError(
                f"Flat index buffer length {len(indices)} is not a multiple of 3"
            )
        triangles = [
            (indices[i], indices[i + 1], indices[i + 2]) for i in range(0, len(indices), 3)
        ]
        return cls(vertices=vertices, triangles=triangles, normals=normals)  # type: ignore[arg-type]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MeshSnapshot":
        try:
            vertices = data["vertices"]
            normals = data["normals"]
        except KeyError as exc:
            raise MeshValidationError(f"Mesh data is missing '{exc.args[0]}'") from exc
        if "triangles" in data:
            return cls(vertices=vertices, triangles=data["triangles"], normals=normals)
        if "indices" in data:
            return cls.from_flat_indices(vertices, data["indices"], normals)
        raise MeshValidationError("Mesh data needs 'triangles' or 'indices'")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "vertices": [list(v) for v in self.vertices],
            "triangles": [list(t) for t in self.triangles],
            "normals": [list(n) for n in self.normals],
        }

    def triangle_points(self, index: int) -> Tuple[Point3, Point3, Point3]:
        a, b, c = self.triangles[index]
        return self.vertices[a], self.vertices[b], self.vertices[c]

    def summary(self) -> str:
        return f"{len(self.vertices)} vertices / {len(self.triangles)} triangles"


class MeshProvider(Protocol):
    """Read-only view of a mesh instance in a scene."""

    def snapshot(self) -> MeshSnapshot: ...

    def transform_point(self, point: Point3) -> Point3: ...

    def bounds_center(self) -> Point3: ...


class SnapshotProvider:
    """:class:`MeshProvider` over an in-memory snapshot and transform."""

    def __init__(self, mesh: MeshSnapshot, transform: Transform = identity_transform) -> None:
        self._mesh = mesh
        self._transform = transform

    def snapshot(self) -> MeshSnapshot:
        return self._mesh

    def transform_point(self, point: Point3) -> Point3:
        return self._transform(point)

    def bounds_center(self) -> Point3:
        return world_bounds_center(self._mesh.vertices, self._transform)


def _check_tolerance(tolerance: float) -> None:
    if not tolerance > 0:
        raise ValueError(f"Proximity tolerance must be positive, got {tolerance!r}")


class SurfaceAggregate(NamedTuple):
    direction: Direction3
    average_vertex_normal: Direction3
    average_face_normal: Direction3


def face_normals(mesh: MeshSnapshot) -> List[Vector3]:
    """Object-space unit normal of every triangle, in triangle order.

    Winding follows ``cross(v2 - v1, v3 - v1)``. A zero-area triangle gets the
    zero vector so the list stays index-aligned with ``mesh.triangles``.
    """
    normals: List[Vector3] = []
    for i in range(len(mesh.triangles)):
        p1, p2, p3 = mesh.triangle_points(i)
        normal = v3.normalize(v3.cross(v3.sub(p2, p1), v3.sub(p3, p1)))
        if normal == v3.ZERO:
            log.debug("Triangle %d is degenerate; face normal set to zero", i)
        normals.append(normal)
    return normals


def surrounding_vertex_normals(
    mesh: MeshSnapshot,
    transform: Transform,
    end: Point3,
    tolerance: float = DEFAULT_PROXIMITY_TOLERANCE,
) -> List[Direction3]:
    """Normals of vertices whose world position is strictly within *tolerance* of *end*."""

    _check_tolerance(tolerance)
    found: List[Direction3] = []
    for position, normal in zip(mesh.vertices, mesh.normals):
        if v3.distance(transform(position), end) < tolerance:
            found.append(normal)
    return found


def surrounding_face_normals(
    mesh: MeshSnapshot,
    transform: Transform,
    end: Point3,
    tolerance: float = DEFAULT_PROXIMITY_TOLERANCE,
    normals: Sequence[Vector3] | None = None,
) -> List[Vector3]:
    """Face normals of triangles whose world-space centroid is strictly within *tolerance* of *end*."""

    _check_tolerance(tolerance)
    if normals is None:
        normals = face_normals(mesh)
    elif len(normals) != len(mesh.triangles):
        raise MeshValidationError(
            f"Face normals ({len(normals)}) do not match triangles ({len(mesh.triangles)})"
        )
    found: List[Vector3] = []
    for i, normal in enumerate(normals):
        center = Point3(v3.centroid(*mesh.triangle_points(i)))
        if v3.distance(transform(center), end) < tolerance:
            found.append(normal)
    return found


def mesh_surface_aggregate(
    start: Point3,
    mesh: MeshSnapshot,
    transform: Transform,
    end: Point3,
    *,
    tolerance: float = DEFAULT_PROXIMITY_TOLERANCE,
    eps: float = v3.EPSILON,
) -> SurfaceAggregate:
    """Direction from *start* to *end* plus the averaged surface normals around *end*.

    *end* is the world-space point being faced, normally the bounds center of
    the mesh instance. Raises :class:`EmptyInputError` when no vertex or no
    triangle centroid lies within *tolerance* of it; pick a tolerance that
    matches the mesh scale.
    """
    _check_tolerance(tolerance)

    normals = face_normals(mesh)
    vertex_group = surrounding_vertex_normals(mesh, transform, end, tolerance)
    face_group = surrounding_face_normals(mesh, transform, end, tolerance, normals)
    log.debug(
        "Mesh %s: %d vertices and %d faces within %.4g of %s",
        mesh.summary(),
        len(vertex_group),
        len(face_group),
        tolerance,
        end,
    )

    if not vertex_group:
        raise EmptyInputError(f"No mesh vertex lies within {tolerance:g} of {end}")
    if not face_group:
        raise EmptyInputError(f"No triangle centroid lies within {tolerance:g} of {end}")

    return SurfaceAggregate(
        direction=direction_to_point(start, end, eps),
        average_vertex_normal=average_direction(vertex_group, eps),
        average_face_normal=average_direction(face_group, eps),
    )


def mesh_direction_to_point(
    start: Point3,
    provider: MeshProvider,
    *,
    tolerance: float = DEFAULT_PROXIMITY_TOLERANCE,
    eps: float = v3.EPSILON,
) -> SurfaceAggregate:
    """Run :func:`mesh_surface_aggregate` against the bounds center of *provider*."""

    return mesh_surface_aggregate(
        start,
        provider.snapshot(),
        provider.transform_point,
        provider.bounds_center(),
        tolerance=tolerance,
        eps=eps,
    )
