#!/usr/bin/env python3
"""Headless entry point: facing directions toward a JSON mesh snapshot."""

from __future__ import annotations

import json
import logging
from pathlib import Path
import sys
from typing import Any, Dict, List, Sequence

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from geodirection import directions, mesh, parameters, transforms
from geodirection.vec3 import Point3


def configure_logging() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


def load_mesh(path: Path | str) -> mesh.MeshSnapshot:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return mesh.MeshSnapshot.from_dict(data)


def run(argv: Sequence[str] | None = None) -> Dict[str, Any]:
    overrides, cli = parameters.parse_cli_overrides(argv)
    params = parameters.load_parameters(cli.config, overrides)
    start = Point3(tuple(cli.start))
    transform = (
        transforms.translation_transform(tuple(cli.translate))
        if cli.translate
        else transforms.identity_transform
    )

    snapshot = load_mesh(cli.mesh) if cli.mesh else None
    if snapshot is not None:
        logging.info("Mesh summary: %s", snapshot.summary())

    if cli.end:
        end = Point3(tuple(cli.end))
    elif snapshot is not None:
        end = transforms.world_bounds_center(snapshot.vertices, transform)
        logging.info("Using mesh bounds center %s as target", end)
    else:
        raise ValueError("Either a mesh or --end is required")

    eps = params.degenerate_epsilon
    result: Dict[str, Any] = {"mode": params.mode, "start": list(start), "end": list(end)}
    if params.mode == "cuboid":
        result["direction"] = list(directions.cuboid_convergence(start, end, eps))
        return result

    if snapshot is None:
        raise ValueError(f"Mode '{params.mode}' needs a mesh snapshot")

    if params.mode == "vertex":
        nearby: List[Any] = mesh.surrounding_vertex_normals(
            snapshot, transform, end, params.proximity_tolerance
        )
        logging.info("%d vertex normals within %.4g of target", len(nearby), params.proximity_tolerance)
        result["direction"] = list(directions.vertex_convergence(start, end, nearby, eps))
        return result

    aggregate = mesh.mesh_surface_aggregate(
        start,
        snapshot,
        transform,
        end,
        tolerance=params.proximity_tolerance,
        eps=eps,
    )
    result["direction"] = list(aggregate.direction)
    result["average_vertex_normal"] = list(aggregate.average_vertex_normal)
    result["average_face_normal"] = list(aggregate.average_face_normal)
    return result


def main(argv: Sequence[str] | None = None) -> int:
    configure_logging()
    try:
        result = run(argv)
    except (ValueError, KeyError, OSError) as exc:
        logging.error("Direction query failed: %s", exc)
        return 1
    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
