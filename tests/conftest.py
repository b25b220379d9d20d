from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure repo root is importable when running pytest from any CWD.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from geodirection.mesh import MeshSnapshot
from meshutils import CUBE_TRIANGLES, CUBE_VERTICES, corner_normal


@pytest.fixture
def unit_cube() -> MeshSnapshot:
    return MeshSnapshot(
        vertices=CUBE_VERTICES,
        triangles=CUBE_TRIANGLES,
        normals=[corner_normal(p) for p in CUBE_VERTICES],
    )


@pytest.fixture
def unit_quad() -> MeshSnapshot:
    """Single +Z facing square in the z=0 plane."""
    return MeshSnapshot(
        vertices=[(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 1.0, 0.0), (0.0, 1.0, 0.0)],
        triangles=[(0, 1, 2), (0, 2, 3)],
        normals=[(0.0, 0.0, 1.0)] * 4,
    )
