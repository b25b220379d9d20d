"""Headless script: JSON mesh in, JSON directions out."""

from __future__ import annotations

import importlib.util
import json
from pathlib import Path

import pytest

from meshutils import CUBE_TRIANGLES, CUBE_VERTICES, assert_vec_close, corner_normal

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "compute_direction.py"


@pytest.fixture(scope="module")
def script():
    spec = importlib.util.spec_from_file_location("compute_direction", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    assert spec.loader is not None
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def cube_json(tmp_path):
    path = tmp_path / "cube.json"
    data = {
        "vertices": CUBE_VERTICES,
        "indices": [i for tri in CUBE_TRIANGLES for i in tri],
        "normals": [corner_normal(p) for p in CUBE_VERTICES],
    }
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_mesh_mode(script, cube_json):
    result = script.run(
        [str(cube_json), "--start", "0.5", "0.5", "0.5", "--end", "0.5", "0.5", "1.5", "--tolerance", "0.9"]
    )
    assert result["mode"] == "mesh"
    assert_vec_close(result["direction"], (0.0, 0.0, 1.0))
    assert_vec_close(result["average_vertex_normal"], (0.0, 0.0, 1.0))
    assert_vec_close(result["average_face_normal"], (0.0, 0.0, 1.0))


def test_cuboid_mode_without_mesh(script):
    result = script.run(["--start", "0", "0", "0", "--end", "0", "3", "0", "--mode", "cuboid"])
    assert_vec_close(result["direction"], (0.0, 1.0, 0.0))


def test_vertex_mode(script, cube_json):
    result = script.run(
        [str(cube_json), "--start", "0.5", "0.5", "0.5", "--end", "0.5", "0.5", "1.5", "--mode", "vertex", "--tolerance", "0.9"]
    )
    assert_vec_close(result["direction"], (0.0, 0.0, 1.0))


def test_end_defaults_to_bounds_center(script, cube_json):
    result = script.run(
        [str(cube_json), "--start", "0.5", "0.5", "3", "--translate", "0", "0", "1", "--mode", "cuboid"]
    )
    # Translated cube spans z in [1, 2].
    assert result["end"] == [0.5, 0.5, 1.5]
    assert_vec_close(result["direction"], (0.0, 0.0, -1.0))


def test_main_reports_failures(script, cube_json, capsys):
    code = script.main([str(cube_json), "--start", "0.5", "0.5", "0.5", "--end", "0.5", "0.5", "1.5"])
    assert code == 1
    assert capsys.readouterr().out == ""


def test_main_prints_json(script, cube_json, capsys):
    code = script.main(
        [str(cube_json), "--start", "0", "0", "0", "--end", "1", "1", "1", "--mode", "cuboid"]
    )
    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["mode"] == "cuboid"
    assert len(payload["direction"]) == 3
