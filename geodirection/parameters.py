"""Configuration stack for direction queries.

Parameters are layered from lowest to highest precedence:

1. Dataclass defaults — the behaviour of the library functions.
2. JSON file — persistent per-project configuration.
3. CLI overrides — runtime tweaks for headless runs.

Only the headless script reads configuration; the library functions take the
same values as explicit keyword arguments.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple
import argparse
import json
import logging

from .mesh import DEFAULT_PROXIMITY_TOLERANCE
from .vec3 import EPSILON

__all__ = [
    "MODES",
    "DirectionParameters",
    "load_json_config",
    "apply_overrides",
    "parse_cli_overrides",
    "load_parameters",
]

log = logging.getLogger(__name__)

MODES = ("mesh", "cuboid", "vertex")


@dataclass(slots=True)
class DirectionParameters:
    """Adjustable settings for a direction query."""

    proximity_tolerance: float = DEFAULT_PROXIMITY_TOLERANCE  # world units
    degenerate_epsilon: float = EPSILON
    mode: str = "mesh"

    def validate(self) -> None:
        if self.proximity_tolerance <= 0:
            raise ValueError("Proximity tolerance must be positive")
        if self.degenerate_epsilon <= 0:
            raise ValueError("Degenerate epsilon must be positive")
        if self.mode not in MODES:
            raise ValueError(f"Unknown mode '{self.mode}' (expected one of {', '.join(MODES)})")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DirectionParameters":
        base = cls()
        merged = base.to_dict()
        for key, value in data.items():
            if key not in merged:
                raise KeyError(f"Unknown parameter '{key}'")
            merged[key] = value
        params = cls(**merged)
        params.validate()
        return params


def load_json_config(path: Path | str | None) -> Dict[str, Any]:
    """Load the JSON config file or return an empty dict if no path is given."""

    if path is None:
        return {}
    json_path = Path(path)
    if not json_path.exists():
        raise FileNotFoundError(f"Config file not found: {json_path}")
    data = json.loads(json_path.read_text(encoding="utf-8"))
    if not isinstance(data, Mapping):
        raise ValueError("Top-level JSON config must be an object")
    return dict(data)


def apply_overrides(base: DirectionParameters, overrides: Mapping[str, Any]) -> DirectionParameters:
    """Return a copy of ``base`` with overrides applied."""

    merged = base.to_dict()
    for key, value in overrides.items():
        if key not in merged:
            raise KeyError(f"Unknown parameter '{key}'")
        merged[key] = value
    return DirectionParameters.from_dict(merged)


def parse_cli_overrides(
    args: Optional[Iterable[str]] = None,
) -> Tuple[Dict[str, Any], argparse.Namespace]:
    """Parse CLI arguments; returns parameter overrides and the raw namespace."""

    parser = argparse.ArgumentParser(description="Geometric-interpolated facing directions")
    parser.add_argument("mesh", type=str, nargs="?", default=None, help="Path to a JSON mesh snapshot")
    parser.add_argument("--config", type=str, help="Path to JSON config", default=None)
    parser.add_argument(
        "--start",
        type=float,
        nargs=3,
        required=True,
        metavar=("X", "Y", "Z"),
        help="World-space point the direction starts from",
    )
    parser.add_argument(
        "--end",
        type=float,
        nargs=3,
        metavar=("X", "Y", "Z"),
        help="World-space target point (defaults to the mesh bounds center)",
    )
    parser.add_argument(
        "--translate",
        type=float,
        nargs=3,
        metavar=("X", "Y", "Z"),
        help="Object-to-world translation applied to the mesh",
    )
    parser.add_argument("--tolerance", type=float, help="Proximity tolerance in world units")
    parser.add_argument("--epsilon", type=float, help="Length below which a vector is degenerate")
    parser.add_argument("--mode", type=str, choices=list(MODES), help="Direction blend to compute")

    parsed, unknown = parser.parse_known_args(args=args)
    if unknown:
        log.info("Ignoring unknown CLI args: %s", " ".join(unknown))
    overrides: Dict[str, Any] = {}
    if parsed.tolerance is not None:
        overrides["proximity_tolerance"] = parsed.tolerance
    if parsed.epsilon is not None:
        overrides["degenerate_epsilon"] = parsed.epsilon
    if parsed.mode is not None:
        overrides["mode"] = parsed.mode
    return overrides, parsed


def load_parameters(
    config_path: Path | str | None,
    cli_overrides: Mapping[str, Any] | None = None,
) -> DirectionParameters:
    """Load parameters using the defaults → JSON → CLI precedence chain."""

    data = load_json_config(config_path)
    params = DirectionParameters.from_dict(data)
    if cli_overrides:
        params = apply_overrides(params, cli_overrides)
    return params
