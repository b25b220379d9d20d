"""Geometric-interpolated facing directions."""

__all__ = ["directions", "errors", "mesh", "parameters", "transforms", "vec3"]
