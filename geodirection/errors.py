"""Exceptions raised by the direction and mesh helpers.

All of them derive from :class:`ValueError` so callers that already guard
geometry calls with ``except ValueError`` keep working.
"""

from __future__ import annotations

__all__ = [
    "GeometryError",
    "DegenerateVectorError",
    "EmptyInputError",
    "MeshValidationError",
]


class GeometryError(ValueError):
    """Base class for geometry failures."""


class DegenerateVectorError(GeometryError):
    """A zero-length vector was asked for a direction."""


class EmptyInputError(GeometryError):
    """An average or bound was requested over no elements."""


class MeshValidationError(GeometryError):
    """A mesh snapshot has misaligned or out-of-range data."""
