"""3-component vector helpers shared by the subdividers and the UV unwrapper.

All functions operate on ``Vector3 = Tuple[float, float, float]`` values so
the generated buffers stay plain tuples until they are exported.
"""

from __future__ import annotations

import math
from typing import Tuple

__all__ = [
    "Vector3",
    "norm",
    "normalize",
    "dot",
    "cross",
    "sub",
    "add",
    "scale",
    "midpoint_direction",
    "is_unit",
]

Vector3 = Tuple[float, float, float]

UNIT_TOLERANCE = 1e-9


def norm(v: Vector3) -> float:
    """Euclidean length of *v*."""
    return math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])


def normalize(v: Vector3) -> Vector3:
    """Unit vector in the direction of *v*.

    Raises ``ValueError`` for a zero-length input; on an icosphere that only
    happens for the midpoint of two antipodal vertices.
    """
    n = norm(v)
    if n <= 1e-12:
        raise ValueError("Cannot normalize zero-length vector")
    return (v[0] / n, v[1] / n, v[2] / n)


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


def midpoint_direction(a: Vector3, b: Vector3) -> Vector3:
    """Average of *a* and *b* pushed back onto the unit sphere."""
    mid = normalize(scale(add(a, b), 0.5))
    assert is_unit(mid), mid
    return mid


def is_unit(v: Vector3, tolerance: float = UNIT_TOLERANCE) -> bool:
    return abs(norm(v) - 1.0) <= tolerance
