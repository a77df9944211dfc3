"""Seed icosahedron shared by both subdivision strategies.

The vertex order and the winding of the 20 faces are fixed: every face is
counter-clockwise when seen from outside, so right-hand-rule normals point
away from the origin and subdivision keeps them that way.
"""

from __future__ import annotations

from math import sqrt
from typing import List, Tuple

from .vec3 import Vector3, normalize

__all__ = [
    "GOLDEN_RATIO",
    "Face",
    "BASE_VERTICES",
    "BASE_FACES",
    "shared_seed",
    "soup_seed",
]

Face = Tuple[int, int, int]

GOLDEN_RATIO = (1 + sqrt(5)) / 2


def _base_vertices() -> Tuple[Vector3, ...]:
    t = GOLDEN_RATIO
    raw: List[Vector3] = [
        (-1.0, t, 0.0),
        (1.0, t, 0.0),
        (-1.0, -t, 0.0),
        (1.0, -t, 0.0),
        (0.0, -1.0, t),
        (0.0, 1.0, t),
        (0.0, -1.0, -t),
        (0.0, 1.0, -t),
        (t, 0.0, -1.0),
        (t, 0.0, 1.0),
        (-t, 0.0, -1.0),
        (-t, 0.0, 1.0),
    ]
    return tuple(normalize(v) for v in raw)


BASE_VERTICES: Tuple[Vector3, ...] = _base_vertices()

BASE_FACES: Tuple[Face, ...] = (
    # Five faces around vertex 0.
    (0, 11, 5),
    (0, 5, 1),
    (0, 1, 7),
    (0, 7, 10),
    (0, 10, 11),
    # Adjacent faces.
    (1, 5, 9),
    (5, 11, 4),
    (11, 10, 2),
    (10, 7, 6),
    (7, 1, 8),
    # Five faces around vertex 3.
    (3, 9, 4),
    (3, 4, 2),
    (3, 2, 6),
    (3, 6, 8),
    (3, 8, 9),
    # Adjacent faces.
    (4, 9, 5),
    (2, 4, 11),
    (6, 2, 10),
    (8, 6, 7),
    (9, 8, 1),
)


def shared_seed() -> Tuple[List[Vector3], List[Face]]:
    """Return fresh copies of the 12 shared vertices and 20 index triples."""

    return list(BASE_VERTICES), list(BASE_FACES)


def soup_seed() -> List[Vector3]:
    """Return the 20 seed faces expanded into 60 independent vertex records."""

    records: List[Vector3] = []
    for a, b, c in BASE_FACES:
        records.extend((BASE_VERTICES[a], BASE_VERTICES[b], BASE_VERTICES[c]))
    return records
