"""Edge midpoint table used by one shared-vertex subdivision pass."""

from __future__ import annotations

from typing import Dict, List, Tuple

from .vec3 import Vector3, midpoint_direction

__all__ = ["MidpointCache", "edge_key"]

Edge = Tuple[int, int]


def edge_key(i1: int, i2: int) -> Edge:
    return (i1, i2) if i1 < i2 else (i2, i1)


class MidpointCache:
    """Split every edge of a mesh exactly once.

    The cache appends new vertices to the list it was given, so callers pass
    the vertex list of the level being built. Build a new cache per pass.
    """

    def __init__(self, vertices: List[Vector3]) -> None:
        self._vertices = vertices
        self._table: Dict[Edge, int] = {}

    def get_midpoint(self, i1: int, i2: int) -> int:
        key = edge_key(i1, i2)
        idx = self._table.get(key)
        if idx is not None:
            return idx

        idx = len(self._vertices)
        self._vertices.append(midpoint_direction(self._vertices[i1], self._vertices[i2]))
        self._table[key] = idx
        return idx

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, edge: object) -> bool:
        if not isinstance(edge, tuple) or len(edge) != 2:
            return False
        return edge_key(*edge) in self._table
