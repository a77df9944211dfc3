"""Icosphere refinement in shared-vertex and duplicated-vertex layouts.

Both layouts expose the same read-only contract (``vertex_count``,
``triangle_count``, ``vertices()``, ``indices()``) and are produced by pure
one-pass transformations: each pass consumes a complete level and returns a
new, immutable one. ``build_levels`` chains the passes in a plain loop so only
the current level stays alive.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Tuple, Union

from . import icosahedron
from .icosahedron import Face
from .midpoint import MidpointCache
from .vec3 import Vector3, midpoint_direction

__all__ = [
    "SHARED",
    "DUPLICATED",
    "SharedVertexMesh",
    "DuplicatedVertexMesh",
    "IcosphereMesh",
    "seed",
    "subdivide",
    "subdivide_shared",
    "subdivide_duplicated",
    "build_levels",
    "expected_counts",
]

SHARED = "shared"
DUPLICATED = "duplicated"


@dataclass(frozen=True, slots=True)
class SharedVertexMesh:
    """Indexed icosphere where neighbouring triangles reference common vertices."""

    vertex_list: Tuple[Vector3, ...]
    triangles: Tuple[Face, ...]
    level: int = 0

    @property
    def vertex_count(self) -> int:
        return len(self.vertex_list)

    @property
    def triangle_count(self) -> int:
        return len(self.triangles)

    def vertices(self) -> Tuple[Vector3, ...]:
        return self.vertex_list

    def indices(self) -> List[int]:
        return [i for tri in self.triangles for i in tri]


@dataclass(frozen=True, slots=True)
class DuplicatedVertexMesh:
    """Triangle soup: consecutive vertex triples, one per triangle, nothing shared."""

    vertex_list: Tuple[Vector3, ...]
    level: int = 0

    def __post_init__(self) -> None:
        if len(self.vertex_list) % 3:
            raise ValueError("Vertex records must come in triples")

    @property
    def vertex_count(self) -> int:
        return len(self.vertex_list)

    @property
    def triangle_count(self) -> int:
        return len(self.vertex_list) // 3

    def vertices(self) -> Tuple[Vector3, ...]:
        return self.vertex_list

    def indices(self) -> List[int]:
        return list(range(len(self.vertex_list)))

    def iter_triangles(self) -> Iterator[Tuple[Vector3, Vector3, Vector3]]:
        records = self.vertex_list
        for i in range(0, len(records), 3):
            yield records[i], records[i + 1], records[i + 2]


IcosphereMesh = Union[SharedVertexMesh, DuplicatedVertexMesh]


def seed(mode: str) -> IcosphereMesh:
    """Level-0 icosahedron in the requested layout."""

    if mode == SHARED:
        vertices, faces = icosahedron.shared_seed()
        return SharedVertexMesh(vertex_list=tuple(vertices), triangles=tuple(faces))
    if mode == DUPLICATED:
        return DuplicatedVertexMesh(vertex_list=tuple(icosahedron.soup_seed()))
    raise ValueError(f"Unknown mesh mode '{mode}'")


def subdivide_shared(mesh: SharedVertexMesh) -> SharedVertexMesh:
    """Split every triangle into four, reusing one midpoint per edge.

    Existing vertices keep their indices; midpoints are appended in the order
    their edges are first visited.
    """

    vertices: List[Vector3] = list(mesh.vertex_list)
    midpoints = MidpointCache(vertices)
    triangles: List[Face] = []

    for a, b, c in mesh.triangles:
        m_ab = midpoints.get_midpoint(a, b)
        m_bc = midpoints.get_midpoint(b, c)
        m_ca = midpoints.get_midpoint(c, a)

        triangles.append((a, m_ab, m_ca))
        triangles.append((m_ab, b, m_bc))
        triangles.append((m_ca, m_bc, c))
        triangles.append((m_ab, m_bc, m_ca))

    return SharedVertexMesh(
        vertex_list=tuple(vertices),
        triangles=tuple(triangles),
        level=mesh.level + 1,
    )


def subdivide_duplicated(mesh: DuplicatedVertexMesh) -> DuplicatedVertexMesh:
    """Split every triangle into four, giving each child its own vertex copies."""

    records: List[Vector3] = []
    for t1, t2, t3 in mesh.iter_triangles():
        # Recomputed per triangle; nothing is shared in this layout.
        m1 = midpoint_direction(t1, t2)
        m2 = midpoint_direction(t2, t3)
        m3 = midpoint_direction(t3, t1)

        records.extend((t1, m1, m3))
        records.extend((m1, t2, m2))
        records.extend((m3, m2, t3))
        records.extend((m1, m2, m3))

    return DuplicatedVertexMesh(vertex_list=tuple(records), level=mesh.level + 1)


def subdivide(mesh: IcosphereMesh) -> IcosphereMesh:
    if isinstance(mesh, SharedVertexMesh):
        return subdivide_shared(mesh)
    if isinstance(mesh, DuplicatedVertexMesh):
        return subdivide_duplicated(mesh)
    raise TypeError(f"Unsupported mesh type: {type(mesh).__name__}")


def build_levels(mode: str, passes: int) -> IcosphereMesh:
    """Seed the icosahedron and apply ``passes`` refinement passes."""

    if passes < 0:
        raise ValueError("Number of passes cannot be negative")
    mesh = seed(mode)
    for _ in range(passes):
        mesh = subdivide(mesh)
        logging.debug(
            "Subdivided %s mesh to level %d: %d vertices / %d triangles",
            mode,
            mesh.level,
            mesh.vertex_count,
            mesh.triangle_count,
        )
    return mesh


def expected_counts(mode: str, level: int) -> Tuple[int, int]:
    """Return ``(vertex_count, triangle_count)`` for a layout at ``level``."""

    triangles = 20 * 4**level
    if mode == SHARED:
        return 10 * 4**level + 2, triangles
    if mode == DUPLICATED:
        return 3 * triangles, triangles
    raise ValueError(f"Unknown mesh mode '{mode}'")
