"""Equirectangular UV projection with per-triangle seam correction.

U follows longitude (``atan2(-x, z)``) and V follows latitude measured from
the +Y pole. A triangle that crosses the U=0/1 seam would interpolate across
the whole texture, so its vertices are shifted by whole texture widths until
they lie within half a width of vertex 0.
"""

from __future__ import annotations

from math import acos, atan2, pi
from typing import List, Sequence, Tuple

from .vec3 import Vector3

__all__ = ["UV", "normal_to_uv", "fix_uv", "fix_triangle_uvs", "unwrap_triangles"]

UV = Tuple[float, float]


def _clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


def normal_to_uv(normal: Vector3) -> UV:
    """Project a unit normal to ``(u, v)`` in ``[0, 1]``."""

    nx, ny, nz = normal
    # Pole vertices can come out of normalization a hair past +-1.
    theta = acos(max(-1.0, min(1.0, -ny)))
    v = theta / pi
    phi = atan2(-nx, nz)
    u = (phi + pi) / (2.0 * pi)
    return _clamp01(u), _clamp01(v)


def _unwrap_component(reference: float, value: float) -> float:
    while value - reference > 0.5:
        value -= 1.0
    while value - reference < -0.5:
        value += 1.0
    return value


def fix_uv(reference: UV, uv: UV) -> UV:
    """Return ``uv`` shifted by whole units so each component is within 0.5 of ``reference``."""

    return (
        _unwrap_component(reference[0], uv[0]),
        _unwrap_component(reference[1], uv[1]),
    )


def fix_triangle_uvs(uv0: UV, uv1: UV, uv2: UV) -> Tuple[UV, UV, UV]:
    """Seam-correct one triangle against its first vertex.

    Vertex 0 is the fixed reference for both corrections. A triangle where
    only vertices 1 and 2 straddle a seam is left untouched.
    """

    return uv0, fix_uv(uv0, uv1), fix_uv(uv0, uv2)


def unwrap_triangles(normals: Sequence[Vector3]) -> List[UV]:
    """Compute seam-corrected UVs for normals grouped in consecutive triples."""

    if len(normals) % 3:
        raise ValueError("Normals must be grouped in triangle triples")

    uvs: List[UV] = []
    for i in range(0, len(normals), 3):
        uvs.extend(
            fix_triangle_uvs(
                normal_to_uv(normals[i]),
                normal_to_uv(normals[i + 1]),
                normal_to_uv(normals[i + 2]),
            )
        )
    return uvs
