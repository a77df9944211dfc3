"""Icosphere generation entry point and output buffers."""

from __future__ import annotations

import logging
import math
import numbers
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import numpy as np

from . import uv
from .parameters import IcosphereParameters
from .subdivision import DUPLICATED, SHARED, build_levels
from .uv import UV
from .vec3 import Vector3, cross, dot, norm, scale, sub

__all__ = [
    "MAX_16BIT_VERTEX_COUNT",
    "MeshBuffers",
    "generate",
    "generate_from_parameters",
    "validate_mesh",
]

# Highest vertex count a 16-bit index buffer can address.
MAX_16BIT_VERTEX_COUNT = 65535


@dataclass(slots=True)
class MeshBuffers:
    """Flat vertex/index buffers ready to be handed to a mesh assembler."""

    positions: List[Vector3]
    normals: List[Vector3]
    indices: List[int]
    uvs: Optional[List[UV]] = None
    radius: float = 1.0

    @property
    def vertex_count(self) -> int:
        return len(self.positions)

    @property
    def triangle_count(self) -> int:
        return len(self.indices) // 3

    @property
    def requires_32bit_indices(self) -> bool:
        return self.vertex_count > MAX_16BIT_VERTEX_COUNT

    @property
    def index_format(self) -> str:
        return "uint32" if self.requires_32bit_indices else "uint16"

    def summary(self) -> str:
        text = f"{self.vertex_count} vertices / {self.triangle_count} triangles ({self.index_format} indices)"
        if self.uvs is not None:
            text += ", with UVs"
        return text

    def to_numpy(self) -> Dict[str, Optional[np.ndarray]]:
        """Return contiguous float32 attribute arrays and an (M, 3) index array."""

        positions = _to_float32(self.positions, 3)
        normals = _to_float32(self.normals, 3)
        uvs = None
        if self.uvs is not None:
            uvs = _to_float32(self.uvs, 2)
        indices = np.asarray(self.indices, dtype=np.dtype(self.index_format)).reshape(-1, 3)
        return {
            "positions": positions,
            "normals": normals,
            "uvs": uvs,
            "indices": np.ascontiguousarray(indices),
        }


def _to_float32(values: Sequence[Sequence[float]], expected_cols: int) -> np.ndarray:
    arr = np.asarray(values, dtype=np.float32)
    if arr.size == 0:
        return np.empty((0, expected_cols), dtype=np.float32)
    if arr.ndim != 2 or arr.shape[1] != expected_cols:
        raise ValueError(f"expected array with shape (N, {expected_cols})")
    return np.ascontiguousarray(arr)


def _check_arguments(radius: float, subdivision: int) -> None:
    if isinstance(subdivision, bool) or not isinstance(subdivision, numbers.Integral):
        raise TypeError("Subdivision must be an integer")
    if not (math.isfinite(radius) and radius > 0):
        raise ValueError("Radius must be positive")
    if subdivision < 1:
        raise ValueError("Subdivision must be at least 1")


def generate(radius: float, subdivision: int, emit_uv: bool = False) -> MeshBuffers:
    """Build an icosphere of ``radius`` refined ``subdivision - 1`` times.

    ``subdivision == 1`` returns the bare icosahedron. Requesting UVs
    switches to the duplicated-vertex layout so each triangle can carry its
    own seam-corrected coordinates; otherwise vertices are shared.
    """

    _check_arguments(radius, subdivision)
    subdivision = int(subdivision)

    mode = DUPLICATED if emit_uv else SHARED
    mesh = build_levels(mode, subdivision - 1)

    directions = mesh.vertices()
    normals = list(directions)
    positions = [scale(d, radius) for d in directions]
    uvs = uv.unwrap_triangles(normals) if emit_uv else None

    buffers = MeshBuffers(
        positions=positions,
        normals=normals,
        indices=mesh.indices(),
        uvs=uvs,
        radius=float(radius),
    )
    logging.info("Generated %s icosphere: %s", mode, buffers.summary())
    if buffers.requires_32bit_indices:
        logging.info("Vertex count %d needs 32-bit indices", buffers.vertex_count)
    return buffers


def generate_from_parameters(params: IcosphereParameters) -> MeshBuffers:
    params.validate()
    return generate(params.radius, params.subdivision, emit_uv=params.has_uv)


def validate_mesh(mesh: MeshBuffers, tolerance: float = 1e-6) -> Dict[str, object]:
    """Check the sphere invariants of generated buffers and log any problems."""

    radius_errors = [abs(norm(p) - mesh.radius) for p in mesh.positions]
    normal_errors = [abs(norm(n) - 1.0) for n in mesh.normals]
    max_radius_error = max(radius_errors) if radius_errors else 0.0
    max_normal_error = max(normal_errors) if normal_errors else 0.0

    out_of_range = [i for i in mesh.indices if not 0 <= i < mesh.vertex_count]
    inward_faces: List[int] = []
    degenerate_faces: List[int] = []
    if not out_of_range:
        for face in range(mesh.triangle_count):
            a, b, c = (mesh.positions[i] for i in mesh.indices[3 * face : 3 * face + 3])
            normal = cross(sub(b, a), sub(c, a))
            if norm(normal) <= 1e-12:
                degenerate_faces.append(face)
                continue
            centroid = scale((a[0] + b[0] + c[0], a[1] + b[1] + c[1], a[2] + b[2] + c[2]), 1.0 / 3.0)
            if dot(normal, centroid) < 0:
                inward_faces.append(face)

    uv_seam_violations: List[int] = []
    if mesh.uvs is not None:
        if len(mesh.uvs) != mesh.vertex_count:
            logging.error(
                "UV count %d does not match vertex count %d", len(mesh.uvs), mesh.vertex_count
            )
        for face in range(len(mesh.uvs) // 3):
            ref, *others = mesh.uvs[3 * face : 3 * face + 3]
            if any(abs(o[0] - ref[0]) > 0.5 or abs(o[1] - ref[1]) > 0.5 for o in others):
                uv_seam_violations.append(face)

    if max_radius_error > tolerance * max(1.0, mesh.radius):
        logging.error("Vertices drift off the sphere by up to %.3g", max_radius_error)
    if max_normal_error > tolerance:
        logging.error("Normals deviate from unit length by up to %.3g", max_normal_error)
    if out_of_range:
        logging.error("%d indices reference missing vertices", len(out_of_range))
    if degenerate_faces:
        logging.warning("%d triangles are degenerate", len(degenerate_faces))
    if inward_faces:
        logging.error(
            "%d triangles face inward (showing first 5): %s",
            len(inward_faces),
            inward_faces[:5],
        )
    if uv_seam_violations:
        logging.error("%d triangles still straddle a UV seam", len(uv_seam_violations))

    return {
        "max_radius_error": max_radius_error,
        "max_normal_error": max_normal_error,
        "out_of_range_indices": out_of_range,
        "inward_faces": inward_faces,
        "degenerate_faces": degenerate_faces,
        "uv_seam_violations": uv_seam_violations,
    }
