"""Icosphere mesh generator package."""

__all__ = ["generator", "icosahedron", "midpoint", "parameters", "subdivision", "uv", "vec3"]
