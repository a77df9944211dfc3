import logging
import math

import numpy as np
import pytest

from icomesh import generator, uv, vec3
from icomesh.generator import MeshBuffers
from icomesh.parameters import IcosphereParameters


def test_base_icosahedron_without_uvs():
    mesh = generator.generate(radius=1.0, subdivision=1, emit_uv=False)
    assert mesh.vertex_count == 12
    assert mesh.triangle_count == 20
    assert len(mesh.indices) == 60
    assert mesh.uvs is None
    assert all(math.isclose(vec3.norm(p), 1.0) for p in mesh.positions)


def test_radius_scales_positions_only():
    mesh = generator.generate(radius=2.0, subdivision=2, emit_uv=False)
    assert mesh.vertex_count == 42
    assert mesh.triangle_count == 80
    assert all(math.isclose(vec3.norm(p), 2.0) for p in mesh.positions)
    assert all(math.isclose(vec3.norm(n), 1.0) for n in mesh.normals)
    for p, n in zip(mesh.positions, mesh.normals):
        assert p == pytest.approx(vec3.scale(n, 2.0))


@pytest.mark.parametrize("subdivision", [1, 2, 3, 4])
def test_shared_mode_counts(subdivision):
    level = subdivision - 1
    mesh = generator.generate(1.0, subdivision)
    assert mesh.vertex_count == 10 * 4**level + 2
    assert mesh.triangle_count == 20 * 4**level
    assert all(0 <= i < mesh.vertex_count for i in mesh.indices)


def test_uv_emission_duplicates_vertices():
    mesh = generator.generate(radius=1.0, subdivision=1, emit_uv=True)
    assert mesh.vertex_count == 60
    assert mesh.triangle_count == 20
    assert mesh.indices == list(range(60))
    assert len(mesh.uvs) == 60

    for n in mesh.normals:
        u, v = uv.normal_to_uv(n)
        assert 0.0 <= u <= 1.0
        assert 0.0 <= v <= 1.0

    for face in range(mesh.triangle_count):
        ref, *others = mesh.uvs[3 * face : 3 * face + 3]
        for u, v in others:
            assert abs(u - ref[0]) <= 0.5
            assert abs(v - ref[1]) <= 0.5
    for u, v in mesh.uvs:
        assert -0.5 <= u <= 1.5
        assert -0.5 <= v <= 1.5


@pytest.mark.parametrize("subdivision", [2, 3])
def test_uv_mode_counts(subdivision):
    mesh = generator.generate(1.5, subdivision, emit_uv=True)
    assert mesh.vertex_count == 3 * mesh.triangle_count
    assert mesh.triangle_count == 20 * 4 ** (subdivision - 1)
    assert len(mesh.uvs) == mesh.vertex_count
    assert all(math.isclose(vec3.norm(p), 1.5) for p in mesh.positions)


def test_generation_is_reproducible():
    first = generator.generate(1.0, 3, emit_uv=True)
    second = generator.generate(1.0, 3, emit_uv=True)
    assert first.positions == second.positions
    assert first.uvs == second.uvs
    assert first.indices == second.indices


@pytest.mark.parametrize("radius", [0.0, -1.0, float("nan"), float("inf")])
def test_rejects_non_positive_radius(radius):
    with pytest.raises(ValueError):
        generator.generate(radius, 2)


@pytest.mark.parametrize(
    "subdivision, error",
    [
        (0, ValueError),
        (np.int64(0), ValueError),
        (1.5, TypeError),
        (np.float64(2.0), TypeError),
        (True, TypeError),
    ],
)
def test_rejects_bad_subdivision(subdivision, error):
    with pytest.raises(error):
        generator.generate(1.0, subdivision)


@pytest.mark.parametrize("subdivision", [np.int64(2), np.int32(2), np.uint8(2)])
def test_accepts_numpy_integer_subdivision(subdivision):
    mesh = generator.generate(1.0, subdivision)
    assert mesh.vertex_count == 42
    assert mesh.triangle_count == 80


def test_index_format_follows_vertex_count():
    small = generator.generate(1.0, 2)
    assert small.index_format == "uint16"
    assert not small.requires_32bit_indices

    big = MeshBuffers(
        positions=[(1.0, 0.0, 0.0)] * 65536,
        normals=[(1.0, 0.0, 0.0)] * 65536,
        indices=[0, 1, 65535],
    )
    assert big.requires_32bit_indices
    assert big.index_format == "uint32"
    assert big.to_numpy()["indices"].dtype == np.uint32


def test_to_numpy_shapes():
    arrays = generator.generate(1.0, 1).to_numpy()
    assert arrays["positions"].shape == (12, 3)
    assert arrays["positions"].dtype == np.float32
    assert arrays["normals"].shape == (12, 3)
    assert arrays["indices"].shape == (20, 3)
    assert arrays["indices"].dtype == np.uint16
    assert arrays["uvs"] is None

    with_uv = generator.generate(1.0, 1, emit_uv=True).to_numpy()
    assert with_uv["uvs"].shape == (60, 2)
    assert with_uv["indices"].shape == (20, 3)


def test_validate_mesh_accepts_generated_meshes():
    for emit_uv in (False, True):
        report = generator.validate_mesh(generator.generate(3.0, 3, emit_uv=emit_uv))
        assert report["max_radius_error"] < 1e-9
        assert report["max_normal_error"] < 1e-9
        assert report["out_of_range_indices"] == []
        assert report["inward_faces"] == []
        assert report["degenerate_faces"] == []
        assert report["uv_seam_violations"] == []


def test_validate_mesh_reports_problems(caplog):
    mesh = generator.generate(1.0, 1)
    a, b, c = mesh.indices[:3]
    mesh.indices[:3] = [a, c, b]

    with caplog.at_level(logging.ERROR):
        report = generator.validate_mesh(mesh)
    assert report["inward_faces"] == [0]
    assert "face inward" in caplog.text

    mesh.indices[0] = 99
    report = generator.validate_mesh(mesh)
    assert report["out_of_range_indices"] == [99]


def test_generate_from_parameters():
    params = IcosphereParameters(radius=0.5, subdivision=2, has_uv=True)
    mesh = generator.generate_from_parameters(params)
    assert mesh.vertex_count == 240
    assert mesh.uvs is not None
    assert mesh.radius == 0.5

    with pytest.raises(ValueError):
        generator.generate_from_parameters(IcosphereParameters(subdivision=9))
