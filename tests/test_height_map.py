"""Tests for sdfmesh.height_map."""

import numpy as np
import numpy.testing as npt
import pytest

from sdfmesh import (
    Extent,
    HeightMapMeshBuffer,
    HeightWave,
    LatticeArray,
    sample,
    triangulate_height_map,
)


def _triangulate(field, extent: Extent) -> HeightMapMeshBuffer:
    buf = HeightMapMeshBuffer()
    triangulate_height_map(sample(field, extent), extent, buf)
    return buf


class TestFlat:
    @pytest.fixture(scope="class")
    def buf(self):
        return _triangulate(lambda p: np.full(len(p), 5.0), Extent((0, 0), (5, 5)))

    def test_interior_vertices(self, buf):
        m = buf.mesh
        assert m.num_vertices == 9
        npt.assert_array_equal(m.positions[:, 1], 5.0)
        xs = m.positions[:, 0]
        zs = m.positions[:, 2]
        assert xs.min() == 1 and xs.max() == 3
        assert zs.min() == 1 and zs.max() == 3

    def test_two_triangles_per_cell(self, buf):
        assert buf.mesh.num_triangles == 8

    def test_normals_up(self, buf):
        npt.assert_allclose(buf.mesh.normals, np.tile([0.0, 1.0, 0.0], (9, 1)))

    def test_faces_wound_up(self, buf):
        tris = buf.mesh.triangles()
        fn = np.cross(tris[:, 1] - tris[:, 0], tris[:, 2] - tris[:, 0])
        assert np.all(fn[:, 1] > 0)

    def test_vertex_order_x_major(self, buf):
        # Interior 3 × 3: vertex i * 3 + j sits at x = 1 + i, z = 1 + j.
        npt.assert_array_equal(buf.mesh.positions[5], [2, 5, 3])
        npt.assert_array_equal(buf.mesh.positions[0], [1, 5, 1])

    def test_buffer_reused(self):
        buf = _triangulate(lambda p: np.full(len(p), 5.0), Extent((0, 0), (5, 5)))
        storage = buf.mesh._positions
        triangulate_height_map(
            sample(HeightWave(), Extent((0, 0), (4, 4))), Extent((0, 0), (4, 4)), buf
        )
        assert buf.mesh.num_vertices == 4
        assert buf.mesh._positions is storage


class TestRamp:
    def test_central_difference_normal(self):
        buf = _triangulate(lambda p: 2.0 * p[:, 0], Extent((0, 0), (4, 4)))
        expected = np.array([-2.0, 1.0, 0.0]) / np.sqrt(5.0)
        npt.assert_allclose(buf.mesh.normals, np.tile(expected, (4, 1)), atol=1e-6)

    def test_heights_follow_field(self):
        buf = _triangulate(lambda p: p[:, 1] - 3.0 * p[:, 0], Extent((-3, 2), (6, 7)))
        pos = buf.mesh.positions
        npt.assert_allclose(pos[:, 1], pos[:, 2] - 3.0 * pos[:, 0])


class TestDegenerate:
    def test_no_interior(self):
        buf = _triangulate(HeightWave(), Extent((0, 0), (2, 9)))
        assert buf.mesh.is_empty
        assert buf.mesh.num_vertices == 0

    def test_single_interior_row_has_no_quads(self):
        buf = _triangulate(HeightWave(), Extent((0, 0), (3, 9)))
        assert buf.mesh.num_vertices == 7
        assert buf.mesh.is_empty

    def test_rejects_3d(self):
        e = Extent((0, 0, 0), (4, 4, 4))
        with pytest.raises(ValueError):
            triangulate_height_map(LatticeArray.fill(e, 0.0), e, HeightMapMeshBuffer())

    def test_array_must_cover_extent(self):
        with pytest.raises(ValueError):
            triangulate_height_map(
                LatticeArray.fill(Extent((0, 0), (4, 4)), 0.0), Extent((0, 0), (5, 5)),
                HeightMapMeshBuffer(),
            )
