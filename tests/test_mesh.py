"""Tests for sdfmesh.mesh — meshes and reusable buffers."""

import numpy as np
import numpy.testing as npt
import pytest

from sdfmesh import HeightMapMeshBuffer, PosNormMesh, SurfaceNetsBuffer


def _quad():
    pos = np.array([[0, 0, 0], [1, 0, 0], [0, 0, 1], [1, 0, 1]], dtype=float)
    nrm = np.tile([0.0, 1.0, 0.0], (4, 1))
    idx = np.array([0, 2, 3, 0, 3, 1])
    return pos, nrm, idx


class TestPosNormMesh:
    def test_empty(self):
        m = PosNormMesh()
        assert m.is_empty
        assert m.positions.shape == (0, 3)
        assert m.indices.shape == (0,)

    def test_extend_offsets_indices(self):
        m = PosNormMesh()
        m.extend(*_quad())
        m.extend(*_quad())
        assert m.num_vertices == 8
        assert m.num_triangles == 4
        npt.assert_array_equal(m.indices[6:], np.array([0, 2, 3, 0, 3, 1]) + 4)
        assert len(m.positions) == len(m.normals)

    def test_clear_keeps_capacity(self):
        m = PosNormMesh()
        m.extend(*_quad())
        cap = m.capacity
        positions_storage = m._positions
        m.clear()
        assert m.is_empty and m.num_vertices == 0
        assert m.capacity == cap
        m.extend(*_quad())
        assert m._positions is positions_storage

    def test_reserve_grows(self):
        m = PosNormMesh()
        m.reserve(1000, 3000)
        v, i = m.capacity
        assert v >= 1000 and i >= 3000
        assert m.is_empty

    @pytest.mark.parametrize("bad", [
        (np.zeros((3, 3)), np.zeros((2, 3)), np.array([0, 1, 2])),
        (np.zeros((3, 3)), np.zeros((3, 3)), np.array([0, 1])),
        (np.zeros((3, 3)), np.zeros((3, 3)), np.array([0, 1, 3])),
    ])
    def test_invariants_enforced(self, bad):
        with pytest.raises(ValueError):
            PosNormMesh().extend(*bad)

    def test_copy_is_independent(self):
        m = PosNormMesh.from_arrays(*_quad())
        c = m.copy()
        m.clear()
        assert c.num_vertices == 4
        assert c.capacity == (4, 6)

    def test_triangles(self):
        tris = PosNormMesh.from_arrays(*_quad()).triangles()
        assert tris.shape == (2, 3, 3)
        npt.assert_array_equal(tris[0, 1], [0, 0, 1])


class TestBuffers:
    def test_surface_nets_reset(self):
        buf = SurfaceNetsBuffer()
        buf.mesh.extend(*_quad())
        buf.reset(10)
        assert buf.mesh.is_empty
        assert np.all(buf.stride_to_index[:10] == -1)
        table = buf.stride_to_index
        buf.reset(5)
        assert buf.stride_to_index is table

    def test_height_map_reset(self):
        buf = HeightMapMeshBuffer()
        buf.mesh.extend(*_quad())
        storage = buf.mesh._positions
        buf.reset()
        assert buf.mesh.is_empty
        assert buf.mesh._positions is storage
