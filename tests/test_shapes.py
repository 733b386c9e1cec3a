"""Tests for shape selection in sdfmesh.shapes."""

import numpy as np
import numpy.testing as npt
import pytest

from sdfmesh import (
    NUM_SHAPES,
    SHAPE_ORDER,
    Cube,
    HeightMap,
    HeightWave,
    Plane,
    Sdf,
    Sphere,
    Torus,
    choose_shape,
    shape_by_name,
)


class TestChooseShape:
    def test_order(self):
        assert NUM_SHAPES == 5
        assert [choose_shape(i) for i in range(NUM_SHAPES)] == [
            Sdf.CUBE, Sdf.PLANE, Sdf.SPHERE, Sdf.TORUS, HeightMap.WAVE,
        ]

    @pytest.mark.parametrize("index", [-1, NUM_SHAPES, 100])
    def test_bad_index_fails_fast(self, index):
        with pytest.raises(IndexError, match="bad shape index"):
            choose_shape(index)

    def test_by_name(self):
        assert shape_by_name("torus") is Sdf.TORUS
        assert shape_by_name("wave") is HeightMap.WAVE

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="unknown shape"):
            shape_by_name("teapot")


class TestShapeFields:
    def test_every_sdf_variant_has_a_field(self):
        expected = {Sdf.CUBE: Cube, Sdf.PLANE: Plane, Sdf.SPHERE: Sphere, Sdf.TORUS: Torus}
        for shape in Sdf:
            assert isinstance(shape.get_sdf(), expected[shape])

    def test_height_map_variant(self):
        assert isinstance(HeightMap.WAVE.get_height_map(), HeightWave)

    def test_every_shape_is_sdf_or_height_map(self):
        for shape in SHAPE_ORDER:
            assert isinstance(shape, (Sdf, HeightMap))

    def test_demo_shapes_fit_default_domain(self):
        # Radius-35 shapes fit inside [-50, 50)³ with room for the padding.
        origin = np.zeros((1, 3))
        corner = np.full((1, 3), 49.0)
        for shape in (Sdf.CUBE, Sdf.SPHERE):
            f = shape.get_sdf()
            assert f(origin)[0] < 0
            assert f(corner)[0] > 0

    def test_torus_parameters(self):
        f = Sdf.TORUS.get_sdf()
        npt.assert_allclose(f(np.array([[35.0, 0.0, 0.0]])), [-10.0], atol=1e-5)
