"""The selectable demonstration shapes.

A :data:`Shape` is either an :class:`Sdf` (meshed with surface nets) or a
:class:`HeightMap` (meshed by triangulation).  Shape indices cycle through
:data:`SHAPE_ORDER`.
"""

from __future__ import annotations

import enum
from typing import Tuple, Union

from .fields import Cube, HeightField2D, HeightWave, Plane, ScalarField3D, Sphere, Torus


class Sdf(enum.Enum):
    CUBE = "cube"
    PLANE = "plane"
    SPHERE = "sphere"
    TORUS = "torus"

    def get_sdf(self) -> ScalarField3D:
        if self is Sdf.CUBE:
            return Cube(center=(0.0, 0.0, 0.0), half_extent=35.0)
        if self is Sdf.PLANE:
            return Plane(normal=(0.5, 0.5, 0.5), thickness=1.0)
        if self is Sdf.SPHERE:
            return Sphere(center=(0.0, 0.0, 0.0), radius=35.0)
        if self is Sdf.TORUS:
            return Torus(major=35.0, minor=10.0)
        raise ValueError(f"unhandled sdf shape: {self!r}")


class HeightMap(enum.Enum):
    WAVE = "wave"

    def get_height_map(self) -> HeightField2D:
        if self is HeightMap.WAVE:
            return HeightWave()
        raise ValueError(f"unhandled height map: {self!r}")


Shape = Union[Sdf, HeightMap]

SHAPE_ORDER: Tuple[Shape, ...] = (
    Sdf.CUBE,
    Sdf.PLANE,
    Sdf.SPHERE,
    Sdf.TORUS,
    HeightMap.WAVE,
)
NUM_SHAPES = len(SHAPE_ORDER)


def choose_shape(index: int) -> Shape:
    """Shape at *index*; any index outside ``[0, NUM_SHAPES)`` is a bug."""
    if not 0 <= index < NUM_SHAPES:
        raise IndexError(f"bad shape index: {index}")
    return SHAPE_ORDER[index]


def shape_by_name(name: str) -> Shape:
    """Look a shape up by its enum value, e.g. ``"torus"``."""
    for shape in SHAPE_ORDER:
        if shape.value == name:
            return shape
    raise ValueError(f"unknown shape {name!r}; choose from {[s.value for s in SHAPE_ORDER]}")
