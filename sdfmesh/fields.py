"""Field generators: small value objects evaluating a pure scalar field.

Volumetric fields take ``(..., 3)`` lattice points and return signed
(quasi-)distances; height fields take ``(..., 2)`` points ``(x, z)`` and
return elevations.  Integer lattice points are converted to float before
evaluation.  All results are ``float32``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

import numpy as np
import numpy.typing as npt

from . import sdf_lib as sdf

# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------
_Array = npt.NDArray[np.floating]


def _as_points(p, dim: int) -> _Array:
    pf = np.asarray(p, dtype=np.float64)
    if pf.shape[-1] != dim:
        raise ValueError(f"expected points of shape (..., {dim}), got {pf.shape}")
    return pf


def _vector(v: Sequence[float], dim: int) -> np.ndarray:
    a = np.array(v, dtype=np.float64)
    if a.shape != (dim,):
        raise ValueError(f"expected a {dim}-vector, got shape {a.shape}")
    return a


# ===========================================================================
# Base classes
# ===========================================================================

class ScalarField3D:
    """Base class for volumetric fields.

    Subclasses implement :meth:`sdf`.  Calling the field is the same as
    calling :meth:`sdf`.
    """

    dim = 3

    def sdf(self, p: _Array) -> _Array:
        raise NotImplementedError

    def __call__(self, p: _Array) -> _Array:
        return self.sdf(p)


class HeightField2D:
    """Base class for height fields over the ``(x, z)`` plane."""

    dim = 2

    def height(self, p: _Array) -> _Array:
        raise NotImplementedError

    def __call__(self, p: _Array) -> _Array:
        return self.height(p)


# ===========================================================================
# Volumetric fields
# ===========================================================================

@dataclass(frozen=True)
class Sphere(ScalarField3D):
    """Sphere of *radius* centred at *center*."""

    center: Sequence[float] = (0.0, 0.0, 0.0)
    radius: float = 1.0
    _c: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_c", _vector(self.center, 3))

    def sdf(self, p: _Array) -> _Array:
        return sdf.sdSphere(_as_points(p, 3), self._c, self.radius)


@dataclass(frozen=True)
class Plane(ScalarField3D):
    """Slab ``(p·normal)² − thickness`` around the plane through the origin.

    The zero set is two parallel planes at ``p·normal = ±√thickness``.
    """

    normal: Sequence[float] = (0.0, 1.0, 0.0)
    thickness: float = 1.0
    _n: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_n", _vector(self.normal, 3))

    def sdf(self, p: _Array) -> _Array:
        return sdf.sdPlaneSlab(_as_points(p, 3), self._n, self.thickness)


@dataclass(frozen=True)
class Cube(ScalarField3D):
    """Axis-aligned cube with half-extent *half_extent* centred at *center*."""

    center: Sequence[float] = (0.0, 0.0, 0.0)
    half_extent: float = 1.0
    _c: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_c", _vector(self.center, 3))

    def sdf(self, p: _Array) -> _Array:
        return sdf.sdCube(_as_points(p, 3), self._c, self.half_extent)


@dataclass(frozen=True)
class Torus(ScalarField3D):
    """Torus around the Y axis through the origin.

    Parameters
    ----------
    major:
        Distance from the Y axis to the tube centre.
    minor:
        Tube cross-section radius.
    """

    major: float = 1.0
    minor: float = 0.25
    _t: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_t", np.array([self.major, self.minor], dtype=np.float64))

    def sdf(self, p: _Array) -> _Array:
        return sdf.sdTorus(_as_points(p, 3), self._t)


# ===========================================================================
# Height fields
# ===========================================================================

@dataclass(frozen=True)
class HeightWave(HeightField2D):
    """Fixed wave ``10·(1 + cos(0.1·x) + sin(0.1·z))``; range ``[-10, 30]``."""

    def height(self, p: _Array) -> _Array:
        return sdf.hmWave(_as_points(p, 2))
