"""Scalar-field math for the sdfmesh package.

Every function accepts and returns ``numpy.ndarray`` objects and supports
broadcasting over arbitrary leading batch dimensions.  A 3-D point array
*p* has shape ``(..., 3)``; a 2-D point array has shape ``(..., 2)``.
Results have shape ``(...,)`` and are always ``float32``.

Sign convention for the volumetric functions: negative inside, zero on the
surface, positive outside.  :func:`sdPlaneSlab` and :func:`sdCube` are
quasi-distances (their zero sets are exact, their magnitudes are not
Euclidean distances).  :func:`hmWave` is an elevation, not a distance.
"""

import numpy as np

from ._common import _F, dot, length, vec2

__all__ = ["sdSphere", "sdPlaneSlab", "sdCube", "sdTorus", "hmWave"]


# ===========================================================================
# Volumetric fields
# ===========================================================================

def sdSphere(p: _F, c: _F, r: float) -> _F:
    """Sphere of radius *r* centred at *c*."""
    return (length(p - c) - r).astype(np.float32)


def sdPlaneSlab(p: _F, n: _F, thickness: float) -> _F:
    """Slab around the plane through the origin with normal *n*.

    ``(p·n)² − thickness``; the zero set is the pair of parallel planes at
    ``p·n = ±√thickness``.  *n* is used as given, not normalised.
    """
    d = dot(p, n)
    return (d * d - thickness).astype(np.float32)


def sdCube(p: _F, c: _F, r: float) -> _F:
    """Axis-aligned cube: Chebyshev distance to *c* minus half-extent *r*."""
    return (np.max(np.abs(p - c), axis=-1) - r).astype(np.float32)


def sdTorus(p: _F, t: _F) -> _F:
    """Torus around the Y axis; *t* = ``(R, r)`` (major, minor radii)."""
    q = vec2(length(p[..., [0, 2]]) - t[0], p[..., 1])
    return (length(q) - t[1]).astype(np.float32)


# ===========================================================================
# Height fields
# ===========================================================================

def hmWave(p: _F) -> _F:
    """``10·(1 + cos(0.1·x) + sin(0.1·z))`` over 2-D points ``(x, z)``."""
    x = p[..., 0]
    z = p[..., 1]
    return (10.0 * (1.0 + np.cos(0.1 * x) + np.sin(0.1 * z))).astype(np.float32)
