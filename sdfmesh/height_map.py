"""Height-map triangulation over a padded 2-D lattice array.

The array is an elevation ``h(x, z)``.  Every point of the extent's
interior (the extent shrunk by one cell per face) becomes a vertex at
``(x, h, z)`` with y up; its normal comes from central differences with
the four edge neighbours, which is why the border is needed.  Every
interior cell that has a right and a top neighbour becomes two
upward-facing triangles.
"""

from __future__ import annotations

import numpy as np

from ._common import normalize
from .array import LatticeArray
from .extent import Extent
from .mesh import HeightMapMeshBuffer


def triangulate_height_map(array: LatticeArray, extent: Extent, buffer: HeightMapMeshBuffer) -> None:
    """Triangulate the heights of *array* over *extent* into *buffer*.

    *buffer* is cleared first; on return ``buffer.mesh`` holds the
    (possibly empty) mesh and nothing references *array*.
    """
    if extent.dim != 2:
        raise ValueError(f"height map triangulation needs a 2-D extent, got {extent.dim}-D")
    if not array.extent.contains_extent(extent):
        raise ValueError(f"{extent} is not covered by {array.extent}")
    buffer.reset()
    interior = extent.padded(-1)
    if interior.is_empty:
        return

    h = array.view(extent).transpose().astype(np.float64)  # [x, z]
    heights = h[1:-1, 1:-1]
    dh_dx = (h[2:, 1:-1] - h[:-2, 1:-1]) / 2.0
    dh_dz = (h[1:-1, 2:] - h[1:-1, :-2]) / 2.0

    xs = np.arange(interior.minimum[0], interior.least_upper_bound[0])
    zs = np.arange(interior.minimum[1], interior.least_upper_bound[1])
    X, Z = np.meshgrid(xs, zs, indexing="ij")
    positions = np.stack([X, heights, Z], axis=-1).reshape(-1, 3)
    normals = normalize(
        np.stack([-dh_dx, np.ones_like(heights), -dh_dz], axis=-1)
    ).reshape(-1, 3)

    nx, nz = heights.shape
    vid = np.arange(nx * nz).reshape(nx, nz)

    bl = vid[:-1, :-1]
    br = vid[1:, :-1]
    tl = vid[:-1, 1:]
    tr = vid[1:, 1:]
    indices = np.stack([bl, tl, tr, bl, tr, br], axis=-1).reshape(-1)

    buffer.mesh.extend(positions, normals, indices)
