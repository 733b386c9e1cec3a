"""Triangle meshes and the reusable buffers extraction writes into.

:class:`PosNormMesh` keeps its arrays between uses: :meth:`PosNormMesh.clear`
only resets the lengths, so regenerating many chunks (or the same chunks
many times) settles into a fixed allocation once the largest chunk mesh
has been seen.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Tuple

import numpy as np

from ._common import _F, _I

logger = logging.getLogger(__name__)

_INDEX_DTYPE = np.uint32


def _grown(arr: np.ndarray, needed: int) -> np.ndarray:
    cap = max(needed, 2 * len(arr), 64)
    out = np.empty((cap,) + arr.shape[1:], dtype=arr.dtype)
    out[: len(arr)] = arr
    return out


class PosNormMesh:
    """Vertex positions, parallel normals and a flat triangle index list.

    Invariants: ``len(positions) == len(normals)``, ``len(indices) % 3 == 0``
    and every index is ``< len(positions)``.
    """

    def __init__(self) -> None:
        self._positions = np.empty((0, 3), dtype=np.float32)
        self._normals = np.empty((0, 3), dtype=np.float32)
        self._indices = np.empty((0,), dtype=_INDEX_DTYPE)
        self._n_vertices = 0
        self._n_indices = 0

    @classmethod
    def from_arrays(cls, positions: _F, normals: _F, indices: _I) -> PosNormMesh:
        """Mesh allocated to exactly fit the given arrays."""
        mesh = cls()
        n = np.asarray(positions).reshape(-1, 3).shape[0]
        mesh._positions = np.empty((n, 3), dtype=np.float32)
        mesh._normals = np.empty((n, 3), dtype=np.float32)
        mesh._indices = np.empty((np.asarray(indices).size,), dtype=_INDEX_DTYPE)
        mesh.extend(positions, normals, indices)
        return mesh

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    @property
    def positions(self) -> _F:
        return self._positions[: self._n_vertices]

    @property
    def normals(self) -> _F:
        return self._normals[: self._n_vertices]

    @property
    def indices(self) -> _I:
        return self._indices[: self._n_indices]

    @property
    def num_vertices(self) -> int:
        return self._n_vertices

    @property
    def num_triangles(self) -> int:
        return self._n_indices // 3

    @property
    def is_empty(self) -> bool:
        return self._n_indices == 0

    @property
    def capacity(self) -> Tuple[int, int]:
        """Allocated ``(vertices, indices)``."""
        return len(self._positions), len(self._indices)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def clear(self) -> None:
        """Drop all vertices and indices, keeping the allocation."""
        self._n_vertices = 0
        self._n_indices = 0

    def reserve(self, n_vertices: int, n_indices: int) -> None:
        """Make room for this many *additional* vertices and indices."""
        need_v = self._n_vertices + n_vertices
        need_i = self._n_indices + n_indices
        if need_v > len(self._positions):
            self._positions = _grown(self._positions[: self._n_vertices], need_v)
            self._normals = _grown(self._normals[: self._n_vertices], need_v)
            logger.debug("mesh buffer grew to %d vertices", len(self._positions))
        if need_i > len(self._indices):
            self._indices = _grown(self._indices[: self._n_indices], need_i)
            logger.debug("mesh buffer grew to %d indices", len(self._indices))

    def extend(self, positions: _F, normals: _F, indices: _I) -> None:
        """Append a sub-mesh.  *indices* refer to the appended vertices."""
        positions = np.asarray(positions, dtype=np.float32).reshape(-1, 3)
        normals = np.asarray(normals, dtype=np.float32).reshape(-1, 3)
        indices = np.asarray(indices).reshape(-1)
        if len(positions) != len(normals):
            raise ValueError(f"{len(positions)} positions but {len(normals)} normals")
        if len(indices) % 3:
            raise ValueError(f"index count {len(indices)} is not a multiple of 3")
        if len(indices) and (indices.min() < 0 or indices.max() >= len(positions)):
            raise ValueError("triangle index out of range")

        self.reserve(len(positions), len(indices))
        v0, i0 = self._n_vertices, self._n_indices
        self._positions[v0 : v0 + len(positions)] = positions
        self._normals[v0 : v0 + len(normals)] = normals
        self._indices[i0 : i0 + len(indices)] = indices.astype(_INDEX_DTYPE) + v0
        self._n_vertices += len(positions)
        self._n_indices += len(indices)

    def copy(self) -> PosNormMesh:
        """Tight, independent copy (what a renderer should keep)."""
        return PosNormMesh.from_arrays(self.positions.copy(), self.normals.copy(), self.indices.copy())

    def triangles(self) -> _F:
        """``(T, 3, 3)`` array of triangle corner positions."""
        return self.positions[self.indices.reshape(-1, 3)]

    def __repr__(self) -> str:
        return f"PosNormMesh(vertices={self._n_vertices}, triangles={self.num_triangles})"


# ===========================================================================
# Per-scheme buffers
# ===========================================================================

@dataclass
class SurfaceNetsBuffer:
    """Scratch state for :func:`~sdfmesh.surface_nets.surface_nets`.

    ``surface_points`` holds the min corner of every cube that produced a
    vertex, in vertex order.  ``stride_to_index`` maps each cube of the
    last input array to its vertex index (``-1`` for none).
    """

    mesh: PosNormMesh = field(default_factory=PosNormMesh)
    surface_points: _I = field(default_factory=lambda: np.empty((0, 3), dtype=np.int64))
    stride_to_index: _I = field(default_factory=lambda: np.empty((0,), dtype=np.int64))

    def reset(self, num_cubes: int) -> None:
        self.mesh.clear()
        self.surface_points = self.surface_points[:0]
        if len(self.stride_to_index) < num_cubes:
            self.stride_to_index = np.empty(num_cubes, dtype=np.int64)
        self.stride_to_index[:num_cubes] = -1


@dataclass
class HeightMapMeshBuffer:
    """Scratch state for :func:`~sdfmesh.height_map.triangulate_height_map`."""

    mesh: PosNormMesh = field(default_factory=PosNormMesh)

    def reset(self) -> None:
        self.mesh.clear()
