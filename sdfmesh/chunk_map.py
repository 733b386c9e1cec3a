"""Chunked lattice storage with an ambient value for unwritten cells.

A :class:`ChunkMap` splits the lattice into fixed-shape chunks keyed by
their minimum corner.  Chunks are created the first time any of their
cells is written and start out filled with the map's ambient value; cells
in chunks that were never created read as ambient too.

Reads used for meshing go through :meth:`ChunkMap.reader`, which lends a
:class:`ChunkMapReader` for one sampling pass.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Sequence, Tuple

import numpy as np

from ._common import _F
from .array import LatticeArray
from .extent import Extent, _PointLike

ChunkKey = Tuple[int, ...]


def chunk_keys_for_extent(extent: Extent, chunk_shape: Sequence[int]) -> List[ChunkKey]:
    """Keys of every chunk intersecting *extent*, in lexicographic order."""
    cs = np.asarray(chunk_shape, dtype=np.int64)
    if extent.is_empty:
        return []
    lo = np.floor_divide(extent.minimum, cs)
    hi = np.floor_divide(extent.max, cs)
    axes = [np.arange(a, b + 1, dtype=np.int64) * c for a, b, c in zip(lo, hi, cs)]
    grids = np.meshgrid(*axes, indexing="ij")
    keys = np.stack(grids, axis=-1).reshape(-1, extent.dim)
    return [tuple(int(v) for v in k) for k in keys]


class ChunkMap:
    """Sparse chunked storage over a 2-D or 3-D lattice.

    Parameters
    ----------
    chunk_shape:
        Cells per chunk along each axis, e.g. ``(16, 16, 16)``.
    ambient_value:
        Value read for every cell that was never written.
    """

    def __init__(self, chunk_shape: Sequence[int], ambient_value: float) -> None:
        cs = np.array(chunk_shape, dtype=np.int64)
        if cs.ndim != 1 or np.any(cs <= 0):
            raise ValueError(f"chunk shape must be positive per axis, got {list(chunk_shape)}")
        self.chunk_shape = cs
        self.ambient_value = np.float32(ambient_value)
        self._chunks: Dict[ChunkKey, LatticeArray] = {}

    @property
    def dim(self) -> int:
        return int(self.chunk_shape.shape[0])

    # ------------------------------------------------------------------
    # Keys and extents
    # ------------------------------------------------------------------

    def chunk_key_for_point(self, p: _PointLike) -> ChunkKey:
        q = np.asarray(p, dtype=np.int64)
        return tuple(int(v) for v in np.floor_divide(q, self.chunk_shape) * self.chunk_shape)

    def extent_for_chunk_at_key(self, key: ChunkKey) -> Extent:
        return Extent(key, self.chunk_shape)

    def chunk_keys(self) -> List[ChunkKey]:
        """Keys of every stored chunk, sorted."""
        return sorted(self._chunks)

    def __len__(self) -> int:
        return len(self._chunks)

    def __iter__(self) -> Iterator[ChunkKey]:
        return iter(self.chunk_keys())

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def get_chunk(self, key: ChunkKey) -> LatticeArray | None:
        return self._chunks.get(key)

    def get(self, p: _PointLike) -> float:
        chunk = self._chunks.get(self.chunk_key_for_point(p))
        if chunk is None:
            return float(self.ambient_value)
        return chunk.get(p)

    def _get_or_create_chunk(self, key: ChunkKey) -> LatticeArray:
        chunk = self._chunks.get(key)
        if chunk is None:
            chunk = LatticeArray.fill(self.extent_for_chunk_at_key(key), self.ambient_value)
            self._chunks[key] = chunk
        return chunk

    def write_extent(self, extent: Extent, values: _F) -> None:
        """Store a z-first *values* block covering *extent*.

        Creates every chunk the extent touches.
        """
        expected = tuple(int(n) for n in extent.shape[::-1])
        if values.shape != expected:
            raise ValueError(f"values shape {values.shape} does not match extent shape {expected}")
        source = LatticeArray(extent, values)
        for key in chunk_keys_for_extent(extent, self.chunk_shape):
            chunk = self._get_or_create_chunk(key)
            overlap = chunk.extent.intersection(extent)
            chunk.write_extent(overlap, source.view(overlap))

    def reader(self) -> ChunkMapReader:
        return ChunkMapReader(self)


class ChunkMapReader:
    """Read handle over a :class:`ChunkMap`, scoped to one sampling pass.

    Holds a per-pass cache of chunk lookups; drop it once the pass is done.
    """

    def __init__(self, chunk_map: ChunkMap) -> None:
        self.map = chunk_map
        self._cache: Dict[ChunkKey, LatticeArray | None] = {}

    @property
    def ambient_value(self) -> np.float32:
        return self.map.ambient_value

    def _chunk(self, key: ChunkKey) -> LatticeArray | None:
        if key not in self._cache:
            self._cache[key] = self.map.get_chunk(key)
        return self._cache[key]

    def get(self, p: _PointLike) -> float:
        """Value at *p*; the ambient value when its chunk was never stored."""
        chunk = self._chunk(self.map.chunk_key_for_point(p))
        if chunk is None:
            return float(self.map.ambient_value)
        return chunk.get(p)

    def copy_into(self, extent: Extent, dst: LatticeArray) -> None:
        """Fill the cells of *extent* in *dst*; uncovered cells get ambient."""
        region = extent.intersection(dst.extent)
        dst.view(region)[...] = self.map.ambient_value
        for key in chunk_keys_for_extent(region, self.map.chunk_shape):
            chunk = self._chunk(key)
            if chunk is None:
                continue
            overlap = chunk.extent.intersection(region)
            dst.view(overlap)[...] = chunk.view(overlap)
