"""Dense scalar arrays addressed by lattice point."""

from __future__ import annotations

import numpy as np

from ._common import _F
from .extent import Extent, _PointLike


class LatticeArray:
    """A dense ``float32`` array covering an :class:`~sdfmesh.extent.Extent`.

    Storage is z-first: ``data[z, y, x]`` in 3-D, ``data[y, x]`` in 2-D, the
    same layout the grid samplers produce.  Use :meth:`xyz` for an
    ``[x, y, z]``-indexed view.
    """

    def __init__(self, extent: Extent, data: _F) -> None:
        expected = tuple(int(n) for n in extent.shape[::-1])
        if data.shape != expected:
            raise ValueError(f"data shape {data.shape} does not match extent shape {expected}")
        self.extent = extent
        self.data = data

    @classmethod
    def fill(cls, extent: Extent, value: float) -> LatticeArray:
        """Array covering *extent* with every cell set to *value*."""
        shape = tuple(int(n) for n in extent.shape[::-1])
        return cls(extent, np.full(shape, value, dtype=np.float32))

    def xyz(self) -> _F:
        """View of :attr:`data` indexed ``[x, y(, z)]``."""
        return self.data.transpose()

    def _local_slices(self, extent: Extent) -> tuple:
        lo = extent.minimum - self.extent.minimum
        hi = lo + extent.shape
        return tuple(slice(int(a), int(b)) for a, b in zip(lo[::-1], hi[::-1]))

    def view(self, extent: Extent) -> _F:
        """Z-first view of the cells of *extent* (clipped to this array)."""
        return self.data[self._local_slices(extent.intersection(self.extent))]

    def get(self, p: _PointLike) -> float:
        q = np.asarray(p, dtype=np.int64) - self.extent.minimum
        return float(self.data[tuple(q[::-1])])

    def write_extent(self, extent: Extent, values: _F) -> None:
        """Overwrite the cells of *extent* with a z-first *values* block."""
        if not self.extent.contains_extent(extent):
            raise ValueError(f"{extent} is not inside {self.extent}")
        self.data[self._local_slices(extent)] = values

    def __repr__(self) -> str:
        return f"LatticeArray({self.extent!r})"
