"""Lattice sampling: evaluate fields and copy samples between stores."""

from __future__ import annotations

from typing import Callable, Union

import numpy as np
import numpy.typing as npt

from .array import LatticeArray
from .chunk_map import ChunkMap, ChunkMapReader, chunk_keys_for_extent
from .extent import Extent

_Array = npt.NDArray[np.floating]
_FieldFunc = Callable[[_Array], _Array]
_Source = Union[_FieldFunc, LatticeArray, ChunkMapReader]
_Dest = Union[LatticeArray, ChunkMap]

__all__ = ["sample", "copy_extent", "chunk_keys_for_extent"]


def _evaluate(field: _FieldFunc, extent: Extent) -> _Array:
    """Z-first block of ``field(p)`` for every lattice point of *extent*."""
    values = field(extent.points())
    return np.asarray(values, dtype=np.float32).reshape(tuple(int(n) for n in extent.shape[::-1]))


def sample(field: _FieldFunc, extent: Extent) -> LatticeArray:
    """Sample *field* at every lattice point of *extent*.

    Parameters
    ----------
    field:
        Any callable accepting an ``(N, dim)`` point array and returning
        ``N`` values, e.g. :class:`~sdfmesh.fields.Sphere` or
        :class:`~sdfmesh.fields.HeightWave`.
    extent:
        Region to sample.

    Returns
    -------
    LatticeArray
        ``float32`` samples, z-first layout.
    """
    return LatticeArray(extent, _evaluate(field, extent))


def copy_extent(extent: Extent, src: _Source, dst: _Dest) -> None:
    """Write the values of *src* over *extent* into *dst*.

    *src* is a field callable, a :class:`LatticeArray` or a
    :class:`ChunkMapReader` (which yields its ambient value for cells with
    no stored chunk).  *dst* is a :class:`LatticeArray`, in which case
    *extent* is clipped to its bounds, or a :class:`ChunkMap`.  Only *dst*
    is modified.
    """
    if isinstance(dst, LatticeArray):
        extent = extent.intersection(dst.extent)

    if isinstance(src, ChunkMapReader):
        if isinstance(dst, LatticeArray):
            src.copy_into(extent, dst)
            return
        block = LatticeArray.fill(extent, src.ambient_value)
        src.copy_into(extent, block)
        values = block.data
    elif isinstance(src, LatticeArray):
        if not src.extent.contains_extent(extent):
            raise ValueError(f"{extent} is not covered by source {src.extent}")
        values = src.view(extent).copy()
    else:
        values = _evaluate(src, extent)

    dst.write_extent(extent, values)
