"""Sampling extents each meshing scheme needs around a chunk.

Surface nets looks at the face and edge neighbours of every cube, so a
chunk has to be sampled one cell past each face or its boundary geometry
goes missing.  Height-map triangulation needs one more row and column on
the max side (it joins each sample to the next one) and is clipped to the
sampled domain so ambient cells outside it never become terrain.  Clipping
can shrink the result unevenly at the domain boundary; that is expected.
"""

from __future__ import annotations

import enum
from typing import Optional

from .extent import Extent


class MeshingScheme(enum.Enum):
    SURFACE_NETS = "surface_nets"
    HEIGHT_MAP = "height_map"


def padded_chunk_extent(
    chunk_extent: Extent,
    scheme: MeshingScheme,
    domain: Optional[Extent] = None,
) -> Extent:
    """Extent to sample for meshing the chunk covering *chunk_extent*.

    Parameters
    ----------
    chunk_extent:
        The chunk's own bounds.
    scheme:
        Which extraction algorithm will consume the samples.
    domain:
        Overall sampling domain.  Required for
        :attr:`MeshingScheme.HEIGHT_MAP`; ignored for surface nets.
    """
    if scheme is MeshingScheme.SURFACE_NETS:
        return chunk_extent.padded(1)
    if scheme is MeshingScheme.HEIGHT_MAP:
        if domain is None:
            raise ValueError("height map padding needs the sampling domain")
        return chunk_extent.padded(1).add_to_shape(1).intersection(domain)
    raise ValueError(f"unknown meshing scheme: {scheme!r}")
