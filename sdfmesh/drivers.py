"""Chunk-by-chunk meshing of a field.

Each driver samples the field over the configured extent into a
:class:`~sdfmesh.chunk_map.ChunkMap`, then for every chunk: sample the
padded chunk extent through the map, run the extraction algorithm into the
shared buffer and, when the result has triangles, hand it to *spawn*.
Chunks without surface are skipped; that is the usual case for most of a
sparse shape's chunks.

*spawn* receives the buffer's mesh, which is overwritten by the next
chunk, so it must copy whatever it keeps.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, TypeVar

from .array import LatticeArray
from .chunk_map import ChunkMap
from .config import HeightMapMeshingConfig, SdfMeshingConfig
from .extent import Extent
from .fields import HeightField2D, ScalarField3D
from .height_map import triangulate_height_map
from .mesh import HeightMapMeshBuffer, PosNormMesh, SurfaceNetsBuffer
from .padding import MeshingScheme, padded_chunk_extent
from .sampler import copy_extent
from .surface_nets import surface_nets

logger = logging.getLogger(__name__)

H = TypeVar("H")
SpawnFunc = Callable[[PosNormMesh], H]


def _mesh_chunks(
    chunk_map: ChunkMap,
    scheme: MeshingScheme,
    domain: Extent,
    extract: Callable,
    buffer,
    spawn: SpawnFunc,
    handles: List[H],
) -> List[H]:
    n_spawned = 0
    n_vertices = 0
    n_triangles = 0
    reader = chunk_map.reader()
    keys = chunk_map.chunk_keys()
    for key in keys:
        padded = padded_chunk_extent(chunk_map.extent_for_chunk_at_key(key), scheme, domain)
        padded_chunk = LatticeArray.fill(padded, 0.0)
        copy_extent(padded, reader, padded_chunk)
        extract(padded_chunk, padded, buffer)

        mesh = buffer.mesh
        if mesh.is_empty:
            continue

        handles.append(spawn(mesh))
        n_spawned += 1
        n_vertices += mesh.num_vertices
        n_triangles += mesh.num_triangles
        logger.debug(
            "chunk %s: %d vertices, %d triangles", key, mesh.num_vertices, mesh.num_triangles
        )

    logger.info(
        "%s: %d/%d chunks meshed, %d vertices, %d triangles",
        scheme.value, n_spawned, len(keys), n_vertices, n_triangles,
    )
    return handles


def generate_chunk_meshes_from_sdf(
    sdf: ScalarField3D,
    buffer: SurfaceNetsBuffer,
    spawn: SpawnFunc,
    config: Optional[SdfMeshingConfig] = None,
    handles: Optional[List[H]] = None,
) -> List[H]:
    """Mesh a volumetric field with surface nets, one mesh per chunk.

    Parameters
    ----------
    sdf:
        Field to sample; negative inside.
    buffer:
        Surface nets buffer reused for every chunk.
    spawn:
        Called with each non-empty chunk mesh; its return values are
        collected.
    config:
        Sample extent, chunk shape and ambient value.  Defaults to
        :class:`~sdfmesh.config.SdfMeshingConfig`.
    handles:
        List each *spawn* result is appended to as soon as it is returned,
        so it stays accurate if *spawn* raises partway.  A new list is
        used when omitted.

    Returns
    -------
    list
        *handles*, with whatever *spawn* returned appended in chunk-key
        order.
    """
    config = config or SdfMeshingConfig()
    chunk_map = ChunkMap(config.chunk_shape, config.ambient_value)
    copy_extent(config.sample_extent, sdf, chunk_map)
    return _mesh_chunks(
        chunk_map, MeshingScheme.SURFACE_NETS, config.sample_extent, surface_nets, buffer, spawn,
        [] if handles is None else handles,
    )


def generate_chunk_meshes_from_height_map(
    height_map: HeightField2D,
    buffer: HeightMapMeshBuffer,
    spawn: SpawnFunc,
    config: Optional[HeightMapMeshingConfig] = None,
    handles: Optional[List[H]] = None,
) -> List[H]:
    """Mesh a height field by triangulation, one mesh per chunk.

    Same contract as :func:`generate_chunk_meshes_from_sdf`; padded chunk
    extents are clipped to ``config.sample_extent`` so cells outside the
    sampled domain never become terrain.
    """
    config = config or HeightMapMeshingConfig()
    chunk_map = ChunkMap(config.chunk_shape, config.ambient_value)
    copy_extent(config.sample_extent, height_map, chunk_map)
    return _mesh_chunks(
        chunk_map, MeshingScheme.HEIGHT_MAP, config.sample_extent, triangulate_height_map, buffer, spawn,
        [] if handles is None else handles,
    )
