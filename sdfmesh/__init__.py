"""
sdfmesh — Chunked scalar-field sampling and iso-surface meshing
===============================================================

Samples closed-form fields (signed distance volumes or 2-D height maps)
onto a chunked integer lattice and turns each chunk into a triangle mesh
with positions, normals and indices.

Implemented features
--------------------
- Field generators: Sphere, Plane, Cube, Torus, HeightWave
- Integer extents with padding, extension and clipping: :class:`Extent`
- Chunked storage with ambient reads: :class:`ChunkMap`
- Sampling: :func:`sample`, :func:`copy_extent`
- Per-scheme chunk padding: :func:`padded_chunk_extent`
- Extraction: :func:`surface_nets`, :func:`triangulate_height_map`
- Chunk drivers: :func:`generate_chunk_meshes_from_sdf`,
  :func:`generate_chunk_meshes_from_height_map`
- Shape cycling with reusable buffers: :class:`MeshGeneratorState`

Quick start
-----------

One field, chunk by chunk::

    from sdfmesh import Sphere, SurfaceNetsBuffer, generate_chunk_meshes_from_sdf

    buffer = SurfaceNetsBuffer()
    meshes = generate_chunk_meshes_from_sdf(
        Sphere(center=(0, 0, 0), radius=35.0), buffer, spawn=lambda m: m.copy()
    )

Cycling the demonstration shapes::

    from sdfmesh import InMemoryScene, MeshGeneratorState, ShapeChange

    scene = InMemoryScene()
    state = MeshGeneratorState()
    state.update(scene)                    # first shape
    state.update(scene, ShapeChange.NEXT)  # old meshes despawned, next built
"""

from .fields import (
    ScalarField3D,
    HeightField2D,
    Sphere,
    Plane,
    Cube,
    Torus,
    HeightWave,
)
from .extent import Extent
from .array import LatticeArray
from .chunk_map import ChunkMap, ChunkMapReader, chunk_keys_for_extent
from .sampler import sample, copy_extent
from .padding import MeshingScheme, padded_chunk_extent
from .mesh import PosNormMesh, SurfaceNetsBuffer, HeightMapMeshBuffer
from .surface_nets import surface_nets
from .height_map import triangulate_height_map
from .config import (
    SdfMeshingConfig,
    HeightMapMeshingConfig,
    GeneratorConfig,
    SDF_AMBIENT_VALUE,
    HEIGHT_MAP_AMBIENT_VALUE,
)
from .drivers import generate_chunk_meshes_from_sdf, generate_chunk_meshes_from_height_map
from .shapes import Sdf, HeightMap, Shape, SHAPE_ORDER, NUM_SHAPES, choose_shape, shape_by_name
from .generator import Scene, InMemoryScene, MeshGeneratorState, ShapeChange

__version__ = "0.1.0"

__all__ = [
    # Fields
    "ScalarField3D",
    "HeightField2D",
    "Sphere",
    "Plane",
    "Cube",
    "Torus",
    "HeightWave",

    # Lattice and storage
    "Extent",
    "LatticeArray",
    "ChunkMap",
    "ChunkMapReader",
    "chunk_keys_for_extent",

    # Sampling and padding
    "sample",
    "copy_extent",
    "MeshingScheme",
    "padded_chunk_extent",

    # Meshes and extraction
    "PosNormMesh",
    "SurfaceNetsBuffer",
    "HeightMapMeshBuffer",
    "surface_nets",
    "triangulate_height_map",

    # Configuration
    "SdfMeshingConfig",
    "HeightMapMeshingConfig",
    "GeneratorConfig",
    "SDF_AMBIENT_VALUE",
    "HEIGHT_MAP_AMBIENT_VALUE",

    # Drivers and generation state
    "generate_chunk_meshes_from_sdf",
    "generate_chunk_meshes_from_height_map",
    "Sdf",
    "HeightMap",
    "Shape",
    "SHAPE_ORDER",
    "NUM_SHAPES",
    "choose_shape",
    "shape_by_name",
    "Scene",
    "InMemoryScene",
    "MeshGeneratorState",
    "ShapeChange",
]
