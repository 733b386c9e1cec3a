"""Meshing configuration.

Defaults reproduce the demonstration scene: shapes about 35 lattice units
across, sampled over ``[-50, 50)`` per axis in 16-cell chunks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

import numpy as np

from .extent import Extent

# Outside every solid: never reads as inside any shape.
SDF_AMBIENT_VALUE = float(np.finfo(np.float32).max)
# Neutral elevation.
HEIGHT_MAP_AMBIENT_VALUE = 0.0


@dataclass(frozen=True)
class SdfMeshingConfig:
    sample_extent: Extent = field(
        default_factory=lambda: Extent.from_min_and_shape((-50, -50, -50), (100, 100, 100))
    )
    chunk_shape: Tuple[int, int, int] = (16, 16, 16)
    ambient_value: float = SDF_AMBIENT_VALUE


@dataclass(frozen=True)
class HeightMapMeshingConfig:
    sample_extent: Extent = field(
        default_factory=lambda: Extent.from_min_and_shape((-50, -50), (100, 100))
    )
    chunk_shape: Tuple[int, int] = (16, 16)
    ambient_value: float = HEIGHT_MAP_AMBIENT_VALUE


@dataclass(frozen=True)
class GeneratorConfig:
    sdf: SdfMeshingConfig = field(default_factory=SdfMeshingConfig)
    height_map: HeightMapMeshingConfig = field(default_factory=HeightMapMeshingConfig)
    initial_shape_index: int = 0
