"""Generation state: which shape is shown, and its live chunk meshes.

:class:`MeshGeneratorState` is created once and driven by
:meth:`MeshGeneratorState.update` from the host's update step.  A shape
change (or the very first update) despawns the previous generation's
meshes from the :class:`Scene` and regenerates every chunk synchronously
before returning, so the state is idle again between updates.
"""

from __future__ import annotations

import enum
import logging
from typing import Dict, Hashable, List, Optional, Protocol

from .config import GeneratorConfig
from .drivers import generate_chunk_meshes_from_height_map, generate_chunk_meshes_from_sdf
from .mesh import HeightMapMeshBuffer, PosNormMesh, SurfaceNetsBuffer
from .shapes import NUM_SHAPES, HeightMap, Sdf, Shape, choose_shape

logger = logging.getLogger(__name__)


class ShapeChange(enum.Enum):
    PREVIOUS = -1
    NEXT = 1


class Scene(Protocol):
    """What the generator needs from whatever renders the meshes."""

    def spawn_mesh(self, mesh: PosNormMesh) -> Hashable:
        """Take ownership of a copy of *mesh* and return a handle for it."""

    def despawn(self, handle: Hashable) -> None:
        """Discard the mesh behind *handle*."""


class InMemoryScene:
    """A :class:`Scene` that just keeps copies of the meshes it is given."""

    def __init__(self) -> None:
        self._meshes: Dict[int, PosNormMesh] = {}
        self._next_handle = 0
        self.spawned = 0
        self.despawned = 0

    def spawn_mesh(self, mesh: PosNormMesh) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._meshes[handle] = mesh.copy()
        self.spawned += 1
        return handle

    def despawn(self, handle: int) -> None:
        if handle not in self._meshes:
            raise KeyError(f"no live mesh with handle {handle}")
        del self._meshes[handle]
        self.despawned += 1

    @property
    def live_handles(self) -> List[int]:
        return sorted(self._meshes)

    @property
    def meshes(self) -> List[PosNormMesh]:
        return [self._meshes[h] for h in self.live_handles]

    def get(self, handle: int) -> PosNormMesh:
        return self._meshes[handle]


class MeshGeneratorState:
    """Current shape, live chunk-mesh handles and the reusable mesh buffers.

    Parameters
    ----------
    config:
        Sampling configuration and starting shape index.
    """

    def __init__(self, config: Optional[GeneratorConfig] = None) -> None:
        self.config = config or GeneratorConfig()
        choose_shape(self.config.initial_shape_index)
        self.current_shape_index = self.config.initial_shape_index
        self.chunk_mesh_handles: List[Hashable] = []
        self.generation = 0

        # Reused across chunks and generations.
        self.surface_nets_buffer = SurfaceNetsBuffer()
        self.height_map_mesh_buffer = HeightMapMeshBuffer()

        self._meshed_shape_index: Optional[int] = None
        self._regenerating = False

    @property
    def current_shape(self) -> Shape:
        return choose_shape(self.current_shape_index)

    @property
    def is_regenerating(self) -> bool:
        return self._regenerating

    def update(self, scene: Scene, change: Optional[ShapeChange] = None) -> bool:
        """Apply an optional shape change and regenerate if needed.

        Returns ``True`` when meshes were regenerated.  Raises
        :class:`RuntimeError` if called while a regeneration is running.
        """
        if self._regenerating:
            raise RuntimeError("shape change requested while a regeneration is in progress")

        if change is not None:
            self.current_shape_index = (self.current_shape_index + change.value) % NUM_SHAPES
        elif self._meshed_shape_index is not None:
            return False

        self.regenerate(scene)
        return True

    def regenerate(self, scene: Scene) -> None:
        """Despawn the previous generation and mesh the current shape.

        :attr:`chunk_mesh_handles` always lists exactly the handles live in
        *scene*: old handles leave it only once despawned and new ones join
        it as soon as they are spawned, so a scene that raises partway
        leaves nothing untracked.  The next :meth:`update` then retries.
        """
        if self._regenerating:
            raise RuntimeError("regeneration is already in progress")
        self._regenerating = True
        self._meshed_shape_index = None
        try:
            n_old = 0
            while self.chunk_mesh_handles:
                scene.despawn(self.chunk_mesh_handles[-1])
                self.chunk_mesh_handles.pop()
                n_old += 1

            shape = choose_shape(self.current_shape_index)
            if isinstance(shape, Sdf):
                generate_chunk_meshes_from_sdf(
                    shape.get_sdf(), self.surface_nets_buffer, scene.spawn_mesh, self.config.sdf,
                    self.chunk_mesh_handles,
                )
            elif isinstance(shape, HeightMap):
                generate_chunk_meshes_from_height_map(
                    shape.get_height_map(), self.height_map_mesh_buffer, scene.spawn_mesh,
                    self.config.height_map, self.chunk_mesh_handles,
                )
            else:
                raise TypeError(f"unhandled shape {shape!r}")

            self._meshed_shape_index = self.current_shape_index
            self.generation += 1
            logger.info(
                "generation %d: %s -> %d chunk meshes (despawned %d)",
                self.generation, shape.value, len(self.chunk_mesh_handles), n_old,
            )
        finally:
            self._regenerating = False
