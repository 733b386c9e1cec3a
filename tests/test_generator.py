"""Tests for the shape-cycling generation state in sdfmesh.generator."""

import pytest

from sdfmesh import (
    NUM_SHAPES,
    Extent,
    GeneratorConfig,
    HeightMap,
    HeightMapMeshingConfig,
    InMemoryScene,
    MeshGeneratorState,
    Sdf,
    SdfMeshingConfig,
    ShapeChange,
)


def _small_config(initial_shape_index: int = 0) -> GeneratorConfig:
    return GeneratorConfig(
        sdf=SdfMeshingConfig(
            sample_extent=Extent.from_min_and_shape((-48, -48, -48), (96, 96, 96)),
            chunk_shape=(24, 24, 24),
        ),
        height_map=HeightMapMeshingConfig(
            sample_extent=Extent.from_min_and_shape((-32, -32), (64, 64)),
            chunk_shape=(16, 16),
        ),
        initial_shape_index=initial_shape_index,
    )


class TestInMemoryScene:
    def test_spawn_copies_mesh(self):
        from sdfmesh import PosNormMesh

        scene = InMemoryScene()
        mesh = PosNormMesh.from_arrays([[0, 0, 0], [1, 0, 0], [0, 1, 0]], [[0, 0, 1]] * 3, [0, 1, 2])
        h = scene.spawn_mesh(mesh)
        mesh.clear()
        assert scene.get(h).num_triangles == 1
        assert scene.live_handles == [h]

    def test_despawn_unknown_handle(self):
        with pytest.raises(KeyError):
            InMemoryScene().despawn(7)


class TestMeshGeneratorState:
    def test_first_update_generates(self):
        scene = InMemoryScene()
        state = MeshGeneratorState(_small_config())
        assert state.update(scene) is True
        assert state.current_shape is Sdf.CUBE
        assert state.chunk_mesh_handles
        assert sorted(state.chunk_mesh_handles) == scene.live_handles
        assert state.generation == 1

    def test_update_without_change_is_idle(self):
        scene = InMemoryScene()
        state = MeshGeneratorState(_small_config())
        state.update(scene)
        spawned = scene.spawned
        assert state.update(scene) is False
        assert scene.spawned == spawned
        assert state.generation == 1

    def test_next_and_previous_wrap(self):
        scene = InMemoryScene()
        state = MeshGeneratorState(_small_config())
        state.update(scene)
        state.update(scene, ShapeChange.PREVIOUS)
        assert state.current_shape_index == NUM_SHAPES - 1
        assert state.current_shape is HeightMap.WAVE
        state.update(scene, ShapeChange.NEXT)
        assert state.current_shape_index == 0

    def test_cycling_never_leaks_handles(self):
        scene = InMemoryScene()
        state = MeshGeneratorState(_small_config())
        state.update(scene)
        for _ in range(NUM_SHAPES + 2):
            previous = list(state.chunk_mesh_handles)
            state.update(scene, ShapeChange.NEXT)
            assert not set(previous) & set(scene.live_handles)
            assert sorted(state.chunk_mesh_handles) == scene.live_handles
        assert scene.despawned == scene.spawned - len(scene.live_handles)
        assert state.generation == NUM_SHAPES + 3

    def test_buffers_reused_across_generations(self):
        scene = InMemoryScene()
        state = MeshGeneratorState(_small_config())
        sn_buf = state.surface_nets_buffer
        hm_buf = state.height_map_mesh_buffer
        state.update(scene)
        sn_mesh = sn_buf.mesh
        for _ in range(NUM_SHAPES):
            state.update(scene, ShapeChange.NEXT)
        assert state.surface_nets_buffer is sn_buf
        assert state.height_map_mesh_buffer is hm_buf
        assert sn_buf.mesh is sn_mesh
        assert hm_buf.mesh.capacity[1] > 0

    def test_height_map_shape(self):
        scene = InMemoryScene()
        state = MeshGeneratorState(_small_config(initial_shape_index=4))
        state.update(scene)
        for mesh in scene.meshes:
            assert -10.0 - 1e-4 <= mesh.positions[:, 1].min()
            assert mesh.positions[:, 1].max() <= 30.0 + 1e-4

    def test_bad_initial_index(self):
        with pytest.raises(IndexError):
            MeshGeneratorState(_small_config(initial_shape_index=NUM_SHAPES))

    def test_reentrant_request_rejected(self):
        state = MeshGeneratorState(_small_config())

        class ReentrantScene(InMemoryScene):
            def spawn_mesh(self, mesh):
                state.update(self, ShapeChange.NEXT)

        with pytest.raises(RuntimeError, match="in progress"):
            state.update(ReentrantScene())
        assert not state.is_regenerating
        assert state.current_shape_index == 0


class _FailingScene(InMemoryScene):
    """Scene whose n-th spawn or despawn call raises once."""

    def __init__(self, fail_spawn_at=None, fail_despawn_at=None):
        super().__init__()
        self.fail_spawn_at = fail_spawn_at
        self.fail_despawn_at = fail_despawn_at
        self._spawn_calls = 0
        self._despawn_calls = 0

    def spawn_mesh(self, mesh):
        self._spawn_calls += 1
        if self._spawn_calls == self.fail_spawn_at:
            raise OSError("renderer out of memory")
        return super().spawn_mesh(mesh)

    def despawn(self, handle):
        self._despawn_calls += 1
        if self._despawn_calls == self.fail_despawn_at:
            raise OSError("renderer lost the mesh")
        super().despawn(handle)


class TestSceneFailures:
    def test_spawn_failure_keeps_spawned_handles(self):
        scene = _FailingScene(fail_spawn_at=3)
        state = MeshGeneratorState(_small_config())
        with pytest.raises(OSError):
            state.update(scene)
        assert len(scene.live_handles) == 2
        assert sorted(state.chunk_mesh_handles) == scene.live_handles
        assert not state.is_regenerating

        state.update(scene, ShapeChange.NEXT)
        assert sorted(state.chunk_mesh_handles) == scene.live_handles
        assert scene.despawned == 2

    def test_idle_update_retries_failed_generation(self):
        scene = _FailingScene(fail_spawn_at=3)
        state = MeshGeneratorState(_small_config())
        with pytest.raises(OSError):
            state.update(scene)
        assert state.update(scene) is True
        assert state.generation == 1
        assert sorted(state.chunk_mesh_handles) == scene.live_handles

    def test_despawn_failure_keeps_remaining_handles(self):
        scene = _FailingScene(fail_despawn_at=2)
        state = MeshGeneratorState(_small_config())
        state.update(scene)
        first = list(state.chunk_mesh_handles)
        assert len(first) > 2
        with pytest.raises(OSError):
            state.update(scene, ShapeChange.NEXT)
        assert len(state.chunk_mesh_handles) == len(first) - 1
        assert sorted(state.chunk_mesh_handles) == scene.live_handles

        state.update(scene, ShapeChange.NEXT)
        assert not set(first) & set(scene.live_handles)
        assert sorted(state.chunk_mesh_handles) == scene.live_handles
        assert scene.despawned == scene.spawned - len(scene.live_handles)

    def test_driver_appends_into_given_list(self):
        from sdfmesh import Sphere, SurfaceNetsBuffer, generate_chunk_meshes_from_sdf

        scene = _FailingScene(fail_spawn_at=2)
        handles = ["earlier"]
        with pytest.raises(OSError):
            generate_chunk_meshes_from_sdf(
                Sphere((0, 0, 0), 10.0), SurfaceNetsBuffer(), scene.spawn_mesh,
                SdfMeshingConfig(sample_extent=Extent((-16, -16, -16), (32, 32, 32))),
                handles,
            )
        assert handles == ["earlier"] + scene.live_handles
        assert len(scene.live_handles) == 1
