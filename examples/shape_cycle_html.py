"""Cycle through every demonstration shape and save each as interactive HTML.

Demonstrates: MeshGeneratorState, InMemoryScene, ShapeChange
Output:       examples/shape_cycle_<shape>.html (one per shape)

The generator state is driven exactly as a host update loop would drive
it: one ``update`` to build the first shape, then ``ShapeChange.NEXT`` for
each following one.  After every step the scene holds only the current
shape's chunk meshes, which are drawn as one ``Mesh3d`` trace per chunk.
"""
import argparse
import os, sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sdfmesh import NUM_SHAPES, InMemoryScene, MeshGeneratorState, ShapeChange

_OUT_DIR = os.path.dirname(os.path.abspath(__file__))


def _figure(scene, title):
    import plotly.graph_objects as go

    fig = go.Figure()
    for handle in scene.live_handles:
        mesh = scene.get(handle)
        x, y, z = mesh.positions.T
        i, j, k = mesh.indices.reshape(-1, 3).T
        # y-up meshes, z-up plot
        fig.add_trace(go.Mesh3d(
            x=x, y=z, z=y, i=i, j=j, k=k,
            name=f"chunk {handle}",
            flatshading=False,
            lighting=dict(ambient=0.5, diffuse=0.8, specular=0.2, roughness=0.6),
            lightposition=dict(x=100, y=200, z=300),
        ))
    fig.update_scenes(xaxis_title="X", yaxis_title="Z", zaxis_title="Y", aspectmode="data")
    fig.update_layout(
        title=dict(text=title, font=dict(size=16)),
        width=900,
        height=750,
        paper_bgcolor="#1a1a2e",
        font=dict(color="#e0e0e0"),
        showlegend=False,
    )
    return fig


def main():
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--out-dir", default=_OUT_DIR, help="Directory for the HTML files")
    args = parser.parse_args()

    try:
        import plotly  # noqa: F401
    except ImportError:
        print("plotly not installed; nothing to draw  (pip install plotly)", file=sys.stderr)
        return

    scene = InMemoryScene()
    state = MeshGeneratorState()
    state.update(scene)

    for step in range(NUM_SHAPES):
        if step:
            state.update(scene, ShapeChange.NEXT)
        shape = state.current_shape
        n_tris = sum(m.num_triangles for m in scene.meshes)
        print(f"  {shape.value:<7s}: {len(scene.live_handles):3d} chunk meshes, "
              f"{n_tris:7d} triangles  (despawned so far: {scene.despawned})")

        fig = _figure(scene, f"{shape.value} — {len(scene.live_handles)} chunk meshes")
        out_html = os.path.join(args.out_dir, f"shape_cycle_{shape.value}.html")
        fig.write_html(out_html, include_plotlyjs="cdn")
        print(f"    saved {out_html}")


if __name__ == "__main__":
    main()
