"""Render every demonstration shape's chunk meshes on one page.

Each shape is meshed chunk by chunk exactly as the generator does it, and
every chunk mesh gets its own tint so the chunk seams are visible.

Usage::

    python scripts/gallery_chunks.py                    # saves gallery_chunks.png
    python scripts/gallery_chunks.py --out my_file.png
    python scripts/gallery_chunks.py --shape torus      # a single shape
    python scripts/gallery_chunks.py --extent 32 --chunk 8

Requirements: numpy, matplotlib
"""
from __future__ import annotations

import argparse
import logging
import os
import sys

# Ensure the repo root (parent of scripts/) is importable regardless of cwd
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np

from sdfmesh import (
    SHAPE_ORDER,
    Extent,
    HeightMap,
    HeightMapMeshBuffer,
    HeightMapMeshingConfig,
    SdfMeshingConfig,
    SurfaceNetsBuffer,
    generate_chunk_meshes_from_height_map,
    generate_chunk_meshes_from_sdf,
    shape_by_name,
)


def _mesh_bounds(meshes):
    """``(2, 3)`` min/max corner over every vertex of *meshes*."""
    pts = np.concatenate([m.positions for m in meshes])
    return np.stack([pts.min(axis=0), pts.max(axis=0)])


def _mesh_shape(shape, half: int, chunk: int):
    """Return the list of chunk meshes for *shape* over ``[-half, half)``."""
    spawn = lambda mesh: mesh.copy()
    if isinstance(shape, HeightMap):
        config = HeightMapMeshingConfig(
            sample_extent=Extent.from_min_and_shape((-half,) * 2, (2 * half,) * 2),
            chunk_shape=(chunk, chunk),
        )
        return generate_chunk_meshes_from_height_map(
            shape.get_height_map(), HeightMapMeshBuffer(), spawn, config
        )
    config = SdfMeshingConfig(
        sample_extent=Extent.from_min_and_shape((-half,) * 3, (2 * half,) * 3),
        chunk_shape=(chunk, chunk, chunk),
    )
    return generate_chunk_meshes_from_sdf(shape.get_sdf(), SurfaceNetsBuffer(), spawn, config)


def render_gallery(shapes, out_path: str, half: int = 50, chunk: int = 16) -> None:
    try:
        import matplotlib.pyplot as plt
        from mpl_toolkits.mplot3d.art3d import Poly3DCollection
    except ImportError:
        raise SystemExit(
            "matplotlib is required for rendering.\n"
            "  pip install matplotlib"
        )

    ncols = len(shapes)
    fig = plt.figure(figsize=(ncols * 3.5, 3.8), facecolor="#111111")
    light = np.array([0.577, 0.577, 0.577])   # diagonal illumination
    cmap = plt.get_cmap("tab20")

    for idx, shape in enumerate(shapes):
        ax = fig.add_subplot(1, ncols, idx + 1, projection="3d")
        ax.set_facecolor("#111111")
        ax.set_axis_off()

        meshes = _mesh_shape(shape, half, chunk)
        ax.set_title(f"{shape.value} ({len(meshes)} chunks)", color="white", fontsize=8, pad=1)
        if not meshes:
            ax.text2D(0.5, 0.5, "no surface", ha="center", va="center",
                      color="gray", transform=ax.transAxes, fontsize=7)
            continue

        for k, mesh in enumerate(meshes):
            tris = mesh.triangles()
            face_n = mesh.normals[mesh.indices.reshape(-1, 3)].mean(axis=1)
            shade = 0.3 + 0.7 * np.clip(face_n @ light, 0.0, 1.0)   # ambient + diffuse
            tint = np.array(cmap(k % 20)[:3])
            # Matplotlib is z-up; meshes are y-up.
            ax.add_collection3d(Poly3DCollection(
                tris[..., [0, 2, 1]], facecolors=np.outer(shade, tint), edgecolors="none",
            ))

        lo, hi = _mesh_bounds(meshes)
        ax.set_xlim(lo[0], hi[0]); ax.set_ylim(lo[2], hi[2]); ax.set_zlim(lo[1], hi[1])
        ax.set_box_aspect(np.maximum(hi - lo, 1.0)[[0, 2, 1]])
        ax.view_init(elev=25, azim=35)

    fig.suptitle("sdfmesh — chunk meshes", color="white", fontsize=12)
    plt.tight_layout(pad=0.3)
    fig.savefig(out_path, dpi=150, bbox_inches="tight", facecolor=fig.get_facecolor())
    plt.close(fig)
    print(f"Saved: {out_path}")


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Render the chunk meshes of every demonstration shape to one PNG."
    )
    parser.add_argument("--out", default="gallery_chunks.png", help="Output PNG path")
    parser.add_argument("--shape", default=None,
                        help="Render only this shape (cube, plane, sphere, torus, wave)")
    parser.add_argument("--extent", type=int, default=50,
                        help="Sample [-extent, extent) along each axis (default 50)")
    parser.add_argument("--chunk", type=int, default=16, help="Chunk size per axis (default 16)")
    parser.add_argument("--verbose", action="store_true", help="Log per-chunk progress")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    shapes = [shape_by_name(args.shape)] if args.shape else list(SHAPE_ORDER)
    render_gallery(shapes, args.out, half=args.extent, chunk=args.chunk)


if __name__ == "__main__":
    main()
