#!/usr/bin/env python3
"""
Basic Triangle Intersection Example

Demonstrates symbolic triangle-triangle intersection on single pairs and
self-intersection detection on a triangle soup.
"""

import torch
import time

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from isect3d import TriangleIntersector, triangles_intersections, triangles_topology


def create_test_soup():
    """Two overlapping icospheres merged into one triangle soup."""
    try:
        import trimesh
        a = trimesh.creation.icosphere(subdivisions=2, radius=0.5)
        b = trimesh.creation.icosphere(subdivisions=2, radius=0.5)
        b.apply_translation([0.4, 0.1, 0.05])
        tris = torch.cat([
            torch.tensor(a.triangles, dtype=torch.float64),
            torch.tensor(b.triangles, dtype=torch.float64),
        ])
        return tris
    except ImportError:
        raise RuntimeError("trimesh required: pip install trimesh")


def main():
    print("=" * 50)
    print("Isect3D: Basic Intersection Example")
    print("=" * 50)

    print("\n[1] Coplanar overlap...")
    p = [(0, 0, 0), (1, 0, 0), (0, 1, 0)]
    q = [(0.5, -0.5, 0), (0.5, 1.5, 0), (-1, 0.5, 0)]
    result = triangles_intersections(*p, *q)
    print(f"    Topology: {triangles_topology(*p, *q).value}")
    print(f"    Hit: {result.hit}, {len(result)} pairs: {result}")

    print("\n[2] Transversal crossing...")
    q = [(0, 0, 1), (1, 0, 1), (0, 1, -1)]
    result = triangles_intersections(*p, *q)
    print(f"    Topology: {triangles_topology(*p, *q).value}")
    print(f"    Hit: {result.hit}, {len(result)} pairs: {result}")

    print("\n[3] Shared edge (degenerate contact)...")
    q = [(1, 0, 0), (0, 1, 0), (1, 1, 0.5)]
    result = triangles_intersections(*p, *q)
    print(f"    Hit: {result.hit}, {len(result)} pairs")

    device = 'cuda' if torch.cuda.is_available() else 'cpu'
    print(f"\n[4] Self-intersection of a triangle soup (device: {device})...")
    tris = create_test_soup()
    print(f"    Soup: {tris.shape[0]} triangles")
    t0 = time.time()
    intersector = TriangleIntersector(device=device)
    soup_result = intersector.check_self_intersection(tris)
    print(f"    Intersecting pairs: {soup_result.hit.shape[0]}")
    print(f"    Time: {time.time()-t0:.3f}s")
    if soup_result.hit.shape[0] > 0:
        i, j = soup_result.face_ids_a[0].item(), soup_result.face_ids_b[0].item()
        print(f"    First pair: faces {i} and {j}: {soup_result.get_isects(0)}")

    print("\n" + "=" * 50)
    print("Done!")
    print("=" * 50)


if __name__ == "__main__":
    main()
