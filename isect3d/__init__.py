"""
Isect3D: Symbolic Triangle-Triangle Intersection

Exact, combinatorial description of the intersection of two triangles in
3D, with a batched PyTorch front-end for triangle soups.
"""

__version__ = "0.1.0"
__author__ = "Isect3D Contributors"

from .core.data_structures import (
    T_RGN_NB,
    Topology,
    TriangleRegion,
    TriangleIsect,
    TriangleIntersection,
    TriangleIntersectResult,
)
from .core.predicates import orient2d, orient3d
from .core.triangle_intersection import (
    triangles_intersections,
    triangles_intersect,
    triangles_topology,
)
from .core.formatting import region_to_string, isect_to_string, isects_to_string
from .apps.triangle_intersector import TriangleIntersector

__all__ = [
    # Core
    "triangles_intersections",
    "triangles_intersect",
    "triangles_topology",
    "orient3d",
    "orient2d",
    # Data structures
    "T_RGN_NB",
    "Topology",
    "TriangleRegion",
    "TriangleIsect",
    "TriangleIntersection",
    "TriangleIntersectResult",
    # Formatting
    "region_to_string",
    "isect_to_string",
    "isects_to_string",
    # Apps
    "TriangleIntersector",
]
