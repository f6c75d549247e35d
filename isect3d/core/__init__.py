"""Core module exports"""

from .data_structures import (
    T_RGN_NB,
    Topology,
    TriangleRegion,
    TriangleIsect,
    TriangleIntersection,
    TriangleIntersectResult,
    vertex_region,
    edge_region,
    interior_region,
)
from .predicates import orient2d, orient3d, orient2d_exact, orient3d_exact
from .triangle_intersection import (
    classify_vertices,
    classify_topology,
    triangles_intersections,
    triangles_intersect,
    triangles_topology,
)
from .formatting import region_to_string, isect_to_string, isects_to_string

__all__ = [
    "T_RGN_NB",
    "Topology",
    "TriangleRegion",
    "TriangleIsect",
    "TriangleIntersection",
    "TriangleIntersectResult",
    "vertex_region",
    "edge_region",
    "interior_region",
    "orient2d",
    "orient3d",
    "orient2d_exact",
    "orient3d_exact",
    "classify_vertices",
    "classify_topology",
    "triangles_intersections",
    "triangles_intersect",
    "triangles_topology",
    "region_to_string",
    "isect_to_string",
    "isects_to_string",
]
