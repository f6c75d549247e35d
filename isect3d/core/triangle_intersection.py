"""
Symbolic triangle-triangle intersection

Computes which vertices, edges or interior of each triangle take part in
the intersection of two triangles, without constructing any coordinate.
Every decision is a combination of exact orientation signs, so the result
is topologically consistent in all degenerate configurations.

Pipeline:
    1. Degeneracy filter (shared vertices) and bounding box fast path
    2. Vertex classifier: sign of each vertex against the other plane
    3. Topology dispatcher: sign triples -> Topology
    4. Symbolic assembler: region pairs for the detected topology

The input triangles are supposed to be non-degenerate (three distinct,
non collinear vertices). This is not checked.
"""

import logging
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np
import torch

from .data_structures import (
    Topology,
    TriangleIntersection,
    TriangleIsect,
    TriangleRegion,
    edge_region,
    interior_region,
    vertex_region,
)
from .predicates import Point3, orient2d_projected, orient3d

logger = logging.getLogger(__name__)

Triangle = Tuple[Point3, Point3, Point3]
Signs = Tuple[int, int, int]
Projection = Tuple[int, int]  # (dropped axis, orientation of the triangle in 2D)
RegionPair = Tuple[TriangleRegion, TriangleRegion]


def _as_point(p) -> Point3:
    if isinstance(p, torch.Tensor):
        p = p.detach().cpu().numpy()
    arr = np.asarray(p, dtype=np.float64)
    if arr.shape != (3,):
        raise ValueError(f"point shape {arr.shape} != (3,)")
    return (float(arr[0]), float(arr[1]), float(arr[2]))


# ==================== Vertex Classifier ====================

def classify_vertices(
    p0: Sequence[float], p1: Sequence[float], p2: Sequence[float],
    q0: Sequence[float], q1: Sequence[float], q2: Sequence[float]
) -> Signs:
    """
    Classify the vertices of triangle (q0, q1, q2) against the supporting
    plane of triangle (p0, p1, p2).

    Returns:
        signs: (s0, s1, s2), si = orient3d(p0, p1, p2, qi) in {-1, 0, +1}
    """
    return (
        orient3d(p0, p1, p2, q0),
        orient3d(p0, p1, p2, q1),
        orient3d(p0, p1, p2, q2),
    )


# ==================== Topology Dispatcher ====================

class SignPattern(Enum):
    """Position of one triangle relative to the plane of the other"""
    SEPARATED = "separated"              # +++ or ---
    COPLANAR = "coplanar"                # 000
    STRADDLING = "straddling"            # both + and - present
    VERTEX_ON_PLANE = "vertex_on_plane"  # 0++ or 0--
    EDGE_ON_PLANE = "edge_on_plane"      # 00+ or 00-


def sign_pattern(signs: Signs) -> SignPattern:
    zeros = signs.count(0)
    if zeros == 3:
        return SignPattern.COPLANAR
    if zeros == 2:
        return SignPattern.EDGE_ON_PLANE
    if 1 in signs and -1 in signs:
        return SignPattern.STRADDLING
    if zeros == 1:
        return SignPattern.VERTEX_ON_PLANE
    return SignPattern.SEPARATED


_S = SignPattern.SEPARATED
_C = SignPattern.COPLANAR
_X = SignPattern.STRADDLING
_V = SignPattern.VERTEX_ON_PLANE
_E = SignPattern.EDGE_ON_PLANE

# (pattern of T1 against plane of T2, pattern of T2 against plane of T1)
# A triangle lying in the plane of the other implies the converse, so
# coplanar mixed with anything else cannot happen with exact signs.
TOPOLOGY_TABLE: Dict[Tuple[SignPattern, SignPattern], Topology] = {
    (_S, _S): Topology.DISJOINT,
    (_S, _C): Topology.DISJOINT,
    (_S, _X): Topology.DISJOINT,
    (_S, _V): Topology.DISJOINT,
    (_S, _E): Topology.DISJOINT,

    (_C, _S): Topology.DISJOINT,
    (_C, _C): Topology.COPLANAR,
    (_C, _X): Topology.INCONSISTENT,
    (_C, _V): Topology.INCONSISTENT,
    (_C, _E): Topology.INCONSISTENT,

    (_X, _S): Topology.DISJOINT,
    (_X, _C): Topology.INCONSISTENT,
    (_X, _X): Topology.TRANSVERSAL,
    (_X, _V): Topology.TOUCHING,
    (_X, _E): Topology.TOUCHING,

    (_V, _S): Topology.DISJOINT,
    (_V, _C): Topology.INCONSISTENT,
    (_V, _X): Topology.TOUCHING,
    (_V, _V): Topology.TOUCHING,
    (_V, _E): Topology.TOUCHING,

    (_E, _S): Topology.DISJOINT,
    (_E, _C): Topology.INCONSISTENT,
    (_E, _X): Topology.TOUCHING,
    (_E, _V): Topology.TOUCHING,
    (_E, _E): Topology.TOUCHING,
}


def classify_topology(signs_p: Signs, signs_q: Signs) -> Topology:
    """
    Decide the intersection topology from the two sign triples.

    Args:
        signs_p: vertices of the first triangle against the plane of the second
        signs_q: vertices of the second triangle against the plane of the first

    Returns:
        topology: Topology (INCONSISTENT for patterns no valid input produces)
    """
    return TOPOLOGY_TABLE.get(
        (sign_pattern(signs_p), sign_pattern(signs_q)), Topology.INCONSISTENT
    )


# ==================== Symbolic Assembler ====================

def _projection(tri: Triangle) -> Optional[Projection]:
    """
    Pick the axis to drop to map the plane of `tri` to 2D.

    Axes are tried by decreasing magnitude of the float normal, the first
    one with an exactly nonzero projected orientation wins.
    """
    a, b, c = tri
    normal = np.cross(np.subtract(b, a), np.subtract(c, a))
    for axis in np.argsort(-np.abs(normal), kind="stable"):
        axis = int(axis)
        orientation = orient2d_projected(a, b, c, axis)
        if orientation != 0:
            return axis, orientation
    return None


def _region_from_zeros(zeros: List[int], t: int) -> Optional[TriangleRegion]:
    """Region of triangle `t` given the edges the point lies on"""
    if not zeros:
        return interior_region(t)
    if len(zeros) == 1:
        return edge_region(t, zeros[0])
    if len(zeros) == 2:
        # Vertex shared by the two edges
        return vertex_region(t, 3 - zeros[0] - zeros[1])
    return None


def _locate_in_plane(
    p: Point3, tri: Triangle, t: int, projection: Projection
) -> Optional[TriangleRegion]:
    """Region of triangle `t` containing a point of its plane, None if outside"""
    axis, orientation = projection
    zeros = []
    for i in range(3):
        s = orientation * orient2d_projected(tri[(i + 1) % 3], tri[(i + 2) % 3], p, axis)
        if s < 0:
            return None
        if s == 0:
            zeros.append(i)
    return _region_from_zeros(zeros, t)


def _locate_crossing(
    a: Point3, b: Point3, tri: Triangle, t: int
) -> Optional[TriangleRegion]:
    """
    Region of triangle `t` crossed by segment [a, b].

    a and b must lie strictly on opposite sides of the plane of `tri`.
    The line (a, b) passes inside the triangle iff it turns the same way
    around its three edges.
    """
    signs = [orient3d(a, b, tri[(i + 1) % 3], tri[(i + 2) % 3]) for i in range(3)]
    if 1 in signs and -1 in signs:
        return None
    return _region_from_zeros([i for i in range(3) if signs[i] == 0], t)


def _strictly_between(a: Point3, b: Point3, q: Point3) -> bool:
    """For q on line (a, b): True if q lies strictly inside [a, b]"""
    for c in range(3):
        if a[c] != b[c]:
            lo, hi = (a[c], b[c]) if a[c] < b[c] else (b[c], a[c])
            return lo < q[c] < hi
    return False


def _segments_cross(a: Point3, b: Point3, u: Point3, v: Point3, axis: int) -> bool:
    """Proper crossing of two coplanar segments at an interior point of both"""
    if orient2d_projected(a, b, u, axis) * orient2d_projected(a, b, v, axis) >= 0:
        return False
    return orient2d_projected(u, v, a, axis) * orient2d_projected(u, v, b, axis) < 0


def _coplanar_segment_isects(
    a: Point3, b: Point3,
    la: TriangleRegion, lb: TriangleRegion, le: TriangleRegion,
    tri: Triangle, t: int, projection: Projection
) -> List[RegionPair]:
    """
    Symbolic intersection of segment [a, b] with a triangle of the same plane.

    Emits the endpoints of the segment-triangle intersection:
    segment endpoints inside the triangle, triangle vertices strictly
    inside the segment and proper edge/edge crossings.
    """
    axis = projection[0]
    out = []

    for p, lp in ((a, la), (b, lb)):
        rgn = _locate_in_plane(p, tri, t, projection)
        if rgn is not None:
            out.append((lp, rgn))

    for k in range(3):
        q = tri[k]
        if orient2d_projected(a, b, q, axis) == 0 and _strictly_between(a, b, q):
            out.append((le, vertex_region(t, k)))

    for i in range(3):
        if _segments_cross(a, b, tri[(i + 1) % 3], tri[(i + 2) % 3], axis):
            out.append((le, edge_region(t, i)))

    return out


def _edge_triangle_isects(
    tri_s: Triangle, s: int, signs_s: Signs,
    tri_t: Triangle, t: int,
    projection: Optional[Projection] = None
) -> List[RegionPair]:
    """
    Intersect the three edges of triangle `s` with triangle `t`.

    Args:
        tri_s, s: triangle whose edges are walked, and its index (0 or 1)
        signs_s: vertices of tri_s against the plane of tri_t
        tri_t, t: the other triangle and its index
        projection: 2D mapping of the plane of tri_t (computed on demand)

    Returns:
        pairs: (region of s, region of t) for every point found
    """
    out: List[RegionPair] = []
    for i in range(3):
        ia, ib = (i + 1) % 3, (i + 2) % 3
        sa, sb = signs_s[ia], signs_s[ib]
        if sa * sb > 0:
            continue

        a, b = tri_s[ia], tri_s[ib]
        la, lb = vertex_region(s, ia), vertex_region(s, ib)
        le = edge_region(s, i)

        if sa != 0 and sb != 0:
            rgn = _locate_crossing(a, b, tri_t, t)
            if rgn is not None:
                out.append((le, rgn))
            continue

        if projection is None:
            projection = _projection(tri_t)
            if projection is None:
                return out

        if sa == 0 and sb == 0:
            out.extend(_coplanar_segment_isects(a, b, la, lb, le, tri_t, t, projection))
        else:
            p, lp = (a, la) if sa == 0 else (b, lb)
            rgn = _locate_in_plane(p, tri_t, t, projection)
            if rgn is not None:
                out.append((lp, rgn))
    return out


def _assemble_coplanar(P: Triangle, Q: Triangle, signs_p: Signs, signs_q: Signs) -> List[RegionPair]:
    # Same plane: one projection axis serves both triangles
    proj_p = _projection(P)
    if proj_p is None:
        return []
    axis = proj_p[0]
    orientation_q = orient2d_projected(Q[0], Q[1], Q[2], axis)
    if orientation_q == 0:
        return []
    pairs = _edge_triangle_isects(P, 0, signs_p, Q, 1, (axis, orientation_q))
    pairs += [
        (first, second) for second, first in
        _edge_triangle_isects(Q, 1, signs_q, P, 0, proj_p)
    ]
    return pairs


def _assemble_non_coplanar(P: Triangle, Q: Triangle, signs_p: Signs, signs_q: Signs) -> List[RegionPair]:
    pairs = _edge_triangle_isects(P, 0, signs_p, Q, 1)
    pairs += [
        (first, second) for second, first in
        _edge_triangle_isects(Q, 1, signs_q, P, 0)
    ]
    return pairs


ASSEMBLERS: Dict[Topology, Callable[[Triangle, Triangle, Signs, Signs], List[RegionPair]]] = {
    Topology.COPLANAR: _assemble_coplanar,
    Topology.TRANSVERSAL: _assemble_non_coplanar,
    Topology.TOUCHING: _assemble_non_coplanar,
}


# ==================== Degeneracy Filter ====================

def shares_vertex(P: Sequence[Point3], Q: Sequence[Point3]) -> bool:
    """True if a vertex of P and a vertex of Q have identical coordinates"""
    return any(tuple(p) == tuple(q) for p in P for q in Q)


def _bboxes_overlap(P: Triangle, Q: Triangle) -> bool:
    for c in range(3):
        if max(p[c] for p in P) < min(q[c] for q in Q):
            return False
        if max(q[c] for q in Q) < min(p[c] for p in P):
            return False
    return True


# ==================== Public API ====================

def triangles_intersections(p0, p1, p2, q0, q1, q2) -> TriangleIntersection:
    """
    Symbolic triangle-triangle intersection.

    The input triangles are supposed to be non-degenerate. When the
    intersection is a coplanar overlap, the returned vertices are not
    sorted; order them by computing their convex hull if needed.

    Args:
        p0, p1, p2: first triangle (length-3 sequences, arrays or tensors)
        q0, q1, q2: second triangle

    Returns:
        result: TriangleIntersection
            - hit: True if there is a non-degenerate intersection
            - isects: between 0 and 6 TriangleIsect, (T1 region, T2 region)
        Triangles sharing one vertex, an edge, or identical triangles are
        degenerate contacts and yield (False, ()).

    Raises:
        ValueError: if a point does not have exactly 3 coordinates
    """
    P: Triangle = (_as_point(p0), _as_point(p1), _as_point(p2))
    Q: Triangle = (_as_point(q0), _as_point(q1), _as_point(q2))

    if shares_vertex(P, Q):
        return TriangleIntersection.EMPTY
    if not _bboxes_overlap(P, Q):
        return TriangleIntersection.EMPTY

    signs_q = classify_vertices(*P, *Q)
    if sign_pattern(signs_q) == SignPattern.SEPARATED:
        return TriangleIntersection.EMPTY
    signs_p = classify_vertices(*Q, *P)

    topology = classify_topology(signs_p, signs_q)
    if topology == Topology.DISJOINT:
        return TriangleIntersection.EMPTY

    assemble = ASSEMBLERS.get(topology)
    if assemble is None:
        logger.warning(
            "Unhandled sign patterns %s / %s (%s), reporting no intersection",
            signs_p, signs_q, topology.value
        )
        return TriangleIntersection.EMPTY

    pairs = list(dict.fromkeys(assemble(P, Q, signs_p, signs_q)))
    if not pairs:
        return TriangleIntersection.EMPTY

    return TriangleIntersection(True, tuple(TriangleIsect(a, b) for a, b in pairs))


def triangles_intersect(p0, p1, p2, q0, q1, q2) -> bool:
    """Boolean form of triangles_intersections (discards the symbolic detail)"""
    return triangles_intersections(p0, p1, p2, q0, q1, q2).hit


def triangles_topology(p0, p1, p2, q0, q1, q2) -> Topology:
    """Topology class of a pair of triangles, before the degeneracy filter"""
    P: Triangle = (_as_point(p0), _as_point(p1), _as_point(p2))
    Q: Triangle = (_as_point(q0), _as_point(q1), _as_point(q2))
    return classify_topology(classify_vertices(*Q, *P), classify_vertices(*P, *Q))
