"""
Data structures for Isect3D
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Iterator, List, NamedTuple, Optional, Tuple
import torch


class TriangleRegion(IntEnum):
    """
    Location of a point within one of the two triangles.

    A point can be located in 7 regions of each triangle: its three
    vertices (P0, P1, P2), its three edges (Ei is the edge opposite to
    vertex Pi) and its interior (T). T1_* symbols refer to the first
    triangle, T2_* symbols to the second one.
    """
    T1_RGN_P0 = 0
    T1_RGN_P1 = 1
    T1_RGN_P2 = 2

    T2_RGN_P0 = 3
    T2_RGN_P1 = 4
    T2_RGN_P2 = 5

    T1_RGN_E0 = 6
    T1_RGN_E1 = 7
    T1_RGN_E2 = 8

    T2_RGN_E0 = 9
    T2_RGN_E1 = 10
    T2_RGN_E2 = 11

    T1_RGN_T = 12
    T2_RGN_T = 13

    @property
    def triangle(self) -> int:
        """0 for a feature of the first triangle, 1 for the second"""
        if self <= 2:
            return 0
        if self <= 5:
            return 1
        if self <= 8:
            return 0
        if self <= 11:
            return 1
        return self - 12

    @property
    def dim(self) -> int:
        """0 for a vertex, 1 for an edge, 2 for the interior"""
        if self <= 5:
            return 0
        if self <= 11:
            return 1
        return 2

    @property
    def index(self) -> Optional[int]:
        """Local vertex / edge index, None for the interior"""
        if self.dim == 2:
            return None
        return self % 3

    def mirrored(self) -> "TriangleRegion":
        """Same feature on the other triangle"""
        if self.dim == 2:
            return interior_region(1 - self.triangle)
        if self.dim == 1:
            return edge_region(1 - self.triangle, self.index)
        return vertex_region(1 - self.triangle, self.index)


T_RGN_NB = 14


def vertex_region(triangle: int, i: int) -> TriangleRegion:
    return TriangleRegion(3 * triangle + i)


def edge_region(triangle: int, i: int) -> TriangleRegion:
    return TriangleRegion(6 + 3 * triangle + i)


def interior_region(triangle: int) -> TriangleRegion:
    return TriangleRegion(12 + triangle)


class TriangleIsect(NamedTuple):
    """
    One vertex of the intersection, as a pair of regions.

    `first` is the feature of the first triangle and `second` the feature
    of the second triangle that contain the point.
    """
    first: TriangleRegion
    second: TriangleRegion

    def mirrored(self) -> "TriangleIsect":
        """The same point, seen with the two triangles exchanged"""
        return TriangleIsect(self.second.mirrored(), self.first.mirrored())

    def __str__(self) -> str:
        from .formatting import isect_to_string
        return isect_to_string(self)


class Topology(Enum):
    """Intersection topology decided from the two sign triples"""
    DISJOINT = "disjoint"
    COPLANAR = "coplanar"
    TRANSVERSAL = "transversal"
    TOUCHING = "touching"
    INCONSISTENT = "inconsistent"


@dataclass(frozen=True)
class TriangleIntersection:
    """Symbolic triangle-triangle intersection result"""
    hit: bool                                            # non-degenerate intersection
    isects: Tuple[TriangleIsect, ...] = field(default=())  # 0..6 unordered region pairs

    def __bool__(self) -> bool:
        return self.hit

    def __len__(self) -> int:
        return len(self.isects)

    def __iter__(self) -> Iterator[TriangleIsect]:
        return iter(self.isects)

    def mirrored(self) -> "TriangleIntersection":
        """Result of the same query with the two triangles exchanged"""
        return TriangleIntersection(self.hit, tuple(i.mirrored() for i in self.isects))

    def __str__(self) -> str:
        from .formatting import isects_to_string
        return isects_to_string(self.isects)


TriangleIntersection.EMPTY = TriangleIntersection(False, ())


@dataclass
class TriangleIntersectResult:
    """Batched triangle-triangle intersection result"""
    hit: torch.Tensor           # [N] bool non-degenerate intersection per pair
    counts: torch.Tensor        # [N] int32 number of region pairs per pair
    pair_ids: torch.Tensor      # [total] int64 owning pair of each region pair
    regions: torch.Tensor       # [total, 2] int64 TriangleRegion values (first, second)
    face_ids_a: Optional[torch.Tensor] = None  # [N] int64 triangle index in first soup
    face_ids_b: Optional[torch.Tensor] = None  # [N] int64 triangle index in second soup

    def get_isects(self, idx: int) -> List[TriangleIsect]:
        """Get the symbolic intersection of the specified pair"""
        rows = self.regions[self.pair_ids == idx].tolist()
        return [TriangleIsect(TriangleRegion(a), TriangleRegion(b)) for a, b in rows]
