"""
Debug rendering of symbolic intersections.

    region_to_string(TriangleRegion.T2_RGN_E1)  -> "T2.E1"
    isect_to_string(isect)                      -> "(T1.E0,T2.T)"
    isects_to_string(isects)                    -> "(T1.E0,T2.T) (T1.P2,T2.E1) "
"""

from typing import Iterable

from .data_structures import TriangleIsect, TriangleRegion

_FEATURE_PREFIX = ("P", "E")


def region_to_string(rgn: TriangleRegion) -> str:
    rgn = TriangleRegion(rgn)
    tri = "T1" if rgn.triangle == 0 else "T2"
    if rgn.dim == 2:
        return f"{tri}.T"
    return f"{tri}.{_FEATURE_PREFIX[rgn.dim]}{rgn.index}"


def isect_to_string(isect: TriangleIsect) -> str:
    first, second = isect
    return f"({region_to_string(first)},{region_to_string(second)})"


def isects_to_string(isects: Iterable[TriangleIsect]) -> str:
    # Trailing separator after each element, like the stream form
    return "".join(isect_to_string(i) + " " for i in isects)
