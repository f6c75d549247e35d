"""Apps module exports"""

from .triangle_intersector import TriangleIntersector

__all__ = [
    "TriangleIntersector",
]
