"""
Shared test fixtures for symbolic triangle intersection tests.
"""
import sys
from pathlib import Path

import pytest

# Allow running the suite from a source checkout
sys.path.insert(0, str(Path(__file__).parent.parent))

from isect3d import TriangleIntersection


def mirror(result: TriangleIntersection) -> set:
    """Pairs of a result, expressed as if the triangles were exchanged."""
    return {isect.mirrored() for isect in result}


@pytest.fixture
def unit_triangle():
    """Right triangle (0,0,0), (1,0,0), (0,1,0) in the z=0 plane."""
    return [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0)]


@pytest.fixture
def piercing_triangle():
    """Triangle whose plane crosses the unit triangle through its interior."""
    return [(0.0, 0.0, 1.0), (1.0, 0.0, 1.0), (0.0, 1.0, -1.0)]


@pytest.fixture
def coplanar_overlap_triangle():
    """Triangle of the z=0 plane overlapping the unit triangle."""
    return [(0.5, -0.5, 0.0), (0.5, 1.5, 0.0), (-1.0, 0.5, 0.0)]
