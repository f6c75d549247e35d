"""Tests for region symbols, result types and debug formatting."""
import pytest

from isect3d import (
    T_RGN_NB,
    TriangleIntersection,
    TriangleIsect,
    TriangleRegion,
    isect_to_string,
    isects_to_string,
    region_to_string,
)
from isect3d.core.data_structures import edge_region, interior_region, vertex_region

R = TriangleRegion


class TestTriangleRegion:
    """Numbering and per-triangle partition of the 14 region symbols."""

    def test_numbering(self):
        assert len(TriangleRegion) == T_RGN_NB == 14
        assert R.T1_RGN_P0 == 0
        assert R.T2_RGN_P0 == 3
        assert R.T1_RGN_E0 == 6
        assert R.T2_RGN_E0 == 9
        assert R.T1_RGN_T == 12
        assert R.T2_RGN_T == 13

    def test_partition_per_triangle(self):
        first = {r for r in TriangleRegion if r.triangle == 0}
        second = {r for r in TriangleRegion if r.triangle == 1}
        assert len(first) == len(second) == 7
        assert first.isdisjoint(second)
        assert all(r.name.startswith("T1_") for r in first)
        assert all(r.name.startswith("T2_") for r in second)

    @pytest.mark.parametrize("rgn,triangle,dim,index", [
        (R.T1_RGN_P0, 0, 0, 0),
        (R.T2_RGN_P2, 1, 0, 2),
        (R.T1_RGN_E0, 0, 1, 0),
        (R.T2_RGN_E1, 1, 1, 1),
        (R.T1_RGN_E2, 0, 1, 2),
        (R.T1_RGN_T, 0, 2, None),
        (R.T2_RGN_T, 1, 2, None),
    ])
    def test_features(self, rgn, triangle, dim, index):
        assert rgn.triangle == triangle
        assert rgn.dim == dim
        assert rgn.index == index

    def test_constructors(self):
        assert vertex_region(1, 2) is R.T2_RGN_P2
        assert edge_region(0, 1) is R.T1_RGN_E1
        assert interior_region(1) is R.T2_RGN_T

    def test_mirrored(self):
        assert R.T1_RGN_E2.mirrored() is R.T2_RGN_E2
        assert R.T2_RGN_P0.mirrored() is R.T1_RGN_P0
        assert R.T1_RGN_T.mirrored() is R.T2_RGN_T
        for rgn in TriangleRegion:
            assert rgn.mirrored().mirrored() is rgn
            assert rgn.mirrored().triangle != rgn.triangle


class TestTriangleIsect:

    def test_fields(self):
        isect = TriangleIsect(R.T1_RGN_E0, R.T2_RGN_T)
        assert isect.first is R.T1_RGN_E0
        assert isect.second is R.T2_RGN_T
        assert isect == (R.T1_RGN_E0, R.T2_RGN_T)

    def test_mirrored(self):
        isect = TriangleIsect(R.T1_RGN_E0, R.T2_RGN_T)
        assert isect.mirrored() == (R.T1_RGN_T, R.T2_RGN_E0)


class TestTriangleIntersection:

    def test_empty(self):
        empty = TriangleIntersection.EMPTY
        assert not empty
        assert len(empty) == 0
        assert list(empty) == []

    def test_hit(self):
        res = TriangleIntersection(True, (TriangleIsect(R.T1_RGN_T, R.T2_RGN_P1),))
        assert res
        assert len(res) == 1
        assert res.mirrored().isects == ((R.T1_RGN_P1, R.T2_RGN_T),)


class TestFormatting:
    """Debug rendering of regions and region pairs."""

    @pytest.mark.parametrize("rgn,text", [
        (R.T1_RGN_P0, "T1.P0"),
        (R.T2_RGN_P2, "T2.P2"),
        (R.T1_RGN_E1, "T1.E1"),
        (R.T2_RGN_E0, "T2.E0"),
        (R.T1_RGN_T, "T1.T"),
        (R.T2_RGN_T, "T2.T"),
    ])
    def test_region_to_string(self, rgn, text):
        assert region_to_string(rgn) == text

    def test_region_to_string_accepts_int(self):
        assert region_to_string(10) == "T2.E1"

    def test_isect_to_string(self):
        isect = TriangleIsect(R.T1_RGN_E0, R.T2_RGN_T)
        assert isect_to_string(isect) == "(T1.E0,T2.T)"
        assert str(isect) == "(T1.E0,T2.T)"

    def test_isects_to_string(self):
        isects = [
            TriangleIsect(R.T1_RGN_E0, R.T2_RGN_T),
            TriangleIsect(R.T1_RGN_P2, R.T2_RGN_E1),
        ]
        assert isects_to_string(isects) == "(T1.E0,T2.T) (T1.P2,T2.E1) "
        assert str(TriangleIntersection(True, tuple(isects))) == isects_to_string(isects)

    def test_empty_sequence(self):
        assert isects_to_string([]) == ""
        assert str(TriangleIntersection.EMPTY) == ""
