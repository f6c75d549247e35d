"""Tests for the batched PyTorch front-end."""
import pytest
import torch
import trimesh

from isect3d import TriangleIntersector, TriangleRegion, triangles_intersections
from isect3d.core.predicates import orient3d
from isect3d.kernels import orient3d_filter, plane_separated

R = TriangleRegion

UNIT = [[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.0, 1.0, 0.0]]
PIERCING = [[0.0, 0.0, 1.0], [1.0, 0.0, 1.0], [0.0, 1.0, -1.0]]
FAR = [[5.0, 5.0, 5.0], [6.0, 5.0, 5.0], [5.0, 6.0, 5.0]]
SHARED_EDGE = [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [1.0, 1.0, 0.5]]


@pytest.fixture
def intersector():
    return TriangleIntersector(device="cpu")


def box_triangles(offset=(0.0, 0.0, 0.0)):
    mesh = trimesh.creation.box(extents=[1.0, 1.0, 1.0])
    mesh.apply_translation(offset)
    return torch.tensor(mesh.triangles, dtype=torch.float64)


class TestKernels:

    def test_orient3d_filter_matches_scalar(self):
        gen = torch.Generator().manual_seed(0)
        pts = torch.rand(256, 4, 3, generator=gen, dtype=torch.float64)
        sign, certain = orient3d_filter(pts[:, 0], pts[:, 1], pts[:, 2], pts[:, 3])
        assert certain.all()
        for i in range(pts.shape[0]):
            a, b, c, d = pts[i].tolist()
            assert sign[i].item() == orient3d(a, b, c, d)

    def test_coplanar_is_uncertain(self):
        a = torch.tensor([[0.0, 0.0, 0.0]])
        b = torch.tensor([[1.0, 0.0, 0.0]])
        c = torch.tensor([[0.0, 1.0, 0.0]])
        d = torch.tensor([[0.3, 0.7, 0.0]])
        _, certain = orient3d_filter(a, b, c, d)
        assert not certain.any()

    def test_plane_separated(self):
        tris_a = torch.tensor([UNIT, UNIT, UNIT], dtype=torch.float64)
        tris_b = torch.tensor([FAR, PIERCING, SHARED_EDGE], dtype=torch.float64)
        assert plane_separated(tris_a, tris_b).tolist() == [True, False, False]


class TestIntersectPairs:

    def test_mixed_batch(self, intersector):
        tris_a = torch.tensor([UNIT, UNIT, UNIT], dtype=torch.float64)
        tris_b = torch.tensor([PIERCING, FAR, SHARED_EDGE], dtype=torch.float64)
        result = intersector.intersect_pairs(tris_a, tris_b)

        assert result.hit.tolist() == [True, False, False]
        assert result.counts.tolist() == [2, 0, 0]
        assert result.regions.shape == (2, 2)
        assert set(result.get_isects(0)) == {
            (R.T1_RGN_E0, R.T2_RGN_E0),
            (R.T1_RGN_E1, R.T2_RGN_E1),
        }
        assert result.get_isects(1) == []

    def test_accepts_nested_lists(self, intersector):
        result = intersector.intersect_pairs([UNIT], [PIERCING])
        assert result.hit.tolist() == [True]

    def test_empty_batch(self, intersector):
        empty = torch.zeros(0, 3, 3, dtype=torch.float64)
        result = intersector.intersect_pairs(empty, empty)
        assert result.hit.shape == (0,)
        assert result.regions.shape == (0, 2)

    def test_matches_scalar_path(self):
        gen = torch.Generator().manual_seed(7)
        tris_a = torch.rand(300, 3, 3, generator=gen, dtype=torch.float64)
        tris_b = torch.rand(300, 3, 3, generator=gen, dtype=torch.float64)
        result = TriangleIntersector(device="cpu", chunk_size=64).intersect_pairs(tris_a, tris_b)

        for i in range(tris_a.shape[0]):
            expected = triangles_intersections(*tris_a[i].tolist(), *tris_b[i].tolist())
            assert result.hit[i].item() == expected.hit
            assert result.counts[i].item() == len(expected)
            assert result.get_isects(i) == list(expected.isects)

    def test_length_mismatch(self, intersector):
        with pytest.raises(ValueError, match="same length"):
            intersector.intersect_pairs([UNIT, UNIT], [PIERCING])

    def test_bad_shape(self, intersector):
        with pytest.raises(ValueError, match="tris_a shape"):
            intersector.intersect_pairs(torch.zeros(2, 3), torch.zeros(2, 3, 3))

    def test_bad_chunk_size(self):
        with pytest.raises(ValueError, match="chunk_size"):
            TriangleIntersector(chunk_size=0)


class TestSoups:

    def test_intersect_soups(self, intersector):
        soup_a = torch.tensor([FAR, UNIT], dtype=torch.float64)
        soup_b = torch.tensor([SHARED_EDGE, PIERCING, FAR], dtype=torch.float64)
        result = intersector.intersect_soups(soup_a, soup_b)

        # FAR vs FAR is identical (degenerate), UNIT vs SHARED_EDGE shares an edge
        assert result.face_ids_a.tolist() == [1]
        assert result.face_ids_b.tolist() == [1]
        assert result.hit.tolist() == [True]
        assert result.counts.tolist() == [2]
        assert result.pair_ids.tolist() == [0, 0]

    def test_closed_box_has_no_self_intersection(self, intersector):
        result = intersector.check_self_intersection(box_triangles())
        assert result.hit.shape == (0,)
        assert result.regions.shape == (0, 2)

    def test_overlapping_boxes(self):
        soup = torch.cat([box_triangles(), box_triangles((0.5, 0.5, 0.5))])
        result = TriangleIntersector(device="cpu", chunk_size=5).check_self_intersection(soup)

        assert result.hit.shape[0] > 0
        assert result.hit.all()
        assert (result.face_ids_a < result.face_ids_b).all()
        # Faces of the same box never intersect each other
        assert (result.face_ids_a < 12).all()
        assert (result.face_ids_b >= 12).all()
        assert (result.counts <= 2).all()
        assert int(result.counts.sum()) == result.regions.shape[0]
