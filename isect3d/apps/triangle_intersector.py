"""
TriangleIntersector: batched symbolic triangle-triangle intersection
"""

import logging
from typing import List, Optional, Tuple, Union

import numpy as np
import torch

from ..core.data_structures import TriangleIntersectResult
from ..core.device_utils import as_triangles, resolve_device
from ..core.triangle_intersection import triangles_intersections
from ..kernels import plane_separated, triangle_aabbs

logger = logging.getLogger(__name__)

TriangleBatch = Union[torch.Tensor, np.ndarray]


class TriangleIntersector:
    """
    Batched triangle-triangle intersection.

    = torch broadphase + exact triangles_intersections per candidate

    Broadphase (vectorized, on `device`):
        - AABB overlap
        - certified plane separation (float64 orientation with error bound)
    Narrowphase (CPU, exact):
        - symbolic intersection of every surviving pair

    Pairs of triangles sharing a vertex or an edge are never reported, so
    adjacent faces of a mesh given as a triangle soup are skipped for free.

    Args:
        device: Broadphase device (None = infer from inputs, else cuda/cpu)
        chunk_size: Tile size for all-pairs AABB tests
    """

    def __init__(
        self,
        device: Optional[Union[str, torch.device]] = None,
        chunk_size: int = 2048
    ):
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.device = device
        self.chunk_size = chunk_size

    # ==================== Pairwise ====================

    def intersect_pairs(
        self,
        tris_a: TriangleBatch,
        tris_b: TriangleBatch
    ) -> TriangleIntersectResult:
        """
        Intersect triangle tris_a[i] with tris_b[i] for every i.

        Args:
            tris_a: [N, 3, 3] first triangles
            tris_b: [N, 3, 3] second triangles

        Returns:
            result: TriangleIntersectResult
                - hit: [N] bool
                - counts: [N] int32
                - pair_ids: [total] int64
                - regions: [total, 2] int64
        """
        device = resolve_device(tris_a, tris_b, device=self.device)
        tris_a = as_triangles(tris_a, device, "tris_a")
        tris_b = as_triangles(tris_b, device, "tris_b")
        if tris_a.shape[0] != tris_b.shape[0]:
            raise ValueError(
                f"tris_a and tris_b must have the same length, "
                f"got {tris_a.shape[0]} and {tris_b.shape[0]}"
            )

        N = tris_a.shape[0]
        candidates = torch.where(self._broadphase_pairs(tris_a, tris_b))[0]

        hit = [False] * N
        counts = [0] * N
        pair_ids: List[int] = []
        regions: List[Tuple[int, int]] = []

        cand_list = candidates.tolist()
        verts_a = tris_a[candidates].cpu().tolist()
        verts_b = tris_b[candidates].cpu().tolist()

        for i, ta, tb in zip(cand_list, verts_a, verts_b):
            result = triangles_intersections(*ta, *tb)
            if not result.hit:
                continue
            hit[i] = True
            counts[i] = len(result)
            for isect in result:
                pair_ids.append(i)
                regions.append((int(isect.first), int(isect.second)))

        logger.debug(
            "intersect_pairs: %d pairs, %d candidates, %d hits",
            N, len(cand_list), sum(hit)
        )

        return TriangleIntersectResult(
            hit=torch.tensor(hit, dtype=torch.bool, device=device),
            counts=torch.tensor(counts, dtype=torch.int32, device=device),
            pair_ids=torch.tensor(pair_ids, dtype=torch.int64, device=device),
            regions=torch.tensor(regions, dtype=torch.int64, device=device).reshape(-1, 2),
        )

    def _broadphase_pairs(
        self,
        tris_a: torch.Tensor,
        tris_b: torch.Tensor
    ) -> torch.Tensor:
        """[N] bool: pairs that may intersect"""
        N = tris_a.shape[0]
        keep = torch.zeros(N, dtype=torch.bool, device=tris_a.device)

        for i0 in range(0, N, self.chunk_size):
            i1 = min(i0 + self.chunk_size, N)
            a = tris_a[i0:i1]
            b = tris_b[i0:i1]
            min_a, max_a = triangle_aabbs(a)
            min_b, max_b = triangle_aabbs(b)
            overlap = ((min_a <= max_b) & (max_a >= min_b)).all(dim=1)
            keep[i0:i1] = overlap & ~plane_separated(a, b)

        return keep

    # ==================== All pairs ====================

    def intersect_soups(
        self,
        tris_a: TriangleBatch,
        tris_b: TriangleBatch
    ) -> TriangleIntersectResult:
        """
        Find all intersecting pairs between two triangle soups.

        Args:
            tris_a: [N, 3, 3]
            tris_b: [M, 3, 3]

        Returns:
            result: TriangleIntersectResult restricted to hitting pairs,
                with face_ids_a / face_ids_b giving the triangle indices
        """
        device = resolve_device(tris_a, tris_b, device=self.device)
        tris_a = as_triangles(tris_a, device, "tris_a")
        tris_b = as_triangles(tris_b, device, "tris_b")

        cand_a, cand_b = self._chunked_broadphase(tris_a, tris_b)
        return self._intersect_candidates(tris_a, tris_b, cand_a, cand_b)

    def check_self_intersection(self, tris: TriangleBatch) -> TriangleIntersectResult:
        """
        Find all intersecting pairs (i < j) inside one triangle soup.

        Faces sharing a vertex or an edge are degenerate contacts and are
        not reported.

        Args:
            tris: [N, 3, 3]

        Returns:
            result: TriangleIntersectResult restricted to hitting pairs
        """
        device = resolve_device(tris, device=self.device)
        tris = as_triangles(tris, device, "tris")

        cand_a, cand_b = self._chunked_broadphase(tris, tris)
        upper = cand_a < cand_b
        return self._intersect_candidates(tris, tris, cand_a[upper], cand_b[upper])

    def _intersect_candidates(
        self,
        tris_a: torch.Tensor,
        tris_b: torch.Tensor,
        cand_a: torch.Tensor,
        cand_b: torch.Tensor
    ) -> TriangleIntersectResult:
        """Run intersect_pairs on candidate pairs and keep the hits."""
        result = self.intersect_pairs(tris_a[cand_a], tris_b[cand_b])

        hit_idx = torch.where(result.hit)[0]
        remap = torch.full(
            (result.hit.shape[0],), -1, dtype=torch.int64, device=result.hit.device
        )
        remap[hit_idx] = torch.arange(hit_idx.shape[0], device=result.hit.device)

        return TriangleIntersectResult(
            hit=result.hit[hit_idx],
            counts=result.counts[hit_idx],
            pair_ids=remap[result.pair_ids],
            regions=result.regions,
            face_ids_a=cand_a[hit_idx],
            face_ids_b=cand_b[hit_idx],
        )

    def _chunked_broadphase(
        self,
        tris_a: torch.Tensor,
        tris_b: torch.Tensor
    ) -> Tuple[torch.Tensor, torch.Tensor]:
        """Chunked all-pairs AABB-AABB overlap."""
        N = tris_a.shape[0]
        M = tris_b.shape[0]
        min_a, max_a = triangle_aabbs(tris_a)
        min_b, max_b = triangle_aabbs(tris_b)
        chunk = self.chunk_size

        all_cand_a = []
        all_cand_b = []

        for a0 in range(0, N, chunk):
            a1 = min(a0 + chunk, N)
            min_a_chunk = min_a[a0:a1]
            max_a_chunk = max_a[a0:a1]

            for b0 in range(0, M, chunk):
                b1 = min(b0 + chunk, M)
                overlap = (min_a_chunk[:, None, :] <= max_b[None, b0:b1, :]) & \
                          (max_a_chunk[:, None, :] >= min_b[None, b0:b1, :])

                local_a, local_b = torch.where(overlap.all(dim=2))
                if local_a.numel() > 0:
                    all_cand_a.append(local_a + a0)
                    all_cand_b.append(local_b + b0)

        if len(all_cand_a) == 0:
            device = tris_a.device
            return torch.empty(0, dtype=torch.long, device=device), \
                   torch.empty(0, dtype=torch.long, device=device)

        return torch.cat(all_cand_a), torch.cat(all_cand_b)
