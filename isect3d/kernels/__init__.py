"""
Isect3D PyTorch Kernels

Vectorized float64 versions of the orientation predicate, used as a
broadphase before the exact per-pair computation. Every answer is either
certified by the static error bound or flagged as uncertain, never guessed.
"""

from typing import Tuple
import torch

from ..core.predicates import O3D_ERRBOUND, SAFE_MAX, SAFE_MIN


def _safe_range(diffs: torch.Tensor) -> torch.Tensor:
    """[..., K] -> [...] True if every nonzero entry is in [SAFE_MIN, SAFE_MAX]"""
    mag = diffs.abs()
    bad = (mag != 0) & ((mag < SAFE_MIN) | (mag > SAFE_MAX))
    return ~bad.any(dim=-1)


def orient3d_filter(
    a: torch.Tensor,
    b: torch.Tensor,
    c: torch.Tensor,
    d: torch.Tensor
) -> Tuple[torch.Tensor, torch.Tensor]:
    """
    Batched orientation sign with certification.

    Args:
        a, b, c, d: [..., 3] points (broadcastable), evaluated in float64

    Returns:
        sign: [...] int8 sign of det[b-a, c-a, d-a] (meaningful where certain)
        certain: [...] bool whether the float sign is guaranteed exact
    """
    a = a.double()
    ba = b.double() - a
    ca = c.double() - a
    da = d.double() - a

    bx, by, bz = ba.unbind(-1)
    cx, cy, cz = ca.unbind(-1)
    dx, dy, dz = da.unbind(-1)

    cydz = cy * dz
    czdy = cz * dy
    czdx = cz * dx
    cxdz = cx * dz
    cxdy = cx * dy
    cydx = cy * dx

    det = bx * (cydz - czdy) + by * (czdx - cxdz) + bz * (cxdy - cydx)
    permanent = (
        (cydz.abs() + czdy.abs()) * bx.abs()
        + (czdx.abs() + cxdz.abs()) * by.abs()
        + (cxdy.abs() + cydx.abs()) * bz.abs()
    )
    errbound = O3D_ERRBOUND * permanent

    safe = _safe_range(torch.cat([ba, ca, da], dim=-1))
    certain = safe & (det.abs() > errbound)
    sign = torch.sign(det).to(torch.int8)
    return sign, certain


def triangle_aabbs(tris: torch.Tensor) -> Tuple[torch.Tensor, torch.Tensor]:
    """
    Per-triangle AABBs.

    Args:
        tris: [N, 3, 3] triangle vertices

    Returns:
        aabb_min: [N, 3]
        aabb_max: [N, 3]
    """
    return tris.min(dim=1)[0], tris.max(dim=1)[0]


def plane_separated(tris_a: torch.Tensor, tris_b: torch.Tensor) -> torch.Tensor:
    """
    Certified plane separation of triangle pairs.

    A pair is separated when all vertices of one triangle lie strictly on
    the same side of the plane of the other, with every sign certified.

    Args:
        tris_a: [N, 3, 3]
        tris_b: [N, 3, 3]

    Returns:
        separated: [N] bool
    """
    def _one_side(plane: torch.Tensor, pts: torch.Tensor) -> torch.Tensor:
        p0, p1, p2 = plane[:, None, 0], plane[:, None, 1], plane[:, None, 2]
        sign, certain = orient3d_filter(p0, p1, p2, pts)
        all_pos = (sign > 0).all(dim=1)
        all_neg = (sign < 0).all(dim=1)
        return certain.all(dim=1) & (all_pos | all_neg)

    return _one_side(tris_a, tris_b) | _one_side(tris_b, tris_a)
