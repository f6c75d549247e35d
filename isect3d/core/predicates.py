"""
Orientation predicates for Isect3D

Exact signs of the 2D and 3D orientation determinants. A float evaluation
guarded by a static error bound (Shewchuk's stage A filter) answers almost
every query; the remaining ones are settled with exact rational arithmetic.

Points are plain tuples of Python floats. Only the sign is returned:
    +1: positive determinant
     0: exactly degenerate (coplanar / collinear)
    -1: negative determinant
"""

from fractions import Fraction
from typing import Sequence, Tuple

Point3 = Tuple[float, float, float]
Point2 = Tuple[float, float]

# Machine epsilon for round-to-nearest doubles (half an ulp of 1.0)
EPSILON = 2.0 ** -53

# Static error bounds relative to the permanent of the determinant
O3D_ERRBOUND = (7.0 + 56.0 * EPSILON) * EPSILON
CCW_ERRBOUND = (3.0 + 16.0 * EPSILON) * EPSILON

# Coordinate differences outside this range may underflow or overflow
# once multiplied together, which voids the static bounds above.
SAFE_MIN = 2.0 ** -300
SAFE_MAX = 2.0 ** 300


def _sign(value) -> int:
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


def _in_safe_range(*values: float) -> bool:
    """True if every nonzero value has a magnitude in [SAFE_MIN, SAFE_MAX]."""
    for v in values:
        m = abs(v)
        if m != 0.0 and not (SAFE_MIN <= m <= SAFE_MAX):
            return False
    return True


# ==================== 3D ====================

def orient3d_exact(a: Sequence[float], b: Sequence[float],
                   c: Sequence[float], d: Sequence[float]) -> int:
    """
    Exact sign of det[b-a, c-a, d-a] using rational arithmetic.

    Every double converts to a Fraction without rounding, so the result is
    the true sign. Slow; used as fallback and as test reference.
    """
    ax, ay, az = Fraction(a[0]), Fraction(a[1]), Fraction(a[2])
    bx, by, bz = Fraction(b[0]) - ax, Fraction(b[1]) - ay, Fraction(b[2]) - az
    cx, cy, cz = Fraction(c[0]) - ax, Fraction(c[1]) - ay, Fraction(c[2]) - az
    dx, dy, dz = Fraction(d[0]) - ax, Fraction(d[1]) - ay, Fraction(d[2]) - az

    det = (
        bx * (cy * dz - cz * dy)
        + by * (cz * dx - cx * dz)
        + bz * (cx * dy - cy * dx)
    )
    return _sign(det)


def orient3d(a: Sequence[float], b: Sequence[float],
             c: Sequence[float], d: Sequence[float]) -> int:
    """
    Sign of the signed volume of tetrahedron (a, b, c, d).

    Positive when d lies on the side pointed to by the normal
    (b-a) x (c-a) of triangle (a, b, c), zero when the four points
    are coplanar.

    Args:
        a, b, c, d: 3D points (any indexable of 3 floats)

    Returns:
        sign: -1, 0 or +1, always exact
    """
    bx, by, bz = b[0] - a[0], b[1] - a[1], b[2] - a[2]
    cx, cy, cz = c[0] - a[0], c[1] - a[1], c[2] - a[2]
    dx, dy, dz = d[0] - a[0], d[1] - a[1], d[2] - a[2]

    if _in_safe_range(bx, by, bz, cx, cy, cz, dx, dy, dz):
        cydz = cy * dz
        czdy = cz * dy
        czdx = cz * dx
        cxdz = cx * dz
        cxdy = cx * dy
        cydx = cy * dx

        det = (
            bx * (cydz - czdy)
            + by * (czdx - cxdz)
            + bz * (cxdy - cydx)
        )
        permanent = (
            (abs(cydz) + abs(czdy)) * abs(bx)
            + (abs(czdx) + abs(cxdz)) * abs(by)
            + (abs(cxdy) + abs(cydx)) * abs(bz)
        )
        errbound = O3D_ERRBOUND * permanent
        if det > errbound:
            return 1
        if -det > errbound:
            return -1

    return orient3d_exact(a, b, c, d)


# ==================== 2D ====================

def orient2d_exact(a: Sequence[float], b: Sequence[float],
                   c: Sequence[float]) -> int:
    """Exact sign of det[b-a, c-a] using rational arithmetic."""
    ax, ay = Fraction(a[0]), Fraction(a[1])
    det = (
        (Fraction(b[0]) - ax) * (Fraction(c[1]) - ay)
        - (Fraction(b[1]) - ay) * (Fraction(c[0]) - ax)
    )
    return _sign(det)


def orient2d(a: Sequence[float], b: Sequence[float],
             c: Sequence[float]) -> int:
    """
    Sign of the signed area of triangle (a, b, c) in the plane.

    Returns:
        +1 if c is left of the directed line a->b, -1 if right, 0 if collinear
    """
    bx, by = b[0] - a[0], b[1] - a[1]
    cx, cy = c[0] - a[0], c[1] - a[1]

    if _in_safe_range(bx, by, cx, cy):
        left = bx * cy
        right = by * cx
        det = left - right
        errbound = CCW_ERRBOUND * (abs(left) + abs(right))
        if det > errbound:
            return 1
        if -det > errbound:
            return -1

    return orient2d_exact(a, b, c)


def project(p: Sequence[float], axis: int) -> Point2:
    """
    Drop coordinate `axis` of a 3D point, keeping the cyclic order.

    With this convention orient2d of projected points has the sign of
    the `axis` component of the 3D normal (b-a) x (c-a).
    """
    return (p[(axis + 1) % 3], p[(axis + 2) % 3])


def orient2d_projected(a: Sequence[float], b: Sequence[float],
                       c: Sequence[float], axis: int) -> int:
    """orient2d of three 3D points projected along `axis`."""
    return orient2d(project(a, axis), project(b, axis), project(c, axis))
