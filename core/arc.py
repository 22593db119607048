"""
Arc centre resolution for G2/G3 moves.
"""
import math
from dataclasses import dataclass
from typing import Optional, Tuple

from core.geometry import Point2


@dataclass(frozen=True)
class ArcGeometry:
    center: Point2
    radius: float


def resolve_arc(p0: Point2, p1: Optional[Point2],
                offset: Optional[Tuple[float, float]] = None,
                radius: Optional[float] = None) -> Optional[ArcGeometry]:
    """
    Compute the centre and radius of an arc from p0 to p1.

    The centre comes from the I/J offset when given, otherwise from the R
    radius. In R form the centre is always taken on the left-hand side of the
    chord (p0 -> p1); the winding direction does not pick between the two
    circles that fit.

    Args:
        p0: Start point (current position)
        p1: End point, or None when the command did not give one
        offset: (i, j) displacement from p0 to the centre
        radius: Arc radius; the sign is ignored

    Returns:
        ArcGeometry, or None when the arc cannot be resolved (missing data,
        zero-length chord in R form, radius shorter than half the chord,
        zero radius, or a non-finite result)
    """
    if p1 is None:
        return None

    if offset is not None:
        center = Point2(p0.x + offset[0], p0.y + offset[1])
        arc_radius = center.distance_to(p0)
    elif radius is not None:
        arc_radius = abs(radius)
        center = _center_from_radius(p0, p1, arc_radius)
        if center is None:
            return None
    else:
        return None

    if arc_radius == 0 or not all(map(math.isfinite, (center.x, center.y, arc_radius))):
        return None
    return ArcGeometry(center, arc_radius)


def _center_from_radius(p0: Point2, p1: Point2, radius: float) -> Optional[Point2]:
    chord = p0.distance_to(p1)
    if chord == 0:
        return None

    h_squared = radius ** 2 - (chord / 2) ** 2
    if h_squared < 0:
        return None
    h = math.sqrt(h_squared)

    mid = Point2((p0.x + p1.x) / 2, (p0.y + p1.y) / 2)
    # Unit vector perpendicular to the chord
    dx = (p0.y - p1.y) / chord
    dy = (p1.x - p0.x) / chord
    return Point2(mid.x + h * dx, mid.y + h * dy)
