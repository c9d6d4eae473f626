"""
Angle and vector primitives.

Pure functions on angles (radians) and 2D points. Anything with x and y
attributes works as a point; results are Point instances.
"""

import math
from typing import Optional, Tuple

from ..models.point import Point

# tan() beyond this slope is treated as vertical
BIG_ENOUGH = 1000

# Precision of length comparisons: we work in meters, one millimeter is fine
EPSILON = 0.001


def normalize_angle(a: float) -> float:
    """Normalize angle to (-pi, pi]."""
    while a > math.pi:
        a -= 2 * math.pi
    while a <= -math.pi:
        a += 2 * math.pi
    return a


def to_polar(dx: float, dy: float) -> Tuple[float, float]:
    """
    Convert a vector to polar coordinates.

    Slopes steeper than BIG_ENOUGH snap to exactly +pi/2 or -pi/2 so that
    near vertical vectors don't lose precision in atan2.

    Args:
        dx, dy: Vector components

    Returns:
        Tuple of (angle, length), angle in (-pi, pi]
    """
    length = math.sqrt(dx * dx + dy * dy)
    if dx == 0 or abs(dy / dx) > BIG_ENOUGH:
        if dy >= 0:
            return math.pi / 2, length
        return -math.pi / 2, length
    angle = math.atan2(dy, dx)
    if angle == -math.pi:
        # atan2(-0.0, x<0)
        angle = math.pi
    return angle, length


def _unwrap(a1: float, a2: float) -> Tuple[float, float]:
    # move the 0..-pi range to pi..2pi when the two angles are on the two
    # sides of the +-pi seam
    if abs(a1 - a2) > math.pi:
        if a1 < 0:
            a1 = 2 * math.pi + a1
        if a2 < 0:
            a2 = 2 * math.pi + a2
    return a1, a2


def angle_delta(a1: float, a2: float) -> float:
    """
    Get the difference a2 - a1, even across the +-pi seam.

    angle_delta(radians(170), radians(-170)) is radians(20), not radians(-340).
    """
    a1, a2 = _unwrap(a1, a2)
    delta = a2 - a1
    if abs(delta) > math.pi:
        delta = normalize_angle(delta)
    return delta


def angle_average(a1: float, a2: float) -> float:
    """Get the average of two angles, even across the +-pi seam."""
    a1, a2 = _unwrap(a1, a2)
    avg = (a1 + a2) / 2
    if avg > math.pi:
        avg -= 2 * math.pi
    return avg


def reverse_angle(angle: float) -> float:
    """The opposite direction, normalized."""
    return normalize_angle(angle + math.pi)


def distance(p1, p2) -> float:
    """Euclidean distance between two points."""
    dx = p2.x - p1.x
    dy = p2.y - p1.y
    return math.sqrt(dx * dx + dy * dy)


def midpoint(p1, p2) -> Point:
    return Point((p1.x + p2.x) / 2, (p1.y + p2.y) / 2)


def add_polar_vector(point, angle: float, length: float) -> Point:
    """
    Add a vector defined by polar coordinates to a point.

    Args:
        point: Start point
        angle: Direction of the vector in radians
        length: Length of the vector

    Returns:
        The resulting point
    """
    return Point(point.x + length * math.cos(angle),
                 point.y + length * math.sin(angle))


def lt(a: float, b: float, epsilon: float = EPSILON) -> bool:
    """Less than, tolerating floating point errors below epsilon."""
    return a < (b - epsilon)


def segment_intersection(a1, a2, b1, b2) -> Optional[Point]:
    """
    Intersection of the segments a1-a2 and b1-b2.

    Exact: the intersection parameter must be within [0, 1] on both
    segments, extend the segments first if you need more.

    Returns:
        The intersection point, or None if the segments are parallel
        or don't cross
    """
    s1_x = a2.x - a1.x
    s1_y = a2.y - a1.y
    s2_x = b2.x - b1.x
    s2_y = b2.y - b1.y

    denominator = -s2_x * s1_y + s1_x * s2_y
    if abs(denominator) < 1e-12:
        return None

    s = (-s1_y * (a1.x - b1.x) + s1_x * (a1.y - b1.y)) / denominator
    t = (s2_x * (a1.y - b1.y) - s2_y * (a1.x - b1.x)) / denominator

    if 0 <= s <= 1 and 0 <= t <= 1:
        return Point(a1.x + t * s1_x, a1.y + t * s1_y)
    return None


def intersection_of_extended_edges(e1, e2, extension: float) -> Optional[Point]:
    """
    Intersect e1 lengthened forward and e2 lengthened backward.

    Used for edges of a polygon, where e1 comes before e2 in the
    direction of travel.
    """
    return segment_intersection(*_endpoints(e1.extended(forward=extension)),
                                *_endpoints(e2.extended(backward=extension)))


def _endpoints(edge):
    return edge.start, edge.end
