"""
Line/polygon intersection and proximity queries.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from scipy.spatial import cKDTree

from ..models.point import Point
from .polygon import Polygon
from .primitives import distance, segment_intersection

# Intersections closer than this to one already found are the same one,
# p1-p2 going right through a vertex hits both edges of that vertex.
SAME_INTERSECTION_M = 0.1


@dataclass
class Intersection:
    """
    Where a line crosses the edge from_index -> to_index of a polygon.

    Attributes:
        from_index: Index of the vertex the crossed edge starts at
        to_index: Index of the vertex the crossed edge ends at
        point: The intersection point
        distance: Distance of the intersection point from the line's start
    """
    from_index: int
    to_index: int
    point: Point
    distance: float


def _edges(polygon: Polygon):
    # (from_index, to_index, from_point, to_point) for every edge
    n = len(polygon)
    last = n if polygon.circular else n - 1
    for i in range(1, last + 1):
        j = polygon.resolve_index(i + 1)
        yield i, j, polygon[i], polygon[j]


def line_intersects_polygon(polygon: Polygon, p1, p2) -> Optional[Tuple[int, int, Point]]:
    """
    Does the segment p1-p2 intersect the polygon?

    Returns:
        (from_index, to_index, point) of the first edge crossed in the
        polygon's own vertex order, or None
    """
    for i, j, cp, np_ in _edges(polygon):
        point = segment_intersection(cp, np_, p1, p2)
        if point is not None:
            return i, j, point
    return None


def all_intersections_of_line(polygon: Polygon, p1, p2) -> List[Intersection]:
    """
    All intersections of the segment p1-p2 and the polygon.

    Returns:
        Intersections sorted by their distance from p1, closest first
    """
    intersections: List[Intersection] = []
    for i, j, cp, np_ in _edges(polygon):
        point = segment_intersection(cp, np_, p1, p2)
        if point is None:
            continue
        if any(distance(found.point, point) < SAME_INTERSECTION_M for found in intersections):
            continue
        intersections.append(Intersection(i, j, point, distance(p1, point)))
    return sorted(intersections, key=lambda intersection: intersection.distance)


def closest_point_index(polygon: Polygon, p) -> Tuple[int, float]:
    """
    Vertex of the polygon closest to p.

    Returns:
        Tuple of (index, distance)
    """
    if len(polygon) == 0:
        raise ValueError("closest point of an empty polygon")
    tree = cKDTree(polygon.to_array())
    d, ix = tree.query([p.x, p.y])
    return int(ix) + 1, float(d)
