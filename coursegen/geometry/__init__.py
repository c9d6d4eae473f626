"""
Geometry module: angle primitives, the polygon/line containers and
queries on them.
"""

from .primitives import (
    to_polar,
    angle_delta,
    angle_average,
    reverse_angle,
    normalize_angle,
    distance,
    midpoint,
    add_polar_vector,
    segment_intersection,
    intersection_of_extended_edges,
)
from .polygon import Polygon, Line, BoundingBox, BestDirection, DirectionBucket
from .transforms import (
    translate,
    rotate,
    create_rectangular_polygon,
    get_inward_direction,
    get_outward_direction,
)
from .intersections import (
    Intersection,
    line_intersects_polygon,
    all_intersections_of_line,
    closest_point_index,
)

__all__ = [
    'to_polar',
    'angle_delta',
    'angle_average',
    'reverse_angle',
    'normalize_angle',
    'distance',
    'midpoint',
    'add_polar_vector',
    'segment_intersection',
    'intersection_of_extended_edges',
    'Polygon',
    'Line',
    'BoundingBox',
    'BestDirection',
    'DirectionBucket',
    'translate',
    'rotate',
    'create_rectangular_polygon',
    'get_inward_direction',
    'get_outward_direction',
    'Intersection',
    'line_intersects_polygon',
    'all_intersections_of_line',
    'closest_point_index',
]
