"""
Filtering and spacing passes.

These condition raw point sequences (recorded or generated courses) before
and after corner rounding: the low pass filter removes noise, spacing
thins out points on straight sections.
"""

import logging

from ..geometry.polygon import Polygon
from ..geometry.primitives import angle_delta, distance, midpoint, to_polar

logger = logging.getLogger(__name__)


def low_pass_filter(polygon: Polygon, angle_threshold: float,
                    distance_threshold: float) -> Polygon:
    """
    Remove points too close to their successor or turning too sharply.

    If the next point is closer than distance_threshold, or the direction
    changes more than angle_threshold at the current point, the current
    point is removed and the next one moved halfway towards it. After
    each merge the geometry is recomputed and the same index checked
    again, the merged point may now qualify itself.

    The first and last points of a Line are never removed or moved.

    Args:
        polygon: Polygon or Line, recomputed, modified in place
        angle_threshold: Maximum direction change at a point in radians
        distance_threshold: Minimum distance between points in meters

    Returns:
        The same container, recomputed
    """
    is_line = not polygon.circular
    n_before = len(polygon)
    index = 2 if is_line else 1
    if not polygon.is_valid:
        polygon.recompute()

    while len(polygon) > polygon.min_points:
        last_index = len(polygon) - 1 if is_line else len(polygon)
        if index > last_index:
            break
        cp, np_ = polygon[index], polygon[index + 1]
        # edge is recalculated as points are moved around here
        _, length = to_polar(np_.x - cp.x, np_.y - cp.y)
        is_too_close = length < distance_threshold
        is_too_sharp = abs(angle_delta(np_.prev_edge.angle, cp.prev_edge.angle)) > angle_threshold
        if is_too_close or is_too_sharp:
            next_is_fixed_end = is_line and index + 1 == len(polygon)
            if not next_is_fixed_end:
                middle = midpoint(cp, np_)
                np_.x, np_.y = middle.x, middle.y
            polygon.remove(index)
            polygon.recompute()
        else:
            index += 1

    logger.debug("Low pass filter removed %d of %d points", n_before - len(polygon), n_before)
    return polygon


def enforce_spacing(polygon: Polygon, angle_threshold: float,
                    min_distance: float) -> Polygon:
    """
    Make sure points are at least min_distance apart, except in curves.

    One forward pass: the first point is kept, every other point only if
    it is further than min_distance from the last kept point, or the
    direction changes more than angle_threshold at it. The last point of
    a Line and points marking a corner or turn boundary are always kept.

    Args:
        polygon: Polygon or Line, recomputed, left untouched
        angle_threshold: Direction change in radians above which a point is
            a curve point and always kept
        min_distance: Minimum distance between points on straight sections

    Returns:
        New container of the same kind, recomputed
    """
    if not polygon.is_valid:
        polygon.recompute()
    points = list(polygon)
    end = None if polygon.circular else points[-1]
    kept = [points[0]]
    for cp in points[1:]:
        is_curve = abs(cp.delta_angle) > angle_threshold
        is_annotated = cp.corner_score is not None or cp.turn_start or cp.turn_end
        if distance(cp, kept[-1]) > min_distance or is_curve or is_annotated or cp is end:
            kept.append(cp)

    result = type(polygon)(p.copy() for p in kept)
    if len(result) >= result.min_points:
        result.recompute()
    logger.debug("Spacing kept %d of %d points", len(result), len(points))
    return result
