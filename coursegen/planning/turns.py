"""
Corner and turn detection.

Finds where the direction of a course changes significantly over a short
distance, and marks the corners a vehicle can't follow as headland turns.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

from ..geometry.polygon import Polygon
from ..geometry.primitives import angle_delta
from ..models.point import Point, STRAIGHT
from ..models.vehicle import SmoothingSettings

logger = logging.getLogger(__name__)


@dataclass
class TurnSpan:
    """
    Result of a turn span search.

    Attributes:
        to_index: Last vertex of the span, never before the start index
        total_delta: Net direction change over the span in radians
        positive_delta: Sum of the positive direction changes
        negative_delta: Sum of the negative direction changes
    """
    to_index: int
    total_delta: float
    positive_delta: float
    negative_delta: float


def find_turn_span(polygon: Polygon, from_index: int, max_distance: float,
                   settings: Optional[SmoothingSettings] = None) -> TurnSpan:
    """
    Find the vertex where a turn starting at from_index ends.

    Walks forward accumulating distance and direction change and stops
    when max_distance is reached, at the last vertex, or once the
    direction has stabilized: it changed less than settings.stable_angle
    over the last step, and that step was longer than
    max_distance * settings.stable_distance_ratio. The walk does not roll
    over the end of a polygon.

    Args:
        polygon: Recomputed polygon or line
        from_index: Where to start
        max_distance: How far to look ahead in meters
        settings: Stabilization thresholds (defaults if None)

    Returns:
        TurnSpan with the furthest index reached and the direction changes
    """
    settings = settings or SmoothingSettings()
    stable_angle = settings.stable_angle
    stable_length = max_distance * settings.stable_distance_ratio

    d = 0.0
    total = positive = negative = 0.0
    prev_total = math.inf
    to_index = from_index
    n = len(polygon)
    while (to_index < n and d < max_distance and
           not (abs(total - prev_total) < stable_angle and
                polygon[to_index].prev_edge.length > stable_length)):
        d += polygon[to_index].next_edge.length
        to_index += 1
        prev_total = total
        delta = polygon[to_index].delta_angle
        total += delta
        if delta > 0:
            positive += delta
        else:
            negative += delta
    return TurnSpan(max(to_index - 1, from_index), total, positive, negative)


def turning_radius_between(from_point: Point, to_point: Point) -> Tuple[float, float]:
    """
    Theoretical turning radius needed to get from from_point to to_point.

    Starting in the from_point.prev_edge direction and ending in the
    to_point.next_edge direction.

    Returns:
        Tuple of (radius, delta_angle), radius is STRAIGHT if there is no
        direction change
    """
    if from_point.prev_edge is None or to_point.next_edge is None:
        raise ValueError("turning radius needs the incoming edge of from_point "
                         "and the outgoing edge of to_point")
    delta = angle_delta(to_point.next_edge.angle, from_point.prev_edge.angle)
    if abs(delta) < 1e-9:
        return STRAIGHT, delta
    return abs(from_point.next_edge.length / delta), delta


def add_turn_info(polygon: Polygon, i: int, turning_radius: float,
                  min_headland_turn_angle: float,
                  settings: Optional[SmoothingSettings] = None) -> int:
    """
    Mark a headland turn starting at vertex i if this is a sharp corner.

    Returns:
        Index to continue at: i + 1 if there was no turn, the end of the
        turn otherwise
    """
    r, _ = turning_radius_between(polygon[i], polygon[i + 1])
    if r < turning_radius:
        # can't make it to the next point, see if a corner starts here
        polygon[i].text = f"r={r:.1f} ({i})"
        span = find_turn_span(polygon, i, turning_radius * math.pi / 2, settings)
        logger.debug("%d-%d, %.1f deg, r=%.1f", i, span.to_index,
                     math.degrees(span.total_delta), r)
        if abs(span.total_delta) > min_headland_turn_angle:
            polygon[i].turn_start = True
            polygon[i].headland_turn = True
            polygon[span.to_index].turn_end = True
            return max(span.to_index, i + 1)
    return i + 1


def annotate_turns(polygon: Polygon, turning_radius: float,
                   min_headland_turn_angle: float,
                   settings: Optional[SmoothingSettings] = None) -> int:
    """
    Add headland turn information to the vertices of a course.

    Args:
        polygon: Recomputed polygon or line, annotated in place
        turning_radius: Vehicle turning radius in meters
        min_headland_turn_angle: Direction change in radians above which a
            corner the vehicle can't follow becomes a headland turn
        settings: Turn span stabilization thresholds

    Returns:
        Number of headland turns found
    """
    # on a line the point after i needs an outgoing edge
    last = len(polygon) if polygon.circular else len(polygon) - 2
    i = 1 if polygon.circular else 2
    turns = 0
    while i <= last:
        next_i = add_turn_info(polygon, i, turning_radius, min_headland_turn_angle, settings)
        if polygon[i].headland_turn:
            turns += 1
        i = next_i
    return turns
