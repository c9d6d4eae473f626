"""
Corner rounding module.

Replaces sharp corners of a course with circular arcs the vehicle can
actually drive, using tangent-arc geometry.
"""

import logging
import math
from typing import Iterable, List, Optional

from ..geometry.polygon import Line, Polygon
from ..geometry.primitives import (
    EPSILON,
    add_polar_vector,
    angle_delta,
    distance,
    intersection_of_extended_edges,
    lt,
    reverse_angle,
)
from ..models.point import Edge, Point
from ..models.vehicle import SmoothingSettings, Vehicle
from .filters import enforce_spacing, low_pass_filter
from .turns import annotate_turns, find_turn_span

logger = logging.getLogger(__name__)

# Arcs are sampled in steps of about this many degrees
ARC_STEP_DEG = 10


# ------------------------------------------------------------------
# Tangent-arc between two edges
# ------------------------------------------------------------------
#
# e1 enters the corner, e2 leaves it. Lengthened, they meet at IS.
#
#            e2
#            ^
#            |
#            T2   <- circle of radius r touches e2 here
#           /
#   ---->--T1    IS
#      e1
#
# The circle touches both lines at the same distance d from IS:
#
#   d = r / tan(alpha / 2)
#
# where alpha is the angle between reversed e1 and e2 at IS. The path is
# e1 straight up to T1, then the arc from T1 to T2, then e2.
# ------------------------------------------------------------------

def find_arc_between_edges(e1: Edge, e2: Edge, r: float,
                           epsilon: float = EPSILON) -> Optional[List[Point]]:
    """
    Find the points of an arc with radius r connecting two edges.

    e1 comes first, e2 second when walking along the course. The arc
    starts with the tangent point on e1 and ends with the tangent point
    on e2, every point returned is on the arc.

    If the edges leave room for an arc wider than r, the widest arc that
    fits is used instead.

    Args:
        e1: Edge entering the corner
        e2: Edge leaving the corner
        r: Turning radius in meters
        epsilon: Tolerance of the edge length checks

    Returns:
        Arc points, or None if the edges don't intersect or are too
        short for an arc of radius r
    """
    extension = 2 * r * math.pi
    is_ = intersection_of_extended_edges(e1, e2, extension)
    if is_ is None:
        return None
    # reverse e1 to get the angle between the two at is_
    alpha = angle_delta(reverse_angle(e1.angle), e2.angle)
    tan_half_alpha = math.tan(alpha / 2)
    if abs(tan_half_alpha) < 1e-9:
        return None
    # the circle touches e1 and e2 this far from is_
    d = abs(r / tan_half_alpha)
    e1_to_is = distance(e1.end, is_)
    is_to_e2 = distance(is_, e2.start)
    if lt(e1_to_is, d, epsilon) or lt(is_to_e2, d, epsilon):
        return None

    r_calculated = abs(min(e1_to_is, is_to_e2) * tan_half_alpha)
    if r < r_calculated:
        # is_ does not depend on the extension, no need to intersect again
        logger.debug("Widening arc radius from %.2f to %.2f", r, r_calculated)
        r = r_calculated
        d = min(e1_to_is, is_to_e2)

    # go straight along e1 until exactly d from is_
    delta = e1_to_is - d
    p = Point(e1.end.x + delta * e1.dx / e1.length,
              e1.end.y + delta * e1.dy / e1.length)
    points = [p]

    # then around the arc until heading in the e2 direction
    turn = angle_delta(e1.angle, e2.angle)
    n_steps = max(1, math.floor(abs(turn) * 360 / ARC_STEP_DEG / (2 * math.pi)))
    step = turn / n_steps
    chord = 2 * r * abs(math.sin(step / 2))
    heading = e1.angle + step / 2
    for _ in range(n_steps):
        p = add_polar_vector(p, heading, chord)
        points.append(p)
        heading += step
    return points


def round_corners(polygon: Polygon, turning_radius: float,
                  settings: Optional[SmoothingSettings] = None,
                  search_distance: Optional[float] = None) -> int:
    """
    Round the corners of a polygon or line to turning_radius.

    Looks for a direction change of more than the corner angle threshold
    within a few turning radii of each vertex. Where one is found and an
    arc fits, the vertices after the corner start up to the end of the
    turn are replaced with the arc. Corner starts get corner_score 1, the
    first arc points 2, the last arc points 4.

    Args:
        polygon: Recomputed polygon or line, modified in place
        turning_radius: Vehicle turning radius in meters
        settings: Corner detection thresholds (defaults if None)
        search_distance: How far ahead to look for a corner in meters
            (turning_radius * settings.corner_search_factor if None)

    Returns:
        Number of corners rounded
    """
    settings = settings or SmoothingSettings()
    if not polygon.is_valid:
        polygon.recompute()
    if search_distance is None:
        search_distance = turning_radius * settings.corner_search_factor
    threshold = settings.corner_angle_threshold

    result: List[Point] = []
    corners = 0
    n = len(polygon)
    i = 1
    while i <= n:
        cp = polygon[i]
        result.append(cp)
        span = find_turn_span(polygon, i, search_distance, settings)
        e1 = cp.prev_edge
        e2 = polygon[span.to_index].next_edge
        # is there a significant direction change within the search distance?
        if e1 is not None and e2 is not None and abs(angle_delta(e1.angle, e2.angle)) > threshold:
            points = find_arc_between_edges(e1, e2, turning_radius, settings.epsilon_m)
            if points:
                logger.info("Arc with %.2f m radius found between %d and %d",
                            turning_radius, i, span.to_index)
                cp.corner_score = 1
                points[0].corner_score = 2
                points[-1].corner_score = 4
                result.extend(points)
                corners += 1
                i = span.to_index
            else:
                logger.debug("Can't find an arc with %.2f m radius between %d and %d",
                             turning_radius, i, span.to_index)
        i += 1

    polygon.replace(1, n, result)
    polygon.recompute()
    return corners


class CourseSmoother:
    """
    Turns a raw sequence of points into a course a vehicle can drive.

    Runs the passes in order: low pass filter, corner rounding, spacing
    and headland turn annotation.
    """

    def __init__(self, vehicle: Optional[Vehicle] = None,
                 settings: Optional[SmoothingSettings] = None):
        """
        Initialize course smoother.

        Args:
            vehicle: Vehicle the course is for (default Vehicle())
            settings: Pass thresholds (default SmoothingSettings())
        """
        self.vehicle = vehicle or Vehicle()
        self.settings = settings or SmoothingSettings()

    def smooth(self, points: Iterable, is_line: bool = False,
               round_corners: bool = True) -> Polygon:
        """
        Smooth a sequence of points.

        Args:
            points: Points, (x, y) pairs or {'x':, 'y':} mappings
            is_line: Open line instead of a closed polygon
            round_corners: Replace sharp corners with arcs

        Returns:
            New recomputed Polygon or Line
        """
        # never move the caller's points
        course = (Line(points) if is_line else Polygon(points)).copy()
        course.recompute()

        low_pass_filter(course,
                        self.settings.filter_angle_threshold,
                        self.settings.filter_distance_threshold_m)
        if round_corners:
            self.round_corners(course)
        course = enforce_spacing(course,
                                 self.settings.spacing_angle_threshold,
                                 self.settings.min_spacing_m)
        annotate_turns(course,
                       self.vehicle.turning_radius_m,
                       self.vehicle.min_headland_turn_angle,
                       self.settings)
        return course

    def round_corners(self, course: Polygon) -> int:
        """Round the corners of course in place to the vehicle's turning radius."""
        return round_corners(course, self.vehicle.turning_radius_m, self.settings,
                             self.vehicle.corner_search_distance_m)

    def get_course_summary(self, course: Polygon) -> dict:
        """
        Get the aggregate geometry of a smoothed course.

        Returns:
            Dictionary with the facts turn and headland planning needs
        """
        best = course.dominant_direction()
        return {
            'points': len(course),
            'area_m2': course.area(),
            'is_clockwise': course.is_clockwise(),
            'bounding_box': course.bounding_box(),
            'best_direction_deg': best.dir_deg,
            'shortest_edge_m': course.shortest_edge_length(),
            'corners': sum(1 for p in course if p.corner_score == 1),
            'headland_turns': sum(1 for p in course if p.headland_turn),
        }


def smooth_course(points: Iterable, turning_radius: float = 6.0,
                  is_line: bool = False) -> Polygon:
    """
    Quick course smoothing function (convenience wrapper).

    Args:
        points: Raw course points
        turning_radius: Vehicle turning radius in meters
        is_line: Open line instead of a closed polygon

    Returns:
        Smoothed course
    """
    smoother = CourseSmoother(Vehicle(turning_radius_m=turning_radius))
    return smoother.smooth(points, is_line=is_line)
