"""
coursegen

Computational geometry for automated-guidance course generation: polygon
and line containers with derived edge geometry, noise filtering, turn
detection and rounding of corners to a vehicle's turning radius.
"""

__version__ = "0.1.0"
__license__ = "MIT"

# Import main classes for easy access
from .models.point import Point, Edge, STRAIGHT
from .models.vehicle import Vehicle, SmoothingSettings
from .geometry.polygon import Polygon, Line
from .geometry.intersections import line_intersects_polygon, all_intersections_of_line
from .planning.filters import low_pass_filter, enforce_spacing
from .planning.turns import find_turn_span, turning_radius_between, annotate_turns
from .planning.smoother import CourseSmoother, find_arc_between_edges, round_corners, smooth_course

__all__ = [
    'Point',
    'Edge',
    'STRAIGHT',
    'Vehicle',
    'SmoothingSettings',
    'Polygon',
    'Line',
    'line_intersects_polygon',
    'all_intersections_of_line',
    'low_pass_filter',
    'enforce_spacing',
    'find_turn_span',
    'turning_radius_between',
    'annotate_turns',
    'CourseSmoother',
    'find_arc_between_edges',
    'round_corners',
    'smooth_course',
]
