"""
Planning module: filtering, turn detection and corner rounding passes.
"""

from .filters import low_pass_filter, enforce_spacing
from .turns import TurnSpan, find_turn_span, turning_radius_between, add_turn_info, annotate_turns
from .smoother import CourseSmoother, find_arc_between_edges, round_corners, smooth_course

__all__ = [
    'low_pass_filter',
    'enforce_spacing',
    'TurnSpan',
    'find_turn_span',
    'turning_radius_between',
    'add_turn_info',
    'annotate_turns',
    'CourseSmoother',
    'find_arc_between_edges',
    'round_corners',
    'smooth_course',
]
