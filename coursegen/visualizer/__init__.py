"""
Visualization module for course smoothing results.
"""

from .visualizer import (
    plot_course,
    plot_direction_stats,
)

__all__ = [
    'plot_course',
    'plot_direction_stats',
]
