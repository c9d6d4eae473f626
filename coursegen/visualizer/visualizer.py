"""
Visualization module for course smoothing results.

This module provides functions to visualize raw and smoothed courses,
the turns found on them and their direction statistics.
"""

import matplotlib.pyplot as plt
import numpy as np
from typing import Optional

from ..geometry.polygon import Polygon

# corner_score -> (marker, color, label)
CORNER_MARKERS = {
    1: ('o', 'orange', 'Corner Start'),
    2: ('>', 'green', 'Arc Start'),
    4: ('s', 'purple', 'Arc End'),
}


def _closed(course: Polygon) -> np.ndarray:
    coords = course.to_array()
    if course.circular and len(coords) > 0:
        coords = np.vstack([coords, coords[:1]])
    return coords


def plot_course(original: Polygon,
                smoothed: Optional[Polygon] = None,
                title: str = "Course",
                save_path: Optional[str] = None,
                show: bool = True):
    """
    Visualize a course before and after smoothing.

    Args:
        original: Raw course
        smoothed: Optional smoothed course, with corner and turn annotations
        title: Plot title
        save_path: Optional path to save figure
        show: Whether to display the plot

    Returns:
        The matplotlib figure
    """
    fig, ax = plt.subplots(figsize=(12, 8))

    coords = _closed(original)
    ax.plot(coords[:, 0], coords[:, 1], 'r--', alpha=0.5, linewidth=1,
            label='Original')
    ax.plot(coords[:, 0], coords[:, 1], 'r.', markersize=4, alpha=0.5)

    if smoothed is not None and len(smoothed) > 0:
        coords = _closed(smoothed)
        ax.plot(coords[:, 0], coords[:, 1], 'b-', linewidth=2,
                label='Smoothed', zorder=4)
        _plot_annotations(ax, smoothed)

    ax.set_xlabel('X Position (m)', fontsize=12)
    ax.set_ylabel('Y Position (m)', fontsize=12)
    ax.set_title(title, fontsize=14, fontweight='bold')
    ax.legend(loc='best')
    ax.grid(True, alpha=0.3)
    ax.set_aspect('equal')

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        print(f"Figure saved to {save_path}")

    if show:
        plt.show()
    else:
        plt.close(fig)
    return fig


def _plot_annotations(ax, course: Polygon):
    """Mark corner scores and headland turns."""
    for score, (marker, color, label) in CORNER_MARKERS.items():
        marked = [p for p in course if p.corner_score == score]
        if marked:
            ax.plot([p.x for p in marked], [p.y for p in marked], marker,
                    color=color, markersize=8, linestyle='none', label=label, zorder=5)

    starts = [p for p in course if p.turn_start]
    ends = [p for p in course if p.turn_end]
    if starts:
        ax.plot([p.x for p in starts], [p.y for p in starts], 'g^',
                markersize=12, label='Turn Start', zorder=6)
    if ends:
        ax.plot([p.x for p in ends], [p.y for p in ends], 'rv',
                markersize=12, label='Turn End', zorder=6)
    for p in course:
        if p.text:
            ax.text(p.x, p.y, p.text, fontsize=7, alpha=0.7)


def plot_direction_stats(course: Polygon,
                         title: str = "Direction Statistics",
                         save_path: Optional[str] = None,
                         show: bool = True):
    """
    Bar chart of total edge length per 20 degree direction bucket.

    The bucket of the dominant direction is highlighted.

    Args:
        course: Recomputed polygon or line
        title: Plot title
        save_path: Optional save path
        show: Whether to display

    Returns:
        The matplotlib figure
    """
    stats = course.direction_stats
    best = course.dominant_direction()
    buckets = sorted(stats)
    lengths = [stats[b].length for b in buckets]
    colors = ['#A23B72' if b == best.range_deg else '#2E86AB' for b in buckets]

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.bar(buckets, lengths, width=18, color=colors)
    if best.dir_deg is not None:
        ax.axvline(best.dir_deg, color='black', linestyle='--', linewidth=1,
                   label=f'Best direction {best.dir_deg:.1f} deg')
        ax.legend(loc='best')

    ax.set_xlabel('Direction (deg)', fontsize=12)
    ax.set_ylabel('Total Edge Length (m)', fontsize=12)
    ax.set_title(title, fontsize=14, fontweight='bold')
    ax.set_xlim(-190, 200)
    ax.grid(True, alpha=0.3, axis='y')

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')

    if show:
        plt.show()
    else:
        plt.close(fig)
    return fig
