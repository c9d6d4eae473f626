"""
Transformations and shape factories.

Transformations return a new container of the same kind. Points are
copied with their annotations, never shared with the source, and the
result is recomputed.
"""

import math
from typing import List

from ..models.point import Point
from .polygon import Polygon


def translate(points: Polygon, dx: float, dy: float) -> Polygon:
    """
    Move every point by (dx, dy).

    Args:
        points: Source polygon or line, left untouched
        dx, dy: Offset in meters

    Returns:
        New polygon or line, recomputed
    """
    result = type(points)()
    for _, point in points.iterate():
        new_point = point.copy()
        new_point.x = point.x + dx
        new_point.y = point.y + dy
        result.append(new_point)
    result.recompute()
    return result


def rotate(points: Polygon, angle: float) -> Polygon:
    """
    Rotate every point around the origin.

    Args:
        points: Source polygon or line, left untouched
        angle: Rotation in radians, positive is counterclockwise

    Returns:
        New polygon or line, recomputed
    """
    result = type(points)()
    sin = math.sin(angle)
    cos = math.cos(angle)
    for _, point in points.iterate():
        new_point = point.copy()
        new_point.x = point.x * cos - point.y * sin
        new_point.y = point.x * sin + point.y * cos
        result.append(new_point)
    result.recompute()
    return result


def create_rectangular_polygon(x: float, y: float, dx: float, dy: float,
                               step: float) -> Polygon:
    """
    Create a rectangle outline with a vertex every step meters.

    The outline starts at (x, y) and goes counterclockwise. dx and dy
    should be multiples of step.
    """
    if step <= 0:
        raise ValueError(f"step must be positive, got {step}")
    nx = int(round(dx / step))
    ny = int(round(dy / step))
    vertices: List[Point] = []
    for i in range(nx + 1):
        vertices.append(Point(x + i * step, y))
    for i in range(1, ny + 1):
        vertices.append(Point(x + dx, y + i * step))
    for i in range(1, nx + 1):
        vertices.append(Point(x + dx - i * step, y + dy))
    for i in range(1, ny):
        vertices.append(Point(x, y + dy - i * step))
    polygon = Polygon(vertices)
    polygon.recompute()
    return polygon


def get_inward_direction(is_clockwise: bool, angle: float = math.pi / 2) -> float:
    """Relative direction pointing into the polygon, left or right of travel."""
    return -angle if is_clockwise else angle


def get_outward_direction(is_clockwise: bool, angle: float = math.pi / 2) -> float:
    return -get_inward_direction(is_clockwise, angle)
