"""
Polygon and line containers.

A Polygon is a closed, circular sequence of points: index arithmetic wraps
around so loops can run across the seam between the last and the first
vertex. A Line is an open sequence with no wraparound.

Vertex indices are 1-based, the same numbering the waypoints of a course
use. container[0] is the last vertex of a polygon.

Derived geometry (edges, tangents, turn angles and the aggregates) is
cached. It is valid only after recompute(); any structural edit marks it
stale.
"""

from dataclasses import dataclass, field
import math
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

import numpy as np

from ..models.point import Point, Edge, STRAIGHT
from .primitives import angle_delta

# Width of a direction statistics bucket in degrees
DIRECTION_BUCKET_DEG = 20


@dataclass
class DirectionBucket:
    """Total edge length and the raw directions (degrees) of edges in a bucket."""
    length: float = 0.0
    dirs: List[float] = field(default_factory=list)


@dataclass
class BestDirection:
    """
    The dominant direction of a shape.

    Attributes:
        range_deg: Key (center) of the bucket with the longest total length
        length: Total edge length in that bucket
        dir_deg: Mean of the actual edge directions in the bucket, degrees
    """
    range_deg: float = 0.0
    length: float = 0.0
    dir_deg: Optional[float] = None


@dataclass
class BoundingBox:
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


def direction_bucket(angle: float) -> float:
    """Key of the 20 degree wide bucket the angle falls into."""
    w = DIRECTION_BUCKET_DEG
    return math.floor(math.degrees(angle) / w) * w + w / 2


def add_to_direction_stats(direction_stats: Dict[float, DirectionBucket],
                           angle: float, length: float):
    bucket = direction_stats.setdefault(direction_bucket(angle), DirectionBucket())
    bucket.length += length
    bucket.dirs.append(math.degrees(angle))


def get_best_direction(direction_stats: Dict[float, DirectionBucket]) -> BestDirection:
    """Figure out in which direction the shape is the longest."""
    best = BestDirection()
    for range_deg, stats in direction_stats.items():
        if stats.length > best.length:
            best.length = stats.length
            best.range_deg = range_deg
    stats = direction_stats.get(best.range_deg)
    if stats and stats.dirs:
        best.dir_deg = sum(stats.dirs) / len(stats.dirs)
    return best


class Polygon:
    """
    Closed sequence of points with cached derived geometry.

    Construct from Points, (x, y) pairs or {'x':, 'y':} mappings, then call
    recompute() before reading any geometry.
    """

    circular = True
    min_points = 3

    def __init__(self, vertices: Optional[Iterable] = None):
        if vertices is None:
            vertices = []
        self.points: List[Point] = [Point.from_any(v) for v in vertices]
        self._valid = False
        self._direction_stats: Dict[float, DirectionBucket] = {}
        self._best_direction = BestDirection()
        self._is_clockwise = False
        self._area = 0.0
        self._shortest_edge_length = STRAIGHT
        self._bounding_box: Optional[BoundingBox] = None

    @classmethod
    def from_array(cls, array) -> 'Polygon':
        """Create from an (n, 2) array of coordinates."""
        return cls(Point(float(x), float(y)) for x, y in np.asarray(array, dtype=float))

    def to_array(self) -> np.ndarray:
        """Coordinates as an (n, 2) array."""
        return np.array([(p.x, p.y) for p in self.points], dtype=float).reshape(-1, 2)

    def copy(self) -> 'Polygon':
        """Independent copy with annotations but no cached geometry."""
        return type(self)(p.copy() for p in self.points)

    # ------------------------------------------------------------------
    # Indexing
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)

    def resolve_index(self, index: int) -> int:
        """
        Always return a valid index, rolling over either end of the polygon.

        0 is the last vertex, n + 1 the first, -1 the one before the last.
        """
        n = len(self.points)
        if n == 0:
            raise IndexError("index into an empty polygon")
        return (index - 1) % n + 1

    def __getitem__(self, index: int) -> Point:
        return self.points[self.resolve_index(index) - 1]

    def __setitem__(self, index: int, point: Point):
        self.points[self.resolve_index(index) - 1] = Point.from_any(point)
        self._valid = False

    def insert(self, index: int, point):
        """Insert point before the vertex at index (len + 1 appends)."""
        self.points.insert(index - 1, Point.from_any(point))
        self._valid = False

    def append(self, point):
        self.points.append(Point.from_any(point))
        self._valid = False

    def remove(self, index: int) -> Point:
        """Remove and return the vertex at index."""
        self._valid = False
        return self.points.pop(self.resolve_index(index) - 1)

    def replace(self, start: int, stop: int, points: Iterable):
        """Replace the vertices start..stop (inclusive) with points."""
        self.points[start - 1:stop] = [Point.from_any(p) for p in points]
        self._valid = False

    def iterate(self, start: int = 1, stop: Optional[int] = None,
                step: int = 1) -> Iterator[Tuple[int, Point]]:
        """
        Iterate over (index, point) pairs from start to stop with step.

        By default does one full circle. When start is past stop the
        iteration rolls over from n to 1 (or 1 to n for a negative step),
        crossing the seam once. Each call starts a new iteration.
        """
        n = len(self.points)
        if n == 0:
            return
        if stop is None:
            stop = self._default_stop(start, step)
        i = self.resolve_index(start)
        stop = self.resolve_index(stop)
        for _ in range(n):
            yield i, self.points[i - 1]
            if i == stop:
                return
            i = self.resolve_index(i + step)

    def _default_stop(self, start: int, step: int) -> int:
        return start - step

    # ------------------------------------------------------------------
    # Derived geometry
    # ------------------------------------------------------------------

    def _neighbors(self, i: int) -> Tuple[Optional[Point], Optional[Point]]:
        return self[i - 1], self[i + 1]

    def recompute(self):
        """
        Calculate edges, tangents and turn angles of every point and the
        aggregate geometry of the whole shape.
        """
        n = len(self.points)
        if n < self.min_points:
            raise ValueError(f"{type(self).__name__} needs at least {self.min_points} "
                             f"points, got {n}")

        direction_stats: Dict[float, DirectionBucket] = {}
        total_delta_angle = 0.0
        area = 0.0
        shortest_edge_length = STRAIGHT

        for i, cp in self.iterate():
            pp, np_ = self._neighbors(i)
            cp.prev_edge = Edge.between(pp, cp) if pp is not None else None
            cp.next_edge = Edge.between(cp, np_) if np_ is not None else None
            if cp.prev_edge is None or cp.next_edge is None:
                cp.tangent = None
                cp.delta_angle = 0.0
                cp.turn_radius = STRAIGHT
            else:
                cp.tangent = Edge.between(pp, np_)
                cp.delta_angle = angle_delta(cp.next_edge.angle, cp.prev_edge.angle)
                cp.turn_radius = _turn_radius(cp.next_edge.length, cp.delta_angle)
            total_delta_angle += cp.delta_angle

            if cp.next_edge is not None:
                shortest_edge_length = min(shortest_edge_length, cp.next_edge.length)
                add_to_direction_stats(direction_stats, cp.next_edge.angle, cp.next_edge.length)

            # shoelace, always over the closed ring
            closing = self.points[i % n]
            area += cp.x * closing.y - cp.y * closing.x

        self._direction_stats = direction_stats
        self._best_direction = get_best_direction(direction_stats)
        self._is_clockwise = total_delta_angle > 0
        self._area = -area / 2 if self._is_clockwise else area / 2
        self._shortest_edge_length = shortest_edge_length
        self._bounding_box = self._calculate_bounding_box()
        self._valid = True

    def _calculate_bounding_box(self) -> BoundingBox:
        coords = self.to_array()
        min_x, min_y = coords.min(axis=0)
        max_x, max_y = coords.max(axis=0)
        return BoundingBox(float(min_x), float(max_x), float(min_y), float(max_y))

    def _check_valid(self):
        if not self._valid:
            raise RuntimeError(f"{type(self).__name__} was modified, call recompute() first")

    def bounding_box(self) -> BoundingBox:
        self._check_valid()
        return self._bounding_box

    def dominant_direction(self) -> BestDirection:
        """Bucket with the longest total edge length and the mean direction in it."""
        self._check_valid()
        return self._best_direction

    @property
    def direction_stats(self) -> Dict[float, DirectionBucket]:
        self._check_valid()
        return self._direction_stats

    def is_clockwise(self) -> bool:
        self._check_valid()
        return self._is_clockwise

    def area(self) -> float:
        """Area enclosed, positive in either traversal direction."""
        self._check_valid()
        return self._area

    def shortest_edge_length(self) -> float:
        self._check_valid()
        return self._shortest_edge_length

    @property
    def is_valid(self) -> bool:
        """True if the cached geometry reflects the current points."""
        return self._valid

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self.points)} points)"


class Line(Polygon):
    """
    Open sequence of points.

    No wraparound: indices outside 1..n raise IndexError, the first point
    has no prev_edge and the last no next_edge.
    """

    circular = False
    min_points = 2

    def resolve_index(self, index: int) -> int:
        n = len(self.points)
        if not 1 <= index <= n:
            raise IndexError(f"index {index} out of range 1..{n} of line")
        return index

    def _default_stop(self, start: int, step: int) -> int:
        return len(self.points) if step > 0 else 1

    def iterate(self, start: int = 1, stop: Optional[int] = None,
                step: int = 1) -> Iterator[Tuple[int, Point]]:
        n = len(self.points)
        if stop is None:
            stop = self._default_stop(start, step)
        i = start
        while 1 <= i <= n:
            yield i, self.points[i - 1]
            if i == stop:
                return
            i += step

    def _neighbors(self, i: int) -> Tuple[Optional[Point], Optional[Point]]:
        n = len(self.points)
        pp = self.points[i - 2] if i > 1 else None
        np_ = self.points[i] if i < n else None
        return pp, np_


def _turn_radius(length: float, delta_angle: float) -> float:
    s = abs(2 * math.sin(delta_angle / 2))
    if s < 1e-9:
        return STRAIGHT
    return length / s


if __name__ == "__main__":
    # Example usage
    square = Polygon([(0, 0), (10, 0), (10, 10), (0, 10)])
    square.recompute()

    print(square)
    print(f"Area: {square.area():.1f} m2")
    print(f"Clockwise: {square.is_clockwise()}")
    print(f"Bounding box: {square.bounding_box()}")
    print(f"Dominant direction: {square.dominant_direction()}")
    for i, p in square.iterate(3):
        print(f"{i}: ({p.x}, {p.y}) turn {math.degrees(p.delta_angle):.0f} deg")
