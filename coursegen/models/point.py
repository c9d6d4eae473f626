"""
POINT AND EDGE MODELLING MODULE

@Description: Defines the vertices of a course and the directed edges between
them. A Point carries its coordinates plus geometry cached by the container
it belongs to, and a handful of annotation fields written by the turn
detection and corner rounding passes.
"""

from dataclasses import dataclass, field
import math
from typing import Optional, Tuple

# Turn radius of a point (or span) with no direction change
STRAIGHT = math.inf

# Fields copied when a point is carried over into a transformed container
ANNOTATIONS = ('turn_start', 'turn_end', 'headland_turn', 'corner_score', 'text')


@dataclass
class Point:
    """
    A vertex of a polygon or line.

    Attributes:
        x, y: Coordinates in meters
        prev_edge: Edge from the predecessor to this point (cached)
        next_edge: Edge from this point to the successor (cached)
        tangent: Edge from the predecessor to the successor (cached)
        delta_angle: Signed turn at this point in radians (cached)
        turn_radius: Radius of the turn at this point (cached, STRAIGHT if none)
        turn_start: Set where a headland turn starts
        turn_end: Set where a headland turn ends
        headland_turn: Set on the start point of a headland turn
        corner_score: 1 = corner start, 2 = first arc point, 4 = last arc point
        text: Debug label
    """
    x: float
    y: float

    # --- CACHED GEOMETRY ---
    prev_edge: Optional['Edge'] = field(default=None, repr=False, compare=False)
    next_edge: Optional['Edge'] = field(default=None, repr=False, compare=False)
    tangent: Optional['Edge'] = field(default=None, repr=False, compare=False)
    delta_angle: float = field(default=0.0, repr=False, compare=False)
    turn_radius: float = field(default=STRAIGHT, repr=False, compare=False)

    # --- ANNOTATIONS ---
    turn_start: bool = field(default=False, repr=False, compare=False)
    turn_end: bool = field(default=False, repr=False, compare=False)
    headland_turn: bool = field(default=False, repr=False, compare=False)
    corner_score: Optional[int] = field(default=None, repr=False, compare=False)
    text: Optional[str] = field(default=None, repr=False, compare=False)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def copy(self) -> 'Point':
        """Copy coordinates and annotations, but none of the cached geometry."""
        result = Point(self.x, self.y)
        for name in ANNOTATIONS:
            setattr(result, name, getattr(self, name))
        return result

    def clear_geometry(self):
        self.prev_edge = None
        self.next_edge = None
        self.tangent = None
        self.delta_angle = 0.0
        self.turn_radius = STRAIGHT

    @classmethod
    def from_any(cls, p) -> 'Point':
        """Create a point from a Point, an (x, y) pair or an {'x':, 'y':} mapping."""
        if isinstance(p, Point):
            return p
        if isinstance(p, dict):
            return cls(float(p['x']), float(p['y']))
        x, y = p
        return cls(float(x), float(y))


@dataclass(frozen=True)
class Edge:
    """
    A directed segment between two points.

    Edges are always derived from two points and never edited; use
    extended() to get a longer copy.

    Attributes:
        start: Origin of the edge
        end: Destination of the edge
        angle: Direction in radians, (-pi, pi]
        length: Length in meters
        dx, dy: Direction vector components (end - start)
    """
    start: Point
    end: Point
    angle: float
    length: float
    dx: float
    dy: float

    @classmethod
    def between(cls, p1, p2) -> 'Edge':
        """Build the edge from p1 to p2."""
        # imported here, primitives depend on Point
        from ..geometry.primitives import to_polar
        dx = p2.x - p1.x
        dy = p2.y - p1.y
        angle, length = to_polar(dx, dy)
        return cls(Point(p1.x, p1.y), Point(p2.x, p2.y), angle, length, dx, dy)

    def extended(self, forward: float = 0.0, backward: float = 0.0) -> 'Edge':
        """
        Return a copy of this edge lengthened at both ends.

        Args:
            forward: Distance to move the end point along the edge direction
            backward: Distance to move the start point against the edge direction

        Returns:
            New edge with the same direction
        """
        if self.length == 0:
            return self
        ux = self.dx / self.length
        uy = self.dy / self.length
        start = Point(self.start.x - backward * ux, self.start.y - backward * uy)
        end = Point(self.end.x + forward * ux, self.end.y + forward * uy)
        return Edge(start, end, self.angle, self.length + forward + backward,
                    end.x - start.x, end.y - start.y)

    def __repr__(self) -> str:
        return (f"Edge(({self.start.x:.2f}, {self.start.y:.2f}) -> "
                f"({self.end.x:.2f}, {self.end.y:.2f}), "
                f"angle={math.degrees(self.angle):.1f}deg, length={self.length:.2f}m)")
