"""
Unit tests for the polygon and line containers.

Run with: pytest test/test_polygon.py
"""

import pytest
import math
import numpy as np
from coursegen.models.point import Point, STRAIGHT
from coursegen.geometry.polygon import Polygon, Line, direction_bucket

SQUARE_CCW = [(0, 0), (10, 0), (10, 10), (0, 10)]
SQUARE_CW = [(0, 0), (0, 10), (10, 10), (10, 0)]


class TestPolygonConstruction:
    """Tests for creating containers."""

    def test_from_tuples(self):
        """Test creating a polygon from (x, y) pairs."""
        polygon = Polygon(SQUARE_CCW)

        assert len(polygon) == 4
        assert all(isinstance(p, Point) for p in polygon)
        assert (polygon[2].x, polygon[2].y) == (10.0, 0.0)

    def test_from_mappings(self):
        """Test creating a polygon from {'x':, 'y':} mappings."""
        polygon = Polygon([{'x': 0, 'y': 0}, {'x': 5, 'y': 0}, {'x': 5, 'y': 5}])

        assert len(polygon) == 3
        assert polygon[3].y == 5.0

    def test_array_round_trip(self):
        """Test conversion to and from numpy arrays."""
        polygon = Polygon(SQUARE_CCW)
        array = polygon.to_array()

        assert array.shape == (4, 2)
        assert np.allclose(Polygon.from_array(array).to_array(), array)

    def test_too_few_points(self):
        """Test a polygon needs 3 points, a line 2."""
        with pytest.raises(ValueError):
            Polygon([(0, 0), (1, 0)]).recompute()

        Line([(0, 0), (1, 0)]).recompute()

        with pytest.raises(ValueError):
            Line([(0, 0)]).recompute()

    def test_from_numpy_array(self):
        """Test creating a polygon directly from an (n, 2) array."""
        polygon = Polygon(np.array([[0, 0], [1, 0], [1, 1]]))

        assert len(polygon) == 3
        assert polygon[3].as_tuple() == (1.0, 1.0)

    def test_empty(self):
        """Test a container without points."""
        assert len(Polygon()) == 0
        assert len(Line()) == 0

    def test_copy_is_independent(self):
        """Test copies don't share points."""
        polygon = Polygon(SQUARE_CCW)
        polygon[1].turn_start = True
        copy = polygon.copy()

        copy[1].x = 100

        assert polygon[1].x == 0
        assert copy[1].turn_start
        assert copy[1] is not polygon[1]


class TestIndexing:
    """Tests for index resolution and iteration."""

    def test_circular_resolve_index(self):
        """Test indices roll over both ends of a polygon."""
        polygon = Polygon([(0, 0), (1, 0), (2, 1), (1, 2), (0, 1)])

        assert polygon.resolve_index(0) == 5
        assert polygon.resolve_index(6) == 1
        assert polygon.resolve_index(-1) == 4
        assert polygon.resolve_index(3) == 3
        assert polygon.resolve_index(10) == 5
        assert polygon.resolve_index(11) == 1

    def test_circular_getitem_wraps(self):
        """Test item access rolls over."""
        polygon = Polygon(SQUARE_CCW)

        assert polygon[0] is polygon[4]
        assert polygon[5] is polygon[1]

    def test_line_resolve_index(self):
        """Test a line does not roll over."""
        line = Line(SQUARE_CCW)

        assert line.resolve_index(1) == 1
        assert line.resolve_index(4) == 4
        with pytest.raises(IndexError):
            line.resolve_index(0)
        with pytest.raises(IndexError):
            line.resolve_index(5)

    def test_iterate_full_circle(self):
        """Test default iteration visits every point once."""
        polygon = Polygon([(0, 0), (1, 0), (2, 1), (1, 2), (0, 1)])

        assert [i for i, _ in polygon.iterate()] == [1, 2, 3, 4, 5]

    def test_iterate_across_seam(self):
        """Test iteration starting in the middle rolls over the end."""
        polygon = Polygon([(0, 0), (1, 0), (2, 1), (1, 2), (0, 1)])

        assert [i for i, _ in polygon.iterate(4)] == [4, 5, 1, 2, 3]
        assert [i for i, _ in polygon.iterate(4, 2)] == [4, 5, 1, 2]
        assert [i for i, _ in polygon.iterate(2, 4)] == [2, 3, 4]

    def test_iterate_backwards(self):
        """Test iteration with a negative step."""
        polygon = Polygon([(0, 0), (1, 0), (2, 1), (1, 2), (0, 1)])

        assert [i for i, _ in polygon.iterate(3, step=-1)] == [3, 2, 1, 5, 4]

    def test_iterate_is_restartable(self):
        """Test each call starts a new iteration."""
        polygon = Polygon(SQUARE_CCW)

        first = [i for i, _ in polygon.iterate(2)]
        second = [i for i, _ in polygon.iterate(2)]
        assert first == second == [2, 3, 4, 1]

    def test_iterate_line(self):
        """Test a line iterates to its end and stops."""
        line = Line([(0, 0), (1, 0), (2, 0), (3, 0), (4, 0)])

        assert [i for i, _ in line.iterate()] == [1, 2, 3, 4, 5]
        assert [i for i, _ in line.iterate(3)] == [3, 4, 5]
        assert [i for i, _ in line.iterate(3, step=-1)] == [3, 2, 1]


class TestRecompute:
    """Tests for derived geometry."""

    def test_counterclockwise_square(self):
        """Test orientation and area of a counterclockwise square."""
        polygon = Polygon(SQUARE_CCW)
        polygon.recompute()

        assert polygon.is_clockwise() is False
        assert abs(polygon.area() - 100.0) < 1e-9

    def test_clockwise_square(self):
        """Test orientation and area of a clockwise square."""
        polygon = Polygon(SQUARE_CW)
        polygon.recompute()

        assert polygon.is_clockwise() is True
        assert abs(polygon.area() - 100.0) < 1e-9

    def test_edges(self):
        """Test edges of a vertex of the square."""
        polygon = Polygon(SQUARE_CCW)
        polygon.recompute()
        p = polygon[2]

        assert abs(p.prev_edge.angle) < 1e-12
        assert abs(p.prev_edge.length - 10.0) < 1e-12
        assert abs(p.next_edge.angle - math.pi / 2) < 1e-12
        assert (p.next_edge.end.x, p.next_edge.end.y) == (10.0, 10.0)
        assert abs(p.tangent.angle - math.pi / 4) < 1e-12
        assert abs(p.tangent.length - math.sqrt(200)) < 1e-9

    def test_edges_across_seam(self):
        """Test the first vertex gets its previous edge from the last one."""
        polygon = Polygon(SQUARE_CCW)
        polygon.recompute()
        p = polygon[1]

        assert (p.prev_edge.start.x, p.prev_edge.start.y) == (0.0, 10.0)
        assert abs(p.prev_edge.angle + math.pi / 2) < 1e-12

    def test_delta_angle_and_turn_radius(self):
        """Test turn of a square corner."""
        polygon = Polygon(SQUARE_CCW)
        polygon.recompute()

        for p in polygon:
            # turning left makes delta_angle negative
            assert abs(p.delta_angle + math.pi / 2) < 1e-12
            assert abs(p.turn_radius - 10 / math.sqrt(2)) < 1e-9

    def test_straight_point_has_no_radius(self):
        """Test a point without direction change has an infinite radius."""
        polygon = Polygon([(0, 0), (5, 0), (10, 0), (10, 10), (0, 10)])
        polygon.recompute()

        assert polygon[2].delta_angle == 0
        assert polygon[2].turn_radius == STRAIGHT
        assert math.isinf(polygon[2].turn_radius)

    def test_recompute_is_idempotent(self):
        """Test calling recompute twice gives the same results."""
        polygon = Polygon([(0, 0), (7, 1), (12, 5), (9, 11), (2, 8)])
        polygon.recompute()
        first = [(p.prev_edge, p.next_edge, p.tangent, p.delta_angle, p.turn_radius)
                 for p in polygon]
        aggregates = (polygon.area(), polygon.is_clockwise(), polygon.shortest_edge_length(),
                      polygon.bounding_box(), polygon.dominant_direction())

        polygon.recompute()

        assert [(p.prev_edge, p.next_edge, p.tangent, p.delta_angle, p.turn_radius)
                for p in polygon] == first
        assert (polygon.area(), polygon.is_clockwise(), polygon.shortest_edge_length(),
                polygon.bounding_box(), polygon.dominant_direction()) == aggregates

    def test_shortest_edge_length(self):
        """Test the shortest edge is found."""
        polygon = Polygon([(0, 0), (10, 0), (10, 3), (0, 10)])
        polygon.recompute()

        assert abs(polygon.shortest_edge_length() - 3.0) < 1e-12

    def test_bounding_box(self):
        """Test bounding box of a shape around the origin."""
        polygon = Polygon([(-5, -2), (8, -3), (6, 4), (-1, 7)])
        polygon.recompute()
        box = polygon.bounding_box()

        assert (box.min_x, box.max_x, box.min_y, box.max_y) == (-5, 8, -3, 7)
        assert box.width == 13
        assert box.height == 10

    def test_stale_geometry_raises(self):
        """Test aggregates can't be read after an edit."""
        polygon = Polygon([(0, 0), (10, 0), (10, 10), (5, 12), (0, 10)])
        polygon.recompute()
        assert polygon.is_valid

        polygon.remove(4)

        assert not polygon.is_valid
        with pytest.raises(RuntimeError):
            polygon.area()

        polygon.recompute()
        assert abs(polygon.area() - 100.0) < 1e-9

    def test_line_ends(self):
        """Test the ends of a line have no outside edges."""
        line = Line([(0, 0), (10, 0), (10, 10), (20, 10)])
        line.recompute()

        assert line[1].prev_edge is None
        assert line[1].next_edge is not None
        assert line[1].tangent is None
        assert line[1].delta_angle == 0
        assert line[4].next_edge is None
        assert line[4].prev_edge is not None
        assert line[4].turn_radius == STRAIGHT
        assert abs(line[2].delta_angle + math.pi / 2) < 1e-12
        assert abs(line[3].delta_angle - math.pi / 2) < 1e-12
        assert abs(line.shortest_edge_length() - 10.0) < 1e-12


class TestDirectionStats:
    """Tests for direction statistics."""

    def test_direction_bucket(self):
        """Test 20 degree wide buckets keyed by their center."""
        assert direction_bucket(math.radians(5)) == 10
        assert direction_bucket(math.radians(25)) == 30
        assert direction_bucket(math.radians(-5)) == -10
        assert direction_bucket(math.radians(-90)) == -90

    def test_dominant_direction_is_mean_of_samples(self):
        """Test the best direction is the mean of the edges in the longest bucket."""
        polygon = Polygon([(0, 0), (50, 2), (100, 6), (60, 20)])
        polygon.recompute()
        best = polygon.dominant_direction()

        expected = (math.degrees(math.atan2(2, 50)) + math.degrees(math.atan2(4, 50))) / 2
        assert best.range_deg == 10
        assert abs(best.length - (math.sqrt(2504) + math.sqrt(2516))) < 1e-9
        assert abs(best.dir_deg - expected) < 1e-9

    def test_direction_stats_accumulate(self):
        """Test every edge is counted in its bucket."""
        polygon = Polygon(SQUARE_CCW)
        polygon.recompute()
        stats = polygon.direction_stats

        assert set(stats) == {10, 90, 190, -90}
        assert all(abs(bucket.length - 10.0) < 1e-12 for bucket in stats.values())
        assert all(len(bucket.dirs) == 1 for bucket in stats.values())
