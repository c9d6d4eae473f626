"""
Unit tests for the low pass filter and the spacing pass.

Run with: pytest test/test_filters.py
"""

import math
from coursegen.geometry.polygon import Polygon, Line
from coursegen.planning.filters import low_pass_filter, enforce_spacing


def _recomputed(container):
    container.recompute()
    return container


class TestLowPassFilter:
    """Tests for the low pass filter."""

    def test_merges_close_points(self):
        """Test a point closer than the threshold is merged into its successor."""
        polygon = _recomputed(Polygon([(0, 0), (10, 0), (10, 0.0005), (10, 10), (0, 10)]))

        result = low_pass_filter(polygon, math.radians(135), 0.001)

        assert result is polygon
        assert len(polygon) == 4
        assert abs(polygon[2].x - 10.0) < 1e-12
        assert abs(polygon[2].y - 0.00025) < 1e-12
        assert polygon.is_valid

    def test_merge_cascades(self):
        """Test a merged point is checked again against its new successor."""
        polygon = _recomputed(Polygon([(0, 0), (10, 0), (10, 0.0004), (10, 0.0008),
                                       (10, 10), (0, 10)]))

        low_pass_filter(polygon, math.radians(135), 0.001)

        assert len(polygon) == 4
        assert abs(polygon[2].x - 10.0) < 1e-12
        assert abs(polygon[2].y - 0.0005) < 1e-9
        assert polygon[3].as_tuple() == (10, 10)

    def test_removes_spike(self):
        """Test a point where the course doubles back is removed."""
        line = _recomputed(Line([(0, 0), (10, 0), (20, 0), (30, 0), (25, 0.05),
                                 (40, 0), (50, 0)]))

        low_pass_filter(line, math.radians(90), 0.001)

        coords = [p.as_tuple() for p in line]
        assert len(coords) == 6
        assert (30, 0) not in coords
        assert abs(line[4].x - 27.5) < 1e-12
        assert abs(line[4].y - 0.025) < 1e-12
        assert coords[0] == (0, 0)
        assert coords[-1] == (50, 0)

    def test_line_end_is_fixed(self):
        """Test the last point of a line is never moved."""
        line = _recomputed(Line([(0, 0), (10, 0), (20, 0), (20.0001, 0)]))

        low_pass_filter(line, math.radians(90), 0.001)

        assert [p.as_tuple() for p in line] == [(0, 0), (10, 0), (20.0001, 0)]

    def test_clean_course_untouched(self):
        """Test nothing happens if no point qualifies."""
        polygon = _recomputed(Polygon([(0, 0), (10, 0), (10, 10), (0, 10)]))

        low_pass_filter(polygon, math.radians(135), 0.001)

        assert [p.as_tuple() for p in polygon] == [(0, 0), (10, 0), (10, 10), (0, 10)]

    def test_stops_at_minimum_size(self):
        """Test the filter never shrinks a polygon below three points."""
        polygon = _recomputed(Polygon([(0, 0), (0.1, 0), (0.1, 0.1), (0, 0.1)]))

        low_pass_filter(polygon, math.radians(135), 1.0)

        assert len(polygon) == 3


class TestEnforceSpacing:
    """Tests for the spacing pass."""

    def test_thins_straight_line(self):
        """Test points on a straight line are kept at least min distance apart."""
        line = _recomputed(Line([(x, 0) for x in range(11)]))

        result = enforce_spacing(line, math.radians(10), 2.5)

        assert [p.x for p in result] == [0, 3, 6, 9, 10]
        assert isinstance(result, Line)
        assert result.is_valid

    def test_input_untouched(self):
        """Test a new container is returned."""
        line = _recomputed(Line([(x, 0) for x in range(11)]))

        result = enforce_spacing(line, math.radians(10), 2.5)

        assert len(line) == 11
        assert result is not line
        assert all(p is not q for p in result for q in line)

    def test_keeps_curve_points(self):
        """Test a point turning more than the threshold is always kept."""
        line = _recomputed(Line([(0, 0), (1, 0), (2, 0), (2, 1), (2, 2)]))

        result = enforce_spacing(line, math.radians(10), 5)

        assert [p.as_tuple() for p in result] == [(0, 0), (2, 0), (2, 2)]

    def test_polygon(self):
        """Test corners of a densely sampled polygon survive."""
        polygon = _recomputed(Polygon(
            [(x, 0) for x in range(10)] + [(10, y) for y in range(10)] +
            [(10 - x, 10) for x in range(10)] + [(0, 10 - y) for y in range(10)]))

        result = enforce_spacing(polygon, math.radians(10), 3)

        coords = [p.as_tuple() for p in result]
        assert isinstance(result, Polygon)
        for corner in [(0, 0), (10, 0), (10, 10), (0, 10)]:
            assert corner in coords
        assert len(result) < len(polygon)

    def test_keeps_annotated_points(self):
        """Test corner and turn markers are never thinned out."""
        line = _recomputed(Line([(x, 0) for x in range(11)]))
        line[2].corner_score = 1
        line[5].turn_start = True

        result = enforce_spacing(line, math.radians(10), 2.5)

        assert [p.x for p in result] == [0, 1, 4, 7, 10]
        assert result[2].corner_score == 1
        assert result[3].turn_start
