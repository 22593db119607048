"""Arc sweep, tessellation and bounding box tests."""
import math

import pytest

from core.geometry import (ArcSegment, ColorTag, LineSegment, Point2, arc_points,
                           arc_sweep, segment_bounds)


def make_arc(start_angle, end_angle, clockwise, radius=1.0, center=Point2(0, 0)):
    return ArcSegment(center=center, radius=radius, start_angle=start_angle,
                      end_angle=end_angle, clockwise=clockwise, visible=True,
                      color=ColorTag.EXTRUDE)


def test_counterclockwise_sweep_is_positive():
    assert arc_sweep(0, math.pi / 2, False) == pytest.approx(math.pi / 2)
    assert arc_sweep(math.pi / 2, 0, False) == pytest.approx(3 * math.pi / 2)


def test_clockwise_sweep_is_negative():
    assert arc_sweep(math.pi / 2, 0, True) == pytest.approx(-math.pi / 2)
    assert arc_sweep(0, math.pi / 2, True) == pytest.approx(-3 * math.pi / 2)


def test_equal_angles_are_a_full_circle():
    assert arc_sweep(1.0, 1.0, False) == pytest.approx(2 * math.pi)
    assert arc_sweep(1.0, 1.0, True) == pytest.approx(-2 * math.pi)


def test_arc_points_start_and_end_on_the_arc():
    arc = make_arc(0, math.pi / 2, False, radius=2.0, center=Point2(1, 1))
    points = arc_points(arc, 5.0)

    assert points[0].x == pytest.approx(3)
    assert points[0].y == pytest.approx(1)
    assert points[-1].x == pytest.approx(1)
    assert points[-1].y == pytest.approx(3)
    assert len(points) >= 19
    for point in points:
        assert point.distance_to(arc.center) == pytest.approx(2.0)


def test_clockwise_arc_points_go_the_long_way():
    arc = make_arc(0, math.pi / 2, True)
    points = arc_points(arc)

    # Passes through the bottom of the circle, not the top-right quadrant
    assert min(p.y for p in points) == pytest.approx(-1, abs=1e-3)


def test_arc_length():
    assert make_arc(0, math.pi, False, radius=2).length() == pytest.approx(2 * math.pi)


def test_line_bounds():
    line = LineSegment(Point2(3, -1), Point2(-2, 4), True, ColorTag.TRAVEL)
    low, high = segment_bounds(line)

    assert low == Point2(-2, -1)
    assert high == Point2(3, 4)


def test_quarter_arc_bounds():
    low, high = segment_bounds(make_arc(0, math.pi / 2, False))

    assert low.x == pytest.approx(0, abs=1e-9)
    assert low.y == pytest.approx(0, abs=1e-9)
    assert high.x == pytest.approx(1)
    assert high.y == pytest.approx(1)


def test_clockwise_half_arc_bounds_include_bottom():
    low, high = segment_bounds(make_arc(0, math.pi, True))

    assert low.x == pytest.approx(-1)
    assert low.y == pytest.approx(-1)
    assert high.x == pytest.approx(1)
    assert high.y == pytest.approx(0, abs=1e-9)
