"""Tests for the reference line and its matcher."""

import pytest
import numpy as np

from path_time_planning.core.data_structures import PathPoint
from path_time_planning.core.errors import InvalidGeometryError
from path_time_planning.core.geometry import Box2d
from path_time_planning.planning.reference_line import ReferenceLine
from path_time_planning.planning.reference_line_matcher import (
    match_to_reference_line_by_s,
    match_to_reference_line_by_xy,
)


@pytest.fixture
def quarter_turn_points():
    """Eastward segment followed by a northward segment."""
    return [
        PathPoint(x=0.0, y=0.0, theta=0.0, s=0.0),
        PathPoint(x=10.0, y=0.0, theta=0.0, s=10.0),
        PathPoint(x=10.0, y=10.0, theta=np.pi / 2, s=20.0),
    ]


@pytest.fixture
def straight_line():
    return ReferenceLine.from_waypoints([0.0, 50.0, 100.0], [0.0, 0.0, 0.0], resolution=1.0)


def test_match_by_s_interpolates(quarter_turn_points):
    point = match_to_reference_line_by_s(quarter_turn_points, 15.0)
    assert point.s == 15.0
    assert point.x == pytest.approx(10.0)
    assert point.y == pytest.approx(5.0)
    assert point.theta == pytest.approx(np.pi / 4)


def test_match_by_s_clamps_to_ends(quarter_turn_points):
    assert match_to_reference_line_by_s(quarter_turn_points, -5.0) is quarter_turn_points[0]
    assert match_to_reference_line_by_s(quarter_turn_points, 25.0) is quarter_turn_points[-1]


def test_match_by_s_empty_line():
    with pytest.raises(ValueError):
        match_to_reference_line_by_s([], 1.0)


def test_match_by_xy_projects_onto_segment(quarter_turn_points):
    point = match_to_reference_line_by_xy(quarter_turn_points, 4.0, 2.0)
    assert point.s == pytest.approx(4.0)
    assert point.x == pytest.approx(4.0)
    assert point.y == pytest.approx(0.0)


def test_straight_line_from_waypoints(straight_line):
    points = straight_line.reference_points
    assert straight_line.length == pytest.approx(100.0)
    assert points[0].s == 0.0
    assert points[-1].s == pytest.approx(100.0)
    assert all(abs(p.theta) < 1e-9 for p in points)
    assert all(abs(p.kappa) < 1e-9 for p in points)


def test_xy_to_sl(straight_line):
    s, l = straight_line.xy_to_sl(30.0, 2.0)
    assert s == pytest.approx(30.0)
    assert l == pytest.approx(2.0)


def test_xy_to_sl_extrapolates_before_start(straight_line):
    s, l = straight_line.xy_to_sl(-5.0, -1.0)
    assert s == pytest.approx(-5.0)
    assert l == pytest.approx(-1.0)


def test_get_sl_boundary_axis_aligned(straight_line):
    box = Box2d(center_x=20.0, center_y=1.0, heading=0.0, length=4.0, width=2.0)
    boundary = straight_line.get_sl_boundary(box)
    assert boundary.start_s == pytest.approx(18.0)
    assert boundary.end_s == pytest.approx(22.0)
    assert boundary.start_l == pytest.approx(0.0)
    assert boundary.end_l == pytest.approx(2.0)


def test_get_sl_boundary_rotated_box(straight_line):
    """A box across the road spans its length laterally."""
    box = Box2d(center_x=20.0, center_y=0.0, heading=np.pi / 2, length=4.0, width=2.0)
    boundary = straight_line.get_sl_boundary(box)
    assert boundary.start_s == pytest.approx(19.0)
    assert boundary.end_s == pytest.approx(21.0)
    assert boundary.start_l == pytest.approx(-2.0)
    assert boundary.end_l == pytest.approx(2.0)
    assert boundary.is_finite()


def test_curved_line_heading():
    """Heading follows a circular arc."""
    angles = np.linspace(0.0, np.pi / 2, 20)
    radius = 50.0
    line = ReferenceLine.from_waypoints(radius * np.sin(angles), radius * (1.0 - np.cos(angles)))
    point = line.get_reference_point(line.length / 2)
    assert point.theta == pytest.approx(np.pi / 4, abs=1e-2)
    assert point.kappa == pytest.approx(1.0 / radius, rel=5e-2)


def test_reference_line_needs_two_points():
    with pytest.raises(InvalidGeometryError):
        ReferenceLine([PathPoint(x=0.0, y=0.0, theta=0.0, s=0.0)])


def test_reference_line_rejects_unordered_s():
    points = [
        PathPoint(x=0.0, y=0.0, theta=0.0, s=0.0),
        PathPoint(x=1.0, y=0.0, theta=0.0, s=0.0),
    ]
    with pytest.raises(InvalidGeometryError):
        ReferenceLine(points)


def test_from_waypoints_rejects_repeated_waypoint():
    with pytest.raises(InvalidGeometryError):
        ReferenceLine.from_waypoints([0.0, 0.0, 10.0], [0.0, 0.0, 0.0])


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
