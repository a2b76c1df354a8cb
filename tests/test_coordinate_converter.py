"""Tests for coordinate helpers and box geometry."""

import pytest
import numpy as np

from path_time_planning.core.coordinate_converter import normalize_angle, cartesian_to_sl, slerp, lerp
from path_time_planning.core.data_structures import PathPoint
from path_time_planning.core.geometry import Box2d


def test_normalize_angle():
    """Test angle normalization."""
    assert abs(normalize_angle(0.0)) < 1e-6
    assert abs(normalize_angle(2 * np.pi)) < 1e-6
    assert abs(normalize_angle(np.pi) - np.pi) < 1e-6
    assert abs(normalize_angle(-np.pi) - (-np.pi)) < 1e-6
    assert abs(normalize_angle(3 * np.pi) - (-np.pi)) < 1e-6


def test_normalize_angle_array():
    angles = np.array([0.0, 2.5 * np.pi, -2.5 * np.pi])
    assert np.allclose(normalize_angle(angles), [0.0, 0.5 * np.pi, -0.5 * np.pi])


def test_slerp_takes_shortest_arc():
    """Interpolating across +-pi goes through pi, not through 0."""
    mid = slerp(np.pi - 0.1, 0.0, -np.pi + 0.1, 1.0, 0.5)
    assert abs(abs(mid) - np.pi) < 1e-9


def test_lerp_degenerate_interval():
    assert lerp(3.0, 1.0, 5.0, 1.0, 1.0) == 3.0
    assert lerp(0.0, 0.0, 10.0, 2.0, 0.5) == pytest.approx(2.5)


def test_cartesian_to_sl_left_is_positive():
    ref = PathPoint(x=10.0, y=0.0, theta=0.0, s=10.0)
    s, l = cartesian_to_sl(ref, 12.0, 1.5)
    assert s == pytest.approx(12.0)
    assert l == pytest.approx(1.5)

    _, l_right = cartesian_to_sl(ref, 10.0, -2.0)
    assert l_right == pytest.approx(-2.0)


def test_cartesian_to_sl_rotated_reference():
    # Reference heading north: left of the line is negative x
    ref = PathPoint(x=0.0, y=0.0, theta=np.pi / 2, s=5.0)
    s, l = cartesian_to_sl(ref, -1.0, 0.0)
    assert s == pytest.approx(5.0)
    assert l == pytest.approx(1.0)


def test_box_corners_axis_aligned():
    box = Box2d(center_x=10.0, center_y=0.0, heading=0.0, length=4.0, width=2.0)
    corners = box.corners()
    assert corners.shape == (4, 2)
    assert np.allclose(corners.min(axis=0), [8.0, -1.0])
    assert np.allclose(corners.max(axis=0), [12.0, 1.0])


def test_box_corners_rotated():
    box = Box2d(center_x=0.0, center_y=0.0, heading=np.pi / 2, length=4.0, width=2.0)
    corners = box.corners()
    assert np.allclose(corners.min(axis=0), [-1.0, -2.0])
    assert np.allclose(corners.max(axis=0), [1.0, 2.0])


def test_box_rejects_negative_dimensions():
    with pytest.raises(ValueError):
        Box2d(center_x=0.0, center_y=0.0, heading=0.0, length=-1.0, width=2.0)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
