"""
Tests for obstacles and their predicted trajectories
"""
import pytest
import numpy as np

from path_time_planning.core.data_structures import TrajectoryPoint
from path_time_planning.prediction.obstacle import Obstacle


@pytest.fixture
def turning_obstacle():
    trajectory = [
        TrajectoryPoint(x=0.0, y=0.0, theta=0.0, v=2.0, relative_time=0.0),
        TrajectoryPoint(x=2.0, y=0.0, theta=np.pi / 2, v=4.0, relative_time=1.0),
        TrajectoryPoint(x=2.0, y=2.0, theta=np.pi / 2, v=4.0, relative_time=2.0),
    ]
    return Obstacle("turning", length=4.0, width=2.0, velocity=(2.0, 0.0), trajectory=trajectory)


def test_obstacle_without_trajectory():
    obstacle = Obstacle("empty", length=4.0, width=2.0)
    assert not obstacle.has_trajectory()
    with pytest.raises(ValueError):
        obstacle.get_point_at_time(0.0)


def test_point_at_time_interpolates(turning_obstacle):
    point = turning_obstacle.get_point_at_time(0.5)
    assert point.x == pytest.approx(1.0)
    assert point.y == pytest.approx(0.0)
    assert point.theta == pytest.approx(np.pi / 4)
    assert point.v == pytest.approx(3.0)
    assert point.relative_time == 0.5


def test_point_at_time_clamps(turning_obstacle):
    assert turning_obstacle.get_point_at_time(-1.0) == turning_obstacle.trajectory[0]
    assert turning_obstacle.get_point_at_time(5.0) == turning_obstacle.trajectory[-1]


def test_point_at_exact_sample_time(turning_obstacle):
    point = turning_obstacle.get_point_at_time(1.0)
    assert point.x == pytest.approx(2.0)
    assert point.theta == pytest.approx(np.pi / 2)


def test_bounding_box_follows_point(turning_obstacle):
    point = turning_obstacle.get_point_at_time(2.0)
    box = turning_obstacle.get_bounding_box(point)
    assert box.center_x == 2.0
    assert box.center_y == 2.0
    assert box.heading == pytest.approx(np.pi / 2)
    assert (box.length, box.width) == (4.0, 2.0)


def test_unordered_trajectory_rejected():
    trajectory = [
        TrajectoryPoint(x=0.0, y=0.0, theta=0.0, relative_time=1.0),
        TrajectoryPoint(x=1.0, y=0.0, theta=0.0, relative_time=1.0),
    ]
    with pytest.raises(ValueError):
        Obstacle("bad", length=1.0, width=1.0, trajectory=trajectory)


def test_constant_velocity_rollout():
    obstacle = Obstacle.from_constant_velocity("cv", x=10.0, y=1.0, vx=3.0, vy=4.0, horizon=2.0, dt=0.5)
    trajectory = obstacle.trajectory

    assert len(trajectory) == 5
    assert trajectory[-1].relative_time == pytest.approx(2.0)
    assert trajectory[-1].x == pytest.approx(16.0)
    assert trajectory[-1].y == pytest.approx(9.0)
    assert trajectory[0].v == pytest.approx(5.0)
    assert trajectory[0].theta == pytest.approx(np.arctan2(4.0, 3.0))
    assert obstacle.perception_velocity() == (3.0, 4.0)


def test_constant_velocity_stationary_keeps_heading():
    obstacle = Obstacle.from_constant_velocity("parked", x=0.0, y=0.0, vx=0.0, vy=0.0, heading=1.0)
    assert all(p.theta == 1.0 for p in obstacle.trajectory)
    assert obstacle.get_point_at_time(3.0).x == 0.0


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
