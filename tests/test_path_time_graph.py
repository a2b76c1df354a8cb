"""
Tests for path-time graph rendering
"""
import matplotlib
matplotlib.use('Agg')

import pytest

from path_time_planning.config import NeighborhoodConfig
from path_time_planning.planning.path_time_neighborhood import PathTimeNeighborhood
from path_time_planning.planning.reference_line import ReferenceLine
from path_time_planning.prediction.obstacle import Obstacle
from path_time_planning.visualization import plot_path_time_graph, save_path_time_graph


@pytest.fixture
def neighborhood():
    config = NeighborhoodConfig(planned_trajectory_time=4.0, trajectory_time_resolution=0.5)
    reference_line = ReferenceLine.from_waypoints([0.0, 50.0, 100.0], [0.0, 0.0, 0.0])
    obstacles = [
        Obstacle.from_constant_velocity("lead", x=20.0, y=0.0, vx=5.0, vy=0.0),
        Obstacle.from_constant_velocity("slow", x=40.0, y=0.5, vx=1.0, vy=0.0),
    ]
    return PathTimeNeighborhood((0.0, 5.0, 0.0), reference_line, obstacles, config=config)


def test_plot_adds_one_patch_per_envelope(neighborhood):
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots()
    try:
        returned = plot_path_time_graph(neighborhood, ax)
        assert returned is ax
        assert len(ax.patches) == len(neighborhood)
        assert ax.get_xlim() == (0.0, 4.0)
    finally:
        plt.close(fig)


def test_save_path_time_graph(neighborhood, tmp_path):
    output = save_path_time_graph(neighborhood, str(tmp_path / "plots" / "path_time.png"))
    assert output.exists()
    assert output.stat().st_size > 0
