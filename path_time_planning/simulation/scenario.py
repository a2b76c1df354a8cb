"""Scenario files describing one planning cycle.

A scenario YAML holds the neighborhood parameters, the ego longitudinal
state, the reference waypoints and the obstacles. Obstacles either list an
explicit trajectory as rows of [t, x, y, theta] or give a current pose and
velocity that is rolled forward at constant velocity.
"""

import yaml
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Tuple
from loguru import logger

from ..config import NeighborhoodConfig, config_from_dict
from ..core.data_structures import TrajectoryPoint
from ..planning.path_time_neighborhood import PathTimeNeighborhood
from ..planning.reference_line import ReferenceLine
from ..prediction.obstacle import Obstacle


@dataclass
class Scenario:
    """Inputs of one path-time neighborhood build."""
    config: NeighborhoodConfig
    init_s: Tuple[float, float, float]
    reference_line: ReferenceLine
    obstacles: List[Obstacle] = field(default_factory=list)
    name: str = ""

    def build_neighborhood(self) -> PathTimeNeighborhood:
        return PathTimeNeighborhood(
            self.init_s,
            self.reference_line,
            self.obstacles,
            self.reference_line.reference_points,
            config=self.config,
        )


def obstacle_from_dict(obstacle_dict: Dict[str, Any], config: NeighborhoodConfig) -> Obstacle:
    """Create an obstacle from its scenario entry."""
    try:
        obstacle_id = str(obstacle_dict['id'])
    except KeyError as e:
        raise ValueError(f"Obstacle entry without 'id': {obstacle_dict}") from e

    length = float(obstacle_dict.get('length', 4.5))
    width = float(obstacle_dict.get('width', 2.0))
    vx = float(obstacle_dict.get('vx', 0.0))
    vy = float(obstacle_dict.get('vy', 0.0))

    if 'trajectory' in obstacle_dict:
        rows = obstacle_dict['trajectory'] or []
        trajectory = []
        for row in rows:
            if len(row) != 4:
                raise ValueError(
                    f"Obstacle {obstacle_id}: trajectory rows must be [t, x, y, theta], got {row}"
                )
            t, x, y, theta = (float(v) for v in row)
            trajectory.append(TrajectoryPoint(x=x, y=y, theta=theta, relative_time=t))
        return Obstacle(obstacle_id, length, width, velocity=(vx, vy), trajectory=trajectory)

    missing = [key for key in ('x', 'y') if key not in obstacle_dict]
    if missing:
        raise ValueError(f"Obstacle {obstacle_id}: missing {missing} for a constant-velocity rollout")

    return Obstacle.from_constant_velocity(
        obstacle_id,
        x=float(obstacle_dict['x']),
        y=float(obstacle_dict['y']),
        vx=vx,
        vy=vy,
        length=length,
        width=width,
        heading=obstacle_dict.get('heading'),
        horizon=config.planned_trajectory_time,
        dt=config.trajectory_time_resolution,
    )


def load_scenario(scenario_path: str) -> Scenario:
    """Load a scenario from a YAML file.

    Args:
        scenario_path: Path to the scenario file

    Returns:
        Scenario ready to build a neighborhood from
    """
    scenario_path = Path(scenario_path)
    if not scenario_path.exists():
        raise FileNotFoundError(f"Scenario file not found: {scenario_path}")

    try:
        with open(scenario_path, 'r') as f:
            scenario_dict = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse YAML file {scenario_path}: {e}") from e

    if not scenario_dict:
        raise ValueError(f"YAML file {scenario_path} is empty or contains no valid content")

    config = config_from_dict(scenario_dict.get('neighborhood', {}))
    config.config_path = str(scenario_path)

    init_s = scenario_dict.get('ego_init_s', [0.0, 0.0, 0.0])
    if len(init_s) != 3:
        raise ValueError(f"ego_init_s must have 3 elements [s, s_dot, s_ddot], got {len(init_s)}")

    reference_line = ReferenceLine.from_waypoints(
        scenario_dict.get('reference_waypoints_x', []),
        scenario_dict.get('reference_waypoints_y', []),
        resolution=config.reference_line_resolution,
    )

    obstacles = [obstacle_from_dict(o, config) for o in scenario_dict.get('obstacles', [])]

    logger.info(
        f"Scenario loaded from {scenario_path}: {len(obstacles)} obstacles, "
        f"reference line length={reference_line.length:.1f}m"
    )

    return Scenario(
        config=config,
        init_s=(float(init_s[0]), float(init_s[1]), float(init_s[2])),
        reference_line=reference_line,
        obstacles=obstacles,
        name=scenario_dict.get('name', scenario_path.stem),
    )
