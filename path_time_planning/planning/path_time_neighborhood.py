"""Path-time neighborhood of the ego vehicle.

Projects the predicted motion of every obstacle into the path-time (s, t)
frame of the reference line and keeps, per obstacle, the quadrilateral
envelope covering the samples in which the obstacle is relevant to the ego
vehicle.

An obstacle sample is relevant when it is not entirely behind the ego
vehicle, does not start beyond the lookahead distance, and has at least one
lateral edge inside the lane band. Sampling of an obstacle stops at its
first irrelevant sample after it became relevant, so an obstacle that leaves
and comes back is only recorded for its first visit.
"""

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np
from loguru import logger

from ..config import NeighborhoodConfig, validate_config
from ..core.data_structures import PathPoint, PathTimeObstacle, PathTimePoint, SLBoundary
from ..core.errors import InvalidGeometryError
from ..core.interfaces import ReferenceCurveProjector, TrajectorySource
from ..core.state_machine import ObstacleSamplingStateMachine
from .reference_line_matcher import match_to_reference_line_by_s


def is_in_region_of_interest(
    sl_boundary: SLBoundary,
    ego_s: float,
    config: NeighborhoodConfig
) -> bool:
    """Relevance test of one obstacle sample.

    Args:
        sl_boundary: Obstacle extent on the reference line
        ego_s: Ego longitudinal position at the planning start [m]
        config: Horizon and lane-band parameters

    Returns:
        False if the sample is behind the ego vehicle, beyond the lookahead,
        or has both lateral edges outside the lane band
    """
    if sl_boundary.end_s < 0.0:
        return False
    if sl_boundary.start_s > ego_s + config.planned_trajectory_horizon:
        return False
    threshold = config.lateral_enter_lane_thred
    if abs(sl_boundary.start_l) > threshold and abs(sl_boundary.end_l) > threshold:
        return False
    return True


def speed_on_reference_line(
    discretized_ref_points: Sequence[PathPoint],
    obstacle: TrajectorySource,
    sl_boundary: SLBoundary
) -> float:
    """Obstacle velocity projected onto the reference line tangent.

    The tangent is taken at the near edge (start_s) of the obstacle.

    Raises:
        InvalidGeometryError: If the matched heading is not finite
    """
    matched = match_to_reference_line_by_s(discretized_ref_points, sl_boundary.start_s)
    ref_theta = matched.theta
    if not np.isfinite(ref_theta):
        raise InvalidGeometryError(
            f"Non-finite reference heading at s={sl_boundary.start_s} for obstacle {obstacle.id}"
        )
    vx, vy = obstacle.perception_velocity()
    return float(np.cos(ref_theta) * vx + np.sin(ref_theta) * vy)


class _EnvelopeAccumulator:
    """Collects the entry edges once and the frontier edges at every sample."""

    def __init__(self, obstacle_id: str):
        self.obstacle_id = obstacle_id
        self.entry: Optional[Tuple[PathTimePoint, PathTimePoint]] = None
        self.frontier: Optional[Tuple[PathTimePoint, PathTimePoint]] = None
        self.entry_velocity: Optional[float] = None
        self.frontier_velocity: Optional[float] = None

    def record(self, sl_boundary: SLBoundary, relative_time: float, velocity: float) -> None:
        lower = PathTimePoint(sl_boundary.start_s, relative_time, self.obstacle_id)
        upper = PathTimePoint(sl_boundary.end_s, relative_time, self.obstacle_id)
        if self.entry is None:
            self.entry = (lower, upper)
            self.entry_velocity = velocity
        self.frontier = (lower, upper)
        self.frontier_velocity = velocity

    def build(self) -> PathTimeObstacle:
        if self.entry is None or self.frontier is None:
            raise RuntimeError(f"No samples recorded for obstacle {self.obstacle_id}")
        return PathTimeObstacle(
            obstacle_id=self.obstacle_id,
            bottom_left=self.entry[0],
            upper_left=self.entry[1],
            bottom_right=self.frontier[0],
            upper_right=self.frontier[1],
            entry_velocity=self.entry_velocity,
            exit_velocity=self.frontier_velocity,
        )


class PathTimeNeighborhood:
    """Path-time envelopes of all obstacles relevant in one planning cycle.

    The envelopes are computed eagerly in the constructor; afterwards the
    object is read-only.

    Args:
        init_s: Ego longitudinal state (s, s_dot, s_ddot); only s is used
        reference_line: Projector returning the SL boundary of a box
        obstacles: Obstacles of the current planning cycle
        discretized_ref_points: Reference points used for velocity projection;
            defaults to reference_line.reference_points
        config: Horizon, resolution and lane-band parameters
    """

    def __init__(
        self,
        init_s: Sequence[float],
        reference_line: ReferenceCurveProjector,
        obstacles: Iterable[TrajectorySource],
        discretized_ref_points: Optional[Sequence[PathPoint]] = None,
        config: Optional[NeighborhoodConfig] = None,
    ):
        if len(init_s) != 3:
            raise ValueError(f"init_s must have 3 elements [s, s_dot, s_ddot], got {len(init_s)}")

        self.config = config if config is not None else NeighborhoodConfig()
        validate_config(self.config)

        if discretized_ref_points is None:
            discretized_ref_points = reference_line.reference_points

        self._init_s = (float(init_s[0]), float(init_s[1]), float(init_s[2]))
        self._path_time_obstacle_map: Dict[str, PathTimeObstacle] = {}
        self._setup_obstacles(reference_line, obstacles, discretized_ref_points)

    @property
    def init_s(self) -> Tuple[float, float, float]:
        return self._init_s

    def _setup_obstacles(
        self,
        reference_line: ReferenceCurveProjector,
        obstacles: Iterable[TrajectorySource],
        discretized_ref_points: Sequence[PathPoint],
    ) -> None:
        n_obstacles = 0
        n_without_trajectory = 0

        for obstacle in obstacles:
            n_obstacles += 1
            if not obstacle.has_trajectory():
                n_without_trajectory += 1
                continue
            if obstacle.id in self._path_time_obstacle_map:
                logger.warning(f"Duplicate obstacle id {obstacle.id}, keeping the first envelope")
                continue

            accumulator = self._sample_obstacle(obstacle, reference_line, discretized_ref_points)
            if accumulator is not None:
                self._path_time_obstacle_map[obstacle.id] = accumulator.build()

        logger.info(
            f"Path-time neighborhood built: {len(self._path_time_obstacle_map)} of "
            f"{n_obstacles} obstacles relevant ({n_without_trajectory} without trajectory), "
            f"horizon={self.config.planned_trajectory_time:.1f}s"
        )

    def _sample_obstacle(
        self,
        obstacle: TrajectorySource,
        reference_line: ReferenceCurveProjector,
        discretized_ref_points: Sequence[PathPoint],
    ) -> Optional[_EnvelopeAccumulator]:
        """Sample one obstacle over the horizon.

        Returns:
            Accumulator with the recorded envelope, or None if the obstacle
            was never relevant
        """
        state_machine = ObstacleSamplingStateMachine()
        accumulator: Optional[_EnvelopeAccumulator] = None
        resolution = self.config.trajectory_time_resolution

        for k in range(self.config.num_time_samples):
            relative_time = k * resolution
            point = obstacle.get_point_at_time(relative_time)
            box = obstacle.get_bounding_box(point)
            sl_boundary = reference_line.get_sl_boundary(box)

            if not sl_boundary.is_finite():
                logger.warning(
                    f"Skipping non-finite SL boundary of obstacle {obstacle.id} at t={relative_time:.2f}s"
                )
                continue
            if sl_boundary.start_s > sl_boundary.end_s:
                logger.warning(
                    f"Skipping inverted SL boundary of obstacle {obstacle.id} at t={relative_time:.2f}s: "
                    f"start_s={sl_boundary.start_s} > end_s={sl_boundary.end_s}"
                )
                continue

            relevant = is_in_region_of_interest(sl_boundary, self._init_s[0], self.config)
            decision = state_machine.update(relevant)
            if decision.stop:
                logger.debug(f"Obstacle {obstacle.id} left the region of interest at t={relative_time:.2f}s")
                break
            if not decision.record:
                continue

            velocity = speed_on_reference_line(discretized_ref_points, obstacle, sl_boundary)
            if decision.is_entry:
                logger.debug(
                    f"Obstacle {obstacle.id} entered at t={relative_time:.2f}s, "
                    f"s=[{sl_boundary.start_s:.1f}, {sl_boundary.end_s:.1f}], v={velocity:.2f}m/s"
                )
                accumulator = _EnvelopeAccumulator(obstacle.id)
            accumulator.record(sl_boundary, relative_time, velocity)

        return accumulator

    def get_path_time_obstacles(self) -> List[PathTimeObstacle]:
        """Snapshot of all envelopes, in no meaningful order."""
        return list(self._path_time_obstacle_map.values())

    def get_path_time_obstacle(self, obstacle_id: str) -> Tuple[bool, Optional[PathTimeObstacle]]:
        """Look up the envelope of one obstacle.

        Returns:
            (True, envelope) if the obstacle was relevant during the horizon,
            (False, None) otherwise
        """
        path_time_obstacle = self._path_time_obstacle_map.get(obstacle_id)
        if path_time_obstacle is None:
            return False, None
        return True, path_time_obstacle

    def __len__(self) -> int:
        return len(self._path_time_obstacle_map)

    def __contains__(self, obstacle_id: object) -> bool:
        return obstacle_id in self._path_time_obstacle_map
