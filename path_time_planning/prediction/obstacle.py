"""Obstacles with a predicted trajectory."""

import bisect
import math
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ..core.coordinate_converter import lerp, slerp
from ..core.data_structures import TrajectoryPoint
from ..core.geometry import Box2d


class Obstacle:
    """Perceived obstacle together with its predicted trajectory.

    Args:
        obstacle_id: Identifier, unique within a planning cycle
        length: Footprint length along the heading [m]
        width: Footprint width [m]
        velocity: Perceived velocity (vx, vy) in the global frame [m/s]
        trajectory: Predicted poses ordered by relative_time
    """

    def __init__(
        self,
        obstacle_id: str,
        length: float,
        width: float,
        velocity: Tuple[float, float] = (0.0, 0.0),
        trajectory: Optional[Sequence[TrajectoryPoint]] = None,
    ):
        if length < 0 or width < 0:
            raise ValueError(f"Obstacle {obstacle_id}: length and width must be non-negative")

        trajectory = list(trajectory) if trajectory is not None else []
        times = [p.relative_time for p in trajectory]
        if any(t1 <= t0 for t0, t1 in zip(times, times[1:])):
            raise ValueError(f"Obstacle {obstacle_id}: trajectory times must be strictly increasing")

        self._id = str(obstacle_id)
        self.length = length
        self.width = width
        self.velocity = (float(velocity[0]), float(velocity[1]))
        self._trajectory: List[TrajectoryPoint] = trajectory
        self._times = times

    @property
    def id(self) -> str:
        return self._id

    @property
    def trajectory(self) -> List[TrajectoryPoint]:
        return list(self._trajectory)

    def has_trajectory(self) -> bool:
        return len(self._trajectory) > 0

    def perception_velocity(self) -> Tuple[float, float]:
        return self.velocity

    def get_point_at_time(self, relative_time: float) -> TrajectoryPoint:
        """Predicted pose at a relative time.

        Times before the first or after the last trajectory point return that
        point; times in between are interpolated.
        """
        if not self._trajectory:
            raise ValueError(f"Obstacle {self._id} has no predicted trajectory")

        points = self._trajectory
        if relative_time <= points[0].relative_time:
            return points[0]
        if relative_time >= points[-1].relative_time:
            return points[-1]

        index = bisect.bisect_left(self._times, relative_time)
        p0, p1 = points[index - 1], points[index]
        t0, t1 = p0.relative_time, p1.relative_time
        return TrajectoryPoint(
            x=lerp(p0.x, t0, p1.x, t1, relative_time),
            y=lerp(p0.y, t0, p1.y, t1, relative_time),
            theta=slerp(p0.theta, t0, p1.theta, t1, relative_time),
            v=lerp(p0.v, t0, p1.v, t1, relative_time),
            a=lerp(p0.a, t0, p1.a, t1, relative_time),
            relative_time=relative_time,
        )

    def get_bounding_box(self, point: TrajectoryPoint) -> Box2d:
        """Footprint of the obstacle at a trajectory point."""
        return Box2d(
            center_x=point.x,
            center_y=point.y,
            heading=point.theta,
            length=self.length,
            width=self.width,
        )

    @classmethod
    def from_constant_velocity(
        cls,
        obstacle_id: str,
        x: float,
        y: float,
        vx: float,
        vy: float,
        length: float = 4.5,
        width: float = 2.0,
        heading: Optional[float] = None,
        horizon: float = 8.0,
        dt: float = 0.1,
    ) -> 'Obstacle':
        """Roll the current pose forward at constant velocity.

        Args:
            obstacle_id: Identifier
            x, y: Current position [m]
            vx, vy: Velocity [m/s]
            length, width: Footprint [m]
            heading: Footprint heading; defaults to the velocity direction
            horizon: Trajectory duration [s]
            dt: Trajectory step [s]

        Returns:
            Obstacle with a trajectory covering [0, horizon]
        """
        if dt <= 0:
            raise ValueError(f"dt must be positive, got {dt}")
        speed = math.hypot(vx, vy)
        if heading is None:
            heading = math.atan2(vy, vx) if speed > 0 else 0.0

        times = np.arange(0.0, horizon + 1e-9, dt)
        trajectory = [
            TrajectoryPoint(
                x=x + vx * t,
                y=y + vy * t,
                theta=heading,
                v=speed,
                a=0.0,
                relative_time=float(t),
            )
            for t in times
        ]
        return cls(obstacle_id, length, width, velocity=(vx, vy), trajectory=trajectory)

    def __repr__(self) -> str:
        return f"Obstacle(id={self._id!r}, points={len(self._trajectory)})"
