"""Core data structures for the path-time planning system.

This module defines the records exchanged between the reference line, the
obstacle trajectory source and the path-time neighborhood builder.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple
import math


@dataclass(frozen=True)
class PathPoint:
    """Discretized sample of the reference line.

    Attributes:
        x: X coordinate in global frame [m]
        y: Y coordinate in global frame [m]
        theta: Heading of the reference line [rad]
        kappa: Curvature [1/m]
        dkappa: Curvature rate [1/m²]
        s: Accumulated arc length [m]
    """
    x: float
    y: float
    theta: float
    kappa: float = 0.0
    dkappa: float = 0.0
    s: float = 0.0


@dataclass(frozen=True)
class TrajectoryPoint:
    """Predicted obstacle pose at a time relative to the planning start.

    Attributes:
        x: X coordinate in global frame [m]
        y: Y coordinate in global frame [m]
        theta: Heading angle [rad]
        v: Speed [m/s]
        a: Acceleration [m/s²]
        relative_time: Time offset from the planning start [s]
    """
    x: float
    y: float
    theta: float
    v: float = 0.0
    a: float = 0.0
    relative_time: float = 0.0


@dataclass(frozen=True)
class SLBoundary:
    """Longitudinal/lateral extent of a shape projected onto the reference line."""
    start_s: float
    end_s: float
    start_l: float
    end_l: float

    def is_finite(self) -> bool:
        """Whether every edge is a finite number."""
        return all(math.isfinite(v) for v in (self.start_s, self.end_s, self.start_l, self.end_l))


@dataclass(frozen=True)
class PathTimePoint:
    """Single sample in the path-time frame.

    Attributes:
        s: Longitudinal position along the reference line [m]
        t: Time relative to the planning start [s]
        obstacle_id: Obstacle the sample belongs to
    """
    s: float
    t: float
    obstacle_id: str = ""


@dataclass
class PathTimeObstacle:
    """Path-time occupancy envelope of one obstacle.

    The left corners are the near/far longitudinal edges at the first relevant
    sample, the right corners the edges at the last relevant sample.

    Attributes:
        obstacle_id: Obstacle identifier
        bottom_left: Near edge at entry time
        upper_left: Far edge at entry time
        bottom_right: Near edge at the last relevant sample
        upper_right: Far edge at the last relevant sample
        path_lower: Lowest s over the four corners [m]
        path_upper: Highest s over the four corners [m]
        time_lower: Entry time [s]
        time_upper: Exit time [s]
        entry_velocity: Speed along the reference line at entry [m/s]
        exit_velocity: Speed along the reference line at the last relevant sample [m/s]
    """
    obstacle_id: str
    bottom_left: PathTimePoint
    upper_left: PathTimePoint
    bottom_right: PathTimePoint
    upper_right: PathTimePoint
    path_lower: float = field(init=False)
    path_upper: float = field(init=False)
    time_lower: float = field(init=False)
    time_upper: float = field(init=False)
    entry_velocity: Optional[float] = None
    exit_velocity: Optional[float] = None

    def __post_init__(self):
        """Derive the aggregate bounds from the corners."""
        # Left corners hold the lower s and right corners the upper s unless the
        # obstacle recedes along the path; taking all four keeps lower <= upper.
        s_values = [p.s for p in self.corners]
        self.path_lower = min(s_values)
        self.path_upper = max(s_values)
        self.time_lower = min(self.bottom_left.t, self.upper_left.t)
        self.time_upper = max(self.bottom_right.t, self.upper_right.t)

    @property
    def corners(self) -> Tuple[PathTimePoint, PathTimePoint, PathTimePoint, PathTimePoint]:
        """Corners in drawing order: bottom-left, bottom-right, upper-right, upper-left."""
        return (self.bottom_left, self.bottom_right, self.upper_right, self.upper_left)

    def to_dict(self) -> dict:
        """Plain dictionary view of the envelope, used for report lines."""
        return {
            'obstacle_id': self.obstacle_id,
            'bottom_left': (self.bottom_left.s, self.bottom_left.t),
            'upper_left': (self.upper_left.s, self.upper_left.t),
            'bottom_right': (self.bottom_right.s, self.bottom_right.t),
            'upper_right': (self.upper_right.s, self.upper_right.t),
            'path_lower': self.path_lower,
            'path_upper': self.path_upper,
            'time_lower': self.time_lower,
            'time_upper': self.time_upper,
            'entry_velocity': self.entry_velocity,
            'exit_velocity': self.exit_velocity,
        }
