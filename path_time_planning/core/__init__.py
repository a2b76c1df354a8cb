"""Core module for fundamental data structures and utilities."""

from .data_structures import (
    PathPoint,
    TrajectoryPoint,
    SLBoundary,
    PathTimePoint,
    PathTimeObstacle,
)
from .coordinate_converter import (
    cartesian_to_sl,
    normalize_angle,
)
from .errors import InvalidGeometryError
from .geometry import Box2d
from .state_machine import ObstacleSamplingStateMachine, SamplingState

__all__ = [
    'PathPoint',
    'TrajectoryPoint',
    'SLBoundary',
    'PathTimePoint',
    'PathTimeObstacle',
    'cartesian_to_sl',
    'normalize_angle',
    'InvalidGeometryError',
    'Box2d',
    'ObstacleSamplingStateMachine',
    'SamplingState',
]
